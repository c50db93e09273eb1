"""Input and output for the tableau pipeline."""

from .input_reader import read_forms, read_forms_file
from .output_writer import TableauWriter

__all__ = ["read_forms", "read_forms_file", "TableauWriter"]
