"""Reading underlying forms from configuration and input files."""

import json
import logging
from pathlib import Path
from typing import List

import pandas as pd

from ..config import InputConfig

logger = logging.getLogger(__name__)


def read_forms_file(path: Path, column: str = "form") -> List[str]:
    """
    Read underlying forms from a file.

    Args:
        path: A .txt (one form per line), .csv or .json (list of strings) file.
        column: Column holding the forms in a CSV file.

    Returns:
        The forms in file order, blank entries dropped.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the format is unsupported or the column is missing.
    """
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    logger.info(f"Reading forms from: {path}")

    suffix = path.suffix.lower()
    if suffix == ".txt":
        forms = path.read_text(encoding="utf-8").splitlines()
    elif suffix == ".csv":
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
        if column not in df.columns:
            raise ValueError(f"Column '{column}' not found in {path}")
        forms = df[column].tolist()
    elif suffix == ".json":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON list of strings in {path}")
        forms = [str(item) for item in data]
    else:
        raise ValueError(f"Unsupported input format: {suffix}")

    forms = [form.strip() for form in forms if form.strip()]
    logger.info(f"Loaded {len(forms)} forms")
    return forms


def read_forms(config: InputConfig) -> List[str]:
    """Forms listed in the config followed by those in the input file."""
    forms = list(config.forms)
    if config.input_file is not None:
        forms.extend(read_forms_file(config.input_file, config.input_column))
    return forms
