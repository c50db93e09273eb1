"""Output writer for violation tableaux."""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Literal, Union

import pandas as pd

from ..models import TableauRow

logger = logging.getLogger(__name__)


class TableauWriter:
    """
    Writes tableau rows to CSV, Parquet or JSON.

    Rows are buffered and written on ``flush``; used as a context manager it
    flushes on exit.
    """

    def __init__(
        self,
        output_path: Union[str, Path],
        format: Literal["csv", "parquet", "json"] = "csv",
        include_parse: bool = True,
    ):
        """
        Initialize the output writer.

        Args:
            output_path: Path to write output file.
            format: Output format (csv, parquet, or json).
            include_parse: Whether to include the syllable parse column.
        """
        if format not in ("csv", "parquet", "json"):
            raise ValueError(f"Unsupported output format: {format}")

        self.output_path = Path(output_path)
        self.format = format
        self.include_parse = include_parse
        self._buffer: List[dict] = []

        self.output_path.parent.mkdir(parents=True, exist_ok=True)

    def write_row(self, row: TableauRow) -> None:
        """Add a single row to the buffer."""
        self._buffer.append(row.to_dict(include_parse=self.include_parse))

    def write_rows(self, rows: Iterable[TableauRow]) -> None:
        """Add several rows to the buffer."""
        for row in rows:
            self.write_row(row)

    def flush(self) -> None:
        """Write buffered rows to file."""
        if not self._buffer:
            logger.warning(f"No rows to write to {self.output_path}")
            return

        if self.format == "json":
            with open(self.output_path, "w", encoding="utf-8") as f:
                json.dump(self._buffer, f, ensure_ascii=False, indent=2)
        else:
            df = pd.DataFrame(self._buffer)
            if self.format == "csv":
                df.to_csv(self.output_path, index=False)
            else:
                df.to_parquet(self.output_path, index=False)

        logger.info(f"Wrote {len(self._buffer)} rows to: {self.output_path}")

    def __enter__(self) -> "TableauWriter":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - flush on close."""
        if exc_type is None:
            self.flush()

    @property
    def count(self) -> int:
        """Return the number of rows in the buffer."""
        return len(self._buffer)
