"""
CSV dataset loading.

Reads a ``worldcities.csv``-shaped file into raw rows (every field kept
as text) for ``CityCatalog.build``.  No validation happens here.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Union

import pandas as pd

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("city_ascii", "iso2", "lat", "lng")


class DatasetError(Exception):
    """The dataset file is unreadable, unparsable or lacks required columns."""


def _skip_bad_line(fields: list[str]) -> None:
    logger.debug("Skipped malformed dataset line: %r", fields)
    return None


def parse_cities_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV *text* with a header row into a list of string dicts."""
    if not text.strip():
        return []
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            engine="python",
            on_bad_lines=_skip_bad_line,
        )
    except pd.errors.ParserError as exc:
        raise DatasetError(f"Cannot parse city dataset: {exc}") from exc
    # short rows leave NaN in their trailing cells
    df = df.fillna("")
    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise DatasetError(f"Dataset is missing columns: {', '.join(missing)}")
    return df.to_dict(orient="records")


def load_cities_csv(path: Union[str, Path]) -> list[dict[str, str]]:
    """Read and parse the dataset at *path*."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DatasetError(f"Cannot read city dataset {path}: {exc}") from exc
    rows = parse_cities_csv(text)
    logger.info("Read %d raw city rows from %s", len(rows), path)
    return rows
