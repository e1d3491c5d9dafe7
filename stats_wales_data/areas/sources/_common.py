"""Shared utilities for the source parsers."""

import csv
import math
from typing import TextIO

from stats_wales_data.areas.exceptions import ConfigurationError, ParseError
from stats_wales_data.areas.schema import ColumnMapping, SourceColumn


def require_columns(
    columns: ColumnMapping, *required: SourceColumn, source: str
) -> None:
    """Fail before reading anything if the mapping lacks a needed column."""
    missing = [column.value for column in required if column not in columns]
    if missing:
        raise ConfigurationError(
            f"{source}: column mapping is missing {', '.join(missing)}"
        )


def read_csv_rows(stream: TextIO, source: str) -> list[list[str]]:
    """Read a comma-separated stream into rows of raw string fields.

    The first line is returned as an ordinary row. Blank lines are dropped,
    empty cells are kept as ``""`` and each row holds exactly the fields
    present on its line, so ragged rows keep their own width.
    """
    try:
        rows = [fields for fields in csv.reader(stream) if fields]
    except csv.Error as e:
        raise ParseError(f"{source}: {e}") from e
    if not rows:
        raise ParseError(f"{source}: the stream has no content")
    return rows


def to_float(text: str, context: str) -> float:
    try:
        value = float(text)
    except (ValueError, TypeError) as e:
        raise ParseError(f"{context}: failed to parse value {text!r}") from e
    if not math.isfinite(value):
        raise ParseError(f"{context}: value {text!r} is not a finite number")
    return value


def to_year(text, context: str) -> int:
    """Convert a year cell or field to a non-negative integer."""
    try:
        year = int(str(text).strip())
    except ValueError as e:
        raise ParseError(f"{context}: failed to parse year {text!r}") from e
    if year < 0:
        raise ParseError(f"{context}: year {text!r} is negative")
    return year
