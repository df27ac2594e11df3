"""
Row parsing for uploaded files.

Delimited text and spreadsheets are both normalized to a list of Rows:
dicts mapping column name to a float, a string or None.
"""

import io
import logging
import math
import re
from datetime import date, datetime, time
from typing import Any, List, Union

import numpy as np
import pandas as pd

from ..exceptions import UnparsableDatasetError
from ..utils import Row, Scalar

logger = logging.getLogger(__name__)

SPREADSHEET_EXTENSIONS = (".xlsx", ".xls")
TEXT_ENCODINGS = ("utf-8-sig", "latin-1")

_SURROUNDING_QUOTES = re.compile(r'^"|"$')


def _clean_field(field: str) -> str:
    return _SURROUNDING_QUOTES.sub("", field.strip())


def _parse_scalar(field: str) -> Scalar:
    """Return the field as a float when it parses cleanly, otherwise as text."""
    # float() accepts digit separators ("1_000"); a CSV cell with one is text.
    if "_" in field:
        return field
    try:
        value = float(field)
    except ValueError:
        return field
    return value if math.isfinite(value) else field


def parse_csv(content: str) -> List[Row]:
    """
    Parse comma-delimited text with a header line.

    Lines whose field count differs from the header are dropped silently.
    Fewer than two lines (header + one data row) yields an empty list.
    """
    lines = content.strip().split("\n")
    if len(lines) < 2:
        return []

    headers = [_clean_field(h) for h in lines[0].split(",")]
    rows: List[Row] = []
    dropped = 0

    for line in lines[1:]:
        fields = line.split(",")
        if len(fields) != len(headers):
            dropped += 1
            continue
        rows.append({header: _parse_scalar(_clean_field(field)) for header, field in zip(headers, fields)})

    if dropped:
        logger.debug(f"Dropped {dropped} malformed line(s) with a field count other than {len(headers)}")
    return rows


def _normalize_cell(value: Any) -> Scalar:
    if value is None:
        return None
    if isinstance(value, (bool, np.bool_)):
        return str(bool(value)).upper()
    if isinstance(value, (pd.Timestamp, datetime, date, time)):
        if pd.isna(value):
            return None
        return value.isoformat()
    if isinstance(value, (int, float, np.integer, np.floating)):
        as_float = float(value)
        return as_float if math.isfinite(as_float) else None
    if pd.isna(value):
        return None
    return str(value)


def parse_excel(buffer: bytes) -> List[Row]:
    """
    Read the first sheet of a spreadsheet into Rows.

    The first sheet row is the header. Empty cells become None so that every
    Row carries the full column set.
    """
    try:
        df = pd.read_excel(io.BytesIO(buffer), sheet_name=0)
    except Exception as e:
        raise UnparsableDatasetError("spreadsheet", reason=f"spreadsheet reader failed ({e})") from e

    df.columns = [str(c).strip() for c in df.columns]
    records = df.to_dict(orient="records")
    return [{key: _normalize_cell(value) for key, value in record.items()} for record in records]


def _decode(content: bytes) -> str:
    for encoding in TEXT_ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    return content.decode("utf-8", errors="replace")


def process_file_content(content: Union[str, bytes, bytearray], file_name: str) -> List[Row]:
    """
    Dispatch an uploaded file to the right parser based on its name and content.
    Returns an empty list when nothing could be parsed.
    """
    is_spreadsheet = file_name.lower().endswith(SPREADSHEET_EXTENSIONS)

    if is_spreadsheet and isinstance(content, (bytes, bytearray)):
        try:
            rows = parse_excel(bytes(content))
        except UnparsableDatasetError as e:
            raise UnparsableDatasetError(file_name, reason=e.details["reason"]) from e
    elif isinstance(content, str):
        rows = parse_csv(content)
    elif isinstance(content, (bytes, bytearray)):
        rows = parse_csv(_decode(bytes(content)))
    else:
        rows = []

    logger.info(f"Parsed {len(rows)} row(s) from '{file_name}'")
    return rows
