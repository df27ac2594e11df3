import math
import numbers
from typing import Any, Dict, Iterable, List, Optional, Set, Union

Scalar = Union[str, float, None]
Row = Dict[str, Scalar]


def is_number(value: Any) -> bool:
    """True for finite real numbers (booleans excluded)."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def is_defined(value: Any) -> bool:
    """A value counts as present unless it is None, NaN or the empty string."""
    if value is None or value == "":
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return True


def to_number(value: Any) -> Optional[float]:
    """
    Coerce a scalar to a finite float.
    Numeric strings ("1.5", " 3 ") are accepted; anything else returns None.
    """
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        # Digit separators ("1_000") stay text, as in the parser
        if not text or "_" in text:
            return None
        try:
            parsed = float(text)
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def stringify(value: Any) -> str:
    """
    String form used for distinct-value counting and class labels.
    Integral floats render without a trailing '.0' so that 1.0 and "1" agree.
    """
    if value is None:
        return ""
    if is_number(value):
        as_float = float(value)
        if as_float.is_integer() and abs(as_float) < 1e16:
            return str(int(as_float))
        return repr(as_float)
    return str(value)


def numeric_values(rows: Iterable[Row], column: str) -> List[float]:
    """Collect the numeric values of a column, skipping text and missing cells."""
    return [float(row[column]) for row in rows if is_number(row.get(column))]


def detect_numeric_columns(rows: List[Row]) -> List[str]:
    """
    Find columns whose defined values are all coercible to numbers.
    Column order follows the first row.
    """
    if not rows:
        return []

    detected: List[str] = []
    for column in rows[0].keys():
        defined = [row.get(column) for row in rows if is_defined(row.get(column))]
        if defined and all(to_number(v) is not None for v in defined):
            detected.append(column)
    return detected


def resolve_columns(
    rows: List[Row],
    config: Dict[str, Any],
    target_column_key: str = "target_column",
) -> List[str]:
    """
    Resolves the list of columns to process.

    1. If 'columns' is given in config, use it (filtered for existence);
       an explicit empty list selects nothing.
    2. Otherwise auto-detect numeric columns, excluding the target column.
    """
    available: Set[str] = set(rows[0].keys()) if rows else set()
    cols = config.get("columns")

    if cols is not None:
        return [c for c in cols if c in available]

    detected = detect_numeric_columns(rows)
    target_col = config.get(target_column_key)
    return [c for c in detected if c != target_col]

