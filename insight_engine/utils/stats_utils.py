"""
Statistical utilities for the insight engine.
Provides cell coercion for each column type and the numeric primitives
shared by the profiling components.

Raw cells are normalised into a closed set of Python values:

    number  -> float
    string  -> str
    date    -> pandas.Timestamp (timezone-naive)
    boolean -> bool
    missing -> None

A value that cannot be coerced to its column's type is treated as missing.
"""

import math
import numbers
import re
import warnings
import numpy as np
import pandas as pd
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence
from .logging_utils import get_logger

logger = get_logger(__name__)

NUMBER_PATTERN = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')
THOUSANDS_PATTERN = re.compile(r'^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$')

_MONTH = r'(jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?'
DATE_PATTERNS = [
    re.compile(r'^\d{4}-\d{1,2}-\d{1,2}([ t]\d{1,2}:\d{2}(:\d{2}(\.\d+)?)?)?(z|[+-]\d{2}:?\d{2})?$'),
    re.compile(r'^\d{4}/\d{1,2}/\d{1,2}$'),
    re.compile(r'^\d{1,2}[/.-]\d{1,2}[/.-]\d{2,4}$'),
    re.compile(r'^' + _MONTH + r'\s+\d{1,2}(st|nd|rd|th)?,?\s+\d{4}$'),
    re.compile(r'^\d{1,2}\s+' + _MONTH + r',?\s+\d{4}$'),
    re.compile(r'^' + _MONTH + r'\s+\d{4}$'),
]

TRUE_STRINGS = {'true', 'yes'}
FALSE_STRINGS = {'false', 'no'}


def is_missing(value: Any) -> bool:
    """
    Check whether a raw cell counts as missing.

    None, NaN/NaT/NA and strings that are empty after stripping whitespace
    are missing.

    Example:
        >>> is_missing("  ")
        True
        >>> is_missing(0)
        False
    """
    if value is None or value is pd.NA or value is pd.NaT:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def coerce_number(value: Any) -> Optional[float]:
    """Coerce a raw cell to a finite float, or None."""
    if is_missing(value) or isinstance(value, (bool, np.bool_)):
        return None

    if isinstance(value, numbers.Real):
        number = float(value)
        return number if math.isfinite(number) else None

    if isinstance(value, str):
        text = value.strip()
        if THOUSANDS_PATTERN.match(text):
            text = text.replace(',', '')
        if NUMBER_PATTERN.match(text):
            number = float(text)
            return number if math.isfinite(number) else None

    return None


def looks_like_date(text: str) -> bool:
    """Check a string against the accepted date layouts."""
    lowered = text.strip().lower()
    return any(pattern.match(lowered) for pattern in DATE_PATTERNS)


def coerce_date(value: Any) -> Optional[pd.Timestamp]:
    """Coerce a raw cell to a timezone-naive Timestamp, or None."""
    if is_missing(value) or isinstance(value, (bool, np.bool_)):
        return None

    if isinstance(value, str):
        if not looks_like_date(value):
            return None
        with warnings.catch_warnings():
            # Day-first guesses for D/M/Y strings emit a UserWarning per value
            warnings.simplefilter('ignore')
            timestamp = pd.to_datetime(value.strip(), errors='coerce')
    elif hasattr(value, 'year') and hasattr(value, 'month'):
        timestamp = pd.Timestamp(value)
    else:
        return None

    if timestamp is None or pd.isna(timestamp):
        return None
    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_convert(None)
    return timestamp


def coerce_boolean(value: Any) -> Optional[bool]:
    """Coerce a raw cell to a bool, or None."""
    if is_missing(value):
        return None
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
    return None


def coerce_string(value: Any) -> Optional[str]:
    """Coerce a raw cell to a string, or None."""
    if is_missing(value):
        return None
    return str(value)


COERCERS: Dict[str, Callable[[Any], Any]] = {
    'number': coerce_number,
    'date': coerce_date,
    'boolean': coerce_boolean,
    'string': coerce_string,
}


def coerce_value(value: Any, column_type: str) -> Any:
    """
    Coerce a raw cell to the Python value for its column type.

    Args:
        value: Raw cell value
        column_type: One of 'number', 'string', 'date', 'boolean'

    Returns:
        The coerced value, or None when missing or not coercible

    Raises:
        ValueError: If the column type is unknown

    Example:
        >>> coerce_value("1,250", "number")
        1250.0
        >>> coerce_value("n/a", "number") is None
        True
    """
    try:
        coercer = COERCERS[column_type]
    except KeyError:
        raise ValueError(f"Unknown column type: {column_type}")
    return coercer(value)


def coerce_column(values: Iterable[Any], column_type: str) -> pd.Series:
    """
    Coerce a sequence of raw cells into a Series.

    Number columns become float64 with NaN for missing values; every other
    type is an object Series holding coerced values and None.
    """
    coerced = [coerce_value(value, column_type) for value in values]

    if column_type == 'number':
        return pd.Series(
            [np.nan if value is None else value for value in coerced],
            dtype='float64'
        )

    return pd.Series(coerced, dtype='object')


def population_std(values: Sequence[float]) -> float:
    """
    Population standard deviation (divides by n, not n - 1).

    Returns 0.0 for an empty input.

    Example:
        >>> round(population_std([1, 2, 3, 4, 5]), 5)
        1.41421
    """
    array = np.asarray(values, dtype=float)
    if array.size == 0:
        return 0.0
    return float(np.std(array, ddof=0))


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson's r over two aligned, fully present sequences.

    Returns 0.0 when fewer than two points are given, when either side is
    constant, or when the result is not finite. The result is clipped to
    [-1, 1] to absorb floating point drift.

    Example:
        >>> pearson_correlation([1, 2, 3], [2, 4, 6])
        1.0
    """
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)

    if x_arr.size < 2 or x_arr.size != y_arr.size:
        return 0.0

    # Exact constant check; tiny mean residuals would otherwise give +/-1
    if np.ptp(x_arr) == 0 or np.ptp(y_arr) == 0:
        return 0.0

    # r is scale invariant; unit max-abs keeps the squared sums finite
    x_arr = x_arr / np.max(np.abs(x_arr))
    y_arr = y_arr / np.max(np.abs(y_arr))

    dx = x_arr - x_arr.mean()
    dy = y_arr - y_arr.mean()

    with np.errstate(over='ignore', invalid='ignore'):
        denominator = math.sqrt(float(np.sum(dx * dx)) * float(np.sum(dy * dy)))
        if denominator == 0 or not math.isfinite(denominator):
            return 0.0
        r = float(np.sum(dx * dy)) / denominator

    if not math.isfinite(r):
        return 0.0

    return max(-1.0, min(1.0, r))


def first_appearance_order(values: Iterable[Any]) -> List[Any]:
    """Distinct non-None values in the order they first appear."""
    seen = set()
    ordered = []
    for value in values:
        if value is None or value in seen:
            continue
        seen.add(value)
        ordered.append(value)
    return ordered
