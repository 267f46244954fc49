"""
Data utility functions for type conversions and null handling.

This module provides utility functions for cleaning and converting values
received from the backend, handling null values, and building collation keys.
"""

import math
import unicodedata
import pandas as pd
from typing import Any, Dict, Iterable, Optional


def safe_int_conversion(value: Any) -> Optional[int]:
    """
    Safely convert a value to integer, handling nulls and invalid values.

    Args:
        value: Value to convert to integer

    Returns:
        Integer value or None if conversion fails
    """
    if is_null_or_empty(value):
        return None

    if isinstance(value, bool):
        return None

    try:
        # Handle string representations of floats (e.g., "123.0")
        if isinstance(value, str):
            value = value.strip()

        number = float(value)
        if not math.isfinite(number):
            return None
        return int(number)
    except (ValueError, TypeError):
        return None


def safe_float_conversion(value: Any) -> Optional[float]:
    """
    Convert a value to float without raising.

    Missing values become None. Values that are present but cannot be read as
    a number become NaN, so that validation reports them as invalid instead
    of treating them as absent.

    Args:
        value: Value to convert to float

    Returns:
        Float value, NaN for unparseable input, or None if null
    """
    if is_null_or_empty(value):
        return None

    if isinstance(value, bool):
        return float('nan')

    try:
        if isinstance(value, str):
            value = value.strip().replace(',', '.')
        return float(value)
    except (ValueError, TypeError):
        return float('nan')


def safe_sequence_conversion(value: Any) -> Optional[float]:
    """
    Read an ordering number without truncating it.

    Whole numbers come back as int. Fractional, infinite or unparseable
    values are kept as float (NaN when unparseable) so validation rejects
    them instead of silently rounding.

    Args:
        value: Value to convert

    Returns:
        int, float, or None if null
    """
    number = safe_float_conversion(value)
    if is_finite_number(number) and number == int(number):
        return int(number)
    return number


def safe_string_conversion(value: Any) -> str:
    """
    Safely convert a value to string, handling nulls and cleaning whitespace.

    Args:
        value: Value to convert to string

    Returns:
        Cleaned string value or empty string if null
    """
    if is_null_or_empty(value):
        return ""

    return str(value).strip()


def optional_string(value: Any) -> Optional[str]:
    """Return the stripped string, or None for null and blank values."""
    cleaned = safe_string_conversion(value)
    return cleaned or None


def is_null_or_empty(value: Any) -> bool:
    """
    Check if a value is null, empty, or contains only whitespace.

    Args:
        value: Value to check

    Returns:
        True if value is null/empty, False otherwise
    """
    if value is None:
        return True

    if isinstance(value, str):
        return not value.strip()

    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # Containers are never "null" scalars
        return False


def is_finite_number(value: Any) -> bool:
    """Check that a value is a real, finite number (bools excluded)."""
    if isinstance(value, bool) or value is None:
        return False
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def collation_key(value: str) -> str:
    """
    Build a case and accent insensitive sort key for display labels.

    Args:
        value: Label to build a key for

    Returns:
        Key suitable for locale-aware ordering of mixed-language labels
    """
    decomposed = unicodedata.normalize('NFKD', value or "")
    stripped = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def pick(payload: Dict[str, Any], *keys: str) -> Any:
    """
    Return the first non-null value found under any of the given keys.

    Used to read backend payloads that may use camelCase or snake_case.
    """
    for key in keys:
        if key in payload and not is_null_or_empty(payload[key]):
            return payload[key]
    return None


def drop_none(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Remove keys whose value is None from a request payload."""
    return {key: value for key, value in payload.items() if value is not None}


def group_by(items: Iterable[Any], key_func) -> Dict[Any, list]:
    """
    Group items by a key, preserving input order inside each group.

    Items whose key is None are skipped.
    """
    groups: Dict[Any, list] = {}
    for item in items:
        key = key_func(item)
        if key is None:
            continue
        groups.setdefault(key, []).append(item)
    return groups
