"""
Utility functions and helpers.
"""

from .data_utils import (
    safe_int_conversion,
    safe_float_conversion,
    safe_sequence_conversion,
    safe_string_conversion,
    optional_string,
    is_null_or_empty,
    is_finite_number,
    collation_key
)

__all__ = [
    'safe_int_conversion',
    'safe_float_conversion',
    'safe_sequence_conversion',
    'safe_string_conversion',
    'optional_string',
    'is_null_or_empty',
    'is_finite_number',
    'collation_key'
]
