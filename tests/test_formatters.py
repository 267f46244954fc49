"""Tests for display formatting."""
import math

import pytest

from hyflo_localization.formatters import (
    format_coordinates,
    format_distance_km,
    format_full_address,
    format_latitude,
    format_longitude,
)


def test_format_latitude_and_longitude():
    assert format_latitude(36.75381) == "36.7538° N"
    assert format_latitude(-33.9) == "33.9000° S"
    assert format_longitude(3.05884) == "3.0588° E"
    assert format_longitude(-0.6308, precision=2) == "0.63° W"


def test_format_coordinates():
    assert format_coordinates(36.7538, 3.0588) == "36.7538° N, 3.0588° E"
    assert format_coordinates(None, 3.0588) == "-"
    assert format_coordinates(math.nan, 3.0) == "-"


def test_format_full_address_skips_blank_parts():
    assert format_full_address("PK12", None, "  ", "Bethioua", "Oran") == "PK12, Bethioua, Oran"
    assert format_full_address() == "-"


@pytest.mark.parametrize("distance, expected", [
    (0.25, "250 m"),
    (12.3456, "12.35 km"),
    (1234.5, "1,234.50 km"),
    (None, "-"),
])
def test_format_distance_km(distance, expected):
    assert format_distance_km(distance) == expected
