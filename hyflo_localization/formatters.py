"""
Display formatting for coordinates, addresses and distances.

Missing values render as '-' so table cells are never blank.
"""

from typing import Optional

from .utils.data_utils import is_finite_number, safe_string_conversion

PLACEHOLDER = '-'


def format_latitude(latitude: Optional[float], precision: int = 4) -> str:
    """Format a latitude as '36.7538° N'."""
    if not is_finite_number(latitude):
        return PLACEHOLDER
    hemisphere = 'N' if latitude >= 0 else 'S'
    return f"{abs(latitude):.{precision}f}° {hemisphere}"


def format_longitude(longitude: Optional[float], precision: int = 4) -> str:
    """Format a longitude as '3.0588° E'."""
    if not is_finite_number(longitude):
        return PLACEHOLDER
    hemisphere = 'E' if longitude >= 0 else 'W'
    return f"{abs(longitude):.{precision}f}° {hemisphere}"


def format_coordinates(latitude: Optional[float], longitude: Optional[float],
                       precision: int = 4) -> str:
    """Format a position as '36.7538° N, 3.0588° E'."""
    if not (is_finite_number(latitude) and is_finite_number(longitude)):
        return PLACEHOLDER
    return f"{format_latitude(latitude, precision)}, {format_longitude(longitude, precision)}"


def format_full_address(*parts: Optional[str]) -> str:
    """Join the non-empty address parts (place, locality, district, state, country)."""
    cleaned = [safe_string_conversion(part) for part in parts]
    cleaned = [part for part in cleaned if part]
    return ', '.join(cleaned) if cleaned else PLACEHOLDER


def format_distance_km(distance_km: Optional[float], precision: int = 2) -> str:
    """Format a distance, switching to metres under one kilometre."""
    if not is_finite_number(distance_km):
        return PLACEHOLDER
    if abs(distance_km) < 1:
        return f"{distance_km * 1000:.0f} m"
    return f"{distance_km:,.{precision}f} km"
