"""
Route model for linear infrastructure.

This module validates, orders and measures the waypoint coordinates that
trace the physical route of one linear asset (a pipeline, a segment).
Validation never raises: every problem is collected into a list so a form
can display them all at once. Geometry functions are pure and return
neutral values (0.0, None) for degenerate input.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

from .config import LocalizationConfig, DEFAULT_CONFIG
from .exceptions import ValidationError
from .models import Coordinate
from .utils.data_utils import is_finite_number

EARTH_RADIUS_KM = 6371.0

Point = Union[Coordinate, Tuple[float, float], Any]

logger = logging.getLogger(__name__)


@dataclass
class RouteValidationResult:
    """Outcome of a route validation: valid only when no error was found."""

    errors: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def raise_if_invalid(self):
        """Raise ValidationError carrying every error when the route is invalid."""
        if self.errors:
            raise ValidationError(
                f"Route is invalid: {len(self.errors)} error(s)",
                errors=self.errors
            )

    def to_dict(self) -> dict:
        return {'valid': self.valid, 'errors': list(self.errors)}


def _lat_lon(point: Point) -> Tuple[Any, Any]:
    """Extract (latitude, longitude) from a record or a (lat, lon) pair."""
    if isinstance(point, (tuple, list)):
        return point[0], point[1]
    return getattr(point, 'latitude', None), getattr(point, 'longitude', None)


def _has_position(point: Point) -> bool:
    lat, lon = _lat_lon(point)
    return is_finite_number(lat) and is_finite_number(lon)


def _degrees(a: Point, b: Point) -> Optional[Tuple[float, float, float, float]]:
    """Return (lat1, lon1, lat2, lon2) as floats, or None if any is not a number."""
    values = _lat_lon(a) + _lat_lon(b)
    if any(isinstance(v, bool) or not isinstance(v, (int, float)) for v in values):
        return None
    return tuple(float(v) for v in values)


def validate_route(coords: Sequence[Coordinate], infrastructure_id: Any = None,
                   min_points: int = 2) -> RouteValidationResult:
    """
    Validate the waypoints of one infrastructure's route.

    Every problem is reported: too few points, each duplicated sequence
    value, and each invalid coordinate (by 1-based position). Nothing is
    short-circuited.

    Args:
        coords: Coordinates of the route, in any order
        infrastructure_id: Expected owner; coordinates of another asset are reported
        min_points: Minimum number of coordinates for a valid route

    Returns:
        RouteValidationResult listing every error found
    """
    coords = list(coords or [])
    errors = []

    if len(coords) < min_points:
        errors.append(f"Route requires at least {min_points} coordinates")

    sequences = Counter(
        coord.sequence for coord in coords
        if is_finite_number(coord.sequence)
    )
    for sequence, count in sequences.items():
        if count > 1:
            errors.append(
                f"Duplicate sequence number {sequence} ({count} coordinates) - "
                f"each coordinate must have a unique sequence"
            )

    for position, coord in enumerate(coords, start=1):
        coord_errors = coord.get_validation_errors()
        if (infrastructure_id is not None and coord.infrastructure_id is not None
                and coord.infrastructure_id != infrastructure_id):
            coord_errors.append(
                f"Belongs to infrastructure {coord.infrastructure_id}, "
                f"expected {infrastructure_id}"
            )
        if coord_errors:
            errors.append(f"Coordinate {position}: {', '.join(coord_errors)}")

    return RouteValidationResult(errors=errors)


def _sequence_key(coord: Coordinate) -> float:
    # Missing or non-numeric sequences sort last
    return coord.sequence if is_finite_number(coord.sequence) else math.inf


def sort_by_sequence(coords: Iterable[Coordinate]) -> List[Coordinate]:
    """Stable ascending sort by sequence; returns a new list."""
    return sorted(coords, key=_sequence_key)


def haversine_distance_km(a: Point, b: Point, radius_km: float = EARTH_RADIUS_KM) -> float:
    """
    Great-circle distance between two points using the Haversine formula.

    Args:
        a: First point (record with latitude/longitude, or (lat, lon) in degrees)
        b: Second point
        radius_km: Sphere radius

    Returns:
        Distance in kilometres, NaN when a position is missing or not finite
    """
    values = _degrees(a, b)
    if values is None:
        return math.nan
    lat1, lon1, lat2, lon2 = values

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    if not math.isfinite(h):
        return math.nan
    # Clamp rounding noise so sqrt(1 - h) stays real
    h = min(1.0, max(0.0, h))
    return radius_km * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bearing_degrees(a: Point, b: Point) -> float:
    """Initial bearing from a to b, in degrees clockwise from north (NaN if unknown)."""
    values = _degrees(a, b)
    if values is None:
        return math.nan
    lat1, lon1, lat2, lon2 = values

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_lambda = math.radians(lon2 - lon1)
    y = math.sin(delta_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(delta_lambda)
    bearing = math.degrees(math.atan2(y, x))
    return (bearing + 360) % 360


def segment_lengths(coords: Iterable[Coordinate],
                    radius_km: float = EARTH_RADIUS_KM) -> List[float]:
    """Length of each leg between consecutive waypoints, in sequence order."""
    ordered = sort_by_sequence(coords)
    return [
        haversine_distance_km(start, end, radius_km)
        for start, end in zip(ordered, ordered[1:])
    ]


def cumulative_distances(coords: Iterable[Coordinate],
                         radius_km: float = EARTH_RADIUS_KM) -> List[float]:
    """Distance from the first waypoint to each waypoint (chainage), in sequence order."""
    ordered = sort_by_sequence(coords)
    if not ordered:
        return []
    chainage = [0.0]
    for length in segment_lengths(ordered, radius_km):
        chainage.append(chainage[-1] + length)
    return chainage


def total_route_length(coords: Iterable[Coordinate],
                       radius_km: float = EARTH_RADIUS_KM) -> float:
    """
    Total length of a route in kilometres.

    Sums the Haversine distance between consecutive waypoints after sorting
    by sequence. Returns 0.0 for fewer than two waypoints.
    """
    return float(sum(segment_lengths(coords, radius_km)))


def nearest_point(coords: Iterable[Coordinate], lat: float, lon: float,
                  radius_km: float = EARTH_RADIUS_KM) -> Optional[Coordinate]:
    """
    Waypoint closest to (lat, lon) by linear scan.

    Ties keep the first waypoint encountered. Waypoints without a finite
    position are skipped.

    Returns:
        The nearest coordinate, or None for empty input. A target with a
        non-finite latitude or longitude has no distance to any waypoint,
        so it also yields None.
    """
    nearest = None
    best = math.inf
    for coord in coords:
        if not _has_position(coord):
            continue
        distance = haversine_distance_km(coord, (lat, lon), radius_km)
        if distance < best:
            nearest, best = coord, distance
    return nearest


def next_sequence(coords: Iterable[Coordinate]) -> int:
    """Sequence number to give a waypoint appended at the end of the route."""
    sequences = [coord.sequence for coord in coords if is_finite_number(coord.sequence)]
    return int(max(sequences)) + 1 if sequences else 1


class RouteModel:
    """
    Waypoints of one linear infrastructure.

    Holds a private copy of the caller's coordinates; callers never see
    their list mutated.
    """

    def __init__(self, infrastructure_id: Any, coordinates: Iterable[Coordinate] = (),
                 config: Optional[LocalizationConfig] = None):
        """
        Initialize the route.

        Args:
            infrastructure_id: Identifier of the linear asset
            coordinates: Waypoints belonging to that asset
            config: Optional configuration (earth radius, minimum points)
        """
        self.infrastructure_id = infrastructure_id
        self.config = config or DEFAULT_CONFIG
        self._coordinates: Tuple[Coordinate, ...] = tuple(coordinates)

    @property
    def coordinates(self) -> List[Coordinate]:
        return list(self._coordinates)

    def __len__(self) -> int:
        return len(self._coordinates)

    def validate(self) -> RouteValidationResult:
        result = validate_route(
            self._coordinates,
            infrastructure_id=self.infrastructure_id,
            min_points=self.config.min_route_points
        )
        if not result.valid:
            logger.debug(
                f"Route {self.infrastructure_id} failed validation with {len(result.errors)} error(s)"
            )
        return result

    def ordered(self) -> List[Coordinate]:
        return sort_by_sequence(self._coordinates)

    def total_length_km(self) -> float:
        return total_route_length(self._coordinates, self.config.earth_radius_km)

    def segment_lengths(self) -> List[float]:
        return segment_lengths(self._coordinates, self.config.earth_radius_km)

    def cumulative_distances(self) -> List[float]:
        return cumulative_distances(self._coordinates, self.config.earth_radius_km)

    def nearest(self, lat: float, lon: float) -> Optional[Coordinate]:
        return nearest_point(self._coordinates, lat, lon, self.config.earth_radius_km)

    def next_sequence(self) -> int:
        return next_sequence(self._coordinates)

    def with_coordinate(self, latitude: float, longitude: float,
                        elevation: Optional[float] = None) -> 'RouteModel':
        """Return a new route with a waypoint appended after the last sequence."""
        appended = Coordinate(
            sequence=self.next_sequence(),
            latitude=latitude,
            longitude=longitude,
            elevation=elevation,
            infrastructure_id=self.infrastructure_id
        )
        return RouteModel(self.infrastructure_id, self._coordinates + (appended,), self.config)

    def to_payloads(self) -> List[dict]:
        """Backend request bodies for the waypoints, in sequence order."""
        return [coord.to_payload() for coord in self.ordered()]
