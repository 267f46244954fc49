"""
Data models for the localization core.

This module defines the geographic and route records exchanged with the
backend. Records are plain dataclasses: they clean their text fields on
construction, convert to and from backend payloads, and report their own
validation errors. They never raise on bad numeric input.
"""

from dataclasses import dataclass
from typing import Optional, List, Dict, Any, Protocol

from .config import LocalizationConfig, DEFAULT_CONFIG
from .utils.data_utils import (
    safe_int_conversion,
    safe_float_conversion,
    safe_sequence_conversion,
    safe_string_conversion,
    optional_string,
    is_null_or_empty,
    is_finite_number,
    pick,
    drop_none
)


LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


class Designated(Protocol):
    """Anything exposing an id, a code and the three localized designations."""

    id: Optional[int]
    code: Optional[str]
    designation_ar: Optional[str]
    designation_en: Optional[str]
    designation_fr: Optional[str]


def _designation_kwargs(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Read id, code and designations from a camelCase or snake_case payload."""
    return {
        'id': safe_int_conversion(pick(payload, 'id')),
        'code': safe_string_conversion(pick(payload, 'code')),
        'designation_ar': pick(payload, 'designationAr', 'designation_ar'),
        'designation_en': pick(payload, 'designationEn', 'designation_en'),
        'designation_fr': pick(payload, 'designationFr', 'designation_fr'),
    }


def _parent_id(payload: Dict[str, Any], flat_keys: tuple, nested_key: str) -> Optional[int]:
    """Read a foreign key either flat (stateId) or from a nested object (state.id)."""
    value = pick(payload, *flat_keys)
    if value is None and isinstance(payload.get(nested_key), dict):
        value = payload[nested_key].get('id')
    return safe_int_conversion(value)


def _coordinate_errors(latitude: Any, longitude: Any) -> List[str]:
    """Collect latitude/longitude errors, treating NaN and infinity as invalid."""
    errors = []

    if latitude is None:
        errors.append("Latitude is required")
    elif not is_finite_number(latitude):
        errors.append("Latitude must be a finite number")
    elif not LATITUDE_RANGE[0] <= latitude <= LATITUDE_RANGE[1]:
        errors.append("Latitude must be between -90 and 90 degrees")

    if longitude is None:
        errors.append("Longitude is required")
    elif not is_finite_number(longitude):
        errors.append("Longitude must be a finite number")
    elif not LONGITUDE_RANGE[0] <= longitude <= LONGITUDE_RANGE[1]:
        errors.append("Longitude must be between -180 and 180 degrees")

    return errors


def _positive_id_errors(value: Any, required_message: str, invalid_message: str) -> List[str]:
    """Check a foreign key is present and a positive whole number."""
    if value is None:
        return [required_message]
    if not is_finite_number(value) or value <= 0:
        return [invalid_message]
    return []


@dataclass
class DesignatedRecord:
    """Common fields of every record carrying localized designations."""

    id: Optional[int] = None
    code: str = ""
    designation_ar: Optional[str] = None
    designation_en: Optional[str] = None
    designation_fr: Optional[str] = None

    def __post_init__(self):
        """Clean text fields after initialization."""
        self.code = safe_string_conversion(self.code)
        self.designation_ar = optional_string(self.designation_ar)
        self.designation_en = optional_string(self.designation_en)
        self.designation_fr = optional_string(self.designation_fr)

    def designation_errors(self, max_length: int) -> List[str]:
        """Validate the three designations (French is mandatory)."""
        errors = []

        if is_null_or_empty(self.designation_fr):
            errors.append("French designation is required")
        elif len(self.designation_fr) > max_length:
            errors.append(f"French designation must not exceed {max_length} characters")

        if self.designation_ar and len(self.designation_ar) > max_length:
            errors.append(f"Arabic designation must not exceed {max_length} characters")

        if self.designation_en and len(self.designation_en) > max_length:
            errors.append(f"English designation must not exceed {max_length} characters")

        return errors

    def code_errors(self, max_length: int) -> List[str]:
        """Validate that the code is present and short enough."""
        if is_null_or_empty(self.code):
            return ["Code is required"]
        if len(self.code) > max_length:
            return [f"Code must not exceed {max_length} characters"]
        return []

    def get_validation_errors(self, config: Optional[LocalizationConfig] = None) -> List[str]:
        """
        Get list of validation errors for this record.

        Args:
            config: Configuration giving the code and designation length limits
        """
        config = config or DEFAULT_CONFIG
        return (self.code_errors(config.code_max_length)
                + self.designation_errors(config.designation_max_length))

    def is_valid(self, config: Optional[LocalizationConfig] = None) -> bool:
        """Check if the record satisfies the backend constraints."""
        return not self.get_validation_errors(config)

    def _designation_payload(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'code': self.code or None,
            'designationAr': self.designation_ar,
            'designationEn': self.designation_en,
            'designationFr': self.designation_fr,
        }

    def to_payload(self) -> Dict[str, Any]:
        """Convert to a backend request body (camelCase, unset fields dropped)."""
        return drop_none(self._designation_payload())


@dataclass
class Country(DesignatedRecord):
    """Represents a country; independent of the State subtree."""

    def get_validation_errors(self, config: Optional[LocalizationConfig] = None) -> List[str]:
        config = config or DEFAULT_CONFIG
        errors = []
        if is_null_or_empty(self.code):
            errors.append("Code is required")
        elif not (2 <= len(self.code) <= 3 and self.code.isalpha() and self.code.isupper()):
            errors.append("Country code must be 2-3 uppercase letters")
        return errors + self.designation_errors(config.designation_max_length)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> 'Country':
        """Create a country from a backend payload."""
        return cls(**_designation_kwargs(payload))


@dataclass
class State(DesignatedRecord):
    """Represents a state, the root of the administrative hierarchy."""

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> 'State':
        """Create a state from a backend payload."""
        return cls(**_designation_kwargs(payload))


@dataclass
class District(DesignatedRecord):
    """Represents a district; always belongs to a state."""

    state_id: Optional[int] = None

    def get_validation_errors(self, config: Optional[LocalizationConfig] = None) -> List[str]:
        config = config or DEFAULT_CONFIG
        errors = self.code_errors(config.code_max_length)
        errors.extend(_positive_id_errors(
            self.state_id, "State is required", "State ID must be a positive number"
        ))
        return errors + self.designation_errors(config.designation_max_length)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> 'District':
        """Create a district from a backend payload (stateId or nested state)."""
        return cls(
            state_id=_parent_id(payload, ('stateId', 'state_id'), 'state'),
            **_designation_kwargs(payload)
        )

    def to_payload(self) -> Dict[str, Any]:
        payload = self._designation_payload()
        payload['stateId'] = self.state_id
        return drop_none(payload)


@dataclass
class Locality(DesignatedRecord):
    """Represents a locality; always belongs to a district."""

    district_id: Optional[int] = None

    def get_validation_errors(self, config: Optional[LocalizationConfig] = None) -> List[str]:
        config = config or DEFAULT_CONFIG
        errors = self.code_errors(config.code_max_length)
        errors.extend(_positive_id_errors(
            self.district_id, "District is required", "District ID must be a positive number"
        ))
        return errors + self.designation_errors(config.designation_max_length)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> 'Locality':
        """Create a locality from a backend payload (districtId or nested district)."""
        return cls(
            district_id=_parent_id(payload, ('districtId', 'district_id'), 'district'),
            **_designation_kwargs(payload)
        )

    def to_payload(self) -> Dict[str, Any]:
        payload = self._designation_payload()
        payload['districtId'] = self.district_id
        return drop_none(payload)


@dataclass
class Zone(DesignatedRecord):
    """Represents a zone; no structural parent."""

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> 'Zone':
        """Create a zone from a backend payload."""
        return cls(**_designation_kwargs(payload))


@dataclass
class Location:
    """Represents a named point, optionally attached to a locality."""

    id: Optional[int] = None
    sequence: Optional[int] = None
    place_name: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    elevation: Optional[float] = None
    locality_id: Optional[int] = None
    designation_ar: Optional[str] = None
    designation_en: Optional[str] = None
    designation_fr: Optional[str] = None

    def __post_init__(self):
        """Clean text fields after initialization."""
        self.place_name = safe_string_conversion(self.place_name)
        self.designation_ar = optional_string(self.designation_ar)
        self.designation_en = optional_string(self.designation_en)
        self.designation_fr = optional_string(self.designation_fr)

    @property
    def code(self) -> str:
        """The place name plays the role of the code for label resolution."""
        return self.place_name

    def get_validation_errors(self, config: Optional[LocalizationConfig] = None) -> List[str]:
        """
        Get list of validation errors for this record.

        Args:
            config: Configuration giving the place name length limit
        """
        config = config or DEFAULT_CONFIG
        errors = []

        if self.sequence is None:
            errors.append("Sequence is required")
        elif not is_finite_number(self.sequence) or self.sequence != int(self.sequence):
            errors.append("Sequence must be a whole number")
        elif self.sequence < 0:
            errors.append("Sequence must be a non-negative number")

        if is_null_or_empty(self.place_name):
            errors.append("Place name is required")
        elif len(self.place_name) > config.code_max_length:
            errors.append(f"Place name must not exceed {config.code_max_length} characters")

        return errors + _coordinate_errors(self.latitude, self.longitude)

    def is_valid(self, config: Optional[LocalizationConfig] = None) -> bool:
        return not self.get_validation_errors(config)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> 'Location':
        """Create a location from a backend payload."""
        return cls(
            id=safe_int_conversion(pick(payload, 'id')),
            sequence=safe_sequence_conversion(pick(payload, 'sequence')),
            place_name=safe_string_conversion(pick(payload, 'placeName', 'place_name', 'code')),
            latitude=safe_float_conversion(pick(payload, 'latitude', 'lat')),
            longitude=safe_float_conversion(pick(payload, 'longitude', 'lon', 'lng')),
            elevation=safe_float_conversion(pick(payload, 'elevation')),
            locality_id=_parent_id(payload, ('localityId', 'locality_id'), 'locality'),
            designation_ar=pick(payload, 'designationAr', 'designation_ar'),
            designation_en=pick(payload, 'designationEn', 'designation_en'),
            designation_fr=pick(payload, 'designationFr', 'designation_fr'),
        )

    def to_payload(self) -> Dict[str, Any]:
        return drop_none({
            'id': self.id,
            'sequence': self.sequence,
            'placeName': self.place_name or None,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'elevation': self.elevation,
            'localityId': self.locality_id,
            'designationAr': self.designation_ar,
            'designationEn': self.designation_en,
            'designationFr': self.designation_fr,
        })


@dataclass
class Coordinate:
    """One ordered waypoint along the route of a linear infrastructure."""

    sequence: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    infrastructure_id: Optional[int] = None
    elevation: Optional[float] = None
    id: Optional[int] = None

    def get_validation_errors(self) -> List[str]:
        """Get list of validation errors for this waypoint."""
        errors = []

        if self.sequence is None:
            errors.append("Sequence is required")
        elif not is_finite_number(self.sequence) or self.sequence != int(self.sequence):
            errors.append("Sequence must be a whole number")
        elif self.sequence <= 0:
            errors.append("Sequence number must be positive")

        errors.extend(_coordinate_errors(self.latitude, self.longitude))

        if self.infrastructure_id is None:
            errors.append("Infrastructure is required")

        return errors

    def is_valid(self) -> bool:
        return not self.get_validation_errors()

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> 'Coordinate':
        """Create a coordinate from a backend payload."""
        return cls(
            id=safe_int_conversion(pick(payload, 'id')),
            sequence=safe_sequence_conversion(pick(payload, 'sequence')),
            latitude=safe_float_conversion(pick(payload, 'latitude', 'lat')),
            longitude=safe_float_conversion(pick(payload, 'longitude', 'lon', 'lng')),
            elevation=safe_float_conversion(pick(payload, 'elevation')),
            infrastructure_id=_parent_id(
                payload, ('infrastructureId', 'infrastructure_id'), 'infrastructure'
            ),
        )

    def to_payload(self) -> Dict[str, Any]:
        return drop_none({
            'id': self.id,
            'sequence': self.sequence,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'elevation': self.elevation,
            'infrastructureId': self.infrastructure_id,
        })
