"""
Configuration management for the localization core.

This module provides the configuration dataclass shared by label resolution,
route geometry, snapshot loading and logging.
"""

from dataclasses import dataclass
from typing import Dict, Optional
import os

from .exceptions import ConfigurationError


SUPPORTED_LANGUAGES = ['ar', 'en', 'fr']


@dataclass
class LocalizationConfig:
    """Configuration class for the localization core."""

    # Language used when the requested locale is missing or unknown
    base_language: str = 'fr'

    # Route geometry
    earth_radius_km: float = 6371.0
    min_route_points: int = 2
    coordinate_precision: int = 4

    # Designation constraints
    designation_max_length: int = 100
    code_max_length: int = 10

    # Fuzzy label suggestions (0-100)
    suggestion_threshold: int = 80
    suggestion_limit: int = 10

    # Logging configuration
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_languages()
        self._validate_geometry()
        self._validate_thresholds()
        self._validate_log_level()

    def _validate_languages(self):
        """Validate the base language."""
        self.base_language = (self.base_language or '').lower()[:2]
        if self.base_language not in SUPPORTED_LANGUAGES:
            raise ConfigurationError(
                f"Base language must be one of {SUPPORTED_LANGUAGES}: {self.base_language}",
                config_key='base_language',
                config_value=self.base_language,
                valid_values=SUPPORTED_LANGUAGES
            )

    def _validate_geometry(self):
        """Validate route geometry settings."""
        if self.earth_radius_km <= 0:
            raise ConfigurationError(
                f"Earth radius must be positive: {self.earth_radius_km}",
                config_key='earth_radius_km',
                config_value=self.earth_radius_km
            )

        if self.min_route_points < 2:
            raise ConfigurationError(
                f"A route needs at least 2 points: {self.min_route_points}",
                config_key='min_route_points',
                config_value=self.min_route_points
            )

        if not 0 <= self.coordinate_precision <= 10:
            raise ConfigurationError(
                f"Coordinate precision must be between 0 and 10: {self.coordinate_precision}",
                config_key='coordinate_precision',
                config_value=self.coordinate_precision
            )

    def _validate_thresholds(self):
        """Validate suggestion threshold and field lengths."""
        if not 0 <= self.suggestion_threshold <= 100:
            raise ConfigurationError(
                f"Suggestion threshold must be between 0 and 100: {self.suggestion_threshold}",
                config_key='suggestion_threshold',
                config_value=self.suggestion_threshold
            )

        for key in ('suggestion_limit', 'designation_max_length', 'code_max_length'):
            if getattr(self, key) <= 0:
                raise ConfigurationError(
                    f"{key} must be positive: {getattr(self, key)}",
                    config_key=key,
                    config_value=getattr(self, key)
                )

    def _validate_log_level(self):
        """Validate log level name."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        self.log_level = self.log_level.upper()
        if self.log_level not in valid_levels:
            raise ConfigurationError(
                f"Invalid log level: {self.log_level}",
                config_key='log_level',
                config_value=self.log_level,
                valid_values=valid_levels
            )

    @classmethod
    def from_dict(cls, config_dict: Dict) -> 'LocalizationConfig':
        """Create configuration from dictionary."""
        return cls(**config_dict)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> 'LocalizationConfig':
        """
        Create configuration from HYFLO_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            LocalizationConfig with defaults for unset variables
        """
        environ = os.environ if environ is None else environ
        values = {}

        if environ.get('HYFLO_BASE_LANGUAGE'):
            values['base_language'] = environ['HYFLO_BASE_LANGUAGE']
        if environ.get('HYFLO_LOG_LEVEL'):
            values['log_level'] = environ['HYFLO_LOG_LEVEL']
        if environ.get('HYFLO_LOG_FILE'):
            values['log_file'] = environ['HYFLO_LOG_FILE']

        numeric_keys = {
            'HYFLO_COORDINATE_PRECISION': ('coordinate_precision', int),
            'HYFLO_SUGGESTION_THRESHOLD': ('suggestion_threshold', int),
            'HYFLO_EARTH_RADIUS_KM': ('earth_radius_km', float),
        }
        for env_key, (config_key, convert) in numeric_keys.items():
            raw = environ.get(env_key)
            if not raw:
                continue
            try:
                values[config_key] = convert(raw)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid value for {env_key}: {raw}",
                    config_key=config_key,
                    config_value=raw
                ) from e

        return cls(**values)

    def to_dict(self) -> Dict:
        """Convert configuration to dictionary."""
        return {
            'base_language': self.base_language,
            'earth_radius_km': self.earth_radius_km,
            'min_route_points': self.min_route_points,
            'coordinate_precision': self.coordinate_precision,
            'designation_max_length': self.designation_max_length,
            'code_max_length': self.code_max_length,
            'suggestion_threshold': self.suggestion_threshold,
            'suggestion_limit': self.suggestion_limit,
            'log_level': self.log_level,
            'log_file': self.log_file
        }


DEFAULT_CONFIG = LocalizationConfig()
