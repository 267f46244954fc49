"""Tests for configuration, logging setup and the exception hierarchy."""
import logging

import pytest

from hyflo_localization.config import LocalizationConfig
from hyflo_localization.exceptions import (
    ConfigurationError,
    DataLoadError,
    NotFoundError,
    ValidationError,
    create_not_found_error,
    get_error_severity,
)
from hyflo_localization.logging_config import LocalizationLogger, setup_logging


def test_default_config():
    config = LocalizationConfig()
    assert config.base_language == 'fr'
    assert config.earth_radius_km == 6371.0
    assert config.min_route_points == 2
    assert config.to_dict()['log_level'] == "INFO"


def test_config_normalizes_values():
    config = LocalizationConfig(base_language="EN-us", log_level="debug")
    assert config.base_language == 'en'
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("overrides, key", [
    ({'base_language': 'de'}, 'base_language'),
    ({'min_route_points': 1}, 'min_route_points'),
    ({'earth_radius_km': 0}, 'earth_radius_km'),
    ({'coordinate_precision': 12}, 'coordinate_precision'),
    ({'suggestion_threshold': 101}, 'suggestion_threshold'),
    ({'suggestion_limit': 0}, 'suggestion_limit'),
    ({'log_level': 'LOUD'}, 'log_level'),
])
def test_invalid_config(overrides, key):
    with pytest.raises(ConfigurationError) as exc_info:
        LocalizationConfig(**overrides)
    assert exc_info.value.config_key == key
    assert exc_info.value.error_code == 'CONFIGURATION_ERROR'


def test_config_from_dict_round_trip():
    config = LocalizationConfig(base_language='ar', suggestion_threshold=70)
    assert LocalizationConfig.from_dict(config.to_dict()) == config


def test_config_from_env():
    config = LocalizationConfig.from_env({
        'HYFLO_BASE_LANGUAGE': 'en',
        'HYFLO_LOG_LEVEL': 'warning',
        'HYFLO_COORDINATE_PRECISION': '6',
        'HYFLO_EARTH_RADIUS_KM': '6378.137',
    })
    assert config.base_language == 'en'
    assert config.log_level == 'WARNING'
    assert config.coordinate_precision == 6
    assert config.earth_radius_km == 6378.137


def test_config_from_env_rejects_bad_numbers():
    with pytest.raises(ConfigurationError) as exc_info:
        LocalizationConfig.from_env({'HYFLO_SUGGESTION_THRESHOLD': 'high'})
    assert exc_info.value.config_key == 'suggestion_threshold'


def test_setup_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "logs" / "hyflo.log"
    logger = setup_logging(LocalizationConfig(log_level="INFO", log_file=str(log_file)))
    assert isinstance(logger, LocalizationLogger)
    assert logger.logger.level == logging.INFO

    logger.log_route_summary(5, 3, 222.39, 0)
    logger.log_data_quality_warning("District 9 references missing state 99")
    for handler in logger.logger.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "Route for infrastructure 5" in content
    assert "Total length: 222.390 km" in content
    assert "DATA QUALITY: District 9 references missing state 99" in content


def test_logger_replaces_handlers():
    LocalizationLogger(name="hyflo_localization.test", level="DEBUG")
    logger = LocalizationLogger(name="hyflo_localization.test", level="ERROR")
    assert len(logger.logger.handlers) == 1
    assert logger.logger.level == logging.ERROR


def test_not_found_error_context():
    error = create_not_found_error('state', 99, referenced_by="district 9")
    assert isinstance(error, NotFoundError)
    assert error.message == "State 99 not found (referenced by district 9)"
    assert error.to_dict() == {
        'error_type': 'NotFoundError',
        'message': "State 99 not found (referenced by district 9)",
        'error_code': 'NOT_FOUND',
        'context': {'entity_type': 'state', 'entity_id': 99, 'referenced_by': "district 9"},
    }


def test_validation_error_carries_every_error():
    error = ValidationError("Route is invalid", errors=["a", "b"])
    assert error.errors == ["a", "b"]
    assert error.context['errors'] == ["a", "b"]


def test_error_severity():
    assert get_error_severity(ConfigurationError("bad")) == 'critical'
    assert get_error_severity(DataLoadError("bad")) == 'high'
    assert get_error_severity(create_not_found_error('state', 1)) == 'medium'
    assert get_error_severity(ValidationError("bad")) == 'low'
    assert get_error_severity(RuntimeError("other")) == 'medium'
