"""
Logging configuration for the localization core.

This module provides the logger wrapper used by the command-line entry point,
with configurable levels, optional file output and helpers for the summaries
printed after loading a snapshot or checking a route.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


class LocalizationLogger:
    """Custom logger for localization operations."""

    def __init__(self, name: str = "hyflo_localization", level: str = "INFO",
                 log_file: Optional[str] = None):
        """
        Initialize the localization logger.

        Args:
            name: Logger name
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional file path for log output
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

        # Clear any existing handlers
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # Console handler
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            self._setup_file_handler(log_file, formatter)

    def _setup_file_handler(self, log_file: str, formatter: logging.Formatter):
        """Set up file logging handler."""
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def log_data_quality_warning(self, message: str):
        """Log data quality warnings."""
        self.warning(f"DATA QUALITY: {message}")

    def log_file_operation(self, operation: str, file_path: str, record_count: int):
        """Log file operations."""
        self.info(f"{operation}: {file_path} ({record_count:,} records)")

    def log_index_summary(self, stats: dict):
        """Log the size of a freshly built hierarchy index."""
        parts = ", ".join(f"{count:,} {name}" for name, count in stats.items())
        self.info(f"Hierarchy index built: {parts}")

    def log_route_summary(self, infrastructure_id, point_count: int,
                          length_km: float, error_count: int):
        """Log the outcome of a route check."""
        self.info("-" * 40)
        self.info(f"Route for infrastructure {infrastructure_id}")
        self.info(f"Coordinates: {point_count:,}")
        self.info(f"Total length: {length_km:.3f} km")
        if error_count:
            self.warning(f"Validation errors: {error_count}")
        else:
            self.info("Route is valid")


def setup_logging(config) -> LocalizationLogger:
    """
    Set up logging based on configuration.

    Args:
        config: LocalizationConfig instance

    Returns:
        Configured LocalizationLogger instance
    """
    return LocalizationLogger(
        name="hyflo_localization",
        level=config.log_level,
        log_file=config.log_file
    )
