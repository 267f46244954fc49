"""
Custom exception classes for the localization core.

This module defines the exception hierarchy raised by the hierarchy index,
the cascade selectors, the snapshot loader and the configuration layer.
Label resolution and route geometry never raise; route validation returns
its errors as a list and only raises on explicit request.
"""

from typing import Optional, List, Dict, Any


class LocalizationError(Exception):
    """Base exception class for all localization errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        """
        Initialize the base localization error.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional context information about the error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code,
            'context': self.context
        }


class NotFoundError(LocalizationError):
    """Exception raised when a referenced entity cannot be resolved in the index."""

    def __init__(self, message: str, entity_type: str, entity_id: Any = None,
                 referenced_by: Optional[str] = None):
        """
        Initialize not found error.

        Args:
            message: Human-readable error message
            entity_type: Hierarchy level of the missing entity (state, district, ...)
            entity_id: Identifier that could not be resolved
            referenced_by: Description of the record holding the dangling reference
        """
        context = {
            'entity_type': entity_type,
            'entity_id': entity_id,
            'referenced_by': referenced_by
        }
        super().__init__(message, error_code='NOT_FOUND', context=context)
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.referenced_by = referenced_by


class ValidationError(LocalizationError):
    """Exception carrying the complete list of validation failures."""

    def __init__(self, message: str, errors: Optional[List[str]] = None,
                 field_name: Optional[str] = None):
        """
        Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Every validation failure found, in discovery order
            field_name: Name of the field that failed validation, if single
        """
        context = {
            'field_name': field_name,
            'errors': list(errors or [])
        }
        super().__init__(message, error_code='VALIDATION_ERROR', context=context)
        self.errors = list(errors or [])
        self.field_name = field_name


class CascadeStateError(LocalizationError):
    """Exception raised when a cascade transition is not allowed in the current state."""

    def __init__(self, message: str, transition: str, current_state: str,
                 selector: Optional[str] = None):
        """
        Initialize cascade state error.

        Args:
            message: Human-readable error message
            transition: Name of the rejected transition
            current_state: State the selector was in
            selector: Label of the selector instance
        """
        context = {
            'transition': transition,
            'current_state': current_state,
            'selector': selector
        }
        super().__init__(message, error_code='CASCADE_STATE_ERROR', context=context)
        self.transition = transition
        self.current_state = current_state
        self.selector = selector


class DataLoadError(LocalizationError):
    """Exception raised for snapshot loading errors."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 line_number: Optional[int] = None, original_error: Optional[Exception] = None):
        """
        Initialize data load error.

        Args:
            message: Human-readable error message
            file_path: Path to the file that caused the error
            line_number: Line number where the error occurred
            original_error: Original exception that caused this error
        """
        context = {
            'file_path': file_path,
            'line_number': line_number,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='DATA_LOAD_ERROR', context=context)
        self.file_path = file_path
        self.line_number = line_number
        self.original_error = original_error


class FileAccessError(LocalizationError):
    """Exception raised for file access and I/O errors."""

    def __init__(self, message: str, file_path: str, operation: str,
                 original_error: Optional[Exception] = None):
        """
        Initialize file access error.

        Args:
            message: Human-readable error message
            file_path: Path to the file that caused the error
            operation: Type of operation that failed (read, list, ...)
            original_error: Original exception that caused this error
        """
        context = {
            'file_path': file_path,
            'operation': operation,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='FILE_ACCESS_ERROR', context=context)
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class ConfigurationError(LocalizationError):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, config_key: Optional[str] = None,
                 config_value: Any = None, valid_values: Optional[List[Any]] = None):
        """
        Initialize configuration error.

        Args:
            message: Human-readable error message
            config_key: Configuration key that has invalid value
            config_value: Invalid configuration value
            valid_values: List of valid values for the configuration key
        """
        context = {
            'config_key': config_key,
            'config_value': str(config_value) if config_value is not None else None,
            'valid_values': [str(v) for v in valid_values] if valid_values else None
        }
        super().__init__(message, error_code='CONFIGURATION_ERROR', context=context)
        self.config_key = config_key
        self.config_value = config_value
        self.valid_values = valid_values or []


class HierarchyValidationError(LocalizationError):
    """Exception raised when a hierarchy level definition is inconsistent."""

    def __init__(self, message: str, issues: Optional[List[str]] = None):
        """
        Initialize hierarchy validation error.

        Args:
            message: Human-readable error message
            issues: Structural issues found (missing parents, cycles)
        """
        super().__init__(message, error_code='HIERARCHY_VALIDATION_ERROR',
                         context={'issues': list(issues or [])})
        self.issues = list(issues or [])


# Utility functions for exception handling

def create_not_found_error(entity_type: str, entity_id: Any,
                           referenced_by: Optional[str] = None) -> NotFoundError:
    """
    Create a standardized not found error.

    Args:
        entity_type: Hierarchy level of the missing entity
        entity_id: Identifier that could not be resolved
        referenced_by: Description of the record holding the reference

    Returns:
        NotFoundError instance
    """
    message = f"{entity_type.capitalize()} {entity_id} not found"
    if referenced_by:
        message += f" (referenced by {referenced_by})"

    return NotFoundError(
        message=message,
        entity_type=entity_type,
        entity_id=entity_id,
        referenced_by=referenced_by
    )


def create_file_error(operation: str, file_path: str, original_error: Exception) -> FileAccessError:
    """
    Create a standardized file access error.

    Args:
        operation: Type of file operation that failed
        file_path: Path to the file
        original_error: Original exception

    Returns:
        FileAccessError instance
    """
    message = f"Failed to {operation} file '{file_path}': {str(original_error)}"

    return FileAccessError(
        message=message,
        file_path=file_path,
        operation=operation,
        original_error=original_error
    )


def get_error_severity(error: Exception) -> str:
    """
    Get the severity level of an error.

    Args:
        error: Exception to evaluate

    Returns:
        Severity level string (low, medium, high, critical)
    """
    if isinstance(error, (ConfigurationError, HierarchyValidationError)):
        return 'critical'
    elif isinstance(error, (DataLoadError, FileAccessError)):
        return 'high'
    elif isinstance(error, (NotFoundError, CascadeStateError)):
        return 'medium'
    elif isinstance(error, ValidationError):
        return 'low'
    else:
        return 'medium'
