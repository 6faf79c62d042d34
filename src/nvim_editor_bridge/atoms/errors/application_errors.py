"""
Custom exception hierarchy for the application.
"""

from typing import Any, Dict, Optional


class BaseApplicationError(Exception):
    """Base class for all application-specific exceptions."""

    def __init__(self, error_code: str, user_friendly_message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize a new BaseApplicationError.

        Args:
            error_code: A unique code identifying the error.
            user_friendly_message: A message suitable for displaying to end users.
            details: Additional details about the error for debugging purposes.
        """
        super().__init__(user_friendly_message)
        self.error_code = error_code
        self.user_friendly_message = user_friendly_message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert the exception to a dictionary for serialization."""
        return {
            "error_code": self.error_code,
            "user_friendly_message": self.user_friendly_message,
            "details": self.details,
        }


class ValidationError(BaseApplicationError):
    """Raised when input validation fails."""

    pass


class ProcessingError(BaseApplicationError):
    """Raised when there is an error during business logic processing."""

    pass


class ConfigurationError(BaseApplicationError):
    """Raised when user configuration is missing or malformed."""

    pass


class RejectedRequestError(ValidationError):
    """Raised when an open request names an unsupported or missing file."""

    pass


class LaunchFailedError(ProcessingError):
    """Raised when an external process could not be started."""

    pass


class MisconfigurationError(ConfigurationError):
    """Raised when a command template is empty or cannot be parsed."""

    pass


class UnknownPreferenceError(ConfigurationError):
    """Raised when a settings field name is not recognised."""

    pass
