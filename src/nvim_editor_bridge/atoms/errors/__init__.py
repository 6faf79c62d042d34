from nvim_editor_bridge.atoms.errors.application_errors import (
    BaseApplicationError,
    ConfigurationError,
    LaunchFailedError,
    MisconfigurationError,
    ProcessingError,
    RejectedRequestError,
    UnknownPreferenceError,
    ValidationError,
)

__all__ = [
    "BaseApplicationError",
    "ConfigurationError",
    "LaunchFailedError",
    "MisconfigurationError",
    "ProcessingError",
    "RejectedRequestError",
    "UnknownPreferenceError",
    "ValidationError",
]
