import traceback
from typing import Any, Dict, Optional

from nvim_editor_bridge.atoms.errors.application_errors import BaseApplicationError
from nvim_editor_bridge.atoms.logging.logger import Logger as ProjectLogger
from nvim_editor_bridge.atoms.logging.logger import get_logger


class ErrorHandler:
    """Provides utility methods for handling exceptions consistently at the integration boundary."""

    _logger: ProjectLogger = get_logger(__name__)

    @classmethod
    def format_exception(cls, exception: Exception) -> Dict[str, Any]:
        """
        Format an exception as a structured error response.

        Args:
            exception: The exception instance to format.

        Returns:
            A dictionary representing the structured error.
        """
        error: Dict[str, Any] = {
            "type": type(exception).__name__,
            "message": str(exception),
        }
        if isinstance(exception, BaseApplicationError):
            error.update(exception.to_dict())
        else:
            error["traceback"] = traceback.format_exc()

        return {"success": False, "error": error}

    @classmethod
    def log_exception(
        cls,
        exception: Exception,
        context: Optional[str] = None,
        logger_instance: Optional[ProjectLogger] = None,
    ) -> None:
        """
        Log an exception with optional context using the project's logging system.

        Args:
            exception: The exception instance to log.
            context: Optional string providing context for where the error occurred.
            logger_instance: Optional specific logger instance to use.
                             Defaults to ErrorHandler's own logger if None.
        """
        logger_to_use = logger_instance if logger_instance is not None else cls._logger

        log_message = f"Error: {str(exception)}"
        if context:
            log_message = f"Error in {context}: {str(exception)}"

        logger_to_use.error(log_message, exc_info=True)

    @classmethod
    def handle_exception(
        cls,
        exception: Exception,
        context: Optional[str] = None,
        logger_instance: Optional[ProjectLogger] = None,
    ) -> Dict[str, Any]:
        """
        Handle an exception by logging it and then formatting it as a structured response.

        Args:
            exception: The exception instance to handle.
            context: Optional string providing context for the error.
            logger_instance: Optional specific logger instance to use for logging.

        Returns:
            A dictionary representing the structured error, suitable for an error response.
        """
        cls.log_exception(exception, context, logger_instance)
        return cls.format_exception(exception)
