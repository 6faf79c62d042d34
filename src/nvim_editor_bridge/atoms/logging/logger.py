import logging
import os
import weakref
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

LOG_LEVEL_ENV_VAR = "NVIM_BRIDGE_LOG_LEVEL"
LOG_DIR_ENV_VAR = "NVIM_BRIDGE_LOG_DIR"
LOG_FILE_NAME = "nvim_editor_bridge.log"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Package-wide settings applied by configure_logging()
_package_defaults: Dict[str, Any] = {"level": None, "log_dir": None, "verbose": False}
_live_loggers: "weakref.WeakSet[Logger]" = weakref.WeakSet()


def resolve_level(level_name: Optional[str]) -> Tuple[int, bool]:
    """
    Map a level name to a logging level and the verbose flag.

    ``VERBOSE`` is DEBUG with verbose formatting; unknown names map to INFO.
    """
    name = (level_name or "").upper()
    if name == "VERBOSE":
        return logging.DEBUG, True
    return _LEVELS.get(name, logging.INFO), False


class Logger:
    """Custom logger that writes to the console (stderr) and optionally to a file."""

    def __init__(
        self,
        name: str,
        log_dir: Optional[Union[str, Path]] = None,
        level: Optional[int] = None,
        verbose: bool = False,
    ):
        """
        Initialize the logger.

        Args:
            name: Logger name
            log_dir: Directory to store the log file (falls back to the package
                     log directory, then NVIM_BRIDGE_LOG_DIR; no file logging when unset)
            level: Logging level (falls back to the package level, then
                   NVIM_BRIDGE_LOG_LEVEL, then INFO)
            verbose: Enable verbose logging mode (applies if level is DEBUG)
        """
        self.name = name
        self._requested_log_dir = log_dir
        self._requested_level = level
        self._requested_verbose = verbose
        self.logger = logging.getLogger(name)
        self.logger.propagate = False

        self._setup()
        _live_loggers.add(self)

    def _setup(self) -> None:
        """(Re)build handlers from the requested values and the package defaults."""
        verbose = self._requested_verbose or bool(_package_defaults["verbose"])
        level = self._requested_level
        if level is None:
            level = _package_defaults["level"]

        env_log_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").upper()
        if level is None:
            level, env_verbose = resolve_level(env_log_level)
            verbose = verbose or env_verbose
        elif level == logging.DEBUG and env_log_level == "VERBOSE":
            verbose = True

        self._verbose = verbose
        self.level = level
        self.log_file_path: Optional[Path] = None

        self.logger.setLevel(level)
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        if level == logging.DEBUG:
            if self._verbose:
                log_formatter = logging.Formatter(
                    "%(asctime)s [%(levelname)s] %(name)s (%(pathname)s:%(lineno)d): %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            else:
                log_formatter = logging.Formatter(
                    "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
        else:
            # Compact formatter for non-debug levels
            log_formatter = logging.Formatter(
                "%(asctime)s [%(levelname)s] %(message)s",
                datefmt="%H:%M:%S",
            )

        # stderr, so stdout stays free for the MCP stdio transport
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(log_formatter)
        console_handler.setLevel(level)
        self.logger.addHandler(console_handler)

        log_dir = self._requested_log_dir
        if log_dir is None:
            log_dir = _package_defaults["log_dir"]
        if log_dir is None and os.environ.get(LOG_DIR_ENV_VAR):
            log_dir = os.environ[LOG_DIR_ENV_VAR]

        if log_dir is not None:
            log_dir = Path(log_dir).expanduser()
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file_path = log_dir / LOG_FILE_NAME

            file_handler = logging.FileHandler(log_file_path, mode="a")
            file_handler.setFormatter(log_formatter)
            file_handler.setLevel(level)
            self.logger.addHandler(file_handler)

            self.log_file_path = log_file_path

    def is_verbose(self) -> bool:
        """Check if verbose mode is enabled."""
        return self._verbose

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug message."""
        self.logger.debug(message, **kwargs)

    def verbose(self, message: str, **kwargs: Any) -> None:
        """Log a message at DEBUG level only if verbose mode is enabled."""
        if self._verbose:
            self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log an info message."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning message."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error message."""
        self.logger.error(message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        """Log a critical message."""
        self.logger.critical(message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log an exception message with traceback."""
        self.logger.exception(message, **kwargs)


def configure_logging(
    level: Optional[Union[int, str]] = None,
    log_dir: Optional[Union[str, Path]] = None,
    verbose: bool = False,
) -> None:
    """
    Set the package-wide logging level, log directory and verbose mode.

    Applies to loggers created later and reconfigures every logger that already
    exists, including module-level ones created at import time. Values passed
    explicitly to get_logger() still take precedence. Calling it without
    arguments restores the environment-driven defaults.

    Args:
        level: A logging level or level name (``VERBOSE`` enables verbose mode).
        log_dir: Directory for the shared log file.
        verbose: Enable verbose logging mode (applies if level is DEBUG).
    """
    if isinstance(level, str):
        level, level_verbose = resolve_level(level)
        verbose = verbose or level_verbose

    _package_defaults["level"] = level
    _package_defaults["log_dir"] = log_dir
    _package_defaults["verbose"] = verbose

    for live_logger in list(_live_loggers):
        live_logger._setup()


def get_logger(
    name: str,
    log_dir: Optional[Union[str, Path]] = None,
    level: Optional[int] = None,
    verbose: bool = False,
) -> Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name
        log_dir: Directory to store log files (optional, see configure_logging)
        level: Logging level (optional, see configure_logging)
        verbose: Enable verbose logging mode (applies if level is DEBUG)

    Returns:
        Configured Logger instance
    """
    return Logger(
        name=name,
        log_dir=log_dir,
        level=level,
        verbose=verbose,
    )
