import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from nvim_editor_bridge.atoms.logging.logger import Logger, get_logger
from nvim_editor_bridge.atoms.utils.config_constants import DEFAULT_LOG_LEVEL, DEFAULT_PREFERENCES_PATH


class ConfigurationSystem:
    """
    Runtime configuration for the bridge itself (not the editor preferences).

    Supports loading from:
    - Environment variables (with NVIM_BRIDGE_ prefix)
    - JSON and YAML configuration files
    - Default configuration values

    Provides type conversion and hierarchical access to configuration values.
    """

    _instance: Optional["ConfigurationSystem"] = None
    _initialized: bool = False

    def __new__(cls) -> "ConfigurationSystem":
        if cls._instance is None:
            cls._instance = super(ConfigurationSystem, cls).__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if self._initialized:
            return

        self._config: Dict[str, Any] = {}
        self._default_config: Dict[str, Any] = {
            "logging": {
                "level": DEFAULT_LOG_LEVEL,
                "directory": None,
                "verbose": False,
            },
            "preferences": {
                "path": DEFAULT_PREFERENCES_PATH,
            },
        }

        self._logger: Logger = get_logger("configuration_system")
        self._initialized = True

        self.load_from_env()

        self._logger.debug("Configuration system initialized")

    def load_from_env(self, prefix: str = "NVIM_BRIDGE_") -> None:
        """
        Load configuration from environment variables.

        Environment variables should be in the format:
        NVIM_BRIDGE_SECTION_KEY=value

        Example: NVIM_BRIDGE_LOGGING_LEVEL=DEBUG
        """
        loaded_count = 0

        for key, value in os.environ.items():
            if key.startswith(prefix):
                # NVIM_BRIDGE_LOGGING_LEVEL -> ['logging', 'level']
                config_path = key[len(prefix) :].lower().split("_", 1)
                self._set_config_value(config_path, value)
                loaded_count += 1
                self._logger.debug(f"Loaded environment variable: {key} -> {config_path}")

        if loaded_count > 0:
            self._logger.debug(f"Loaded {loaded_count} configuration values from environment variables")

    def load_from_file(self, file_path: Union[str, Path]) -> None:
        """
        Load configuration from a file (JSON or YAML).

        Args:
            file_path: Path to the configuration file

        Raises:
            FileNotFoundError: If the configuration file doesn't exist
            ValueError: If the file format is unsupported
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        self._logger.info(f"Loading configuration from file: {file_path}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                if file_path.suffix.lower() in [".yaml", ".yml"]:
                    import yaml

                    config = yaml.safe_load(f)
                elif file_path.suffix.lower() == ".json":
                    config = json.load(f)
                else:
                    raise ValueError(f"Unsupported configuration file format: {file_path.suffix}")

            if config:
                self._merge_dicts(config, self._config)
                self._logger.info(f"Successfully loaded configuration from {file_path}")
            else:
                self._logger.warning(f"Configuration file {file_path} is empty or invalid")

        except Exception as e:
            self._logger.error(f"Error loading configuration from {file_path}: {e}")
            raise

    def _merge_dicts(self, source: Dict[str, Any], destination: Dict[str, Any]) -> None:
        """
        Merge source dictionary into destination dictionary.

        Args:
            source: Source dictionary to merge from
            destination: Destination dictionary to merge into
        """
        for key, value in source.items():
            if isinstance(value, dict) and key in destination and isinstance(destination[key], dict):
                self._merge_dicts(value, destination[key])
            else:
                destination[key] = value

    def _set_config_value(self, path: List[str], value: str) -> None:
        current = self._config
        for i, key in enumerate(path):
            if i == len(path) - 1:
                current[key] = self._convert_value(value)
            else:
                if not isinstance(current.get(key), dict):
                    current[key] = {}
                current = current[key]

    def _convert_value(self, value: str) -> Any:
        """
        Convert a string value to the appropriate Python type.

        Args:
            value: String value to convert

        Returns:
            Converted value (bool, int, float, or str)
        """
        if value.lower() in ("true", "yes", "on"):
            return True
        elif value.lower() in ("false", "no", "off"):
            return False

        if value.isdigit():
            return int(value)

        if "." in value and value.replace(".", "", 1).isdigit():
            return float(value)

        return value

    def get(self, *path: str, default: Any = None) -> Any:
        """
        Get a configuration value at the specified path.

        Args:
            *path: Path components to the configuration value
            default: Default value to return if the path doesn't exist

        Returns:
            Configuration value or default
        """
        if not path:
            return default

        value = self._get_value(self._config, path)
        if value is not None:
            return value

        value = self._get_value(self._default_config, path)
        if value is not None:
            return value

        return default

    def _get_value(self, config: Dict[str, Any], path: tuple[str, ...]) -> Optional[Any]:
        current = config
        for key in path:
            if not isinstance(current, dict) or key not in current:
                return None
            current = current[key]
        return current

    def set(self, value: Any, *path: str) -> None:
        """
        Set a configuration value at the specified path.

        Args:
            value: Value to set
            *path: Path components to the configuration value
        """
        current = self._config
        for i, key in enumerate(path):
            if i == len(path) - 1:
                current[key] = value
                self._logger.debug(f"Set configuration value: {'.'.join(path)} = {value}")
            else:
                if key not in current:
                    current[key] = {}
                current = current[key]

    def get_all(self) -> Dict[str, Any]:
        """Get the complete configuration (merged defaults and user config)."""
        result = copy.deepcopy(self._default_config)
        self._merge_dicts(self._config, result)
        return result

    def has(self, *path: str) -> bool:
        if not path:
            return False

        return (
            self._get_value(self._config, path) is not None or self._get_value(self._default_config, path) is not None
        )

    def reload(self) -> None:
        """
        Reload configuration from environment variables.

        This clears user configuration and reloads from environment.
        """
        self._config.clear()
        self.load_from_env()
        self._logger.info("Configuration reloaded from environment")

    def validate(self) -> List[str]:
        """
        Validate the current configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors: List[str] = []

        log_level = str(self.get("logging", "level")).upper()
        valid_levels = ["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if log_level not in valid_levels:
            errors.append(f"Invalid logging level: {log_level}. Must be one of {valid_levels}")

        preferences_path = self.get("preferences", "path")
        if not isinstance(preferences_path, str) or not preferences_path.strip():
            errors.append(f"Invalid preferences path: {preferences_path!r}")

        for error in errors:
            self._logger.warning(f"Validation error: {error}")

        return errors

    def preferences_path(self) -> Path:
        """Location of the editor preferences file."""
        return Path(str(self.get("preferences", "path", default=DEFAULT_PREFERENCES_PATH))).expanduser()

    def logging_level(self) -> Optional[str]:
        """
        Logging level set through the environment or a configuration file.

        Returns None when only the built-in default applies, so the
        NVIM_BRIDGE_LOG_LEVEL variable read by the logger still takes effect.
        """
        level = self._get_value(self._config, ("logging", "level"))
        return str(level).upper() if level is not None else None

    def log_directory(self) -> Optional[Path]:
        """Directory for the log file, or None for console-only logging."""
        directory = self.get("logging", "directory")
        return Path(str(directory)).expanduser() if directory else None


def get_config() -> ConfigurationSystem:
    """
    Get the global configuration instance.

    Returns:
        ConfigurationSystem singleton instance
    """
    return ConfigurationSystem()
