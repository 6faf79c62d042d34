"""
Preference storage backends.

``JsonPreferenceStore`` is the persisted, process-wide store the CLI and MCP
server use; ``InMemoryPreferenceStore`` backs tests and embedding hosts that
persist preferences themselves.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from nvim_editor_bridge.atoms.logging.logger import Logger, get_logger
from nvim_editor_bridge.atoms.utils.config_constants import DEFAULT_PREFERENCES_PATH


class InMemoryPreferenceStore:
    """Dictionary-backed preference store."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def update(self, values: Dict[str, Any]) -> None:
        self._values.update(values)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)


class JsonPreferenceStore:
    """
    Preference store persisted as a JSON object in a single file.

    The file is read lazily, re-read when the file on disk changes and
    always re-read before a write, so changes made by another process are
    merged rather than overwritten. Every ``set`` rewrites the file atomically.
    A missing file is an empty store; a corrupt one is logged and treated as
    empty.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        """
        Initialize the store.

        Args:
            path: Location of the preferences file. Defaults to
                  ~/.config/nvim-editor-bridge/preferences.json
        """
        self.path = Path(path or DEFAULT_PREFERENCES_PATH).expanduser()
        self._logger: Logger = get_logger(f"{__name__}.{self.__class__.__name__}")
        self._values: Optional[Dict[str, Any]] = None
        self._signature: Optional[Tuple[int, int]] = None

    def _file_signature(self) -> Optional[Tuple[int, int]]:
        # Atomic replace gives every write a new inode, even within one mtime tick
        try:
            stat = self.path.stat()
            return stat.st_mtime_ns, stat.st_ino
        except OSError:
            return None

    def _load(self, refresh: bool = False) -> Dict[str, Any]:
        signature = self._file_signature()
        if self._values is not None and not refresh and signature == self._signature:
            return self._values

        self._values = self._read()
        self._signature = signature
        return self._values

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self._logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            self._logger.warning(f"Preferences file {self.path} does not contain a JSON object")
            return {}

        self._logger.debug(f"Loaded {len(data)} preferences from {self.path}")
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._merge_and_write({key: value})
        self._logger.debug(f"Set preference: {key} = {value}")

    def update(self, values: Dict[str, Any]) -> None:
        """Set several keys with a single write of the preferences file."""
        self._merge_and_write(values)
        self._logger.debug(f"Set {len(values)} preferences")

    def _merge_and_write(self, values: Dict[str, Any]) -> None:
        merged = dict(self._load(refresh=True))
        merged.update(values)
        self._write(merged)
        self._values = merged
        self._signature = self._file_signature()

    def _write(self, values: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".preferences-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(values, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
