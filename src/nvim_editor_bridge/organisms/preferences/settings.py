"""
User-editable editor settings backed by a preference store.

Each field is read from the store on first access, cached, and written
through on every assignment.
"""

import os
from typing import Any, Dict, Iterable, List, Optional, Tuple

from nvim_editor_bridge.atoms.errors.application_errors import UnknownPreferenceError
from nvim_editor_bridge.atoms.logging.logger import get_logger
from nvim_editor_bridge.atoms.types.data_types import CommandTemplate, EditorRole
from nvim_editor_bridge.atoms.utils.config_constants import (
    CLIENT_ARGS_KEY,
    CLIENT_CMD_KEY,
    CLIENT_PID_KEY,
    DEFAULT_BUILTIN_EXTENSIONS,
    DEFAULT_CLIENT_ARGS,
    DEFAULT_CLIENT_CMD,
    DEFAULT_REMOTE_ARGS,
    DEFAULT_REMOTE_CMD,
    DEFAULT_SERVER_ARGS,
    DEFAULT_SERVER_CMD,
    EXTENSION_SEPARATOR,
    EXTRA_EXTENSIONS,
    REMOTE_ARGS_KEY,
    REMOTE_CMD_KEY,
    SERVER_ARGS_KEY,
    SERVER_CMD_KEY,
    USER_EXTENSIONS_KEY,
)
from nvim_editor_bridge.interfaces.preference_store import IPreferenceStore

# field name -> (preference key, default)
COMMAND_FIELDS: Dict[str, Tuple[str, str]] = {
    "server_cmd": (SERVER_CMD_KEY, DEFAULT_SERVER_CMD),
    "server_args": (SERVER_ARGS_KEY, DEFAULT_SERVER_ARGS),
    "client_cmd": (CLIENT_CMD_KEY, DEFAULT_CLIENT_CMD),
    "client_args": (CLIENT_ARGS_KEY, DEFAULT_CLIENT_ARGS),
    "remote_cmd": (REMOTE_CMD_KEY, DEFAULT_REMOTE_CMD),
    "remote_args": (REMOTE_ARGS_KEY, DEFAULT_REMOTE_ARGS),
}

EDITABLE_FIELDS = tuple(COMMAND_FIELDS) + ("handled_extensions",)

_ROLE_FIELDS = {
    EditorRole.SERVER: ("server_cmd", "server_args"),
    EditorRole.CLIENT: ("client_cmd", "client_args"),
    EditorRole.REMOTE: ("remote_cmd", "remote_args"),
}


def default_extensions(
    builtin_extensions: Optional[Iterable[str]] = None,
    user_extensions: Optional[Iterable[str]] = None,
) -> List[str]:
    """
    Build the default handled-extension list.

    Args:
        builtin_extensions: The host's own source file extensions.
        user_extensions: Extensions the host user added to project generation.

    Returns:
        List[str]: The de-duplicated union with the fixed extras, in first-seen order.
    """
    builtin = DEFAULT_BUILTIN_EXTENSIONS if builtin_extensions is None else builtin_extensions
    combined: List[str] = []
    for extension in [*builtin, *(user_extensions or ()), *EXTRA_EXTENSIONS]:
        if extension not in combined:
            combined.append(extension)
    return combined


def parse_extensions(extensions_string: str) -> List[str]:
    """Split a semicolon-delimited extension list, dropping empties and leading dots/asterisks."""
    return [
        part.lstrip(".*")
        for part in extensions_string.split(EXTENSION_SEPARATOR)
        if part and part.lstrip(".*")
    ]


class EditorSettings:
    """
    The bridge's persisted configuration: command templates, the tracked client
    pid and the handled extensions.
    """

    def __init__(
        self,
        store: IPreferenceStore,
        builtin_extensions: Optional[Iterable[str]] = None,
        user_extensions: Optional[Iterable[str]] = None,
    ) -> None:
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")
        self.store = store
        self._default_extensions = default_extensions(builtin_extensions, user_extensions)
        self._cache: Dict[str, Any] = {}

    def _get(self, field: str) -> str:
        if field not in self._cache:
            key, default = COMMAND_FIELDS[field]
            self._cache[field] = self.store.get(key, default)
        return self._cache[field]

    def _set(self, field: str, value: str) -> None:
        key, _ = COMMAND_FIELDS[field]
        self._cache[field] = value
        self.store.set(key, value)

    @property
    def server_cmd(self) -> str:
        return self._get("server_cmd")

    @server_cmd.setter
    def server_cmd(self, value: str) -> None:
        self._set("server_cmd", value)

    @property
    def server_args(self) -> str:
        return self._get("server_args")

    @server_args.setter
    def server_args(self, value: str) -> None:
        self._set("server_args", value)

    @property
    def client_cmd(self) -> str:
        return self._get("client_cmd")

    @client_cmd.setter
    def client_cmd(self, value: str) -> None:
        self._set("client_cmd", value)

    @property
    def client_args(self) -> str:
        return self._get("client_args")

    @client_args.setter
    def client_args(self, value: str) -> None:
        self._set("client_args", value)

    @property
    def remote_cmd(self) -> str:
        return self._get("remote_cmd")

    @remote_cmd.setter
    def remote_cmd(self, value: str) -> None:
        self._set("remote_cmd", value)

    @property
    def remote_args(self) -> str:
        return self._get("remote_args")

    @remote_args.setter
    def remote_args(self, value: str) -> None:
        self._set("remote_args", value)

    @property
    def client_pid(self) -> int:
        if "client_pid" not in self._cache:
            stored = self.store.get(CLIENT_PID_KEY, 0)
            try:
                pid = int(stored or 0)
            except (TypeError, ValueError):
                self.logger.warning(f"Ignoring invalid stored client pid {stored!r}")
                pid = 0
            self._cache["client_pid"] = pid
        return self._cache["client_pid"]

    @client_pid.setter
    def client_pid(self, value: int) -> None:
        self._cache["client_pid"] = int(value)
        self.store.set(CLIENT_PID_KEY, int(value))

    @property
    def handled_extensions_string(self) -> str:
        return self.store.get(USER_EXTENSIONS_KEY, EXTENSION_SEPARATOR.join(self._default_extensions))

    @handled_extensions_string.setter
    def handled_extensions_string(self, value: str) -> None:
        self.store.set(USER_EXTENSIONS_KEY, value)

    @property
    def handled_extensions(self) -> List[str]:
        return parse_extensions(self.handled_extensions_string)

    def supports_extension(self, path: str) -> bool:
        """Return True if the file's extension is one the bridge opens."""
        extension = os.path.splitext(path)[1]
        if not extension:
            return False
        return extension.lstrip(".") in self.handled_extensions

    def command_template(self, role: EditorRole) -> CommandTemplate:
        """Return the configured executable and argument template for a role."""
        cmd_field, args_field = _ROLE_FIELDS[role]
        return CommandTemplate(role=role, command=self._get(cmd_field), arguments=self._get(args_field))

    def reset_arguments(self) -> None:
        """Reset all six command and argument fields to their defaults together."""
        defaults = {field: default for field, (_, default) in COMMAND_FIELDS.items()}
        set_many = getattr(self.store, "update", None)
        if callable(set_many):
            set_many({COMMAND_FIELDS[field][0]: value for field, value in defaults.items()})
        else:
            for field, value in defaults.items():
                self.store.set(COMMAND_FIELDS[field][0], value)
        self._cache.update(defaults)
        self.logger.info("Reset server, client and remote commands to defaults")

    def snapshot(self) -> Dict[str, str]:
        """Return the user-editable fields as a dictionary."""
        values = {field: self._get(field) for field in COMMAND_FIELDS}
        values["handled_extensions"] = self.handled_extensions_string
        return values

    def update(self, **fields: str) -> None:
        """
        Assign several user-editable fields by name.

        Raises:
            UnknownPreferenceError: If a field name is not editable. Nothing is written in that case.
        """
        unknown = sorted(set(fields) - set(EDITABLE_FIELDS))
        if unknown:
            raise UnknownPreferenceError(
                "unknown_preference",
                f"Unknown setting(s): {', '.join(unknown)}",
                {"valid_fields": list(EDITABLE_FIELDS)},
            )
        for field, value in fields.items():
            if field == "handled_extensions":
                self.handled_extensions_string = value
            else:
                self._set(field, value)
