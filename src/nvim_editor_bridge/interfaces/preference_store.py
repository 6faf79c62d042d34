"""
Defines the protocol for persisted key/value preference storage.
"""

from typing import Any, Protocol

from typing_extensions import runtime_checkable


@runtime_checkable
class IPreferenceStore(Protocol):
    """
    Protocol for process-wide preference storage keyed by fixed string identifiers.
    """

    def get(self, key: str, default: Any = None) -> Any:
        """
        Read a stored value.

        Args:
            key: The preference key.
            default: Value returned when the key has never been set.

        Returns:
            The stored value or the default.
        """
        ...

    def set(self, key: str, value: Any) -> None:
        """
        Store a value, persisting it immediately.

        Args:
            key: The preference key.
            value: The value to store.
        """
        ...
