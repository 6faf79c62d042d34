"""
Defines the protocol a host editor consumes from an external code editor integration.
"""

from typing import List, Optional, Protocol

from typing_extensions import runtime_checkable

from nvim_editor_bridge.atoms.types.data_types import Installation


@runtime_checkable
class IExternalCodeEditor(Protocol):
    """
    Protocol for external code editor integrations registered with a host editor.
    """

    @property
    def installations(self) -> List[Installation]:
        """Editor installations this integration can drive."""
        ...

    def try_get_installation_for_path(self, editor_path: str) -> Optional[Installation]:
        """Return the installation registered at ``editor_path``, if any."""
        ...

    def initialize(self, editor_installation_path: str) -> None:
        """Called by the host once the installation is selected."""
        ...

    def open_project(self, path: str = "", line: int = -1, column: int = -1) -> bool:
        """
        Open a file at a location, or the project root when ``path`` is empty.

        Returns:
            True if the request was accepted and the editor was driven successfully.
        """
        ...

    def create_if_doesnt_exist(self) -> None:
        """Generate project files if they are missing."""
        ...

    def sync_if_needed(
        self,
        added_files: List[str],
        deleted_files: List[str],
        moved_files: List[str],
        moved_from_files: List[str],
        imported_files: List[str],
    ) -> None:
        """Forward asset changes to the project generator."""
        ...

    def sync_all(self) -> None:
        """Regenerate all project files."""
        ...
