"""
Defines the protocol for the project/solution file generator collaborator.
"""

from typing import List, Protocol

from typing_extensions import runtime_checkable


@runtime_checkable
class IProjectGenerator(Protocol):
    """
    Protocol for the component that writes the host's project and solution files.

    Generators may additionally expose ``reset_package_info_cache()``; the
    editor calls it before syncing when present.
    """

    def solution_exists(self) -> bool:
        """Return True if the solution file is already on disk."""
        ...

    def sync(self) -> None:
        """Regenerate all project files."""
        ...

    def sync_if_needed(self, affected_files: List[str], imported_files: List[str]) -> None:
        """
        Regenerate project files only if the changed files require it.

        Args:
            affected_files: Files that were added, deleted or moved.
            imported_files: Files that were (re)imported by the host.
        """
        ...
