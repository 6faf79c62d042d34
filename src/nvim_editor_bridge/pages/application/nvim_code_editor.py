"""
Host-facing Neovim code editor integration.

``NvimCodeEditor`` is what a host editor registers as its external code
editor: it opens files through the OpenFileOrchestrator and forwards project
file regeneration to the host's project generator.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from nvim_editor_bridge.atoms.logging.logger import get_logger
from nvim_editor_bridge.atoms.types.data_types import Installation, OpenFileResult
from nvim_editor_bridge.atoms.utils.config_constants import (
    INSTALLATION_NAME,
    INSTALLATION_PATH,
    SUPPORTED_FILE_NAMES,
)
from nvim_editor_bridge.interfaces.preference_store import IPreferenceStore
from nvim_editor_bridge.interfaces.project_generator import IProjectGenerator
from nvim_editor_bridge.organisms.orchestrator.open_file import OpenFileOrchestrator
from nvim_editor_bridge.organisms.preferences.settings import EditorSettings
from nvim_editor_bridge.organisms.preferences.store import JsonPreferenceStore

logger = get_logger(__name__)


class NullProjectGenerator:
    """Project generator for hosts without project files: the solution always exists."""

    def solution_exists(self) -> bool:
        return True

    def sync(self) -> None:
        pass

    def sync_if_needed(self, affected_files: List[str], imported_files: List[str]) -> None:
        pass


def is_supported_executable(path: str) -> bool:
    """Return True if ``path`` names a known Neovim front-end executable."""
    return os.path.basename(path).lower() in SUPPORTED_FILE_NAMES


class NvimCodeEditor:
    """
    External code editor backed by a headless Neovim server.
    """

    def __init__(
        self,
        project_generator: IProjectGenerator,
        settings: EditorSettings,
        orchestrator: Optional[OpenFileOrchestrator] = None,
        installations: Optional[List[Installation]] = None,
    ) -> None:
        self.project_generator = project_generator
        self.settings = settings
        self.orchestrator = orchestrator or OpenFileOrchestrator(settings)
        self._installations = (
            installations
            if installations is not None
            else [Installation(name=INSTALLATION_NAME, path=INSTALLATION_PATH)]
        )

    @property
    def installations(self) -> List[Installation]:
        return list(self._installations)

    def try_get_installation_for_path(self, editor_path: str) -> Optional[Installation]:
        for installation in self._installations:
            if installation.path == editor_path:
                return installation
        return None

    def initialize(self, editor_installation_path: str) -> None:
        pass

    def supports_extension(self, path: str) -> bool:
        return self.settings.supports_extension(path)

    def open_file(self, path: str = "", line: int = -1, column: int = -1) -> OpenFileResult:
        """Open a file and return the detailed per-step result."""
        return self.orchestrator.open_file(path, line, column)

    def open_project(self, path: str = "", line: int = -1, column: int = -1) -> bool:
        return self.open_file(path, line, column).success

    def _reset_package_info_cache(self) -> None:
        reset = getattr(self.project_generator, "reset_package_info_cache", None)
        if callable(reset):
            reset()

    def create_if_doesnt_exist(self) -> None:
        if not self.project_generator.solution_exists():
            logger.info("Solution file missing, generating project files")
            self.project_generator.sync()

    def sync_if_needed(
        self,
        added_files: List[str],
        deleted_files: List[str],
        moved_files: List[str],
        moved_from_files: List[str],
        imported_files: List[str],
    ) -> None:
        self._reset_package_info_cache()
        affected: List[str] = []
        for file_path in [*added_files, *deleted_files, *moved_files, *moved_from_files]:
            if file_path not in affected:
                affected.append(file_path)
        self.project_generator.sync_if_needed(affected, list(imported_files))

    def sync_all(self) -> None:
        self._reset_package_info_cache()
        self.project_generator.sync()

    # Preference panel

    def settings_snapshot(self) -> Dict[str, str]:
        return self.settings.snapshot()

    def update_settings(self, **fields: str) -> Dict[str, str]:
        self.settings.update(**fields)
        return self.settings.snapshot()

    def reset_arguments(self) -> Dict[str, str]:
        self.settings.reset_arguments()
        return self.settings.snapshot()


def create_editor(
    project_generator: Optional[IProjectGenerator] = None,
    store: Optional[IPreferenceStore] = None,
    working_directory: Optional[Union[str, Path]] = None,
    builtin_extensions: Optional[List[str]] = None,
    user_extensions: Optional[List[str]] = None,
) -> NvimCodeEditor:
    """
    Build a NvimCodeEditor and generate missing project files.

    Host integration glue calls this once at start-up and registers the result.

    Args:
        project_generator: The host's project generator. Defaults to NullProjectGenerator.
        store: Preference storage. Defaults to the JSON preferences file.
        working_directory: Workspace directory. Defaults to the process cwd at request time.
        builtin_extensions: The host's own source file extensions.
        user_extensions: Extra extensions configured in the host.

    Returns:
        NvimCodeEditor: The ready editor integration.
    """
    generator = project_generator or NullProjectGenerator()
    settings = EditorSettings(
        store if store is not None else JsonPreferenceStore(),
        builtin_extensions=builtin_extensions,
        user_extensions=user_extensions,
    )
    orchestrator = OpenFileOrchestrator(settings, working_directory=working_directory)
    editor = NvimCodeEditor(generator, settings, orchestrator)
    editor.create_if_doesnt_exist()
    return editor
