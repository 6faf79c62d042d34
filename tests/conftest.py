import os
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

# Add the src directory to the path for importing modules during tests
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

from nvim_editor_bridge.atoms.errors.application_errors import LaunchFailedError  # noqa: E402
from nvim_editor_bridge.atoms.logging.logger import configure_logging  # noqa: E402
from nvim_editor_bridge.atoms.types.data_types import EditorRole, LaunchResult  # noqa: E402
from nvim_editor_bridge.organisms.preferences.settings import EditorSettings  # noqa: E402
from nvim_editor_bridge.organisms.preferences.store import InMemoryPreferenceStore  # noqa: E402
from nvim_editor_bridge.templates.configuration.configuration_system import ConfigurationSystem  # noqa: E402


class RecordingLauncher:
    """
    Stand-in for ProcessLauncher that records launches instead of spawning processes.

    Roles listed in ``failing_roles`` return a failed LaunchResult.
    """

    def __init__(self, first_pid: int = 1000, failing_roles: Tuple[EditorRole, ...] = ()) -> None:
        self.calls: List[Tuple[EditorRole, str, str, Optional[str]]] = []
        self.next_pid = first_pid
        self.failing_roles = failing_roles

    def launch(self, role, executable, argument_string, working_directory=None) -> LaunchResult:
        self.calls.append((role, executable, argument_string, working_directory))
        if role in self.failing_roles:
            error = LaunchFailedError("executable_not_found", f"Executable not found: {executable}")
            return LaunchResult.from_error(role, error, [executable])
        self.next_pid += 1
        return LaunchResult(role=role, command=[executable], pid=self.next_pid)

    def calls_for(self, role: EditorRole) -> List[Tuple[EditorRole, str, str, Optional[str]]]:
        return [call for call in self.calls if call[0] == role]


class FakeProber:
    def __init__(self, running: bool = False) -> None:
        self.running = running
        self.probed: List[str] = []

    def probe(self, endpoint: str) -> bool:
        self.probed.append(endpoint)
        return self.running


class FakeLiveness:
    """Client tracker where a recorded client stays alive until ``kill()`` is called."""

    def __init__(self, settings: EditorSettings) -> None:
        self.settings = settings
        self.alive_pids = set()

    def is_client_alive(self) -> bool:
        return self.settings.client_pid in self.alive_pids

    def record_client(self, pid: int) -> None:
        self.settings.client_pid = pid
        self.alive_pids.add(pid)

    def kill(self) -> None:
        self.alive_pids.clear()


@pytest.fixture
def store() -> InMemoryPreferenceStore:
    return InMemoryPreferenceStore()


@pytest.fixture
def settings(store: InMemoryPreferenceStore) -> EditorSettings:
    return EditorSettings(store)


@pytest.fixture
def launcher() -> RecordingLauncher:
    return RecordingLauncher()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A workspace directory holding one handled source file."""
    scripts = tmp_path / "Assets" / "Scripts"
    scripts.mkdir(parents=True)
    (scripts / "Player.cs").write_text("class Player {}\n")
    return tmp_path


@pytest.fixture
def reset_configuration():
    """Reset the ConfigurationSystem singleton around a test."""
    ConfigurationSystem._instance = None
    ConfigurationSystem._initialized = False
    yield
    ConfigurationSystem._instance = None
    ConfigurationSystem._initialized = False


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore the environment-driven logging defaults around every test."""
    configure_logging()
    yield
    configure_logging()
