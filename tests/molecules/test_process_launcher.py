"""
Tests for ProcessLauncher.

Most tests mock subprocess.Popen; a few start real short-lived processes to
check the failure mapping against the operating system.
"""

import subprocess
import sys
from unittest.mock import MagicMock, patch

import pytest

from nvim_editor_bridge.atoms.types.data_types import EditorRole
from nvim_editor_bridge.molecules.process.launcher import ProcessLauncher

posix_only = pytest.mark.skipif(sys.platform.startswith("win"), reason="POSIX quoting and session handling")


@pytest.fixture
def mock_popen():
    with patch("nvim_editor_bridge.molecules.process.launcher.subprocess.Popen") as popen:
        popen.return_value = MagicMock(pid=4321)
        yield popen


class TestProcessLauncher:
    def test_launch_success_returns_pid_and_command(self, mock_popen: MagicMock, tmp_path):
        launcher = ProcessLauncher(platform="linux")

        result = launcher.launch(EditorRole.SERVER, "nvim", "--headless --listen /tmp/nvimsocket_1", tmp_path)

        assert result.success is True
        assert result.pid == 4321
        assert result.role == EditorRole.SERVER
        assert result.command == ["nvim", "--headless", "--listen", "/tmp/nvimsocket_1"]
        assert result.error is None
        assert launcher.last_process is mock_popen.return_value

    def test_launch_is_detached_and_silent_on_posix(self, mock_popen: MagicMock, tmp_path):
        ProcessLauncher(platform="linux").launch(EditorRole.REMOTE, "nvr", "--servername /tmp/s", tmp_path)

        mock_popen.assert_called_once_with(
            ["nvr", "--servername", "/tmp/s"],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            cwd=str(tmp_path),
            start_new_session=True,
        )

    def test_launch_uses_no_window_flag_on_windows(self, mock_popen: MagicMock):
        ProcessLauncher(platform="win32").launch(EditorRole.SERVER, "nvim.exe", "--headless")

        _, kwargs = mock_popen.call_args
        assert kwargs["creationflags"] == getattr(subprocess, "CREATE_NO_WINDOW", 0)
        assert "start_new_session" not in kwargs
        assert kwargs["cwd"] is None

    def test_quoted_remote_command_stays_one_argument(self, mock_popen: MagicMock):
        launcher = ProcessLauncher(platform="linux")

        result = launcher.launch(
            EditorRole.REMOTE,
            "nvr",
            '--servername /tmp/s -c "n /src/My Player.cs | call cursor(3,1)<CR>"',
        )

        assert result.command == ["nvr", "--servername", "/tmp/s", "-c", "n /src/My Player.cs | call cursor(3,1)<CR>"]

    def test_empty_executable_is_misconfiguration(self, mock_popen: MagicMock):
        result = ProcessLauncher(platform="linux").launch(EditorRole.CLIENT, "   ", "-e nvim")

        assert result.success is False
        assert result.error_code == "misconfigured_command"
        assert result.pid is None
        mock_popen.assert_not_called()

    def test_unbalanced_quotes_are_misconfiguration(self, mock_popen: MagicMock):
        result = ProcessLauncher(platform="linux").launch(EditorRole.REMOTE, "nvr", '-c "n a.cs')

        assert result.success is False
        assert result.error_code == "misconfigured_command"
        mock_popen.assert_not_called()

    def test_missing_executable_is_reported(self, mock_popen: MagicMock):
        mock_popen.side_effect = FileNotFoundError(2, "No such file or directory")

        result = ProcessLauncher(platform="linux").launch(EditorRole.CLIENT, "alacritty", "-e nvim")

        assert result.success is False
        assert result.error_code == "executable_not_found"
        assert "alacritty" in result.error
        assert result.command == ["alacritty", "-e", "nvim"]

    def test_missing_working_directory_is_not_reported_as_missing_executable(self, mock_popen: MagicMock, tmp_path):
        missing = tmp_path / "deleted-workspace"

        result = ProcessLauncher(platform="linux").launch(EditorRole.SERVER, "nvim", "--headless", missing)

        assert result.success is False
        assert result.error_code == "launch_failed"
        assert str(missing) in result.error
        assert result.command == ["nvim", "--headless"]
        mock_popen.assert_not_called()

    def test_permission_denied_is_reported(self, mock_popen: MagicMock):
        mock_popen.side_effect = PermissionError(13, "Permission denied")

        result = ProcessLauncher(platform="linux").launch(EditorRole.SERVER, "/opt/nvim", "")

        assert result.success is False
        assert result.error_code == "permission_denied"

    def test_other_os_errors_are_reported(self, mock_popen: MagicMock):
        mock_popen.side_effect = OSError(8, "Exec format error")

        result = ProcessLauncher(platform="linux").launch(EditorRole.SERVER, "/opt/nvim", "")

        assert result.success is False
        assert result.error_code == "launch_failed"


@posix_only
def test_real_missing_executable_does_not_raise():
    result = ProcessLauncher().launch(EditorRole.REMOTE, "nvim-editor-bridge-no-such-binary", "--version")

    assert result.success is False
    assert result.error_code == "executable_not_found"


@posix_only
def test_real_launch_does_not_wait_for_the_child():
    launcher = ProcessLauncher()

    result = launcher.launch(EditorRole.REMOTE, sys.executable, '-c "import sys; sys.exit(0)"')

    assert result.success is True
    assert result.pid == launcher.last_process.pid
    assert launcher.last_process.wait(timeout=30) == 0
