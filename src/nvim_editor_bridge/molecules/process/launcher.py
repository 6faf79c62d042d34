"""
Process Launcher for the editor server, remote-control and client processes.

Launches are fire-and-forget: the child is detached from the caller, its
output is discarded, and nothing waits for it to exit. Start-up failures are
reported as a failed LaunchResult instead of an exception.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from nvim_editor_bridge.atoms.errors.application_errors import (
    BaseApplicationError,
    LaunchFailedError,
    MisconfigurationError,
)
from nvim_editor_bridge.atoms.logging.logger import get_logger
from nvim_editor_bridge.atoms.types.data_types import EditorRole, LaunchResult
from nvim_editor_bridge.atoms.utils.template_expander import split_arguments


class ProcessLauncher:
    """
    Starts external processes non-interactively.
    """

    def __init__(self, platform: Optional[str] = None) -> None:
        """
        Initialize the ProcessLauncher.

        Args:
            platform: A ``sys.platform`` style string. Defaults to the running platform.
        """
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")
        self.platform = platform or sys.platform
        self.last_process: Optional[subprocess.Popen] = None

    @property
    def _is_windows(self) -> bool:
        return self.platform.startswith("win")

    def build_command(self, executable: str, argument_string: str) -> List[str]:
        """
        Build the argv for a launch.

        Args:
            executable: The executable name or path.
            argument_string: The expanded argument string.

        Returns:
            List[str]: The argv list.

        Raises:
            MisconfigurationError: If the executable is empty or the arguments cannot be parsed.
        """
        if not executable or not executable.strip():
            raise MisconfigurationError(
                "misconfigured_command",
                "No executable configured",
                {"executable": executable, "arguments": argument_string},
            )
        try:
            arguments = split_arguments(argument_string, posix=not self._is_windows)
        except ValueError as e:
            raise MisconfigurationError(
                "misconfigured_command",
                f"Could not parse arguments for {executable}: {e}",
                {"executable": executable, "arguments": argument_string},
            ) from e
        return [executable.strip(), *arguments]

    def _popen_options(self, working_directory: Optional[Union[str, Path]]) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "stdin": subprocess.DEVNULL,
            "stdout": subprocess.DEVNULL,
            "stderr": subprocess.DEVNULL,
            "cwd": os.fspath(working_directory) if working_directory is not None else None,
        }
        if self._is_windows:
            options["creationflags"] = getattr(subprocess, "CREATE_NO_WINDOW", 0)
        else:
            options["start_new_session"] = True  # Detach from parent
        return options

    def launch(
        self,
        role: EditorRole,
        executable: str,
        argument_string: str,
        working_directory: Optional[Union[str, Path]] = None,
    ) -> LaunchResult:
        """
        Start a process without waiting for it.

        Args:
            role: The role the process plays, used for reporting.
            executable: The executable name or path.
            argument_string: The expanded argument string.
            working_directory: Working directory for the child, if any.

        Returns:
            LaunchResult: The pid on success, or the error that prevented the start.
        """
        command: List[str] = []
        try:
            command = self.build_command(executable, argument_string)
            process = self._start(command, working_directory)
        except BaseApplicationError as e:
            self.logger.error(f"Failed to launch {role.value} process: {e.user_friendly_message}")
            return LaunchResult.from_error(role, e, command)

        self.last_process = process
        self.logger.info(f"Launched {role.value} process (PID: {process.pid}): {' '.join(command)}")
        return LaunchResult(role=role, command=command, pid=process.pid)

    def _start(self, command: List[str], working_directory: Optional[Union[str, Path]]) -> subprocess.Popen:
        # Popen reports a missing cwd as FileNotFoundError, same as a missing executable
        if working_directory is not None and not os.path.isdir(working_directory):
            raise LaunchFailedError(
                "launch_failed",
                f"Working directory not found: {os.fspath(working_directory)}",
                {"command": command, "working_directory": os.fspath(working_directory)},
            )
        try:
            return subprocess.Popen(command, **self._popen_options(working_directory))  # noqa: S603
        except FileNotFoundError as e:
            raise LaunchFailedError(
                "executable_not_found",
                f"Executable not found: {command[0]}",
                {"command": command, "reason": str(e)},
            ) from e
        except PermissionError as e:
            raise LaunchFailedError(
                "permission_denied",
                f"Permission denied starting {command[0]}",
                {"command": command, "reason": str(e)},
            ) from e
        except (OSError, ValueError) as e:
            raise LaunchFailedError(
                "launch_failed",
                f"Failed to start {command[0]}: {e}",
                {"command": command, "reason": str(e)},
            ) from e
