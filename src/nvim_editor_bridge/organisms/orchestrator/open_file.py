"""
Open-File Orchestrator.

Routes an "open file at line/column" request to the headless Neovim server of
the current workspace: starts the server if its endpoint is not live, sends
the jump through a remote-control process and makes sure one interactive
client is attached.
"""

import os
from pathlib import Path
from typing import Optional, Union

from nvim_editor_bridge.atoms.logging.logger import get_logger
from nvim_editor_bridge.atoms.types.data_types import EditorRole, LaunchResult, OpenFileResult
from nvim_editor_bridge.atoms.utils.session_key import derive_key
from nvim_editor_bridge.atoms.utils.template_expander import expand
from nvim_editor_bridge.error_handling import ErrorHandler
from nvim_editor_bridge.interfaces.endpoint_prober import IEndpointProber
from nvim_editor_bridge.molecules.endpoint.prober import endpoint_path, select_prober
from nvim_editor_bridge.molecules.process.launcher import ProcessLauncher
from nvim_editor_bridge.molecules.process.liveness import ClientLivenessTracker
from nvim_editor_bridge.organisms.preferences.settings import EditorSettings


class OpenFileOrchestrator:
    """
    Drives the server, remote-control and client processes for open-file requests.

    Requests are handled synchronously on the calling thread. Launched processes
    are never waited on.
    """

    def __init__(
        self,
        settings: EditorSettings,
        launcher: Optional[ProcessLauncher] = None,
        prober: Optional[IEndpointProber] = None,
        liveness: Optional[ClientLivenessTracker] = None,
        working_directory: Optional[Union[str, Path]] = None,
        platform: Optional[str] = None,
    ) -> None:
        """
        Initialize the OpenFileOrchestrator.

        Args:
            settings: The editor settings holding the command templates.
            launcher: Process launcher. Defaults to a ProcessLauncher for ``platform``.
            prober: Endpoint prober. Defaults to the one for ``platform``.
            liveness: Client tracker. Defaults to one backed by ``settings``.
            working_directory: Workspace directory. Defaults to the process cwd at request time.
            platform: A ``sys.platform`` style string. Defaults to the running platform.
        """
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings
        self.platform = platform
        self.launcher = launcher or ProcessLauncher(platform=platform)
        self.prober = prober or select_prober(platform)
        self.liveness = liveness or ClientLivenessTracker(settings)
        self._working_directory = working_directory

    @property
    def working_directory(self) -> str:
        if self._working_directory is not None:
            return os.path.abspath(os.fspath(self._working_directory))
        return os.getcwd()

    def current_endpoint(self) -> str:
        """Return the endpoint path of the current workspace."""
        return endpoint_path(derive_key(self.working_directory), self.platform)

    def _resolve(self, path: str) -> str:
        if os.path.isabs(path):
            return path
        return os.path.join(self.working_directory, path)

    def is_acceptable(self, path: str) -> bool:
        """
        Check whether a request for ``path`` should be handled.

        An empty path (open the project root) is always accepted. Otherwise the
        extension must be handled and the file must exist.
        """
        if path == "":
            return True
        if not self.settings.supports_extension(path):
            self.logger.info(f"Rejected open request for unsupported file type: {path}")
            return False
        if not os.path.isfile(self._resolve(path)):
            self.logger.info(f"Rejected open request for missing file: {path}")
            return False
        return True

    def open_file(self, path: str, line: int, column: int) -> OpenFileResult:
        """
        Open ``path`` at ``line``/``column`` in the workspace's Neovim server.

        Args:
            path: File to open, or an empty string to just bring up the editor.
            line: Target line (1-indexed).
            column: Target column (0-indexed).

        Returns:
            OpenFileResult: Per-step launch results. ``success`` is true only if the
            remote-control launch and every other attempted launch succeeded.
        """
        result = OpenFileResult(path=path, line=line, column=column, accepted=False, success=False)
        try:
            if not self.is_acceptable(path):
                return result
            result.accepted = True
            self._run(result, path, line, column)
        except Exception as e:
            ErrorHandler.log_exception(e, f"open_file({path!r})", self.logger)
            result.success = False
            result.errors.append(str(e))
        return result

    def open(self, path: str, line: int, column: int) -> bool:
        """Boolean form of :meth:`open_file` for hosts that only take success/failure."""
        return self.open_file(path, line, column).success

    def _run(self, result: OpenFileResult, path: str, line: int, column: int) -> None:
        working_directory = self.working_directory
        endpoint = endpoint_path(derive_key(working_directory), self.platform)
        result.endpoint = endpoint

        result.server_running = self.prober.probe(endpoint)
        if not result.server_running:
            server = self.settings.command_template(EditorRole.SERVER)
            result.server = self.launcher.launch(
                EditorRole.SERVER,
                server.command,
                expand(server.arguments, endpoint, path, 1, 0),
                working_directory,
            )
        else:
            self.logger.debug(f"Editor server already listening on {endpoint}")

        remote = self.settings.command_template(EditorRole.REMOTE)
        result.remote = self.launcher.launch(
            EditorRole.REMOTE,
            remote.command,
            expand(remote.arguments, endpoint, path, line, column),
        )

        if self.liveness.is_client_alive():
            # The existing client window is left where it is; no focus/raise.
            result.client_reused = True
        else:
            client = self.settings.command_template(EditorRole.CLIENT)
            result.client = self.launcher.launch(
                EditorRole.CLIENT,
                client.command,
                expand(client.arguments, endpoint, path, 0, 0),
            )
            if result.client.success and result.client.pid is not None:
                self.liveness.record_client(result.client.pid)

        attempted = [launch for launch in (result.server, result.remote, result.client) if launch is not None]
        failed = [launch for launch in attempted if not launch.success]
        result.errors.extend(_describe(launch) for launch in failed)
        result.success = result.remote.success and not failed

        if result.success:
            self.logger.info(f"Opened {path or working_directory} at {max(line, 1)}:{max(column, 0)} via {endpoint}")
        else:
            self.logger.warning(f"Open request for {path or working_directory} finished with errors: {result.errors}")


def _describe(launch: LaunchResult) -> str:
    return f"{launch.role.value}: {launch.error}"
