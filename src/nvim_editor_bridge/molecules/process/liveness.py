"""
Tracks the interactive client process so only one is launched per workspace.
"""

from typing import TYPE_CHECKING

import psutil

from nvim_editor_bridge.atoms.logging.logger import get_logger

if TYPE_CHECKING:
    from nvim_editor_bridge.organisms.preferences.settings import EditorSettings


class ClientLivenessTracker:
    """
    Remembers the pid of the last launched client and checks whether it is still running.

    The pid lives in the editor settings so it survives host restarts. Only
    clients launched by the bridge are tracked; a client started by hand is
    invisible here.
    """

    def __init__(self, settings: "EditorSettings") -> None:
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings

    def is_client_alive(self) -> bool:
        pid = self.settings.client_pid
        if not pid or pid <= 0:
            return False

        try:
            process = psutil.Process(pid)
            alive = process.is_running() and process.status() != psutil.STATUS_ZOMBIE
        except psutil.NoSuchProcess:
            alive = False
        except psutil.AccessDenied:
            # Exists but belongs to someone else
            alive = True

        self.logger.debug(f"Client process {pid} alive: {alive}")
        return alive

    def record_client(self, pid: int) -> None:
        self.settings.client_pid = pid
        self.logger.debug(f"Recorded client process {pid}")
