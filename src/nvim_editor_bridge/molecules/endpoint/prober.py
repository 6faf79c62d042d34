"""
Endpoint naming and platform-specific endpoint probes.

Windows hosts talk to the editor server over a named pipe, everything else
over a Unix domain socket whose path shows up as a filesystem entry.
"""

import os
import posixpath
import sys
from typing import Optional

from nvim_editor_bridge.atoms.logging.logger import get_logger
from nvim_editor_bridge.atoms.utils.config_constants import (
    PIPE_NAME_PREFIX,
    PIPE_NAMESPACE,
    SOCKET_DIRECTORY,
    SOCKET_NAME_PREFIX,
)
from nvim_editor_bridge.interfaces.endpoint_prober import IEndpointProber

logger = get_logger(__name__)


def is_windows(platform: Optional[str] = None) -> bool:
    """Return True if ``platform`` (default: the running one) is a Windows platform string."""
    return (platform or sys.platform).startswith("win")


def endpoint_path(key: int, platform: Optional[str] = None) -> str:
    """
    Build the endpoint path for a session key.

    Args:
        key: The workspace session key.
        platform: A ``sys.platform`` style string. Defaults to the running platform.

    Returns:
        str: ``\\\\.\\pipe\\unity-nvim-ipc-<key>`` on Windows, ``/tmp/nvimsocket_<key>`` elsewhere.
    """
    if is_windows(platform):
        return f"{PIPE_NAMESPACE}{PIPE_NAME_PREFIX}-{key}"
    return posixpath.join(SOCKET_DIRECTORY, f"{SOCKET_NAME_PREFIX}_{key}")


class PipeNamespaceProber:
    """Looks the endpoint up in the Windows named pipe namespace."""

    def __init__(self, namespace: str = PIPE_NAMESPACE) -> None:
        self.namespace = namespace

    def probe(self, endpoint: str) -> bool:
        try:
            running_pipes = {self.namespace + name for name in os.listdir(self.namespace)}
        except OSError as e:
            logger.warning(f"Could not enumerate named pipes in {self.namespace}: {e}")
            return False
        return endpoint in running_pipes


class SocketFileProber:
    """Checks for the socket file of a Unix domain socket endpoint."""

    def probe(self, endpoint: str) -> bool:
        return os.path.exists(endpoint)


def select_prober(platform: Optional[str] = None) -> IEndpointProber:
    """
    Return the endpoint prober for a platform.

    Args:
        platform: A ``sys.platform`` style string. Defaults to the running platform.

    Returns:
        IEndpointProber: The prober implementation.
    """
    if is_windows(platform):
        return PipeNamespaceProber()
    return SocketFileProber()
