"""
Defines the protocol for checking whether an IPC endpoint is live.
"""

from typing import Protocol

from typing_extensions import runtime_checkable


@runtime_checkable
class IEndpointProber(Protocol):
    """
    Protocol for platform-specific endpoint probes.

    The check is best-effort: a listener may appear or vanish between the probe
    and whatever the caller decides based on it.
    """

    def probe(self, endpoint: str) -> bool:
        """
        Check whether something is listening at the endpoint right now.

        Args:
            endpoint: The named pipe or socket path.

        Returns:
            True if the endpoint appears to exist, False otherwise.
        """
        ...
