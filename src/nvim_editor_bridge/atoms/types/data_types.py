from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from nvim_editor_bridge.atoms.errors.application_errors import BaseApplicationError


class EditorRole(str, Enum):
    """The three external processes the bridge can start."""

    SERVER = "server"
    CLIENT = "client"
    REMOTE = "remote"


class CommandTemplate(BaseModel):
    """An executable paired with its argument template for one role."""

    role: EditorRole
    command: str
    arguments: str


class LaunchResult(BaseModel):
    """
    Outcome of a single process launch.

    Attributes:
        role: The role the process was started for.
        command: The argv the launch was attempted with (empty if it could not be built).
        pid: Process id of the started child, if any.
        success: Whether the process was started.
        error: A message describing the failure, suitable for end users.
        error_code: A unique code identifying the failure.
    """

    role: EditorRole
    command: List[str] = Field(default_factory=list)
    pid: Optional[int] = None
    success: bool = True
    error: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def from_error(cls, role: EditorRole, exc: BaseApplicationError, command: Optional[List[str]] = None) -> "LaunchResult":
        """
        Create a failed LaunchResult from an application error.

        Args:
            role: The role that failed to launch.
            exc: The error describing the failure.
            command: The argv that was attempted, if it was built.

        Returns:
            LaunchResult: The failed launch result.
        """
        return cls(
            role=role,
            command=command or [],
            success=False,
            error=exc.user_friendly_message,
            error_code=exc.error_code,
        )


class OpenFileResult(BaseModel):
    """Aggregate outcome of an open-file request, one LaunchResult per attempted step."""

    path: str
    line: int
    column: int
    accepted: bool
    success: bool
    endpoint: Optional[str] = None
    server_running: Optional[bool] = None
    server: Optional[LaunchResult] = None
    remote: Optional[LaunchResult] = None
    client: Optional[LaunchResult] = None
    client_reused: bool = False
    errors: List[str] = Field(default_factory=list)

    def to_response(self) -> Dict[str, Any]:
        """Serialize for the MCP tool response."""
        return self.model_dump(mode="json")


class Installation(BaseModel):
    """An editor installation advertised to the host."""

    name: str
    path: str
