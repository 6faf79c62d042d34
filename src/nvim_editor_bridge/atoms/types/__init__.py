from nvim_editor_bridge.atoms.types.data_types import (
    CommandTemplate,
    EditorRole,
    Installation,
    LaunchResult,
    OpenFileResult,
)

__all__ = [
    "CommandTemplate",
    "EditorRole",
    "Installation",
    "LaunchResult",
    "OpenFileResult",
]
