"""
Utility atoms for the Neovim editor bridge.

Provides atomic utility components: configuration constants, the session
key deriver and the command template expander.
"""

from nvim_editor_bridge.atoms.utils.config_constants import (
    DEFAULT_CLIENT_ARGS,
    DEFAULT_CLIENT_CMD,
    DEFAULT_REMOTE_ARGS,
    DEFAULT_REMOTE_CMD,
    DEFAULT_SERVER_ARGS,
    DEFAULT_SERVER_CMD,
)
from nvim_editor_bridge.atoms.utils.session_key import derive_key
from nvim_editor_bridge.atoms.utils.template_expander import expand, split_arguments

__all__ = [
    "DEFAULT_CLIENT_ARGS",
    "DEFAULT_CLIENT_CMD",
    "DEFAULT_REMOTE_ARGS",
    "DEFAULT_REMOTE_CMD",
    "DEFAULT_SERVER_ARGS",
    "DEFAULT_SERVER_CMD",
    "derive_key",
    "expand",
    "split_arguments",
]
