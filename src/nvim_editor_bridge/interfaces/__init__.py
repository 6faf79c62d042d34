"""
Interface definitions for the Neovim editor bridge.

This package contains protocol definitions for the bridge's collaborators:
preference storage, endpoint probes, the project generator and the
host-facing editor contract.
"""

from nvim_editor_bridge.interfaces.endpoint_prober import IEndpointProber
from nvim_editor_bridge.interfaces.external_code_editor import IExternalCodeEditor
from nvim_editor_bridge.interfaces.preference_store import IPreferenceStore
from nvim_editor_bridge.interfaces.project_generator import IProjectGenerator

__all__ = [
    "IEndpointProber",
    "IExternalCodeEditor",
    "IPreferenceStore",
    "IProjectGenerator",
]
