"""
Neovim Editor Bridge Package

This package lets a host editor delegate "open file at line/column" requests
to a headless Neovim server, attaching a single interactive client per
workspace. It is exposed to hosts as a Python API, a command line tool and
an MCP stdio server.
"""

import importlib.metadata
import logging

from .atoms.types.data_types import EditorRole, Installation, LaunchResult, OpenFileResult
from .organisms.orchestrator.open_file import OpenFileOrchestrator
from .organisms.preferences.settings import EditorSettings
from .organisms.preferences.store import InMemoryPreferenceStore, JsonPreferenceStore
from .pages.application.nvim_code_editor import NullProjectGenerator, NvimCodeEditor, create_editor
from .templates.initialization.cli import main

try:
    __version__ = importlib.metadata.version("nvim-editor-bridge")
except importlib.metadata.PackageNotFoundError:
    # Handle case where package is not installed (e.g., during development)
    __version__ = "0.0.0-dev"
    logging.getLogger(__name__).warning(
        "Could not determine package version from metadata. Defaulting to %s",
        __version__,
    )


__all__ = [
    "main",
    "create_editor",
    "EditorRole",
    "EditorSettings",
    "InMemoryPreferenceStore",
    "Installation",
    "JsonPreferenceStore",
    "LaunchResult",
    "NullProjectGenerator",
    "NvimCodeEditor",
    "OpenFileOrchestrator",
    "OpenFileResult",
    "__version__",
]
