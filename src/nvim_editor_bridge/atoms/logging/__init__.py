"""
Logging atoms for the Neovim editor bridge.
"""

from nvim_editor_bridge.atoms.logging.logger import Logger, configure_logging, get_logger

__all__ = ["Logger", "configure_logging", "get_logger"]
