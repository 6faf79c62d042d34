"""Main entry point for the Neovim editor bridge."""

import sys

from nvim_editor_bridge.templates.initialization.cli import main

if __name__ == "__main__":
    sys.exit(main())
