from nvim_editor_bridge.pages.application.nvim_code_editor import (
    NullProjectGenerator,
    NvimCodeEditor,
    create_editor,
    is_supported_executable,
)

__all__ = ["NullProjectGenerator", "NvimCodeEditor", "create_editor", "is_supported_executable"]
