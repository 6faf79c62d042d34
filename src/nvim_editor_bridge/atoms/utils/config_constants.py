"""
Configuration constants for the Neovim editor bridge.

Provides preference keys and default values for the command templates,
endpoint naming and handled file extensions.
This is an atomic component containing only immutable constants.
"""

# Preference storage keys
SERVER_CMD_KEY = "nvim_server_cmd"
SERVER_ARGS_KEY = "nvim_server_args"
CLIENT_CMD_KEY = "nvim_client_cmd"
CLIENT_ARGS_KEY = "nvim_client_args"
REMOTE_CMD_KEY = "nvim_remote_cmd"
REMOTE_ARGS_KEY = "nvim_remote_args"
CLIENT_PID_KEY = "nvim_pid"
USER_EXTENSIONS_KEY = "nvim_userExtensions"

# Default command templates
DEFAULT_SERVER_CMD = "nvim"
DEFAULT_SERVER_ARGS = "--headless --listen ${pipePath}"

DEFAULT_CLIENT_CMD = "alacritty"
DEFAULT_CLIENT_ARGS = "-e nvim --server ${pipePath} --remote-ui"

DEFAULT_REMOTE_CMD = "nvr"
DEFAULT_REMOTE_ARGS = '--servername ${pipePath} -c "n ${filePath} | call cursor(${line},${column})<CR>"'

# Template placeholders
PIPE_PATH_PLACEHOLDER = "${pipePath}"
FILE_PATH_PLACEHOLDER = "${filePath}"
LINE_PLACEHOLDER = "${line}"
COLUMN_PLACEHOLDER = "${column}"

# Endpoint naming
PIPE_NAMESPACE = "\\\\.\\pipe\\"
PIPE_NAME_PREFIX = "unity-nvim-ipc"
SOCKET_DIRECTORY = "/tmp"
SOCKET_NAME_PREFIX = "nvimsocket"

# Handled extensions
EXTENSION_SEPARATOR = ";"
EXTRA_EXTENSIONS = ("json", "asmdef", "log")
DEFAULT_BUILTIN_EXTENSIONS = (
    "cs",
    "uxml",
    "uss",
    "shader",
    "compute",
    "cginc",
    "hlsl",
    "glslinc",
    "template",
    "raytrace",
)

# Executables recognised as Neovim front-ends
SUPPORTED_FILE_NAMES = ("neovide", "neovide.exe", "nvim.exe", "nvim", "lvim")

INSTALLATION_NAME = "Neovim"
INSTALLATION_PATH = "/"

# Settings files
DEFAULT_PREFERENCES_PATH = "~/.config/nvim-editor-bridge/preferences.json"
DEFAULT_LOG_LEVEL = "INFO"
