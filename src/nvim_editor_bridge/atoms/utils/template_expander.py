"""
Placeholder substitution for the server, client and remote command templates.
"""

import re
import shlex
import sys
from typing import Dict, List, Optional

from nvim_editor_bridge.atoms.utils.config_constants import (
    COLUMN_PLACEHOLDER,
    FILE_PATH_PLACEHOLDER,
    LINE_PLACEHOLDER,
    PIPE_PATH_PLACEHOLDER,
)

_PLACEHOLDER_PATTERN = re.compile(
    "|".join(
        re.escape(token)
        for token in (PIPE_PATH_PLACEHOLDER, FILE_PATH_PLACEHOLDER, LINE_PLACEHOLDER, COLUMN_PLACEHOLDER)
    )
)


def expand(template: str, pipe_path: str, file_path: str, line: int, column: int) -> str:
    """
    Substitute the recognised placeholders in a command template.

    Lines are 1-indexed and columns 0-indexed, so ``line`` is clamped to at
    least 1 and ``column`` to at least 0. Substitution is a single pass:
    replacement text is never scanned for further placeholders, and unknown
    ``${...}`` tokens are left as they are.

    Args:
        template: The argument template.
        pipe_path: The endpoint path of the editor server.
        file_path: The file to open.
        line: The target line.
        column: The target column.

    Returns:
        str: The expanded argument string.
    """
    replacements: Dict[str, str] = {
        PIPE_PATH_PLACEHOLDER: pipe_path,
        FILE_PATH_PLACEHOLDER: file_path,
        LINE_PLACEHOLDER: str(max(line, 1)),
        COLUMN_PLACEHOLDER: str(max(column, 0)),
    }
    return _PLACEHOLDER_PATTERN.sub(lambda match: replacements[match.group(0)], template)


def split_arguments(argument_string: str, posix: Optional[bool] = None) -> List[str]:
    """
    Split an expanded argument string into an argv list.

    Args:
        argument_string: The expanded arguments.
        posix: Use POSIX quoting rules. Defaults to False on Windows, True elsewhere.

    Returns:
        List[str]: The arguments.

    Raises:
        ValueError: If the string has unbalanced quotes.
    """
    if posix is None:
        posix = not sys.platform.startswith("win")

    arguments = shlex.split(argument_string, posix=posix)
    if not posix:
        # Non-POSIX mode keeps the surrounding quotes
        arguments = [
            arg[1:-1] if len(arg) >= 2 and arg[0] == arg[-1] and arg[0] in "\"'" else arg for arg in arguments
        ]
    return arguments
