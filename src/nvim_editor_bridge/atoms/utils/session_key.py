"""
Per-workspace session key used to namespace the editor server endpoint.
"""

import hashlib
import os
from pathlib import Path
from typing import Union

# Keeps keys in the non-negative int32 range so endpoint names stay short
KEY_MASK = 0x7FFFFFFF


def derive_key(working_directory: Union[str, Path]) -> int:
    """
    Derive a stable, non-negative integer key from a working directory.

    The key is a SHA-256 digest of the absolute path, truncated to 31 bits.
    The builtin ``hash()`` is salted per interpreter and cannot be used here.

    Args:
        working_directory: The workspace directory.

    Returns:
        int: The session key for the workspace.
    """
    absolute_path = os.path.abspath(os.fspath(working_directory))
    digest = hashlib.sha256(absolute_path.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big") & KEY_MASK
