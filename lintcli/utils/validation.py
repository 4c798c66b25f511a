"""
Input validation utilities.

Checks the directories named by settings before they are scanned.
"""

import os
from pathlib import Path
from typing import Optional, Tuple


def validate_directory(path, setting: str = "directory") -> Tuple[bool, Optional[str]]:
    """
    Validate a directory read from a setting.

    Args:
        path: Directory to validate.
        setting: Name of the setting the path came from, used in
            error messages.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not path:
        return False, f"{setting} is empty"

    try:
        resolved = Path(path).resolve()
    except (OSError, RuntimeError) as e:
        return False, f"{setting} is not a usable path ({path}): {e}"

    if not resolved.exists():
        return False, f"{setting} points to a missing directory: {path}"

    if not resolved.is_dir():
        return False, f"{setting} points to a file, expected a directory: {path}"

    if not os.access(resolved, os.R_OK | os.X_OK):
        return False, f"{setting} points to an unreadable directory: {path}"

    return True, None
