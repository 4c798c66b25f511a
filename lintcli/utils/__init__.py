"""
Utility functions and helpers.

Provides common utilities used across the codebase.
"""

from lintcli.utils.logging_config import LogContext, setup_logging
from lintcli.utils.system import System
from lintcli.utils.validation import validate_directory

__all__ = [
    "LogContext",
    "setup_logging",
    "System",
    "validate_directory",
]
