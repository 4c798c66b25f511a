"""
Thin wrapper around process-level facilities.

Lets the orchestrator exit the process and read interactive input
through an object that tests can replace.
"""

import sys
from typing import TextIO


class System:
    """Access to process exit and standard input."""

    @property
    def stdin(self) -> TextIO:
        return sys.stdin

    def exit(self, code: int) -> None:
        sys.exit(code)
