"""
Input file discovery.

Walks a project root and selects the files to analyze using glob
patterns for source and test files.
"""

import logging
import os
import re
from pathlib import Path
from typing import List, Optional, Pattern

from lintcli.analysis.entities import InputFile

logger = logging.getLogger(__name__)


def glob_to_regex(pattern: str) -> Pattern:
    """
    Compile a path glob into a regular expression.

    ``**`` matches across directories, ``*`` and ``?`` stay within
    one path segment. Patterns are matched against paths relative to
    the project root, using '/' as separator.
    """
    parts = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(parts) + r"\Z")


class InputFileFinder:
    """
    Collects the input files of a project.

    A file is collected when it matches the source pattern (every file
    when no pattern is set) or the test pattern (no file when unset);
    matching the test pattern marks it as a test file. Hidden
    directories and files are skipped.
    """

    def __init__(
        self,
        src_glob: Optional[str] = None,
        tests_glob: Optional[str] = None,
        charset: str = "utf-8",
    ):
        self.src_pattern = glob_to_regex(src_glob) if src_glob else None
        self.tests_pattern = glob_to_regex(tests_glob) if tests_glob else None
        self.charset = charset

    def collect(self, root: Path) -> List[InputFile]:
        """
        Collect input files under a root directory.

        Args:
            root: Project root directory.

        Returns:
            InputFiles in a stable order (directories walked
            alphabetically).
        """
        root = Path(root)
        files = []

        for current, dirs, filenames in os.walk(root):
            current_path = Path(current)
            dirs[:] = sorted(d for d in dirs if not d.startswith("."))

            for filename in sorted(filenames):
                if filename.startswith("."):
                    continue

                file_path = current_path / filename
                if not file_path.is_file():
                    continue

                relative = file_path.relative_to(root).as_posix()
                is_test = self._matches(self.tests_pattern, relative, default=False)
                is_src = self._matches(self.src_pattern, relative, default=True)

                if is_src or is_test:
                    files.append(InputFile(path=file_path, is_test=is_test, charset=self.charset))

        logger.debug(f"Collected {len(files)} files in {root}")
        return files

    @staticmethod
    def _matches(pattern: Optional[Pattern], relative: str, default: bool) -> bool:
        if pattern is None:
            return default
        return pattern.match(relative) is not None
