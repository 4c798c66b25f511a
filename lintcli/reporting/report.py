"""
Report data structures.

Gathers the outcome of one analysis pass in a form the formatters
can render.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, Tuple

from lintcli.analysis.entities import Issue, Severity


@dataclass
class Report:
    """Issues found by one analysis pass over a project."""

    project_name: str
    base_dir: Path
    issues: Tuple[Issue, ...] = ()
    files_analyzed: int = 0
    test_files_analyzed: int = 0
    generated_at: datetime = field(default_factory=datetime.now)

    @property
    def issue_count(self) -> int:
        return len(self.issues)

    def count_by_severity(self) -> Dict[Severity, int]:
        """Count issues per severity, most severe first, omitting zeros."""
        counts = Counter(issue.severity for issue in self.issues)
        return {severity: counts[severity] for severity in Severity if counts[severity]}

    def relative_path(self, issue: Issue) -> str:
        """Path of the issue's file relative to the project, if possible."""
        if issue.file_path is None:
            return ""
        try:
            return Path(issue.file_path).relative_to(self.base_dir).as_posix()
        except ValueError:
            return str(issue.file_path)
