"""
Analysis entity definitions.

Defines the input files handed to the engine and the issues it
reports back. Both are immutable once created.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional


class Severity(Enum):
    """Severity of an issue, most severe first."""
    BLOCKER = "BLOCKER"
    CRITICAL = "CRITICAL"
    MAJOR = "MAJOR"
    MINOR = "MINOR"
    INFO = "INFO"


@dataclass(frozen=True)
class InputFile:
    """A file to analyze."""

    path: Path
    is_test: bool = False
    charset: str = "utf-8"

    def read_text(self) -> str:
        """Read the file content using its charset."""
        return self.path.read_text(encoding=self.charset)


@dataclass(frozen=True)
class Issue:
    """A single analysis finding."""

    rule_key: str
    message: str = ""
    severity: Severity = Severity.MAJOR
    file_path: Optional[Path] = None
    line: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], default_file: Optional[Path] = None) -> "Issue":
        """
        Create an Issue from a plain mapping.

        Args:
            data: Mapping with at least a "rule_key" entry.
            default_file: File to attach when the mapping has none.

        Returns:
            The corresponding Issue.
        """
        if not data.get("rule_key"):
            raise ValueError(f"Issue without rule key: {dict(data)}")

        file_path = data.get("file_path")
        return cls(
            rule_key=str(data["rule_key"]),
            message=str(data.get("message", "")),
            severity=Severity(str(data.get("severity", Severity.MAJOR.value)).upper()),
            file_path=Path(file_path) if file_path else default_file,
            line=int(data["line"]) if data.get("line") is not None else None,
        )

