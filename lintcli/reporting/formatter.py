"""
Report formatters.

Renders a Report as a console summary or as a standalone HTML page.
"""

import html
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from lintcli.reporting.report import Report

logger = logging.getLogger(__name__)


class ReportFormatter(ABC):
    """Abstract base class for report formatters."""

    @abstractmethod
    def format(self, report: Report) -> str:
        """Format a report to string."""
        pass


class TextFormatter(ReportFormatter):
    """Short plain-text summary, printed at the end of each pass."""

    def __init__(self, width: int = 48):
        self.width = width

    def format(self, report: Report) -> str:
        lines = [self._rule(" lintcli Report ")]

        if report.issue_count == 0:
            lines.append("  No issues to display")
        else:
            noun = "issue" if report.issue_count == 1 else "issues"
            lines.append(f"  {report.issue_count} {noun}")
            lines.append("")
            for severity, count in report.count_by_severity().items():
                lines.append(f"  {count:>6} {severity.value.lower()}")

        lines.append(self._rule(""))
        return "\n".join(lines)

    def _rule(self, title: str) -> str:
        return title.center(self.width, "-")


class HTMLFormatter(ReportFormatter):
    """
    Formats reports as a self-contained HTML page.

    Lists every issue with its file, line, rule, severity and
    message. All text coming from the project or plugins is escaped.
    """

    def __init__(self, charset: str = "utf-8"):
        self.charset = charset

    def format(self, report: Report) -> str:
        lines: List[str] = []
        lines.extend(self._format_header(report))
        lines.extend(self._format_summary(report))
        lines.extend(self._format_issues(report))
        lines.extend(["</body>", "</html>", ""])
        return "\n".join(lines)

    def _format_header(self, report: Report) -> List[str]:
        title = html.escape(f"lintcli report - {report.project_name}")
        return [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            f'<meta charset="{html.escape(self.charset)}">',
            f"<title>{title}</title>",
            "<style>",
            "body { font-family: sans-serif; margin: 2em; }",
            "table { border-collapse: collapse; width: 100%; }",
            "th, td { border: 1px solid #ccc; padding: 4px 8px; text-align: left; }",
            "th { background: #eee; }",
            "</style>",
            "</head>",
            "<body>",
            f"<h1>{title}</h1>",
        ]

    def _format_summary(self, report: Report) -> List[str]:
        lines = [
            '<ul class="summary">',
            f"<li>Generated: {report.generated_at.strftime('%Y-%m-%d %H:%M:%S')}</li>",
            f"<li>Files analyzed: {report.files_analyzed}"
            f" ({report.test_files_analyzed} test)</li>",
            f"<li>Issues: {report.issue_count}</li>",
        ]
        for severity, count in report.count_by_severity().items():
            lines.append(f"<li>{severity.value}: {count}</li>")
        lines.append("</ul>")
        return lines

    def _format_issues(self, report: Report) -> List[str]:
        if not report.issues:
            return ["<p>No issues to display.</p>"]

        lines = [
            '<table class="issues">',
            "<tr><th>File</th><th>Line</th><th>Rule</th><th>Severity</th><th>Message</th></tr>",
        ]
        for issue in report.issues:
            line = "" if issue.line is None else str(issue.line)
            lines.append(
                "<tr>"
                f"<td>{html.escape(report.relative_path(issue))}</td>"
                f"<td>{line}</td>"
                f"<td>{html.escape(issue.rule_key)}</td>"
                f"<td>{issue.severity.value}</td>"
                f"<td>{html.escape(issue.message)}</td>"
                "</tr>"
            )
        lines.append("</table>")
        return lines

    def save(self, report: Report, path: Path) -> None:
        """Save report as HTML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        content = self.format(report)
        with open(path, "w", encoding=self.charset, errors="xmlcharrefreplace") as f:
            f.write(content)

        logger.info(f"HTML report generated: {path}")
