"""
Report rendering for analysis passes.

Turns the issues collected by one pass into the console summary and
the HTML report artifact.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from lintcli.analysis.entities import InputFile, Issue
from lintcli.core.config import LintSettings, Options
from lintcli.core.exceptions import ReportWriteError
from lintcli.reporting.formatter import HTMLFormatter, TextFormatter
from lintcli.reporting.report import Report

logger = logging.getLogger(__name__)

DEFAULT_HTML_REPORT = "lintcli-report.html"


class ReportFactory:
    """
    Renders collected issues.

    The HTML report goes to <project>/.lintcli/lintcli-report.html
    unless another location is given; relative locations are resolved
    against the project root.
    """

    def __init__(self, charset: str = "utf-8", html_report: Optional[str] = None):
        self.charset = charset
        self.html_report = html_report

    def html_report_path(self, base_dir: Path) -> Path:
        if self.html_report:
            path = Path(self.html_report)
            return path if path.is_absolute() else Path(base_dir) / path
        return Path(base_dir) / LintSettings.WORK_DIR / DEFAULT_HTML_REPORT

    def create_report(
        self,
        issues: Sequence[Issue],
        options: Options,
        base_dir: Path,
        input_files: Sequence[InputFile] = (),
    ) -> Report:
        base_dir = Path(base_dir)
        name = options.properties.get(LintSettings.PROJECT_NAME_PROPERTY) or base_dir.resolve().name
        return Report(
            project_name=name,
            base_dir=base_dir,
            issues=tuple(issues),
            files_analyzed=len(input_files),
            test_files_analyzed=sum(1 for f in input_files if f.is_test),
        )

    def render(
        self,
        issues: Sequence[Issue],
        options: Options,
        base_dir: Path,
        input_files: Sequence[InputFile] = (),
    ) -> Report:
        """
        Write the reports of one analysis pass.

        Args:
            issues: Issues collected during the pass, in arrival order.
            options: Invocation options.
            base_dir: Project root directory.
            input_files: Files analyzed during the pass.

        Returns:
            The rendered Report.

        Raises:
            ReportWriteError: If the HTML report cannot be written.
        """
        report = self.create_report(issues, options, base_dir, input_files)

        logger.info(TextFormatter().format(report))

        path = self.html_report_path(base_dir)
        try:
            HTMLFormatter(self.charset).save(report, path)
        except OSError as e:
            raise ReportWriteError(
                f"Unable to write HTML report {path}: {e}",
                details={"path": str(path)},
                cause=e,
            )
        return report
