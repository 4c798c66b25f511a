"""
Reporting module.

Renders the issues of an analysis pass to the console and to an
HTML report.
"""

from lintcli.reporting.report import Report
from lintcli.reporting.factory import ReportFactory
from lintcli.reporting.formatter import ReportFormatter, HTMLFormatter, TextFormatter

__all__ = [
    "Report",
    "ReportFactory",
    "ReportFormatter",
    "HTMLFormatter",
    "TextFormatter",
]
