"""
Core module containing the analysis client, plugin discovery,
configuration and exceptions.
"""

from lintcli.core.config import Config, LintSettings, Options
from lintcli.core.client import AnalysisClient, ClientState, IssueCollector
from lintcli.core.plugins import resolve_plugins
from lintcli.core.exceptions import (
    LintError,
    ArgumentParsingError,
    ConfigurationError,
    PluginResolutionError,
    EngineStartError,
    AnalysisError,
    ReportWriteError,
    EngineStopError,
    IllegalStateError,
)

__all__ = [
    "Config",
    "LintSettings",
    "Options",
    "AnalysisClient",
    "ClientState",
    "IssueCollector",
    "resolve_plugins",
    "LintError",
    "ArgumentParsingError",
    "ConfigurationError",
    "PluginResolutionError",
    "EngineStartError",
    "AnalysisError",
    "ReportWriteError",
    "EngineStopError",
    "IllegalStateError",
]
