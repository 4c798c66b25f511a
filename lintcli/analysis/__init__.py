"""
Analysis engine module.

Provides the engine interface driven by the analysis client, the
default plugin engine and the entities exchanged with it.
"""

from lintcli.analysis.entities import InputFile, Issue, Severity
from lintcli.analysis.engine import AnalysisEngine, PluginEngine

__all__ = [
    "InputFile",
    "Issue",
    "Severity",
    "AnalysisEngine",
    "PluginEngine",
]
