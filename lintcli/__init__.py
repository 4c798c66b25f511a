"""
lintcli - command-line runner for a pluggable static-analysis engine.

Discovers plugin archives, collects project files, runs analysis
passes and renders the findings to console and HTML reports.
"""

__version__ = "1.0.0"
__author__ = "lintcli"
