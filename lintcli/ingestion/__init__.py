"""
Input ingestion module.

Discovers the project files handed to the analysis engine.
"""

from lintcli.ingestion.finder import InputFileFinder

__all__ = [
    "InputFileFinder",
]
