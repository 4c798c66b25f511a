#!/usr/bin/env python3
"""
lintcli - Main Entry Point

Runs the installed analysis plugins over the current project and
writes the findings to console and HTML reports.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from lintcli.cli import main

if __name__ == "__main__":
    main()
