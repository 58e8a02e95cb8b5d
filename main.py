#!/usr/bin/env python3
"""
SubView Entry Point Script

This script initializes the CLI handler and follows the mpv subtitle feed.
"""

import sys
from subview.cli import CLIHandler

if __name__ == "__main__":
    if sys.version_info < (3, 8):
        sys.stderr.write("SubView requires Python 3.8 or later.\n")
        sys.exit(1)

    cli = CLIHandler()
    cli.run()
