#!/usr/bin/env python3
"""
Entry point for running the OImage command line.

Usage:
    python run.py info photo.png
"""

import sys

from oimage.cli import main


if __name__ == "__main__":
    sys.exit(main())
