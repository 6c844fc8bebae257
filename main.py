#!/usr/bin/env python3
"""
Terminal Minesweeper - Main entry point.

Usage:
    python main.py [width height mines] [--preset NAME] [--seed N]
"""
import sys

from src.sweeper.cli import main


if __name__ == "__main__":
    sys.exit(main())
