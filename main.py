#!/usr/bin/env python3
"""
cursed-mines - Minesweeper in the terminal.

Usage:
    python main.py WIDTH HEIGHT MINES [--seed N] [--log-file PATH]
"""
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from mines.cli import main


if __name__ == "__main__":
    sys.exit(main())
