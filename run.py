#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four

Examples:
    python run.py play --color1 red --color2 yellow
    python run.py check --position 0,0,...
    python run.py benchmark --iterations 500
"""

import sys

from connect4.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
