#!/usr/bin/env python3
"""
run.py - Main entry point for dropfour

Examples:
    # Play a game, prompting for names and colors
    python run.py play

    # Play with everything given up front on a 7x8 board
    python run.py play --p1-name Ada --p1-color red --p2-name Bob --p2-color yellow --height 7 --width 8

    # Check a position for wins (42 values, top row first)
    python run.py test --position 0,0,0,...

    # Benchmark both win checks with detailed logging
    python run.py --debug_level debug benchmark --iterations 5000
"""

import sys

from dropfour.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
