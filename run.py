#!/usr/bin/env python3
"""
run.py - Main entry point for negamax Connect Four

Examples:
    python run.py play --depth 5
    python run.py play --mode pvp
    python run.py analyze --position 0,0,...,1 --depth 3
    python run.py benchmark --depth 4 --iterations 10
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from negamax_c4.interfaces.cli import main


if __name__ == "__main__":
    sys.exit(main())
