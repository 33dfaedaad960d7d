"""Entry point for the cache trace simulator.

Usage:
    python run.py traces.txt                 # replay a trace file
    python run.py - < traces.txt             # replay a trace from stdin
    python run.py --scenario "Matrix Traversal" --passes 2
"""
import sys

from cachetrace.cli import main


if __name__ == '__main__':
    sys.exit(main())
