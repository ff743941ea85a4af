#!/usr/bin/env python3
"""Convenience runner for the TrackAndFeel activity client.

Usage:
    python run.py activities
    python run.py activity <id> --unit pace
"""
import sys

from trackandfeel.main import main

if __name__ == "__main__":
    sys.exit(main())
