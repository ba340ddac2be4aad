"""Tracker - local, file-backed issue tracker.

Entry script: ``python tracker_main.py <command>``.
"""

from tracker_core.cli import app, main

__all__ = ["app", "main"]

if __name__ == "__main__":
    main()
