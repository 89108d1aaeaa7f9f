"""
CLI entry point for famsearch.

This module serves as the entry point when famsearch.cli is executed as a module
with `python -m famsearch.cli`.
"""

from .main import main

if __name__ == "__main__":
    main()
