"""
Command-line interface for famsearch.

- main: click commands ``find``, ``advanced`` and ``suggest``
"""

from .main import cli, main

__all__ = [
    "cli",
    "main",
]
