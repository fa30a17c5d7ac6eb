"""
Command-line interface for makeimage.

This package contains CLI implementations using Click.
"""

from makeimage.cli.commands import cli, main

__all__ = ["cli", "main"]
