"""CLI commands for tradejournal.

This package provides the command-line interface for recording trades
and viewing performance analytics.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
