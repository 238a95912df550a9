"""CLI commands for hsmposix.

This package contains all subcommand implementations.
"""

from hsmposix.cli.commands import config

__all__ = ["config"]
