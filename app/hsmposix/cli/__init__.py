"""CLI package for hsmposix.

This package contains the Typer application and all subcommands.
"""

from hsmposix.cli.main import app

__all__ = ["app"]
