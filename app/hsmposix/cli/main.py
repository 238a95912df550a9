"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from hsmposix import __version__
from hsmposix.cli.commands import config
from hsmposix.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="hsmposix",
    help="Inspect and check the POSIX copy-agent plugin configuration.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"hsmposix version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
) -> None:
    """hsmposix - configuration tooling for the POSIX HSM copy agent.

    Load the plugin configuration, merge it with the agent environment,
    and check that every archive can be provisioned.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


# Register commands
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
