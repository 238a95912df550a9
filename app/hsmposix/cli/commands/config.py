"""Plugin configuration commands.

Provides commands to display the merged plugin configuration, check
that every archive can be provisioned, and write a starter config file.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from hsmposix.core.config import (
    default_config,
    get_merged_config,
    load_config,
    merge_environment,
    save_config,
)
from hsmposix.core.errors import HsmConfigError
from hsmposix.core.paths import get_config_path, resolve_config_file
from hsmposix.models.checksums import resolve_checksums
from hsmposix.models.config import PosixConfig
from hsmposix.movers.client import client_root_from_config
from hsmposix.movers.factory import create_movers
from hsmposix.utils.formatting import (
    console,
    create_archive_table,
    format_archive_row,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Show and check the plugin configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    """Output format options for config show."""

    TABLE = "table"
    JSON = "json"


ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Config file or directory (default: $LHSMD_CONFIG_DIR).",
    ),
]


def _load_merged(config_path: Path | None) -> PosixConfig:
    """Load and merge the configuration or exit with an error message."""
    try:
        if config_path is None:
            return get_merged_config()
        return merge_environment(load_config(config_path))
    except HsmConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.command()
def show(
    config_path: ConfigOption = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the merged configuration with effective checksum policies."""
    config = _load_merged(config_path)

    if output_format == OutputFormat.JSON:
        data = config.model_dump(mode="json", by_alias=True)
        data["effective_checksums"] = {
            str(archive.id): resolve_checksums(config.checksums, archive.checksums).to_toml()
            for archive in config.archives
        }
        console.print_json(json.dumps(data))
        return

    console.print(f"[muted]Agent address:[/] {config.agent_address or '-'}")
    console.print(f"[muted]Client root:[/] {config.client_root or '-'}")
    threads = config.num_threads if config.num_threads is not None else "-"
    console.print(f"[muted]Threads:[/] {threads}")

    if not config.archives:
        print_warning("No archives configured.")
        return

    table = create_archive_table()
    for archive in config.archives:
        effective = resolve_checksums(config.checksums, archive.checksums)
        table.add_row(*format_archive_row(archive, effective))
    console.print(table)


@app.command()
def check(config_path: ConfigOption = None) -> None:
    """Validate archives and provision a mover for each one."""
    config = _load_merged(config_path)

    errors = config.archives.errors()
    if errors:
        for error in errors:
            print_error(str(error))
        raise typer.Exit(code=1)

    try:
        movers = create_movers(client_root_from_config(config), config)
    except HsmConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not movers:
        print_warning("No archives configured.")
        return

    print_success(f"Configuration OK: {len(movers)} mover(s) ready.")


@app.command()
def init(
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Config file or directory to write (default: $LHSMD_CONFIG_DIR).",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config."),
    ] = False,
) -> None:
    """Write a starter plugin configuration."""
    path = resolve_config_file(output) if output is not None else get_config_path()
    if path.exists() and not force:
        print_error(f"Config already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(default_config(), path)
    except HsmConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
