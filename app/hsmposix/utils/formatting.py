"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

if TYPE_CHECKING:
    from hsmposix.models.archive import ArchiveDefinition
    from hsmposix.models.checksums import ChecksumPolicy

THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "bold_header": "bold #69B9A1",
        "border": "#29526d",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "#f53263",
        "info": "#0ec1c8",
    }
)

# Shared console instances
console = Console(theme=THEME)
err_console = Console(theme=THEME, stderr=True)


def create_archive_table(title: str = "Archives") -> Table:
    """Create a pre-configured table for displaying archives.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for archive display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("ID", justify="right", no_wrap=True)
    table.add_column("Name", style="text", no_wrap=True)
    table.add_column("Root", style="muted")
    table.add_column("Checksums", style="info")
    table.add_column("Compare on restore", style="info")
    table.add_column("Policy", style="muted")
    return table


def format_archive_row(
    archive: ArchiveDefinition, effective: ChecksumPolicy
) -> tuple[str, str, str, str, str, str]:
    """Format an archive and its effective checksum policy as a table row.

    Returns:
        Tuple of (id, name, root, checksums, compare, policy source).
    """
    checksums = "[warning]disabled[/]" if effective.disabled else "[success]enabled[/]"
    compare = "[warning]skipped[/]" if effective.skip_compare_on_restore else "[success]yes[/]"
    source = "override" if archive.checksums is not None else "global"
    return (
        str(archive.id),
        escape(archive.name),
        escape(archive.root),
        checksums,
        compare,
        source,
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
