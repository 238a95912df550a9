"""Utility modules for hsmposix.

This module exports commonly used utility functions.
"""

from hsmposix.utils.formatting import (
    console,
    create_archive_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_archive_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
