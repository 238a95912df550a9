"""Data models for hsmposix.

This module exports the configuration data structures.
"""

from hsmposix.models.archive import ArchiveDefinition, ArchiveSet
from hsmposix.models.checksums import ChecksumPolicy, resolve_checksums
from hsmposix.models.config import PosixConfig

__all__ = [
    "ArchiveDefinition",
    "ArchiveSet",
    "ChecksumPolicy",
    "PosixConfig",
    "resolve_checksums",
]
