"""Data mover handles and provisioning.

This module provides the client-root accessors, the immutable mover
records, and the factory that builds one mover per archive.
"""

from hsmposix.movers.client import (
    ClientRoot,
    LocalClientRoot,
    StaticClientRoot,
    client_root_from_config,
)
from hsmposix.movers.factory import create_movers
from hsmposix.movers.mover import MoverChecksums, MoverSet, PosixMover

__all__ = [
    "ClientRoot",
    "LocalClientRoot",
    "MoverChecksums",
    "MoverSet",
    "PosixMover",
    "StaticClientRoot",
    "client_root_from_config",
    "create_movers",
]
