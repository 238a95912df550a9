"""Client-root accessors for mover provisioning.

Movers copy data between the primary filesystem client mount and an
archive root. The accessor abstracts how those locations are opened so
that provisioning can run against a real mount or a fixed path.
"""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

from hsmposix.models.config import PosixConfig

logger = logging.getLogger(__name__)


class ClientRoot(ABC):
    """Abstract base class for client filesystem accessors.

    Attributes:
        mountpoint: Root of the primary filesystem client.

    Example:
        >>> client = LocalClientRoot("/mnt/lustre")
        >>> archive_root = client.open_archive("/srv/archives/1")
    """

    def __init__(self, mountpoint: str | Path) -> None:
        """Initialize the accessor.

        Args:
            mountpoint: Root of the primary filesystem client.
        """
        self._mountpoint = Path(mountpoint)

    @property
    def mountpoint(self) -> Path:
        """Root of the primary filesystem client."""
        return self._mountpoint

    @abstractmethod
    def open_archive(self, root: str) -> Path:
        """Prepare an archive root for use by a mover.

        Args:
            root: Archive root directory from the configuration.

        Returns:
            Path the mover should use for the archive.

        Raises:
            OSError: If the client or archive root cannot be accessed.
        """


class LocalClientRoot(ClientRoot):
    """Accessor for a locally mounted client filesystem."""

    def open_archive(self, root: str) -> Path:
        _check_directory(self.mountpoint, "client mountpoint")
        archive_root = Path(root)
        _check_directory(archive_root, "archive root")
        logger.debug("Opened archive root %s (client %s)", archive_root, self.mountpoint)
        return archive_root


class StaticClientRoot(ClientRoot):
    """Accessor that trusts its paths and never touches the filesystem."""

    def open_archive(self, root: str) -> Path:
        return Path(root)


def client_root_from_config(config: PosixConfig) -> LocalClientRoot:
    """Create the local accessor for a merged configuration.

    Raises:
        MissingEnvironmentError: If the client mountpoint is not set.
    """
    return LocalClientRoot(config.require_client_root())


def _check_directory(path: Path, name: str) -> None:
    if not path.exists():
        raise FileNotFoundError(f"{name} {path} does not exist")
    if not path.is_dir():
        raise NotADirectoryError(f"{name} {path} is not a directory")
    if not os.access(path, os.R_OK | os.X_OK):
        raise PermissionError(f"{name} {path}: Permission denied")
