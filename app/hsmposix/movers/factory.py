"""Mover provisioning from a merged configuration.

Provisioning is atomic: either every configured archive gets a mover,
or the call fails and nothing is returned.
"""

import logging

from hsmposix.core.errors import MoverCreationError
from hsmposix.models.checksums import resolve_checksums
from hsmposix.models.config import PosixConfig
from hsmposix.movers.client import ClientRoot
from hsmposix.movers.mover import MoverChecksums, MoverSet, PosixMover

logger = logging.getLogger(__name__)


def create_movers(client: ClientRoot, config: PosixConfig) -> MoverSet:
    """Create one mover per configured archive.

    Each mover carries the archive's own checksum policy if it has one,
    otherwise the global policy.

    Args:
        client: Accessor for the primary filesystem client.
        config: Merged plugin configuration.

    Returns:
        MoverSet keyed by archive ID.

    Raises:
        ArchiveValidationError: If any archive definition is invalid.
        MoverCreationError: If any archive root cannot be opened.
    """
    config.archives.check_valid()

    movers: dict[int, PosixMover] = {}
    for archive in config.archives:
        policy = resolve_checksums(config.checksums, archive.checksums)
        try:
            root = client.open_archive(archive.root)
        except OSError as e:
            raise MoverCreationError(archive.id, str(e)) from e

        movers[archive.id] = PosixMover(
            archive_id=archive.id,
            name=archive.name,
            root=root,
            client_root=client.mountpoint,
            checksums=MoverChecksums.from_policy(policy),
        )
        logger.info(
            "Created mover for archive %d (%s) with checksums %s",
            archive.id,
            archive.root,
            "disabled" if policy.disabled else "enabled",
        )

    if not movers:
        logger.warning("No archives configured, no movers created")

    return MoverSet(movers)
