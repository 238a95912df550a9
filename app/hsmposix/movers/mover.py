"""POSIX data mover handles.

A mover is bound to one archive and carries the checksum settings the
transfer engine applies to that archive. Handles are plain immutable
records; the copying itself happens elsewhere.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from hsmposix.models.checksums import ChecksumPolicy


@dataclass(frozen=True, slots=True)
class MoverChecksums:
    """Checksum settings in the form the POSIX backend consumes.

    Attributes:
        disabled: Do not compute checksums when archiving.
        disable_compare_on_restore: Do not verify checksums when restoring.
    """

    disabled: bool = False
    disable_compare_on_restore: bool = False

    @classmethod
    def from_policy(cls, policy: ChecksumPolicy) -> "MoverChecksums":
        """Convert a configuration checksum policy."""
        return cls(
            disabled=policy.disabled,
            disable_compare_on_restore=policy.skip_compare_on_restore,
        )


@dataclass(frozen=True, slots=True)
class PosixMover:
    """Data mover bound to a single archive.

    Attributes:
        archive_id: ID of the archive this mover serves.
        name: Archive name.
        root: Archive root directory.
        client_root: Mountpoint of the primary filesystem client.
        checksums: Effective checksum settings for this archive.
    """

    archive_id: int
    name: str
    root: Path
    client_root: Path
    checksums: MoverChecksums

    def __post_init__(self) -> None:
        """Validate mover data after initialization."""
        if self.archive_id == 0:
            msg = "Mover archive ID cannot be 0"
            raise ValueError(msg)

    def checksum_config(self) -> MoverChecksums:
        """Return the resolved checksum settings."""
        return self.checksums


class MoverSet(Mapping[int, PosixMover]):
    """Read-only mapping of archive ID to mover."""

    def __init__(self, movers: Mapping[int, PosixMover] | None = None) -> None:
        self._movers = MappingProxyType(dict(movers or {}))

    def __getitem__(self, archive_id: int) -> PosixMover:
        return self._movers[archive_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._movers)

    def __len__(self) -> int:
        return len(self._movers)

    def __repr__(self) -> str:
        return f"MoverSet({sorted(self._movers)})"
