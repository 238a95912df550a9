"""Archive definition models.

An archive is a numbered storage target the copy agent moves file data
to and from. Archive definitions are parsed leniently (types only) and
validated separately, so that a loaded configuration can be inspected
entry by entry even when some entries are invalid.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Annotated, NoReturn

from pydantic import BaseModel, ConfigDict, Field, RootModel, StrictInt, StrictStr

from hsmposix.core.errors import ArchiveValidationError
from hsmposix.models.checksums import ChecksumPolicy


# Archive IDs travel as unsigned 32-bit integers; 0 means "no archive"
MAX_ARCHIVE_ID = 2**32 - 1


class ArchiveDefinition(BaseModel):
    """A single archive target.

    Attributes:
        name: Human-readable archive name.
        id: Archive ID, unique within the configuration and non-zero.
        root: Directory under which archived data is stored.
        checksums: Checksum policy override, None to inherit the global one.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Annotated[StrictStr, Field(description="Archive name")]
    id: Annotated[StrictInt, Field(ge=0, le=MAX_ARCHIVE_ID, description="Archive ID")]
    root: Annotated[StrictStr, Field(description="Archive root directory")]
    checksums: Annotated[
        ChecksumPolicy | None,
        Field(description="Checksum policy override"),
    ] = None

    def __str__(self) -> str:
        return f"archive {self.name} (id={self.id}, root={self.root})"

    def check_valid(self, peers: Iterable[ArchiveDefinition] = ()) -> None:
        """Validate this archive definition.

        Args:
            peers: The other archives in the owning set. The archive
                itself may be included once; that occurrence is skipped.

        Raises:
            ArchiveValidationError: If the name is empty, the ID is zero
                or shared with a peer, or the root is missing, not a
                directory, or not readable and writable.
        """
        if not self.name:
            self._fail("name cannot be empty")
        if self.id == 0:
            self._fail("archive ID 0 is reserved")
        skipped_self = False
        for peer in peers:
            if peer is self and not skipped_self:
                skipped_self = True
                continue
            if peer.id == self.id:
                self._fail(f"archive ID {self.id} is also used by {peer.name!r}")
        if not self.root:
            self._fail("root cannot be empty")

        root = Path(self.root)
        if not root.exists():
            self._fail(f"root {self.root} does not exist")
        if not root.is_dir():
            self._fail(f"root {self.root} is not a directory")
        if not os.access(root, os.R_OK | os.W_OK | os.X_OK):
            self._fail(f"root {self.root} is not accessible")

    def _fail(self, reason: str) -> NoReturn:
        raise ArchiveValidationError(self.id, self.name, reason)


class ArchiveSet(RootModel[tuple[ArchiveDefinition, ...]]):
    """Ordered collection of archive definitions in file order."""

    model_config = ConfigDict(frozen=True)

    root: tuple[ArchiveDefinition, ...] = ()

    def __iter__(self) -> Iterator[ArchiveDefinition]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> ArchiveDefinition:
        return self.root[index]

    @property
    def ids(self) -> list[int]:
        """Archive IDs in file order."""
        return [archive.id for archive in self.root]

    def get(self, archive_id: int) -> ArchiveDefinition | None:
        """Look up an archive by ID, None if not present."""
        for archive in self.root:
            if archive.id == archive_id:
                return archive
        return None

    def errors(self) -> list[ArchiveValidationError]:
        """Validate every archive and collect the failures.

        Returns:
            One error per invalid archive, in file order.
        """
        errors: list[ArchiveValidationError] = []
        for archive in self.root:
            try:
                archive.check_valid(self.root)
            except ArchiveValidationError as e:
                errors.append(e)
        return errors

    def check_valid(self) -> None:
        """Validate the whole set.

        Raises:
            ArchiveValidationError: For the first invalid archive.
        """
        for archive in self.root:
            archive.check_valid(self.root)
