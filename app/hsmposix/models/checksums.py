"""Checksum policy model and inheritance rules.

A policy may be set globally and overridden per archive. Inheritance is
all-or-nothing: an archive with its own checksum block uses that block
as-is, an archive without one uses the global policy unchanged.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class ChecksumPolicy(BaseModel):
    """Checksum settings for an archive or for the whole plugin.

    Attributes:
        disabled: Do not compute checksums when archiving.
        skip_compare_on_restore: Do not compare checksums when restoring.
            Written as ``disable-compare-on-restore`` in config files.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    disabled: Annotated[StrictBool, Field(description="Disable checksum computation")] = False
    skip_compare_on_restore: Annotated[
        StrictBool,
        Field(
            alias="disable-compare-on-restore",
            description="Skip checksum comparison on restore",
        ),
    ] = False

    def to_toml(self) -> dict[str, bool]:
        """Convert to the key layout used in config files."""
        return self.model_dump(by_alias=True)


def resolve_checksums(
    global_policy: ChecksumPolicy | None,
    override: ChecksumPolicy | None,
) -> ChecksumPolicy:
    """Resolve the effective checksum policy for one archive.

    Args:
        global_policy: Plugin-wide policy, None if not configured.
        override: Archive-specific policy, None if the archive inherits.

    Returns:
        The override when present, else the global policy, else a
        policy with checksums and restore comparison enabled.
    """
    if override is not None:
        return override
    if global_policy is not None:
        return global_policy
    return ChecksumPolicy()
