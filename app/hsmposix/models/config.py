"""Plugin configuration model.

PosixConfig holds both the file-sourced settings and the runtime
parameters merged in from the environment. The runtime fields stay
None until the environment merge fills them.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from hsmposix.core.errors import MissingEnvironmentError
from hsmposix.core.paths import AGENT_CONN_ENV_VAR, CLIENT_MOUNTPOINT_ENV_VAR
from hsmposix.models.archive import ArchiveSet
from hsmposix.models.checksums import ChecksumPolicy

# Keys only the environment may provide
RUNTIME_KEYS = frozenset({"agent_address", "client_root"})


class PosixConfig(BaseModel):
    """Complete configuration of the POSIX copy-agent plugin.

    Attributes:
        agent_address: Agent connection address (environment only).
        client_root: Primary filesystem mountpoint (environment only).
        num_threads: Worker count for the mover pool, None if unset.
        archives: Configured archives in file order.
        checksums: Global checksum policy, None if unset.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    agent_address: Annotated[str | None, Field(description="Agent connection address")] = None
    client_root: Annotated[str | None, Field(description="Client filesystem mountpoint")] = None
    num_threads: Annotated[
        StrictInt | None,
        Field(ge=0, description="Number of mover worker threads"),
    ] = None
    archives: Annotated[
        ArchiveSet,
        Field(alias="archive", default_factory=ArchiveSet, description="Archive definitions"),
    ]
    checksums: Annotated[
        ChecksumPolicy | None,
        Field(description="Global checksum policy"),
    ] = None

    def require_agent_address(self) -> str:
        """Get the agent address or fail if the environment did not set it.

        Raises:
            MissingEnvironmentError: If the agent address is unset.
        """
        if not self.agent_address:
            raise MissingEnvironmentError(AGENT_CONN_ENV_VAR, "agent connection address")
        return self.agent_address

    def require_client_root(self) -> str:
        """Get the client root or fail if the environment did not set it.

        Raises:
            MissingEnvironmentError: If the client root is unset.
        """
        if not self.client_root:
            raise MissingEnvironmentError(CLIENT_MOUNTPOINT_ENV_VAR, "client mountpoint")
        return self.client_root
