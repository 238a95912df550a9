"""Plugin configuration file I/O and environment merge.

This module loads the plugin configuration from TOML, validates it with
the Pydantic models, and merges in the runtime parameters the agent
passes through the environment.
"""

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import ValidationError

from hsmposix.core.errors import ConfigNotFoundError, ConfigParseError, HsmConfigError
from hsmposix.core.paths import (
    AGENT_CONN_ENV_VAR,
    CLIENT_MOUNTPOINT_ENV_VAR,
    get_config_dir,
    get_config_path,
    resolve_config_file,
)
from hsmposix.models.archive import ArchiveDefinition, ArchiveSet
from hsmposix.models.checksums import ChecksumPolicy
from hsmposix.models.config import RUNTIME_KEYS, PosixConfig

logger = logging.getLogger(__name__)


def load_config(path: Path | None = None) -> PosixConfig:
    """Load and validate the plugin configuration from a TOML file.

    Fields missing from the file stay unset (None), so that callers can
    tell an absent setting from an explicit one.

    Args:
        path: Config file, or a directory holding lhsm-plugin-posix.toml.
            If None, uses the default config path.

    Returns:
        PosixConfig with only the file-sourced fields populated.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the file can't be read, isn't valid TOML,
            or doesn't match the schema.
    """
    config_path = resolve_config_file(path) if path is not None else get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    logger.debug("Loading plugin config from %s", config_path)
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigParseError(f"Failed to read config {config_path}: {e}") from e

    runtime_keys = sorted(RUNTIME_KEYS & data.keys())
    if runtime_keys:
        msg = (
            f"Invalid config {config_path}: {', '.join(runtime_keys)} "
            "can only be set through the environment"
        )
        raise ConfigParseError(msg)

    try:
        return PosixConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(f"Invalid config content in {config_path}: {e}") from e


def merge_environment(
    config: PosixConfig,
    environ: Mapping[str, str] | None = None,
) -> PosixConfig:
    """Merge runtime parameters from the environment into a file config.

    The agent address and client root come from the environment only;
    unset variables leave them None. A missing global checksum policy
    is replaced by an explicit all-enabled one so that every archive has
    a concrete policy to inherit.

    Args:
        config: Configuration as loaded from file.
        environ: Environment mapping to read. Defaults to ``os.environ``.

    Returns:
        New PosixConfig; the input is left untouched.
    """
    env = os.environ if environ is None else environ
    return config.model_copy(
        update={
            "agent_address": env.get(AGENT_CONN_ENV_VAR),
            "client_root": env.get(CLIENT_MOUNTPOINT_ENV_VAR),
            "checksums": config.checksums if config.checksums is not None else ChecksumPolicy(),
        }
    )


def get_merged_config(environ: Mapping[str, str] | None = None) -> PosixConfig:
    """Load the plugin config from the configured directory and merge the environment.

    Args:
        environ: Environment mapping to read. Defaults to ``os.environ``.

    Returns:
        Merged PosixConfig.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the config file is invalid.
    """
    config = load_config(get_config_dir(environ))
    return merge_environment(config, environ)


def save_config(config: PosixConfig, path: Path | None = None) -> Path:
    """Save the file-sourced part of a configuration to a TOML file.

    Runtime fields (agent address, client root) are never written. The
    file is written atomically by first writing to a temporary file and
    then using os.replace() for atomic rename.

    Args:
        config: The configuration to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        HsmConfigError: If the file cannot be written.
    """
    from tempfile import NamedTemporaryFile

    config_path = path or get_config_path()

    # Ensure parent directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        # Cleanup temp file on failure
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise HsmConfigError(f"Failed to write config: {e}") from e

    return config_path


def default_config() -> PosixConfig:
    """Create a sample configuration with a single archive.

    Returns:
        PosixConfig suitable as a starting point for operators.
    """
    return PosixConfig(
        num_threads=4,
        archives=ArchiveSet(
            (ArchiveDefinition(name="archive1", id=1, root="/srv/archives/1"),)
        ),
        checksums=ChecksumPolicy(),
    )


def _config_to_dict(config: PosixConfig) -> dict[str, Any]:
    """Convert a PosixConfig to a dictionary for TOML serialization.

    Only includes values that are set to keep the file clean.

    Args:
        config: The PosixConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, Any] = {}

    if config.num_threads is not None:
        result["num_threads"] = config.num_threads

    if config.checksums is not None:
        result["checksums"] = config.checksums.to_toml()

    archives: list[dict[str, Any]] = []
    for archive in config.archives:
        entry: dict[str, Any] = {"name": archive.name, "id": archive.id, "root": archive.root}
        if archive.checksums is not None:
            entry["checksums"] = archive.checksums.to_toml()
        archives.append(entry)
    if archives:
        result["archive"] = archives

    return result
