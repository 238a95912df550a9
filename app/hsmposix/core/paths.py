"""Environment contract and default locations for the POSIX copy agent.

The agent daemon hands runtime parameters to its plugins through
environment variables. The variable names below are the contract
between the two.

Defaults:
- Config directory: /etc/lhsmd/
- Plugin config: <config dir>/lhsm-plugin-posix.toml
"""

import os
from collections.abc import Mapping
from pathlib import Path

# Address the plugin uses to reach the agent (e.g. "tcp://localhost:4242")
AGENT_CONN_ENV_VAR = "LHSMD_AGENT_CONNECTION"

# Mountpoint of the primary filesystem client used by the plugin
CLIENT_MOUNTPOINT_ENV_VAR = "LHSMD_CLIENT_MOUNTPOINT"

# Directory holding the agent and plugin configuration files
CONFIG_DIR_ENV_VAR = "LHSMD_CONFIG_DIR"

DEFAULT_CONFIG_DIR = Path("/etc/lhsmd")

CONFIG_FILE_NAME = "lhsm-plugin-posix.toml"


def get_config_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Get the configuration directory path.

    Args:
        environ: Environment mapping to read. Defaults to ``os.environ``.

    Returns:
        Path from LHSMD_CONFIG_DIR, or /etc/lhsmd/ when unset or empty.
    """
    env = os.environ if environ is None else environ
    base = env.get(CONFIG_DIR_ENV_VAR)
    if base:
        return Path(base)
    return DEFAULT_CONFIG_DIR


def get_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Get the plugin configuration file path.

    Returns:
        Path to <config dir>/lhsm-plugin-posix.toml.
    """
    return get_config_dir(environ) / CONFIG_FILE_NAME


def resolve_config_file(path: Path) -> Path:
    """Resolve a config location to a file path.

    A directory is taken to contain the plugin config under its
    standard file name; anything else is returned unchanged.
    """
    if path.is_dir():
        return path / CONFIG_FILE_NAME
    return path
