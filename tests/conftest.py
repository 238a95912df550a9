"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the sample plugin configs."""
    return FIXTURES_DIR


@pytest.fixture
def basic_config_path() -> Path:
    """Config with 42 threads and a single archive."""
    return FIXTURES_DIR / "lhsm-plugin-posix.toml"


@pytest.fixture
def badarchive_config_path() -> Path:
    """Config whose archives all fail validation."""
    return FIXTURES_DIR / "lhsm-plugin-posix-badarchive.toml"


@pytest.fixture
def checksums_config_path() -> Path:
    """Config with a global checksum policy and per-archive overrides."""
    return FIXTURES_DIR / "lhsm-plugin-posix-checksums.toml"


@pytest.fixture
def archive_roots(tmp_path: Path) -> list[Path]:
    """Three existing archive root directories."""
    roots = [tmp_path / "archives" / str(n) for n in (1, 2, 3)]
    for root in roots:
        root.mkdir(parents=True)
    return roots


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove the agent environment variables for the test."""
    for var in ("LHSMD_AGENT_CONNECTION", "LHSMD_CLIENT_MOUNTPOINT", "LHSMD_CONFIG_DIR"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
