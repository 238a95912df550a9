"""Unit tests for plugin config I/O and environment merge.

Tests for load_config, merge_environment, get_merged_config and save_config.
"""

import shutil
from pathlib import Path

import pytest
from hsmposix.core.config import (
    default_config,
    get_merged_config,
    load_config,
    merge_environment,
    save_config,
)
from hsmposix.core.errors import ConfigNotFoundError, ConfigParseError
from hsmposix.core.paths import CONFIG_FILE_NAME
from hsmposix.models.archive import ArchiveDefinition, ArchiveSet
from hsmposix.models.checksums import ChecksumPolicy
from hsmposix.models.config import PosixConfig


@pytest.fixture
def expected_basic() -> PosixConfig:
    """The configuration described by lhsm-plugin-posix.toml."""
    return PosixConfig(
        num_threads=42,
        archives=ArchiveSet(
            (ArchiveDefinition(name="1", id=1, root="/tmp/archives/1"),)
        ),
    )


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_basic(self, basic_config_path: Path, expected_basic: PosixConfig) -> None:
        """load_config returns exactly the file contents."""
        loaded = load_config(basic_config_path)

        assert loaded == expected_basic
        assert loaded.checksums is None
        assert loaded.agent_address is None
        assert loaded.client_root is None

    def test_load_from_directory(self, tmp_path: Path, basic_config_path: Path) -> None:
        """load_config reads lhsm-plugin-posix.toml from a directory."""
        shutil.copy(basic_config_path, tmp_path / CONFIG_FILE_NAME)

        loaded = load_config(tmp_path)

        assert loaded.num_threads == 42

    def test_load_checksums(self, checksums_config_path: Path) -> None:
        """load_config keeps global and per-archive checksum blocks apart."""
        loaded = load_config(checksums_config_path)

        expected = PosixConfig(
            archives=ArchiveSet(
                (
                    ArchiveDefinition(
                        name="1",
                        id=1,
                        root="/tmp/archives/1",
                        checksums=ChecksumPolicy(disabled=False, skip_compare_on_restore=False),
                    ),
                    ArchiveDefinition(
                        name="2",
                        id=2,
                        root="/tmp/archives/2",
                        checksums=ChecksumPolicy(disabled=False, skip_compare_on_restore=True),
                    ),
                    ArchiveDefinition(name="3", id=3, root="/tmp/archives/3"),
                )
            ),
            checksums=ChecksumPolicy(disabled=True, skip_compare_on_restore=False),
        )
        assert loaded == expected
        assert loaded.num_threads is None

    def test_load_does_not_validate_archives(self, badarchive_config_path: Path) -> None:
        """Invalid archives still load so they can be inspected."""
        loaded = load_config(badarchive_config_path)

        assert len(loaded.archives) == 6

    def test_load_empty_file(self, tmp_path: Path) -> None:
        """An empty file loads as a config with no archives."""
        config_file = tmp_path / "empty.toml"
        config_file.write_text("")

        loaded = load_config(config_file)

        assert loaded == PosixConfig()
        assert len(loaded.archives) == 0

    def test_load_nonexistent_file(self, tmp_path: Path) -> None:
        """load_config raises ConfigNotFoundError for a missing file."""
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "nonexistent.toml")

    def test_load_directory_without_config(self, tmp_path: Path) -> None:
        """load_config raises ConfigNotFoundError for a directory without a config."""
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path)

    def test_load_invalid_toml(self, tmp_path: Path) -> None:
        """load_config raises ConfigParseError for invalid TOML syntax."""
        config_file = tmp_path / "invalid.toml"
        config_file.write_text("this is not valid toml [[[")

        with pytest.raises(ConfigParseError, match="Invalid TOML syntax"):
            load_config(config_file)

    def test_load_unknown_key(self, tmp_path: Path) -> None:
        """load_config raises ConfigParseError for keys outside the schema."""
        config_file = tmp_path / "unknown.toml"
        config_file.write_text("num_threads = 4\nworkers = 8\n")

        with pytest.raises(ConfigParseError, match="Invalid config content"):
            load_config(config_file)

    def test_load_wrong_type(self, tmp_path: Path) -> None:
        """load_config raises ConfigParseError for values of the wrong type."""
        config_file = tmp_path / "wrong.toml"
        config_file.write_text('[[archive]]\nname = "1"\nid = "one"\nroot = "/tmp"\n')

        with pytest.raises(ConfigParseError):
            load_config(config_file)

    @pytest.mark.parametrize(
        "body",
        [
            '[[archive]]\nname = "1"\nid = "1"\nroot = "/tmp"\n',
            '[[archive]]\nname = "1"\nid = true\nroot = "/tmp"\n',
            '[[archive]]\nname = 1\nid = 1\nroot = "/tmp"\n',
            "num_threads = 42.0\n",
            'num_threads = "42"\n',
            '[checksums]\ndisabled = "yes"\n',
            "[checksums]\ndisabled = 1\n",
            "[checksums]\ndisable-compare-on-restore = 0\n",
        ],
    )
    def test_load_rejects_coercible_types(self, tmp_path: Path, body: str) -> None:
        """Values of the wrong type are rejected rather than converted."""
        config_file = tmp_path / "coerced.toml"
        config_file.write_text(body)

        with pytest.raises(ConfigParseError, match="Invalid config content"):
            load_config(config_file)

    def test_load_zero_threads(self, tmp_path: Path) -> None:
        """An explicit zero thread count loads as 0, not as unset."""
        config_file = tmp_path / "zero.toml"
        config_file.write_text("num_threads = 0\n")

        loaded = load_config(config_file)

        assert loaded.num_threads == 0
        assert loaded.num_threads is not None

    @pytest.mark.parametrize("key", ["agent_address", "client_root"])
    def test_load_rejects_runtime_keys(self, tmp_path: Path, key: str) -> None:
        """Runtime parameters can't be set from the config file."""
        config_file = tmp_path / "runtime.toml"
        config_file.write_text(f'{key} = "/somewhere"\n')

        with pytest.raises(ConfigParseError, match="through the environment"):
            load_config(config_file)

    def test_load_then_validate(self, basic_config_path: Path, archive_roots: list[Path]) -> None:
        """Archives loaded from a valid file pass validation."""
        # The fixture points at /tmp/archives/1; use an existing root instead.
        config_file = archive_roots[0].parent / "valid.toml"
        text = basic_config_path.read_text().replace("/tmp/archives/1", str(archive_roots[0]))
        config_file.write_text(text)

        loaded = load_config(config_file)

        assert len(loaded.archives) == 1
        for archive in loaded.archives:
            archive.check_valid(loaded.archives)

    def test_bad_archives_fail_one_by_one(self, badarchive_config_path: Path) -> None:
        """Every archive in the bad fixture fails validation on its own."""
        loaded = load_config(badarchive_config_path)

        assert len(loaded.archives.errors()) == len(loaded.archives)


class TestMergeEnvironment:
    """Tests for merge_environment and get_merged_config."""

    def test_merge_sets_runtime_fields(
        self, basic_config_path: Path, expected_basic: PosixConfig
    ) -> None:
        """Merging adds environment values and normalizes checksums."""
        env = {
            "LHSMD_AGENT_CONNECTION": "foo://bar:1234",
            "LHSMD_CLIENT_MOUNTPOINT": "/foo/bar/baz",
        }

        merged = merge_environment(load_config(basic_config_path), env)

        assert merged == PosixConfig(
            agent_address="foo://bar:1234",
            client_root="/foo/bar/baz",
            num_threads=42,
            archives=expected_basic.archives,
            checksums=ChecksumPolicy(),
        )

    def test_merge_keeps_global_checksums(self, checksums_config_path: Path) -> None:
        """A configured global checksum policy survives the merge."""
        merged = merge_environment(load_config(checksums_config_path), {})

        assert merged.checksums == ChecksumPolicy(disabled=True)

    def test_merge_without_environment(self, basic_config_path: Path) -> None:
        """Missing variables leave runtime fields unset without failing."""
        merged = merge_environment(load_config(basic_config_path), {})

        assert merged.agent_address is None
        assert merged.client_root is None
        assert merged.checksums == ChecksumPolicy()

    def test_merge_does_not_modify_input(self, basic_config_path: Path) -> None:
        """merge_environment returns a new value."""
        loaded = load_config(basic_config_path)

        merge_environment(loaded, {"LHSMD_AGENT_CONNECTION": "foo://bar:1234"})

        assert loaded.agent_address is None
        assert loaded.checksums is None

    def test_get_merged_config(
        self, clean_env, fixtures_dir: Path, expected_basic: PosixConfig
    ) -> None:
        """get_merged_config loads from LHSMD_CONFIG_DIR and merges os.environ."""
        clean_env.setenv("LHSMD_AGENT_CONNECTION", "foo://bar:1234")
        clean_env.setenv("LHSMD_CLIENT_MOUNTPOINT", "/foo/bar/baz")
        clean_env.setenv("LHSMD_CONFIG_DIR", str(fixtures_dir))

        merged = get_merged_config()

        assert merged.agent_address == "foo://bar:1234"
        assert merged.client_root == "/foo/bar/baz"
        assert merged.num_threads == expected_basic.num_threads
        assert merged.archives == expected_basic.archives
        assert merged.checksums == ChecksumPolicy()

    def test_get_merged_config_missing_dir(self, tmp_path: Path) -> None:
        """get_merged_config raises ConfigNotFoundError without a config."""
        with pytest.raises(ConfigNotFoundError):
            get_merged_config({"LHSMD_CONFIG_DIR": str(tmp_path / "nowhere")})


class TestSaveConfig:
    """Tests for save_config function."""

    def test_save_round_trip(self, tmp_path: Path, checksums_config_path: Path) -> None:
        """A saved config loads back unchanged."""
        original = load_config(checksums_config_path)
        config_file = tmp_path / "saved.toml"

        result = save_config(original, config_file)

        assert result == config_file
        assert load_config(config_file) == original

    def test_save_skips_runtime_fields(self, tmp_path: Path, basic_config_path: Path) -> None:
        """Runtime parameters are never written to the file."""
        merged = merge_environment(
            load_config(basic_config_path),
            {"LHSMD_AGENT_CONNECTION": "foo://bar:1234", "LHSMD_CLIENT_MOUNTPOINT": "/mnt"},
        )
        config_file = tmp_path / "saved.toml"

        save_config(merged, config_file)

        content = config_file.read_text()
        assert "agent_address" not in content
        assert "client_root" not in content
        assert load_config(config_file).num_threads == 42

    def test_save_creates_directory(self, tmp_path: Path) -> None:
        """save_config creates parent directories if needed."""
        config_file = tmp_path / "nested" / "dir" / CONFIG_FILE_NAME

        save_config(default_config(), config_file)

        assert config_file.exists()

    def test_default_config(self) -> None:
        """default_config describes one archive with checksums enabled."""
        config = default_config()

        assert config.archives.ids == [1]
        assert config.checksums == ChecksumPolicy()
