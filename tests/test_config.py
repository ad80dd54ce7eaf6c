"""Tests for staticsync.config module.

Validates FilePair invariants, SyncConfig defaults and validation, and
JSON config loading.
"""

from pathlib import Path

import pytest

from staticsync.config import (
    DEFAULT_INTERVAL,
    FilePair,
    SyncConfig,
    default_config_path,
    load_config,
)
from staticsync.exceptions import ConfigError
from staticsync.utils.hashing import DEFAULT_BUFFER_SIZE


@pytest.fixture
def two_files(tmp_path):
    a = tmp_path / "a.txt"
    b = tmp_path / "b.txt"
    a.write_text("a")
    b.write_text("b")
    return a, b


class TestFilePair:
    """Test FilePair construction and validation."""

    def test_string_path_coercion(self):
        pair = FilePair("/some/a", "/some/b")
        assert isinstance(pair.side_a, Path)
        assert isinstance(pair.side_b, Path)

    def test_self_pairing_rejected(self):
        with pytest.raises(ConfigError, match="paired with itself"):
            FilePair("/same", "/same")

    def test_immutable(self):
        pair = FilePair("/x", "/y")
        with pytest.raises(AttributeError):
            pair.side_a = Path("/z")

    def test_iter_and_str(self):
        pair = FilePair("/x", "/y")
        assert list(pair) == [Path("/x"), Path("/y")]
        assert str(pair) == f"{Path('/x')} <-> {Path('/y')}"

    def test_hashable(self):
        assert FilePair("/x", "/y") == FilePair("/x", "/y")
        assert len({FilePair("/x", "/y"), FilePair("/x", "/y")}) == 1

    def test_validated(self, two_files):
        pair = FilePair.validated(*two_files)
        assert pair.side_a == two_files[0]

    def test_validated_relative_path(self, two_files):
        with pytest.raises(ConfigError, match="absolute"):
            FilePair.validated("relative.txt", two_files[1])

    def test_validated_missing(self, tmp_path, two_files):
        with pytest.raises(ConfigError, match="does not exist"):
            FilePair.validated(two_files[0], tmp_path / "missing.txt")

    def test_validated_directory(self, tmp_path, two_files):
        with pytest.raises(ConfigError, match="directory"):
            FilePair.validated(tmp_path, two_files[1])

    def test_validated_same_file_two_spellings(self, tmp_path, two_files):
        (tmp_path / "sub").mkdir()
        other_spelling = tmp_path / "sub" / ".." / "a.txt"
        with pytest.raises(ConfigError, match="same file"):
            FilePair.validated(two_files[0], other_spelling)


class TestSyncConfig:
    """Test SyncConfig dataclass behavior."""

    def test_defaults(self):
        config = SyncConfig()
        assert config.pairs == []
        assert config.interval == DEFAULT_INTERVAL == 10
        assert config.buffer_size == DEFAULT_BUFFER_SIZE
        assert config.algorithm == "xxhash"
        assert config.run_once is False
        assert config.verbose is False
        assert config.json_logs is False
        assert config.log_file is None

    def test_log_file_coercion(self):
        config = SyncConfig(log_file="/var/log/staticsync.log")
        assert isinstance(config.log_file, Path)

    @pytest.mark.parametrize("interval", [-1, "10", True])
    def test_invalid_interval(self, interval):
        with pytest.raises(ConfigError, match="interval"):
            SyncConfig(interval=interval)

    @pytest.mark.parametrize("size", [0, -5, 1.5, "8192"])
    def test_invalid_buffer_size(self, size):
        with pytest.raises(ConfigError, match="buffer size"):
            SyncConfig(buffer_size=size)

    def test_invalid_algorithm(self):
        with pytest.raises(ConfigError, match="Unknown algorithm"):
            SyncConfig(algorithm="crc32")

    def test_zero_interval_allowed(self):
        assert SyncConfig(interval=0).interval == 0

    def test_with_overrides_skips_none(self):
        config = SyncConfig(interval=30, buffer_size=4096)
        updated = config.with_overrides(interval=None, buffer_size=65536, run_once=True)
        assert updated.interval == 30
        assert updated.buffer_size == 65536
        assert updated.run_once is True
        # Original untouched
        assert config.buffer_size == 4096

    def test_with_overrides_validates(self):
        with pytest.raises(ConfigError):
            SyncConfig().with_overrides(buffer_size=0)


class TestLoadConfig:
    """Test JSON config file loading."""

    def test_load(self, write_config, two_files):
        path = write_config({"files": [[str(two_files[0]), str(two_files[1])]]})
        config = load_config(path)
        assert config.pairs == [FilePair(*two_files)]
        assert config.interval == DEFAULT_INTERVAL

    def test_load_settings(self, write_config, two_files):
        path = write_config({
            "files": [[str(two_files[0]), str(two_files[1])]],
            "interval": 2.5,
            "buffer_size": 1024,
            "algorithm": "sha1",
        })
        config = load_config(str(path))
        assert config.interval == 2.5
        assert config.buffer_size == 1024
        assert config.algorithm == "sha1"

    def test_extra_entry_elements_ignored(self, write_config, two_files):
        path = write_config({"files": [[str(two_files[0]), str(two_files[1]), "note"]]})
        assert len(load_config(path).pairs) == 1

    def test_empty_file_list(self, write_config):
        assert load_config(write_config({"files": []})).pairs == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Missing config file"):
            load_config(tmp_path / "nope.json")

    def test_invalid_json(self, write_config):
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(write_config("{not json"))

    def test_root_not_object(self, write_config):
        with pytest.raises(ConfigError, match="must be an object"):
            load_config(write_config([1, 2]))

    def test_missing_files_key(self, write_config):
        with pytest.raises(ConfigError, match='"files"'):
            load_config(write_config({"interval": 5}))

    def test_files_not_list(self, write_config):
        with pytest.raises(ConfigError, match="must be a list"):
            load_config(write_config({"files": "oops"}))

    def test_short_entry(self, write_config, two_files):
        with pytest.raises(ConfigError, match="Entry #1"):
            load_config(write_config({"files": [[str(two_files[0])]]}))

    def test_non_string_entry(self, write_config):
        with pytest.raises(ConfigError, match="path strings"):
            load_config(write_config({"files": [[1, 2]]}))

    def test_nonexistent_path(self, write_config, tmp_path, two_files):
        path = write_config({"files": [[str(two_files[0]), str(tmp_path / "gone")]]})
        with pytest.raises(ConfigError, match="does not exist"):
            load_config(path)

    def test_invalid_setting(self, write_config, two_files):
        path = write_config({
            "files": [[str(two_files[0]), str(two_files[1])]],
            "buffer_size": -1,
        })
        with pytest.raises(ConfigError):
            load_config(path)

    def test_default_path(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("USERPROFILE", str(tmp_path))
        assert default_config_path() == tmp_path / ".staticsync.json"
        with pytest.raises(ConfigError, match="Missing config file"):
            load_config()
