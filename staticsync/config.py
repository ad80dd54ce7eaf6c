"""Configuration dataclasses and config file loading for staticsync."""

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, List, Optional, Union

from staticsync.exceptions import ConfigError
from staticsync.utils.hashing import ALGORITHMS, DEFAULT_ALGORITHM, DEFAULT_BUFFER_SIZE

DEFAULT_INTERVAL = 10.0
DEFAULT_CONFIG_NAME = ".staticsync.json"

PathLike = Union[str, Path]


def default_config_path() -> Path:
    """Location of the config file when none is given: ~/.staticsync.json"""
    return Path.home() / DEFAULT_CONFIG_NAME


@dataclass(frozen=True)
class FilePair:
    """Two files kept in sync with each other.

    Order carries no meaning for the sync direction; it only fixes how the
    pair is reported.

    Attributes:
        side_a: First file
        side_b: Second file
    """
    side_a: Path
    side_b: Path

    def __post_init__(self):
        """Ensure paths are Path objects and the pair is not self-referencing."""
        object.__setattr__(self, "side_a", Path(self.side_a))
        object.__setattr__(self, "side_b", Path(self.side_b))
        if self.side_a == self.side_b:
            raise ConfigError(f"File is paired with itself: {self.side_a}")

    @classmethod
    def validated(cls, side_a: PathLike, side_b: PathLike) -> "FilePair":
        """Build a pair after checking both sides against the filesystem.

        Both paths must be absolute, exist, be regular files, and refer to
        two different files.

        Raises:
            ConfigError: If any check fails
        """
        pair = cls(side_a, side_b)

        for path in pair:
            if not path.is_absolute():
                raise ConfigError(f"Path must be absolute: {path}")
            if not path.exists():
                raise ConfigError(f'File "{path}" does not exist!')
            if path.is_dir():
                raise ConfigError(f"Path is a directory: {path}")
            if not path.is_file():
                raise ConfigError(f"Not a regular file: {path}")

        try:
            same = os.path.samefile(pair.side_a, pair.side_b)
        except OSError as e:
            raise ConfigError(f"Cannot compare {pair.side_a} and {pair.side_b}: {e}") from e
        if same:
            raise ConfigError(f"Both sides refer to the same file: {pair.side_a} and {pair.side_b}")

        return pair

    def __iter__(self):
        yield self.side_a
        yield self.side_b

    def __str__(self) -> str:
        return f"{self.side_a} <-> {self.side_b}"


@dataclass
class SyncConfig:
    """Settings for a staticsync run.

    Attributes:
        pairs: Validated file pairs to keep in sync
        interval: Seconds to wait between passes
        buffer_size: Read buffer size for content digests, in bytes
        algorithm: Digest algorithm name (see utils.hashing.ALGORITHMS)
        run_once: Run a single pass and return instead of looping
        verbose: Log per-pair details at DEBUG level
        json_logs: Emit logs as JSON lines
        log_file: Path to log file (None for stderr only)
    """
    pairs: List[FilePair] = field(default_factory=list)
    interval: float = DEFAULT_INTERVAL
    buffer_size: int = DEFAULT_BUFFER_SIZE
    algorithm: str = DEFAULT_ALGORITHM
    run_once: bool = False
    verbose: bool = False
    json_logs: bool = False
    log_file: Optional[Path] = None

    def __post_init__(self):
        """Coerce paths and reject values the engine cannot run with."""
        if isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)

        if isinstance(self.interval, bool) or not isinstance(self.interval, (int, float)) or self.interval < 0:
            raise ConfigError(f"Invalid interval number: {self.interval!r}")
        if isinstance(self.buffer_size, bool) or not isinstance(self.buffer_size, int) or self.buffer_size <= 0:
            raise ConfigError(f"Invalid buffer size: {self.buffer_size!r}")
        if self.algorithm not in ALGORITHMS:
            raise ConfigError(
                f"Unknown algorithm: {self.algorithm!r} "
                f"(choose from {', '.join(sorted(ALGORITHMS))})"
            )

    def with_overrides(self, **overrides: Any) -> "SyncConfig":
        """Return a copy with every non-None override applied.

        Example:
            >>> config.with_overrides(interval=args.time, run_once=args.once or None)
        """
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def _parse_pairs(entries: Any) -> List[FilePair]:
    if not isinstance(entries, list):
        raise ConfigError('"files" must be a list of [path, path] entries')

    pairs = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, list) or len(entry) < 2:
            raise ConfigError(f"Entry #{index + 1} in \"files\" must be a list of two paths")
        # Extra elements after the first two are ignored
        side_a, side_b = entry[0], entry[1]
        if not isinstance(side_a, str) or not isinstance(side_b, str):
            raise ConfigError(f"Entry #{index + 1} in \"files\" must contain path strings")
        pairs.append(FilePair.validated(side_a, side_b))

    return pairs


def load_config(path: Optional[PathLike] = None) -> SyncConfig:
    """Load and validate a JSON config file.

    Expected shape::

        {"files": [["/abs/a.txt", "/abs/b.txt"]],
         "interval": 10, "buffer_size": 8192, "algorithm": "sha1"}

    Only "files" is required.

    Args:
        path: Config file (defaults to ~/.staticsync.json)

    Returns:
        SyncConfig with validated pairs

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid
    """
    config_path = Path(path) if path is not None else default_config_path()

    if not config_path.is_file():
        raise ConfigError(f"Missing config file: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be an object: {config_path}")
    if "files" not in data:
        raise ConfigError(f'Config is missing "files": {config_path}')

    settings = {
        key: data[key]
        for key in ("interval", "buffer_size", "algorithm")
        if key in data
    }

    return SyncConfig(pairs=_parse_pairs(data["files"]), **settings)
