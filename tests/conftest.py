"""Shared pytest fixtures for staticsync tests.

Provides file pair factories with controlled modification times so
reconcile outcomes are deterministic.
"""

import json
import os

import pytest

from staticsync.config import FilePair

# Whole seconds, so every filesystem can store them exactly
T = 1_600_000_000 * 10**9
SECOND = 10**9


def set_mtime(path, mtime_ns, atime_ns=None):
    """Set a file's mtime (and atime, defaulting to the mtime)."""
    os.utime(path, ns=(mtime_ns if atime_ns is None else atime_ns, mtime_ns))


def mtime_ns(path):
    return os.stat(path).st_mtime_ns


@pytest.fixture
def make_pair(tmp_path):
    """Factory: make_pair(content_a, content_b, mtime_a, mtime_b) -> FilePair."""

    def _make(content_a, content_b, mtime_a=T, mtime_b=T, name="file.txt"):
        side_a = tmp_path / "a" / name
        side_b = tmp_path / "b" / name
        side_a.parent.mkdir(exist_ok=True)
        side_b.parent.mkdir(exist_ok=True)
        side_a.write_bytes(content_a if isinstance(content_a, bytes) else content_a.encode())
        side_b.write_bytes(content_b if isinstance(content_b, bytes) else content_b.encode())
        set_mtime(side_a, mtime_a)
        set_mtime(side_b, mtime_b)
        return FilePair.validated(side_a, side_b)

    return _make


@pytest.fixture
def write_config(tmp_path):
    """Factory: write_config(data) -> path of a JSON config file."""

    def _write(data, name="staticsync.json"):
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data)
        else:
            path.write_text(json.dumps(data))
        return path

    return _write
