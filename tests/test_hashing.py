"""Tests for staticsync.utils.hashing module.

Validates streaming digests: determinism across buffer sizes, empty files,
algorithm selection, and error reporting. The reconciler trusts these
digests to decide whether a copy is needed.
"""

import hashlib

import pytest
import xxhash

from staticsync.utils.hashing import (
    ALGORITHMS,
    DEFAULT_BUFFER_SIZE,
    ContentDigester,
    digest_file,
)


class TestContentDigester:
    """Test ContentDigester construction and digests."""

    def test_defaults(self):
        d = ContentDigester()
        assert d.buffer_size == DEFAULT_BUFFER_SIZE
        assert d.algorithm == "xxhash"

    def test_same_file_same_digest(self, tmp_path):
        f = tmp_path / "test.txt"
        f.write_text("hello world")
        d = ContentDigester()
        assert d.digest(f) == d.digest(f)

    def test_buffer_size_does_not_change_digest(self, tmp_path):
        """64 bytes vs 1MB must agree, including a short final chunk."""
        f = tmp_path / "data.bin"
        f.write_bytes(bytes(range(256)) * 41 + b"tail")
        small = ContentDigester(buffer_size=64).digest(f)
        large = ContentDigester(buffer_size=1024 * 1024).digest(f)
        odd = ContentDigester(buffer_size=7).digest(f)
        assert small == large == odd

    def test_exact_multiple_of_buffer(self, tmp_path):
        f = tmp_path / "exact.bin"
        f.write_bytes(b"x" * 128)
        assert ContentDigester(buffer_size=64).digest(f) == ContentDigester(buffer_size=4096).digest(f)

    def test_matches_reference_xxhash(self, tmp_path):
        content = b"reference content" * 1000
        f = tmp_path / "ref.bin"
        f.write_bytes(content)
        assert ContentDigester(buffer_size=100).digest(f) == xxhash.xxh64(content).hexdigest()

    @pytest.mark.parametrize("algorithm", ["sha1", "md5", "sha256"])
    def test_matches_reference_hashlib(self, tmp_path, algorithm):
        content = b"some bytes\n" * 500
        f = tmp_path / "ref.bin"
        f.write_bytes(content)
        expected = hashlib.new(algorithm, content).hexdigest()
        assert ContentDigester(buffer_size=333, algorithm=algorithm).digest(f) == expected

    def test_empty_file(self, tmp_path):
        """Empty file should produce the digest of zero bytes."""
        f = tmp_path / "empty.txt"
        f.write_bytes(b"")
        assert ContentDigester().digest(f) == xxhash.xxh64(b"").hexdigest()
        assert ContentDigester(algorithm="sha1").digest(f) == hashlib.sha1(b"").hexdigest()

    def test_different_content_different_digest(self, tmp_path):
        f1 = tmp_path / "a.txt"
        f2 = tmp_path / "b.txt"
        f1.write_text("hello")
        f2.write_text("world")
        d = ContentDigester()
        assert d.digest(f1) != d.digest(f2)

    def test_nonexistent_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ContentDigester().digest(tmp_path / "nonexistent.txt")

    def test_directory_raises_oserror(self, tmp_path):
        with pytest.raises(OSError):
            ContentDigester().digest(tmp_path)

    @pytest.mark.parametrize("size", [0, -1, 1.5, None, True])
    def test_invalid_buffer_size(self, size):
        with pytest.raises(ValueError, match="Buffer size"):
            ContentDigester(buffer_size=size)

    def test_unknown_algorithm_raises(self):
        with pytest.raises(ValueError, match="Unknown algorithm"):
            ContentDigester(algorithm="bogus")

    def test_accepts_string_path(self, tmp_path):
        f = tmp_path / "s.txt"
        f.write_text("string path")
        assert ContentDigester().digest(str(f)) == ContentDigester().digest(f)


class TestDigestFile:
    """Test the digest_file convenience wrapper."""

    def test_matches_digester(self, tmp_path):
        f = tmp_path / "f.txt"
        f.write_text("wrapper")
        assert digest_file(f, buffer_size=16, algorithm="md5") == ContentDigester(16, "md5").digest(f)

    def test_known_algorithms(self):
        assert set(ALGORITHMS) == {"xxhash", "sha1", "md5", "sha256"}
