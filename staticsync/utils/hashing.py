"""Streaming file content digests.

Uses xxhash by default since these digests only compare two local copies
of the same file. The cryptographic algorithms from hashlib are available
when a stable, well-known fingerprint is wanted (sha1 matches what older
staticsync releases reported).
"""

import hashlib
from pathlib import Path
from typing import Callable, Dict, Union

import xxhash

# 8KB per read; callers trade memory for fewer syscalls via buffer_size
DEFAULT_BUFFER_SIZE = 8 * 1024

DEFAULT_ALGORITHM = "xxhash"

ALGORITHMS: Dict[str, Callable] = {
    "xxhash": xxhash.xxh64,
    "sha1": hashlib.sha1,
    "md5": hashlib.md5,
    "sha256": hashlib.sha256,
}


def _new_hasher(algorithm: str):
    try:
        return ALGORITHMS[algorithm]()
    except KeyError:
        raise ValueError(f"Unknown algorithm: {algorithm}") from None


class ContentDigester:
    """Compute content digests by streaming a file through a fixed buffer.

    The digest depends only on the bytes of the file, never on the buffer
    size, so digests produced by differently configured digesters can be
    compared directly.

    Attributes:
        buffer_size: Bytes read per syscall
        algorithm: Key into ALGORITHMS
    """

    def __init__(
        self,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        algorithm: str = DEFAULT_ALGORITHM
    ):
        """Initialize the digester.

        Args:
            buffer_size: Size of the read buffer in bytes (must be positive)
            algorithm: Hash algorithm ("xxhash", "sha1", "md5", "sha256")

        Raises:
            ValueError: If buffer_size is not positive or algorithm is unknown
        """
        if isinstance(buffer_size, bool) or not isinstance(buffer_size, int) or buffer_size <= 0:
            raise ValueError(f"Buffer size must be a positive integer: {buffer_size!r}")
        if algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm: {algorithm}")

        self.buffer_size = buffer_size
        self.algorithm = algorithm

    def digest(self, path: Union[str, Path]) -> str:
        """Digest the full content of a file.

        Reads until end of file, so a file that grows or shrinks while
        being read is hashed as whatever was actually read.

        Args:
            path: File to digest

        Returns:
            Hex digest of the file content

        Raises:
            OSError: If the file cannot be opened or read
        """
        hasher = _new_hasher(self.algorithm)
        buffer = bytearray(self.buffer_size)
        view = memoryview(buffer)

        with open(path, "rb", buffering=0) as f:
            while True:
                n = f.readinto(view)
                if not n:
                    break
                hasher.update(view[:n])

        return hasher.hexdigest()

    def __repr__(self) -> str:
        return f"ContentDigester(buffer_size={self.buffer_size}, algorithm={self.algorithm!r})"


def digest_file(
    path: Union[str, Path],
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    algorithm: str = DEFAULT_ALGORITHM
) -> str:
    """Compute the digest of a file.

    Convenience wrapper around ContentDigester for one-off calls.

    Args:
        path: File to digest
        buffer_size: Read buffer size in bytes
        algorithm: Hash algorithm name

    Returns:
        Hex digest of the file content

    Example:
        >>> digest_file("/etc/hosts", buffer_size=64, algorithm="sha1")
        '...'
    """
    return ContentDigester(buffer_size, algorithm).digest(path)
