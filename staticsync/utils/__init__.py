"""Utility modules for staticsync.

This package provides:
- hashing: Streaming file content digests
- logging: Configured logging with JSON/text output support
"""

from staticsync.utils.hashing import ContentDigester, digest_file
from staticsync.utils.logging import get_logger, configure_root_logger

__all__ = [
    "ContentDigester",
    "digest_file",
    "get_logger",
    "configure_root_logger",
]
