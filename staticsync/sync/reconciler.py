"""Reconciliation of a single file pair.

The newest modification time wins. Each call works from fresh stat()
results, so nothing is remembered between passes:

1. Equal mtimes: nothing to do (no reads at all).
2. Different mtimes, equal content: retime the older file so the next
   pass takes the equal-mtime path instead of hashing again.
3. Different mtimes, different content: copy newer over older, then give
   the older file the newer file's mtime.

Files whose mtimes are identical but whose content differs are never
detected. This is accepted: mtimes are the cheap signal that keeps the
steady state free of reads.
"""

import logging
import os
import shutil
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from staticsync.config import FilePair
from staticsync.exceptions import (
    CopyFailed,
    DigestUnavailable,
    MetadataUnavailable,
    TimestampUpdateFailed,
)
from staticsync.utils.hashing import ContentDigester, DEFAULT_BUFFER_SIZE

logger = logging.getLogger(__name__)


class SyncAction(Enum):
    """Outcome of reconciling one pair."""
    UNCHANGED = "unchanged"                  # mtimes equal
    NOOP_SAME_CONTENT = "noop_same_content"  # mtimes differ, content equal
    PROPAGATED = "propagated"                # newer copied over older


@dataclass
class FileSnapshot:
    """One side of a pair as observed during a single reconcile call."""
    path: Path
    mtime_ns: int
    atime_ns: int
    digest: Optional[str] = None


@dataclass
class SyncDecision:
    """What reconcile decided for a pair.

    Attributes:
        action: The SyncAction taken (or planned, for inspect)
        pair: The pair that was reconciled
        source: Newer side (None when UNCHANGED)
        target: Older side (None when UNCHANGED)
    """
    action: SyncAction
    pair: FilePair
    source: Optional[Path] = None
    target: Optional[Path] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert decision to dictionary."""
        return {
            "action": self.action.value,
            "side_a": str(self.pair.side_a),
            "side_b": str(self.pair.side_b),
            "source": str(self.source) if self.source else None,
            "target": str(self.target) if self.target else None,
        }


class Reconciler:
    """Decides and applies the sync action for file pairs.

    Usage:
        reconciler = Reconciler(buffer_size=64 * 1024)
        decision = reconciler.reconcile(pair)
        if decision.action is SyncAction.PROPAGATED:
            print(f"{decision.source} -> {decision.target}")
    """

    def __init__(
        self,
        digester: Optional[ContentDigester] = None,
        buffer_size: int = DEFAULT_BUFFER_SIZE
    ):
        """Initialize reconciler.

        Args:
            digester: ContentDigester to use. Built from buffer_size if omitted.
            buffer_size: Read buffer size for the default digester
        """
        self.digester = digester or ContentDigester(buffer_size)

    def reconcile(self, pair: FilePair) -> SyncDecision:
        """Bring one pair into sync.

        Args:
            pair: The pair to reconcile

        Returns:
            SyncDecision describing what was done

        Raises:
            MetadataUnavailable: stat() failed on either side
            DigestUnavailable: Reading either side failed
            CopyFailed: Writing the older side failed
            TimestampUpdateFailed: Content was handled but retiming the
                older side failed. Carries the decision.
        """
        ordered = self._order(pair)
        if ordered is None:
            logger.debug(f"{pair}: timestamps equal, unchanged")
            return SyncDecision(SyncAction.UNCHANGED, pair)

        newer, older = ordered
        self._fill_digests(pair, newer, older)

        if newer.digest == older.digest:
            decision = SyncDecision(SyncAction.NOOP_SAME_CONTENT, pair, newer.path, older.path)
            # Equal content must end with equal mtimes, or every pass re-hashes
            self._set_times(pair, older.path, older.atime_ns, newer.mtime_ns, decision)
            logger.info(f"{pair}: same content, retimed {older.path}")
            return decision

        decision = SyncDecision(SyncAction.PROPAGATED, pair, newer.path, older.path)

        try:
            shutil.copyfile(newer.path, older.path)
        except OSError as e:
            raise CopyFailed(pair, older.path, str(e)) from e

        self._set_times(pair, older.path, time.time_ns(), newer.mtime_ns, decision)
        logger.info(f"{pair}: copied {newer.path} -> {older.path}")
        return decision

    def inspect(self, pair: FilePair) -> SyncDecision:
        """Work out what reconcile would do without touching either file.

        Raises:
            MetadataUnavailable: stat() failed on either side
            DigestUnavailable: Reading either side failed
        """
        ordered = self._order(pair)
        if ordered is None:
            return SyncDecision(SyncAction.UNCHANGED, pair)

        newer, older = ordered
        self._fill_digests(pair, newer, older)

        if newer.digest == older.digest:
            return SyncDecision(SyncAction.NOOP_SAME_CONTENT, pair, newer.path, older.path)
        return SyncDecision(SyncAction.PROPAGATED, pair, newer.path, older.path)

    def _snapshot(self, pair: FilePair, path: Path) -> FileSnapshot:
        try:
            st = os.stat(path)
        except OSError as e:
            raise MetadataUnavailable(pair, path, str(e)) from e
        return FileSnapshot(path=path, mtime_ns=st.st_mtime_ns, atime_ns=st.st_atime_ns)

    def _order(self, pair: FilePair) -> Optional[Tuple[FileSnapshot, FileSnapshot]]:
        """Return (newer, older), or None when the mtimes are equal."""
        a = self._snapshot(pair, pair.side_a)
        b = self._snapshot(pair, pair.side_b)

        if a.mtime_ns == b.mtime_ns:
            return None
        if a.mtime_ns > b.mtime_ns:
            return a, b
        return b, a

    def _fill_digests(self, pair: FilePair, *snapshots: FileSnapshot) -> None:
        for snapshot in snapshots:
            try:
                snapshot.digest = self.digester.digest(snapshot.path)
            except OSError as e:
                raise DigestUnavailable(pair, snapshot.path, str(e)) from e

    def _set_times(
        self,
        pair: FilePair,
        path: Path,
        atime_ns: int,
        mtime_ns: int,
        decision: SyncDecision
    ) -> None:
        try:
            os.utime(path, ns=(atime_ns, mtime_ns))
        except OSError as e:
            raise TimestampUpdateFailed(pair, path, str(e), decision=decision) from e
