"""Exception hierarchy for staticsync.

ConfigError belongs to the setup phase and is fatal. Every ReconcileError
is recoverable: the pair is skipped for the current pass and retried on the
next one.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from staticsync.config import FilePair
    from staticsync.sync.reconciler import SyncDecision


class StaticSyncError(Exception):
    """Base class for all staticsync errors."""


class ConfigError(StaticSyncError):
    """Configuration file missing, malformed, or naming invalid paths."""


class ReconcileError(StaticSyncError):
    """A single pair could not be reconciled on this pass.

    Attributes:
        pair: The FilePair being reconciled
        path: The side the failing operation was applied to
    """

    action = "reconcile"

    def __init__(self, pair: "FilePair", path: Optional[Path] = None, reason: str = ""):
        self.pair = pair
        self.path = path
        self.reason = reason
        super().__init__(self._message())

    def _message(self) -> str:
        target = self.path if self.path is not None else self.pair
        if self.reason:
            return f"Failed to {self.action} {target}: {self.reason}"
        return f"Failed to {self.action} {target}"


class MetadataUnavailable(ReconcileError):
    """stat() failed on one side of the pair."""

    action = "stat"


class DigestUnavailable(ReconcileError):
    """Reading one side failed while computing its digest."""

    action = "digest"


class CopyFailed(ReconcileError):
    """Overwriting the older side with the newer side's content failed."""

    action = "copy onto"


class TimestampUpdateFailed(ReconcileError):
    """The older side could not be retimed.

    Content is already correct; the next pass re-hashes the pair and
    retries the timestamp update.

    Attributes:
        decision: The SyncDecision the reconcile would otherwise have returned
    """

    action = "update timestamps of"

    def __init__(
        self,
        pair: "FilePair",
        path: Optional[Path] = None,
        reason: str = "",
        decision: Optional["SyncDecision"] = None
    ):
        self.decision = decision
        super().__init__(pair, path, reason)
