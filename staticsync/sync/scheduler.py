"""Pass loop for staticsync.

Every pass reconciles each configured pair once, in order, on the calling
thread. Failures are recorded per pair and retried on the next pass; none
of them stop the loop.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from staticsync.config import DEFAULT_INTERVAL, FilePair
from staticsync.exceptions import ReconcileError, TimestampUpdateFailed
from staticsync.sync.reconciler import Reconciler, SyncAction, SyncDecision

logger = logging.getLogger(__name__)


@dataclass
class PassStats:
    """Statistics from one pass over all pairs."""

    # Pair counts
    unchanged: int = 0
    same_content: int = 0
    propagated: int = 0
    warnings: int = 0
    failed: int = 0

    # Timing
    started_at: float = 0.0
    completed_at: float = 0.0
    duration_ms: float = 0.0

    # Errors
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True when no pair failed outright (warnings are allowed)."""
        return self.failed == 0

    @property
    def total(self) -> int:
        return self.unchanged + self.same_content + self.propagated + self.failed

    def record(self, decision: SyncDecision) -> None:
        """Count a decision returned by the reconciler."""
        if decision.action is SyncAction.UNCHANGED:
            self.unchanged += 1
        elif decision.action is SyncAction.NOOP_SAME_CONTENT:
            self.same_content += 1
        else:
            self.propagated += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "success": self.success,
            "unchanged": self.unchanged,
            "same_content": self.same_content,
            "propagated": self.propagated,
            "warnings": self.warnings,
            "failed": self.failed,
            "duration_ms": self.duration_ms,
            "errors": self.errors,
        }


class Scheduler:
    """Runs reconcile passes over a fixed list of pairs.

    Usage:
        scheduler = Scheduler(config.pairs, Reconciler(), interval=10)
        scheduler.run()              # until stop() is called
        scheduler.run(run_once=True) # single pass
    """

    def __init__(
        self,
        pairs: Iterable[FilePair],
        reconciler: Optional[Reconciler] = None,
        interval: float = DEFAULT_INTERVAL
    ):
        """Initialize scheduler.

        Args:
            pairs: Pairs to reconcile on every pass
            reconciler: Reconciler to use (default settings if omitted)
            interval: Seconds to wait between passes
        """
        self.pairs = list(pairs)
        self.reconciler = reconciler or Reconciler()
        self.interval = interval
        self.passes = 0
        self._stop_event = threading.Event()

    def run_pass(self) -> PassStats:
        """Reconcile every pair once.

        Returns:
            PassStats for this pass
        """
        stats = PassStats(started_at=time.time())
        logger.debug(f"Checking {len(self.pairs)} pair(s)...")

        for pair in self.pairs:
            try:
                decision = self.reconciler.reconcile(pair)
            except TimestampUpdateFailed as e:
                # Content is in place; the next pass re-hashes and retries the retime
                stats.warnings += 1
                stats.errors.append(str(e))
                if e.decision is not None:
                    stats.record(e.decision)
                logger.warning(f"{e} (will retry next pass)")
            except ReconcileError as e:
                stats.failed += 1
                stats.errors.append(str(e))
                logger.error(f"Skipping {pair} this pass: {e}")
            else:
                stats.record(decision)

        self.passes += 1
        return self._finalize_stats(stats)

    def run(self, run_once: bool = False, max_passes: Optional[int] = None) -> PassStats:
        """Run passes until stopped.

        A stop request is honoured between passes, never in the middle of one.
        A stop requested before run() is called is kept: the loop returns
        right after its first pass. At least one pass always runs.

        Args:
            run_once: Run exactly one pass and return
            max_passes: Stop after this many passes (None for no limit)

        Returns:
            PassStats of the last completed pass

        Raises:
            ValueError: If max_passes is less than 1
        """
        if max_passes is not None and max_passes < 1:
            raise ValueError(f"max_passes must be at least 1: {max_passes!r}")
        if run_once:
            max_passes = 1

        completed = 0

        while True:
            stats = self.run_pass()
            completed += 1

            if max_passes is not None and completed >= max_passes:
                break
            if self._stop_event.wait(self.interval):
                logger.info("Stop requested, exiting after pass")
                break

        return stats

    def stop(self) -> None:
        """Ask a running loop to return once the current pass is done."""
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def _finalize_stats(self, stats: PassStats) -> PassStats:
        stats.completed_at = time.time()
        stats.duration_ms = (stats.completed_at - stats.started_at) * 1000

        logger.info(
            f"Pass {self.passes}: "
            f"{stats.propagated} propagated, "
            f"{stats.same_content} retimed, "
            f"{stats.unchanged} unchanged, "
            f"{stats.failed} failed, "
            f"{stats.warnings} warning(s) "
            f"in {stats.duration_ms:.1f}ms"
        )

        return stats
