"""staticsync - Keep pairs of files in sync by modification time.

Each configured pair is checked on a fixed interval. When the two files
have different modification times and different content, the newer file is
copied over the older one and the older one takes over the newer mtime.
Files that were only touched get their mtimes equalized so later checks
stay cheap.

Quick Start:
    from staticsync import FilePair, Reconciler, Scheduler

    pair = FilePair.validated("/home/me/.vimrc", "/mnt/backup/.vimrc")
    decision = Reconciler().reconcile(pair)
    print(decision.action)

    # Or keep checking every 10 seconds:
    Scheduler([pair], Reconciler(), interval=10).run()

Classes:
    FilePair: Two distinct existing files to keep in sync
    SyncConfig: Settings loaded from ~/.staticsync.json and the CLI
    Reconciler: Decide and apply the sync action for one pair
    Scheduler: Run passes over all pairs
    ContentDigester: Streaming content digests
"""

__version__ = "0.2.0"
__license__ = "MIT"

from .config import (
    FilePair,
    SyncConfig,
    load_config,
    default_config_path,
)

from .exceptions import (
    StaticSyncError,
    ConfigError,
    ReconcileError,
    MetadataUnavailable,
    DigestUnavailable,
    CopyFailed,
    TimestampUpdateFailed,
)

from .sync.reconciler import Reconciler, SyncAction, SyncDecision
from .sync.scheduler import Scheduler, PassStats
from .utils.hashing import ContentDigester, digest_file

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "FilePair",
    "SyncConfig",
    "load_config",
    "default_config_path",
    # Errors
    "StaticSyncError",
    "ConfigError",
    "ReconcileError",
    "MetadataUnavailable",
    "DigestUnavailable",
    "CopyFailed",
    "TimestampUpdateFailed",
    # Sync components
    "Reconciler",
    "SyncAction",
    "SyncDecision",
    "Scheduler",
    "PassStats",
    # Hashing
    "ContentDigester",
    "digest_file",
]
