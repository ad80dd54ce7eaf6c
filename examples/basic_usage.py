#!/usr/bin/env python3
"""Basic usage example for staticsync.

This example demonstrates:
1. Declaring a file pair
2. Propagating the newer file over the older one
3. Equalizing timestamps of files that were only touched
4. Running the scheduler for a single pass

Run this example:
    python basic_usage.py
"""

import os
import tempfile
import time
from pathlib import Path

from staticsync import FilePair, Reconciler, Scheduler, SyncAction


def main():
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)

        # Two locations holding "the same" file
        home_copy = temp_path / "home" / "settings.json"
        backup_copy = temp_path / "backup" / "settings.json"
        home_copy.parent.mkdir()
        backup_copy.parent.mkdir()

        backup_copy.write_text('{"theme": "light"}')
        home_copy.write_text('{"theme": "dark"}')

        # Make the home copy clearly newer
        now = time.time_ns()
        os.utime(backup_copy, ns=(now - 60 * 10**9, now - 60 * 10**9))
        os.utime(home_copy, ns=(now, now))

        print("=" * 60)
        print("staticsync - Basic Usage Example")
        print("=" * 60)

        # ---------------------------------------------------------------------
        # Step 1: Declare the pair
        # ---------------------------------------------------------------------
        print("\n[1] Declaring pair...")
        pair = FilePair.validated(home_copy, backup_copy)
        print(f"    {pair}")

        # ---------------------------------------------------------------------
        # Step 2: Reconcile - newer content wins
        # ---------------------------------------------------------------------
        print("\n[2] Reconciling...")
        reconciler = Reconciler(buffer_size=64 * 1024)
        decision = reconciler.reconcile(pair)
        print(f"    Action: {decision.action.value}")
        print(f"    Backup now contains: {backup_copy.read_text()}")

        # ---------------------------------------------------------------------
        # Step 3: Reconcile again - nothing left to do
        # ---------------------------------------------------------------------
        print("\n[3] Reconciling again...")
        decision = reconciler.reconcile(pair)
        assert decision.action is SyncAction.UNCHANGED
        print(f"    Action: {decision.action.value}")

        # ---------------------------------------------------------------------
        # Step 4: Touch without editing - only timestamps are equalized
        # ---------------------------------------------------------------------
        print("\n[4] Touching the backup copy...")
        os.utime(backup_copy, ns=(now + 10**9, now + 10**9))
        decision = reconciler.reconcile(pair)
        print(f"    Action: {decision.action.value}")

        # ---------------------------------------------------------------------
        # Step 5: One scheduler pass over all pairs
        # ---------------------------------------------------------------------
        print("\n[5] Running one scheduler pass...")
        stats = Scheduler([pair], reconciler).run(run_once=True)
        print(f"    {stats.to_dict()}")

        print("\n" + "=" * 60)
        print("Example complete!")
        print("=" * 60)


if __name__ == "__main__":
    main()
