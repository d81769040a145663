"""
Snapshot recorder.

Write-only sink that appends one immutable snapshot per score change.
"""

import time
from collections.abc import Callable

from .interfaces import SnapshotStore
from .logging_config import get_logger
from .models import Item, Snapshot

logger = get_logger("snapshot_recorder")


class SnapshotRecorder:
    """Appends timestamped score snapshots to a snapshot store."""

    def __init__(self, store: SnapshotStore, clock: Callable[[], float] = time.time):
        """
        Initialize snapshot recorder.

        Args:
            store: Append-only snapshot store
            clock: Returns the current POSIX timestamp
        """
        self.store: SnapshotStore = store
        self.clock: Callable[[], float] = clock

    def record(self, owner_id: str, item: Item, score: float) -> Snapshot:
        """
        Append a snapshot of `item`'s current score.

        Store errors propagate; the caller decides whether to swallow them.
        """
        snapshot = Snapshot(
            owner_id=owner_id,
            item_id=item.item_id,
            kind=item.kind,
            score=float(score),
            timestamp=self.clock(),
        )
        self.store.append(snapshot)
        logger.debug(f"Recorded snapshot {owner_id}/{item.item_id}={score} at {snapshot.timestamp}")
        return snapshot
