"""
Trend aggregation over score snapshots.

Computes "top movers": items whose score changed the most within a trailing
time window, measured as the last in-window snapshot minus the first.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass

from .interfaces import SnapshotStore
from .logging_config import get_logger
from .models import ItemKind, Mover

SECONDS_PER_DAY = 86400.0

logger = get_logger("trend_aggregator")


@dataclass
class TrendConfig:
    """Default window and result size for movers."""

    window_days: float = 7
    top_n: int = 6

    def __post_init__(self):
        """Validate configuration."""
        if self.window_days <= 0:
            raise ValueError(f"window_days must be positive, got {self.window_days}")
        if self.top_n < 0:
            raise ValueError(f"top_n must be non-negative, got {self.top_n}")


class TrendAggregator:
    """Top movers over a snapshot store."""

    def __init__(
        self,
        store: SnapshotStore,
        config: TrendConfig | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize trend aggregator.

        Args:
            store: Snapshot store to query
            config: Default window and result size
            clock: Returns the current POSIX timestamp
        """
        self.store: SnapshotStore = store
        self.config: TrendConfig = config or TrendConfig()
        self.clock: Callable[[], float] = clock

    def movers(
        self,
        owner_id: str,
        kind: ItemKind | None = None,
        window_days: float | None = None,
        top_n: int | None = None,
    ) -> list[Mover]:
        """
        Items with the largest absolute score change in the window.

        For each item the first snapshot in ascending time order sets `early`
        and every later one overwrites `late`, so `late` is the chronologically
        last value, not the most extreme one. An item with a single in-window
        snapshot is reported with delta 0; items without one are absent.

        Args:
            owner_id: Owner whose snapshots to aggregate
            kind: Optional item kind filter
            window_days: Trailing window length (defaults to config)
            top_n: Maximum number of movers (defaults to config)

        Returns:
            Movers sorted by descending absolute delta
        """
        # Validates overrides the same way as the defaults
        config = TrendConfig(
            window_days=self.config.window_days if window_days is None else window_days,
            top_n=self.config.top_n if top_n is None else top_n,
        )

        since = self.clock() - config.window_days * SECONDS_PER_DAY
        window = sorted(self.store.query(owner_id, since=since, kind=kind), key=lambda s: s.timestamp)

        by_item = dict[str, tuple[ItemKind, float, float]]()  # item_id -> (kind, early, late)
        for snap in window:
            if snap.item_id not in by_item:
                by_item[snap.item_id] = (snap.kind, snap.score, snap.score)
            else:
                item_kind, early, _ = by_item[snap.item_id]
                by_item[snap.item_id] = (item_kind, early, snap.score)

        movers = [
            Mover(item_id=item_id, kind=item_kind, delta=late - early, early=early, late=late)
            for item_id, (item_kind, early, late) in by_item.items()
        ]
        movers.sort(key=lambda m: abs(m.delta), reverse=True)

        logger.debug(
            f"Movers for {owner_id}: {len(window)} snapshots, {len(movers)} items in {config.window_days}-day window"
        )
        return movers[:config.top_n]
