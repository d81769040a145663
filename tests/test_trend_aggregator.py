"""
Tests for TrendAggregator.

Focus on window semantics and early/late selection.
"""

import pytest

from movie_ranker.models import ItemKind, Snapshot
from movie_ranker.storage.memory_storage import InMemorySnapshotStore
from movie_ranker.trends import SECONDS_PER_DAY, TrendAggregator, TrendConfig

NOW = 1_700_000_000.0
OWNER = "alice"


def days_ago(days: float) -> float:
    return NOW - days * SECONDS_PER_DAY


def snap(item_id: str, score: float, timestamp: float, kind: ItemKind = ItemKind.MOVIE, owner_id: str = OWNER) -> Snapshot:
    return Snapshot(owner_id=owner_id, item_id=item_id, kind=kind, score=score, timestamp=timestamp)


def make_aggregator(*snapshots: Snapshot) -> TrendAggregator:
    store = InMemorySnapshotStore()
    for snapshot in snapshots:
        store.append(snapshot)
    return TrendAggregator(store, clock=lambda: NOW)


class TestTrendAggregator:
    """Test TrendAggregator behavior through public interface."""

    def test_late_is_last_snapshot_not_most_extreme(self) -> None:
        """40 -> 60 -> 55 within the window gives +15."""
        # Arrange
        aggregator = make_aggregator(
            snap("x", 40, days_ago(3)),
            snap("x", 60, days_ago(2)),
            snap("x", 55, days_ago(1)),
        )

        # Act
        movers = aggregator.movers(OWNER)

        # Assert
        assert len(movers) == 1
        assert movers[0].item_id == "x"
        assert (movers[0].early, movers[0].late, movers[0].delta) == (40, 55, 15)

    def test_order_is_by_timestamp_not_insertion(self) -> None:
        """Snapshots appended out of order are sorted by time first."""
        aggregator = make_aggregator(
            snap("x", 55, days_ago(1)),
            snap("x", 40, days_ago(3)),
            snap("x", 60, days_ago(2)),
        )

        movers = aggregator.movers(OWNER)

        assert movers[0].delta == 15

    def test_snapshots_before_window_are_ignored(self) -> None:
        aggregator = make_aggregator(
            snap("x", 10, days_ago(10)),
            snap("x", 40, days_ago(3)),
            snap("x", 55, days_ago(1)),
        )

        movers = aggregator.movers(OWNER)

        assert movers[0].early == 40
        assert movers[0].delta == 15

    def test_single_snapshot_is_included_with_zero_delta(self) -> None:
        """One in-window snapshot means delta 0, ranked last but present."""
        # Arrange
        aggregator = make_aggregator(
            snap("once", 70, days_ago(1)),
            snap("moved", 50, days_ago(2)),
            snap("moved", 44, days_ago(1)),
            snap("stale", 30, days_ago(9)),
            snap("stale", 90, days_ago(8)),
        )

        # Act
        movers = aggregator.movers(OWNER)

        # Assert
        assert [(m.item_id, m.delta) for m in movers] == [("moved", -6), ("once", 0)]
        assert "stale" not in {m.item_id for m in movers}, "No in-window snapshots means absent"

    def test_sorted_by_absolute_delta_and_truncated(self) -> None:
        """Default top 6 by descending |delta|."""
        # Arrange
        changes = {"a": 3, "b": -12, "c": 7, "d": -1, "e": 20, "f": 5, "g": -9, "h": 2}
        snapshots = []
        for item_id, change in changes.items():
            snapshots.append(snap(item_id, 50, days_ago(2)))
            snapshots.append(snap(item_id, 50 + change, days_ago(1)))
        aggregator = make_aggregator(*snapshots)

        # Act
        movers = aggregator.movers(OWNER)

        # Assert
        assert [m.item_id for m in movers] == ["e", "b", "g", "c", "f", "a"]
        assert [m.delta for m in movers] == [20, -12, -9, 7, 5, 3]

    def test_top_n_override(self) -> None:
        aggregator = make_aggregator(
            snap("a", 50, days_ago(2)), snap("a", 60, days_ago(1)),
            snap("b", 50, days_ago(2)), snap("b", 52, days_ago(1)),
        )

        assert [m.item_id for m in aggregator.movers(OWNER, top_n=1)] == ["a"]
        assert aggregator.movers(OWNER, top_n=0) == []

    def test_window_override(self) -> None:
        aggregator = make_aggregator(
            snap("a", 50, days_ago(20)),
            snap("a", 70, days_ago(1)),
        )

        assert aggregator.movers(OWNER)[0].delta == 0
        assert aggregator.movers(OWNER, window_days=30)[0].delta == 20

    def test_kind_filter(self) -> None:
        """Only snapshots of the requested kind are considered."""
        aggregator = make_aggregator(
            snap("movie", 50, days_ago(2)),
            snap("movie", 60, days_ago(1)),
            snap("show", 50, days_ago(2), kind=ItemKind.SHOW),
            snap("show", 40, days_ago(1), kind=ItemKind.SHOW),
        )

        shows = aggregator.movers(OWNER, kind=ItemKind.SHOW)

        assert [(m.item_id, m.kind, m.delta) for m in shows] == [("show", ItemKind.SHOW, -10)]
        assert len(aggregator.movers(OWNER)) == 2

    def test_other_owners_are_ignored(self) -> None:
        aggregator = make_aggregator(
            snap("x", 50, days_ago(2), owner_id="bob"),
            snap("x", 90, days_ago(1), owner_id="bob"),
        )

        assert aggregator.movers(OWNER) == []

    def test_invalid_parameters_are_rejected(self) -> None:
        aggregator = make_aggregator()

        with pytest.raises(ValueError):
            aggregator.movers(OWNER, window_days=0)
        with pytest.raises(ValueError):
            aggregator.movers(OWNER, top_n=-1)
        with pytest.raises(ValueError):
            TrendConfig(window_days=-1)
