"""
Abstract base classes defining the interfaces for the movie ranker.

All interfaces are synchronous; the only suspension point of the engine is the
caller deciding which of two items it prefers.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence, Set

from .models import Item, ItemKind, Score, Snapshot

PairKey = tuple[str, str]


def canonical_pair_key(a: Item, b: Item) -> PairKey:
    """Unordered pair key: both item ids in ascending string order."""
    if a.item_id <= b.item_id:
        return (a.item_id, b.item_id)
    return (b.item_id, a.item_id)


class Catalog(ABC):
    """Interface for the external item catalog."""

    @abstractmethod
    def list_watched(self, owner_id: str) -> Iterable[Item]:
        """Return all items the owner has marked as watched."""
        pass

    @abstractmethod
    def get_item(self, item_id: str) -> Item:
        """Get a specific item by ID. Raises KeyError if unknown."""
        pass

    def resolve_kind(self, item_id: str) -> ItemKind:
        """Resolve the kind of an item."""
        return self.get_item(item_id).kind


class ScoreStore(ABC):
    """Interface for reading and writing per-owner scores."""

    @abstractmethod
    def get_or_create(self, owner_id: str, item_id: str) -> Score:
        """
        Read the score for (owner, item).

        A missing score is created with the default display of 50.
        """
        pass

    @abstractmethod
    def write(self, score: Score) -> None:
        """Persist a score. Last write wins."""
        pass

    @abstractmethod
    def list_scores(self, owner_id: str) -> Iterable[Score]:
        """Return every score stored for the owner."""
        pass


class SnapshotStore(ABC):
    """Interface for the append-only snapshot log."""

    @abstractmethod
    def append(self, snapshot: Snapshot) -> None:
        """Append one snapshot. Snapshots are never updated or deleted."""
        pass

    @abstractmethod
    def query(
        self,
        owner_id: str,
        since: float | None = None,
        kind: ItemKind | None = None,
    ) -> Iterable[Snapshot]:
        """
        Return snapshots of an owner, optionally restricted.

        Args:
            owner_id: Owner whose snapshots to return
            since: Only snapshots with timestamp >= since
            kind: Only snapshots of this item kind

        Returns:
            Matching snapshots, in no guaranteed order
        """
        pass


class Selector(ABC):
    """Interface for choosing the next comparison pair."""

    @abstractmethod
    def select_pair(
        self,
        pool: Sequence[Item],
        scores: Mapping[str, int],
        excluded: Set[PairKey],
    ) -> tuple[Item, Item] | None:
        """
        Select the next pair to compare.

        Args:
            pool: Items eligible for comparison
            scores: Current display score per item id (missing ids count as 50)
            excluded: Canonical pair keys already shown this session
                (the caller marks the returned pair as shown; selectors never
                mutate it)

        Returns:
            Two distinct items, or None if the pool has fewer than 2 items
        """
        pass


class Chooser(ABC):
    """Interface for whoever decides which item of a pair is preferred."""

    @abstractmethod
    def choose(self, pair: tuple[Item, Item]) -> Item:
        """
        Pick the preferred item of a pair.

        May block waiting for a human.

        Returns:
            One of the two items in `pair`
        """
        pass
