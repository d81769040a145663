"""
In-memory store implementations.

Volatile score and snapshot stores for tests and throwaway sessions.
"""

from collections.abc import Iterable

from typing_extensions import override

from ..interfaces import ScoreStore, SnapshotStore
from ..models import ItemKind, Score, Snapshot


class InMemoryScoreStore(ScoreStore):
    """Dict-backed score store."""

    def __init__(self) -> None:
        self._scores = dict[tuple[str, str], int]()

    @override
    def get_or_create(self, owner_id: str, item_id: str) -> Score:
        key = (owner_id, item_id)
        if key not in self._scores:
            self._scores[key] = Score(owner_id=owner_id, item_id=item_id).display
        return Score(owner_id=owner_id, item_id=item_id, display=self._scores[key])

    @override
    def write(self, score: Score) -> None:
        self._scores[(score.owner_id, score.item_id)] = score.display

    @override
    def list_scores(self, owner_id: str) -> Iterable[Score]:
        return [
            Score(owner_id=owner, item_id=item_id, display=display)
            for (owner, item_id), display in self._scores.items()
            if owner == owner_id
        ]


class InMemorySnapshotStore(SnapshotStore):
    """List-backed append-only snapshot store."""

    def __init__(self) -> None:
        self.snapshots = list[Snapshot]()

    @override
    def append(self, snapshot: Snapshot) -> None:
        self.snapshots.append(snapshot)

    @override
    def query(
        self,
        owner_id: str,
        since: float | None = None,
        kind: ItemKind | None = None,
    ) -> Iterable[Snapshot]:
        return [
            snap
            for snap in self.snapshots
            if snap.owner_id == owner_id
            and (since is None or snap.timestamp >= since)
            and (kind is None or snap.kind == kind)
        ]
