"""
JSON/JSONL storage implementation.

Persists the latest score per (owner, item) to a JSON file and snapshots to an
append-only JSONL file. Neither store is transactional: a score write and a
snapshot write succeed or fail independently.
"""

import json
from collections.abc import Iterable
from pathlib import Path
from pydantic import Field, TypeAdapter, ValidationError as PydanticValidationError
from typing_extensions import Annotated, TypedDict, override

from ..exceptions import PersistenceError, ValidationError
from ..interfaces import ScoreStore, SnapshotStore
from ..logging_config import get_logger
from ..models import MAX_DISPLAY, MIN_DISPLAY, ItemKind, Score, Snapshot

# Module-level logger
logger = get_logger("jsonl_storage")


class SnapshotRecord(TypedDict):
    """On-disk shape of one snapshot line."""

    owner_id: str
    item_id: str
    kind: ItemKind
    score: float
    timestamp: float


DisplayScore = Annotated[int, Field(ge=MIN_DISPLAY, le=MAX_DISPLAY)]
ScoresFile = dict[str, dict[str, DisplayScore]]  # owner_id -> item_id -> display

_snapshot_adapter = TypeAdapter(SnapshotRecord)
_scores_adapter = TypeAdapter(ScoresFile)


class JSONLScoreStore(ScoreStore):
    """
    JSON-file score store.

    Keeps all scores in memory and rewrites the file on every write.
    """

    scores_path: Path

    def __init__(self, scores_path: Path):
        """
        Initialize JSON score store.

        Args:
            scores_path: Path to JSON file holding the latest scores
        """
        self.scores_path = Path(scores_path)
        self.scores_path.parent.mkdir(parents=True, exist_ok=True)

        self._cache: ScoresFile = {}
        self._cache_loaded: bool = False

        logger.info(f"JSON score store initialized: scores={self.scores_path}")

    def _load(self) -> None:
        """Load scores file into cache."""
        if self._cache_loaded:
            return

        if self.scores_path.exists():
            try:
                with open(self.scores_path, "r", encoding="utf-8") as f:
                    self._cache = _scores_adapter.validate_python(json.load(f))
            except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
                logger.error(f"Failed to load scores from {self.scores_path}: {e}")
                raise PersistenceError(f"Cannot read scores from {self.scores_path}: {e}") from e
            logger.debug(f"Loaded scores for {len(self._cache)} owners from {self.scores_path}")

        self._cache_loaded = True

    def _flush(self) -> None:
        """Rewrite the scores file from cache."""
        try:
            with open(self.scores_path, "w", encoding="utf-8") as f:
                json.dump(self._cache, f, indent=2, ensure_ascii=False, sort_keys=True)
        except OSError as e:
            logger.error(f"Failed to write scores to {self.scores_path}: {e}")
            raise PersistenceError(f"Cannot write scores to {self.scores_path}: {e}") from e

    @override
    def get_or_create(self, owner_id: str, item_id: str) -> Score:
        """Read a score, creating and persisting the default if missing."""
        self._load()
        owner_scores = self._cache.get(owner_id, {})
        if item_id in owner_scores:
            return Score(owner_id=owner_id, item_id=item_id, display=owner_scores[item_id])

        score = Score(owner_id=owner_id, item_id=item_id)
        logger.debug(f"Creating default score {score.display} for {owner_id}/{item_id}")
        self.write(score)
        return score

    @override
    def write(self, score: Score) -> None:
        """Persist a score (last write wins)."""
        self._load()
        self._cache.setdefault(score.owner_id, {})[score.item_id] = score.display
        self._flush()

    @override
    def list_scores(self, owner_id: str) -> Iterable[Score]:
        self._load()
        return [
            Score(owner_id=owner_id, item_id=item_id, display=display)
            for item_id, display in self._cache.get(owner_id, {}).items()
        ]


class JSONLSnapshotStore(SnapshotStore):
    """
    Append-only JSONL snapshot store.

    Every append adds one line; queries scan the whole file.
    """

    snapshots_path: Path

    def __init__(self, snapshots_path: Path):
        """
        Initialize JSONL snapshot store.

        Args:
            snapshots_path: Path to JSONL file for snapshots
        """
        self.snapshots_path = Path(snapshots_path)
        self.snapshots_path.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"JSONL snapshot store initialized: snapshots={self.snapshots_path}")

    @override
    def append(self, snapshot: Snapshot) -> None:
        """Append a snapshot to the JSONL file."""
        data = {
            "owner_id": snapshot.owner_id,
            "item_id": snapshot.item_id,
            "kind": snapshot.kind.value,
            "score": snapshot.score,
            "timestamp": snapshot.timestamp,
        }

        try:
            with open(self.snapshots_path, "a", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
                f.write("\n")
        except OSError as e:
            logger.error(f"Failed to append snapshot to {self.snapshots_path}: {e}")
            raise PersistenceError(f"Cannot append snapshot to {self.snapshots_path}: {e}") from e

        logger.debug(f"Appended snapshot {snapshot.owner_id}/{snapshot.item_id}={snapshot.score}")

    def load_snapshots(self) -> Iterable[Snapshot]:
        """Load every valid snapshot from the JSONL file, skipping corrupt lines."""
        if not self.snapshots_path.exists():
            return

        try:
            f = open(self.snapshots_path, "r", encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Cannot read snapshots from {self.snapshots_path}: {e}") from e

        with f:
            for line in f:
                line = line.strip()
                if not line:
                    continue

                try:
                    record = _snapshot_adapter.validate_python(json.loads(line))
                    yield Snapshot(
                        owner_id=record["owner_id"],
                        item_id=record["item_id"],
                        kind=record["kind"],
                        score=record["score"],
                        timestamp=record["timestamp"],
                    )
                except (json.JSONDecodeError, PydanticValidationError, ValidationError) as e:
                    # Skip corrupted or invalid lines
                    logger.warning(f"Skipping invalid JSON line in {self.snapshots_path}: {e}")
                    continue

    @override
    def query(
        self,
        owner_id: str,
        since: float | None = None,
        kind: ItemKind | None = None,
    ) -> Iterable[Snapshot]:
        return [
            snap
            for snap in self.load_snapshots()
            if snap.owner_id == owner_id
            and (since is None or snap.timestamp >= since)
            and (kind is None or snap.kind == kind)
        ]

    def get_snapshot_count(self) -> int:
        """Get number of stored snapshot lines."""
        if not self.snapshots_path.exists():
            return 0

        count = 0
        with open(self.snapshots_path, "r", encoding="utf-8") as f:
            for line in f:
                if line.strip():
                    count += 1
        return count
