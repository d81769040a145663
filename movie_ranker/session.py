"""
Comparison session for pairwise ranking.

A session runs a bounded number of rounds over a pool of watched items. Each
round exposes one pair, waits for the caller's choice, applies the Elo update,
persists both scores and records snapshots. Persistence is best effort: a
failed score or snapshot write is logged and the session still advances.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loguru import Logger

from .exceptions import ValidationError
from .interfaces import PairKey, ScoreStore, Selector, canonical_pair_key
from .logging_config import get_logger
from .models import (
    DEFAULT_DISPLAY,
    ComparisonOutcome,
    Item,
    Score,
    ScoreDelta,
    SessionSummary,
    SummaryEntry,
)
from .pair_selectors.nearest_score_selector import unique_items
from .rankers.rating_transform import DEFAULT_K_FACTOR, RatingTransform
from .snapshot_recorder import SnapshotRecorder


@dataclass
class SessionConfig:
    """Configuration for comparison sessions."""

    k_factor: float = DEFAULT_K_FACTOR  # Elo step size
    max_rounds: int = 7  # choices per session
    summary_size: int = 5  # risers/droppers shown in the summary

    def __post_init__(self):
        """Validate configuration."""
        if self.k_factor <= 0:
            raise ValueError(f"k_factor must be positive, got {self.k_factor}")
        if self.max_rounds <= 0:
            raise ValueError(f"max_rounds must be positive, got {self.max_rounds}")
        if self.summary_size < 0:
            raise ValueError(f"summary_size must be non-negative, got {self.summary_size}")


class SessionState(str, Enum):
    """Lifecycle states of a comparison session."""

    PREPARING = "preparing"
    AWAITING_CHOICE = "awaiting_choice"
    UPDATING = "updating"
    FINISHED = "finished"


class ComparisonSession:
    """Bounded sequence of pairwise comparisons for one owner."""

    def __init__(
        self,
        owner_id: str,
        pool: Iterable[Item],
        score_store: ScoreStore,
        recorder: SnapshotRecorder,
        selector: Selector,
        config: SessionConfig | None = None,
        seed_item: Item | None = None,
    ):
        """
        Prepare a session and select its first pair.

        Args:
            owner_id: Owner whose scores are ranked
            pool: Watched items eligible for comparison
            score_store: Store for reading and writing scores
            recorder: Snapshot recorder fed after every score change
            selector: Pair selection strategy
            config: Session configuration (defaults to SessionConfig())
            seed_item: Optional extra item added to the pool if absent
        """
        self.owner_id: str = owner_id
        self.score_store: ScoreStore = score_store
        self.recorder: SnapshotRecorder = recorder
        self.selector: Selector = selector
        self.config: SessionConfig = config or SessionConfig()
        self.transform: RatingTransform = RatingTransform(self.config.k_factor)

        # Runtime state
        self.state: SessionState = SessionState.PREPARING
        self.round_number: int = 1
        self.shown_pair_keys: set[PairKey] = set()
        self.deltas: list[ScoreDelta] = []
        self.failed_writes: int = 0
        self._unsaved: set[str] = set()  # item ids whose last score write failed
        self._scores: dict[str, int] = {}
        self._pool: list[Item] = []
        self._current_pair: tuple[Item, Item] | None = None

        self.logger: Logger = get_logger("comparison_session")

        self._prepare(pool, seed_item)

    @property
    def max_rounds(self) -> int:
        return self.config.max_rounds

    @property
    def pool(self) -> list[Item]:
        return list(self._pool)

    @property
    def current_pair(self) -> tuple[Item, Item] | None:
        """The pair awaiting a choice, or None when finished or the pool is too small."""
        if self.state is not SessionState.AWAITING_CHOICE:
            return None
        return self._current_pair

    @property
    def is_finished(self) -> bool:
        return self.state is SessionState.FINISHED

    def score_of(self, item: Item | str) -> int:
        """Session view of an item's display score."""
        item_id = item if isinstance(item, str) else item.item_id
        return self._scores.get(item_id, DEFAULT_DISPLAY)

    def _prepare(self, pool: Iterable[Item], seed_item: Item | None) -> None:
        """Assemble the pool, make sure every item has a score, pick the first pair."""
        items = unique_items(list(pool))
        if seed_item is not None and all(item.item_id != seed_item.item_id for item in items):
            items.append(seed_item)
        self._pool = items

        if len(items) < 2:
            self.logger.info(f"Not enough watched items for {self.owner_id} ({len(items)}), nothing to compare")
            self._finish()
            return

        for item in items:
            self._scores[item.item_id] = self._read_score(item).display

        self.logger.info(f"Starting session for {self.owner_id}: {len(items)} items, {self.max_rounds} rounds")
        self._select_next_pair()

    def _select_next_pair(self) -> None:
        pair = self.selector.select_pair(self._pool, self._scores, self.shown_pair_keys)
        if pair is None:
            self.logger.info("Selector returned no pair")
            self._finish()
            return

        self.shown_pair_keys.add(canonical_pair_key(*pair))
        self._current_pair = pair
        self.state = SessionState.AWAITING_CHOICE
        self.logger.debug(f"Round {self.round_number}/{self.max_rounds}: {pair[0].item_id} vs {pair[1].item_id}")

    def _finish(self) -> None:
        self._current_pair = None
        self.state = SessionState.FINISHED

    def choose(self, winner: Item | str) -> None:
        """
        Record the caller's preference for the current pair and advance one round.

        Args:
            winner: The preferred item, or its id; must be one of current_pair

        Raises:
            ValidationError: If no pair is awaiting a choice or winner is not in it
        """
        pair = self.current_pair
        if pair is None:
            raise ValidationError(f"No pair is awaiting a choice (state: {self.state.value})")

        winner_id = winner if isinstance(winner, str) else winner.item_id
        first, second = pair
        if winner_id == first.item_id:
            outcome = ComparisonOutcome(winner=first, loser=second)
        elif winner_id == second.item_id:
            outcome = ComparisonOutcome(winner=second, loser=first)
        else:
            raise ValidationError(f"{winner_id} is not part of the current pair ({first.item_id}, {second.item_id})")

        self.state = SessionState.UPDATING
        self._apply(outcome)

        self.round_number += 1
        if self.round_number <= self.max_rounds:
            self._select_next_pair()
        else:
            self.logger.info(f"Session for {self.owner_id} finished after {self.max_rounds} rounds")
            self._finish()

    def _apply(self, outcome: ComparisonOutcome) -> None:
        """Update both scores, persist them and record snapshots (main step of a round)."""
        winner, loser = outcome.winner, outcome.loser
        before_winner = self._current_display(winner)
        before_loser = self._current_display(loser)

        new_winner, new_loser = self.transform.update(before_winner, before_loser)
        self._scores[winner.item_id] = new_winner
        self._scores[loser.item_id] = new_loser

        self._write_score(Score(owner_id=self.owner_id, item_id=winner.item_id, display=new_winner))
        self._write_score(Score(owner_id=self.owner_id, item_id=loser.item_id, display=new_loser))

        self.deltas.append(ScoreDelta(item=winner, delta=new_winner - before_winner))
        self.deltas.append(ScoreDelta(item=loser, delta=new_loser - before_loser))

        self._record_snapshot(winner, new_winner)
        self._record_snapshot(loser, new_loser)

        self.logger.info(f"Score update: {winner.item_id} beat {loser.item_id}")
        self.logger.info(f"  {winner.item_id}: {before_winner}->{new_winner}")
        self.logger.info(f"  {loser.item_id}: {before_loser}->{new_loser}")

    def _current_display(self, item: Item) -> int:
        """Score before a round; the session view wins over a store that missed our last write."""
        if item.item_id in self._unsaved:
            return self.score_of(item)
        return self._read_score(item).display

    def _read_score(self, item: Item) -> Score:
        """Read (or create) a score; on failure fall back to the session's view."""
        try:
            return self.score_store.get_or_create(self.owner_id, item.item_id)
        except Exception as e:
            self.logger.error(f"Failed to read score for {self.owner_id}/{item.item_id}: {e}")
            return Score(owner_id=self.owner_id, item_id=item.item_id, display=self.score_of(item))

    def _write_score(self, score: Score) -> None:
        try:
            self.score_store.write(score)
            self._unsaved.discard(score.item_id)
        except Exception as e:
            self.failed_writes += 1
            self._unsaved.add(score.item_id)
            self.logger.error(f"Failed to persist score {score.owner_id}/{score.item_id}={score.display}: {e}")

    def _record_snapshot(self, item: Item, display: int) -> None:
        try:
            _ = self.recorder.record(self.owner_id, item, display)
        except Exception as e:
            self.failed_writes += 1
            self.logger.error(f"Failed to record snapshot for {self.owner_id}/{item.item_id}: {e}")

    def summary(self) -> SessionSummary:
        """
        Summed per-item changes split into biggest risers and droppers.

        Deltas of an item touched in several rounds are combined. Risers are
        sorted descending, droppers most negative first; ties go by item id.
        """
        totals = dict[str, tuple[Item, int]]()
        for entry in self.deltas:
            item, total = totals.get(entry.item.item_id, (entry.item, 0))
            totals[entry.item.item_id] = (item, total + entry.delta)

        rows = [SummaryEntry(item=item, delta=total) for item, total in totals.values()]
        size = self.config.summary_size

        risers = sorted((r for r in rows if r.delta > 0), key=lambda r: (-r.delta, r.item.item_id))
        droppers = sorted((r for r in rows if r.delta < 0), key=lambda r: (r.delta, r.item.item_id))
        return SessionSummary(risers=risers[:size], droppers=droppers[:size])
