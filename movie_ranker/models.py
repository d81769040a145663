"""
Core dataclasses for the movie ranker.

Defines items, scores, snapshots and the result types produced by sessions,
trend aggregation and the leaderboard.
"""

import time
from dataclasses import dataclass, field
from enum import Enum

from .exceptions import ValidationError

DEFAULT_DISPLAY = 50
MIN_DISPLAY = 0
MAX_DISPLAY = 100


class ItemKind(str, Enum):
    """Kind of a catalog item."""

    MOVIE = "movie"
    SHOW = "show"


@dataclass(frozen=True)
class Item:
    """A watched movie or show. Identity is the item_id; title is display-only."""

    item_id: str
    kind: ItemKind = ItemKind.MOVIE
    title: str | None = None

    def __post_init__(self) -> None:
        """Validate item data."""
        if not self.item_id:
            raise ValidationError("item_id cannot be empty")
        if not isinstance(self.kind, ItemKind):
            try:
                object.__setattr__(self, "kind", ItemKind(self.kind))
            except ValueError:
                raise ValidationError(f"Unknown item kind: {self.kind!r}") from None

    @property
    def label(self) -> str:
        """Title if known, otherwise the id."""
        return self.title or self.item_id


@dataclass
class Score:
    """Per-owner display score for an item."""

    owner_id: str
    item_id: str
    display: int = DEFAULT_DISPLAY

    def __post_init__(self) -> None:
        """Validate score data."""
        if not self.owner_id:
            raise ValidationError("owner_id cannot be empty")
        if not self.item_id:
            raise ValidationError("item_id cannot be empty")
        if not (MIN_DISPLAY <= self.display <= MAX_DISPLAY):
            raise ValidationError(f"display must be between {MIN_DISPLAY} and {MAX_DISPLAY}, got {self.display}")

    @property
    def internal(self) -> float:
        """Internal (Elo) rating derived from the display score."""
        from .rankers.rating_transform import to_internal
        return to_internal(self.display)


@dataclass(frozen=True)
class ComparisonOutcome:
    """Result of one round: which of the two shown items the user preferred."""

    winner: Item
    loser: Item

    def __post_init__(self) -> None:
        if self.winner.item_id == self.loser.item_id:
            raise ValidationError("winner and loser must be different items")


@dataclass(frozen=True)
class Snapshot:
    """Immutable record of an item's score at a point in time."""

    owner_id: str
    item_id: str
    kind: ItemKind
    score: float
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        """Validate snapshot data."""
        if not self.owner_id:
            raise ValidationError("owner_id cannot be empty")
        if not self.item_id:
            raise ValidationError("item_id cannot be empty")


@dataclass(frozen=True)
class ScoreDelta:
    """Signed display change of one participant in one round."""

    item: Item
    delta: int


@dataclass(frozen=True)
class SummaryEntry:
    """An item's summed change across a session."""

    item: Item
    delta: int


@dataclass
class SessionSummary:
    """Biggest risers and droppers of a session."""

    risers: list[SummaryEntry] = field(default_factory=list)
    droppers: list[SummaryEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.risers and not self.droppers


@dataclass(frozen=True)
class Mover:
    """Score change of an item over a trailing time window."""

    item_id: str
    kind: ItemKind
    delta: float
    early: float
    late: float


@dataclass(frozen=True)
class LeaderboardRow:
    """One ranked row of an owner's leaderboard."""

    rank: int
    item_id: str
    kind: ItemKind
    title: str | None
    display: int
