"""
Movie Ranker - Pairwise Preference Ranking Engine

Ranks watched movies and shows from pairwise choices using an Elo update on
0-100 display scores, with close-score pair selection, bounded comparison
sessions and time-windowed top movers.
"""

from .models import Item, ItemKind, Score, Snapshot, SessionSummary, Mover, LeaderboardRow
from .interfaces import Catalog, ScoreStore, SnapshotStore, Selector, Chooser
from .session import ComparisonSession, SessionConfig, SessionState
from .trends import TrendAggregator, TrendConfig
from .engine import RankingEngine

__version__ = "0.1.0"
__all__ = [
    "Item",
    "ItemKind",
    "Score",
    "Snapshot",
    "SessionSummary",
    "Mover",
    "LeaderboardRow",
    "Catalog",
    "ScoreStore",
    "SnapshotStore",
    "Selector",
    "Chooser",
    "ComparisonSession",
    "SessionConfig",
    "SessionState",
    "TrendAggregator",
    "TrendConfig",
    "RankingEngine",
]
