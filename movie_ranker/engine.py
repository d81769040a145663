"""
Ranking engine facade.

Wires catalog, stores, selector and configuration into the operations exposed
to the presentation layer: starting and driving comparison sessions,
summaries, top movers and the leaderboard.
"""

import time
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loguru import Logger

from .interfaces import Catalog, Chooser, ScoreStore, Selector, SnapshotStore
from .leaderboard import DEFAULT_LIMIT, Leaderboard
from .logging_config import get_logger
from .models import Item, ItemKind, LeaderboardRow, Mover, SessionSummary
from .pair_selectors.closest_score_selector import ClosestScoreSelector
from .session import ComparisonSession, SessionConfig
from .snapshot_recorder import SnapshotRecorder
from .trends import TrendAggregator, TrendConfig


class RankingEngine:
    """Entry point for callers of the preference ranking engine."""

    def __init__(
        self,
        catalog: Catalog,
        score_store: ScoreStore,
        snapshot_store: SnapshotStore,
        selector: Selector | None = None,
        config: SessionConfig | None = None,
        trend_config: TrendConfig | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize ranking engine with all components.

        Args:
            catalog: Source of watched items
            score_store: Score persistence
            snapshot_store: Append-only snapshot log
            selector: Pair selection strategy (defaults to ClosestScoreSelector)
            config: Session configuration
            trend_config: Default movers window and size
            clock: Returns the current POSIX timestamp
        """
        self.catalog: Catalog = catalog
        self.score_store: ScoreStore = score_store
        self.snapshot_store: SnapshotStore = snapshot_store
        self.selector: Selector = selector or ClosestScoreSelector()
        self.config: SessionConfig = config or SessionConfig()

        self.recorder: SnapshotRecorder = SnapshotRecorder(snapshot_store, clock=clock)
        self.trends: TrendAggregator = TrendAggregator(snapshot_store, config=trend_config, clock=clock)
        self._leaderboard: Leaderboard = Leaderboard(score_store, catalog)

        self.logger: Logger = get_logger("ranking_engine")

    def start_session(
        self,
        owner_id: str,
        pool: Iterable[Item] | None = None,
        seed_item: Item | None = None,
    ) -> ComparisonSession:
        """
        Start a comparison session.

        Args:
            owner_id: Owner whose scores are ranked
            pool: Items to compare (defaults to the owner's watched items)
            seed_item: Extra item to include, e.g. one just marked watched

        Returns:
            A session whose current_pair is None if fewer than 2 items are eligible
        """
        if pool is None:
            pool = self.catalog.list_watched(owner_id)
        return ComparisonSession(
            owner_id=owner_id,
            pool=pool,
            score_store=self.score_store,
            recorder=self.recorder,
            selector=self.selector,
            config=self.config,
            seed_item=seed_item,
        )

    def current_pair(self, session: ComparisonSession) -> tuple[Item, Item] | None:
        return session.current_pair

    def choose(self, session: ComparisonSession, winner: Item | str) -> None:
        session.choose(winner)

    def summary(self, session: ComparisonSession) -> SessionSummary:
        return session.summary()

    def run_session(self, session: ComparisonSession, chooser: Chooser) -> SessionSummary:
        """Drive a session to completion, asking `chooser` for every round."""
        pair = session.current_pair
        while pair is not None:
            session.choose(chooser.choose(pair))
            pair = session.current_pair

        if session.failed_writes:
            self.logger.warning(f"Session for {session.owner_id} finished with {session.failed_writes} failed writes")
        return session.summary()

    def movers(
        self,
        owner_id: str,
        kind: ItemKind | None = None,
        window_days: float | None = None,
        top_n: int | None = None,
    ) -> list[Mover]:
        return self.trends.movers(owner_id, kind=kind, window_days=window_days, top_n=top_n)

    def leaderboard(
        self,
        owner_id: str,
        kind: ItemKind | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[LeaderboardRow]:
        return self._leaderboard.rows(owner_id, kind=kind, limit=limit)
