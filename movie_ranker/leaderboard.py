"""
Owner leaderboard: scores joined with the catalog, best first.
"""

from .interfaces import Catalog, ScoreStore
from .logging_config import get_logger
from .models import ItemKind, LeaderboardRow

DEFAULT_LIMIT = 100

logger = get_logger("leaderboard")


class Leaderboard:
    """Ranks an owner's scored items."""

    def __init__(self, score_store: ScoreStore, catalog: Catalog):
        self.score_store: ScoreStore = score_store
        self.catalog: Catalog = catalog

    def rows(self, owner_id: str, kind: ItemKind | None = None, limit: int = DEFAULT_LIMIT) -> list[LeaderboardRow]:
        """Scores sorted by display descending (ties by item id), truncated to `limit`."""
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        entries = list[tuple[int, str, ItemKind, str | None]]()
        for score in self.score_store.list_scores(owner_id):
            try:
                item = self.catalog.get_item(score.item_id)
            except KeyError:
                logger.debug(f"Skipping score for unknown item {score.item_id}")
                continue
            if kind is not None and item.kind != kind:
                continue
            entries.append((score.display, item.item_id, item.kind, item.title))

        entries.sort(key=lambda e: (-e[0], e[1]))
        return [
            LeaderboardRow(rank=rank, item_id=item_id, kind=item_kind, title=title, display=display)
            for rank, (display, item_id, item_kind, title) in enumerate(entries[:limit], 1)
        ]
