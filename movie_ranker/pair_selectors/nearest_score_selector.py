"""
Nearest-score selector implementation.

Deterministic alternative to the closest-score selector: scans every unordered
pair and returns the novel one with the smallest score gap.
"""

from collections.abc import Mapping, Sequence, Set

from typing_extensions import override

from ..interfaces import PairKey, Selector, canonical_pair_key
from ..logging_config import get_logger
from ..models import DEFAULT_DISPLAY, Item

# Module-level logger
logger = get_logger("nearest_score_selector")


def unique_items(pool: Sequence[Item]) -> list[Item]:
    """Drop repeated item ids, keeping first occurrence order."""
    seen = set[str]()
    items = list[Item]()
    for item in pool:
        if item.item_id not in seen:
            seen.add(item.item_id)
            items.append(item)
    return items


def fallback_pair(items: Sequence[Item]) -> tuple[Item, Item]:
    """First item and the first item with a different id."""
    first = items[0]
    second = next(item for item in items if item.item_id != first.item_id)
    return first, second


class NearestScoreSelector(Selector):
    """Exhaustive, deterministic nearest-by-score selector."""

    @override
    def select_pair(
        self,
        pool: Sequence[Item],
        scores: Mapping[str, int],
        excluded: Set[PairKey],
    ) -> tuple[Item, Item] | None:
        items = unique_items(pool)
        if len(items) < 2:
            logger.warning("Insufficient items for a comparison pair")
            return None

        best: tuple[Item, Item] | None = None
        best_gap: int | None = None
        for i, a in enumerate(items):
            score_a = scores.get(a.item_id, DEFAULT_DISPLAY)
            for b in items[i + 1:]:
                if canonical_pair_key(a, b) in excluded:
                    continue
                gap = abs(score_a - scores.get(b.item_id, DEFAULT_DISPLAY))
                if best_gap is None or gap < best_gap:
                    best, best_gap = (a, b), gap

        if best is None:
            return fallback_pair(items)
        logger.debug(f"Selected nearest pair {best[0].item_id} vs {best[1].item_id} (gap {best_gap})")
        return best
