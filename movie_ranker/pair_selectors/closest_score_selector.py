"""
Closest-score selector implementation.

Randomized bounded search for a not-yet-shown pair with the smallest score gap.
Comparisons between similarly rated items are more informative; the attempt cap
keeps selection cost independent of pool size.
"""

import random
from collections.abc import Mapping, Sequence, Set

from typing_extensions import override

from ..interfaces import PairKey, Selector, canonical_pair_key
from ..logging_config import get_logger
from ..models import DEFAULT_DISPLAY, Item
from .nearest_score_selector import fallback_pair, unique_items

DEFAULT_MAX_ATTEMPTS = 200

# Module-level logger
logger = get_logger("closest_score_selector")


class ClosestScoreSelector(Selector):
    """Greedy random-sampling selector biased toward close scores."""

    def __init__(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS, seed: int | None = None):
        """
        Initialize closest-score selector.

        Args:
            max_attempts: Upper bound on sampled candidate pairs per selection
            seed: Random seed for reproducible selection (None = nondeterministic)
        """
        if max_attempts <= 0:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")
        self.max_attempts: int = max_attempts
        self._rng: random.Random = random.Random(seed)

    @override
    def select_pair(
        self,
        pool: Sequence[Item],
        scores: Mapping[str, int],
        excluded: Set[PairKey],
    ) -> tuple[Item, Item] | None:
        """Return the closest-scored novel pair found within the attempt budget."""
        items = unique_items(pool)
        if len(items) < 2:
            logger.warning("Insufficient items for a comparison pair")
            return None

        attempts = min(self.max_attempts, len(items) * len(items))
        best: tuple[Item, Item] | None = None
        best_gap: int | None = None

        for _ in range(attempts):
            a, b = self._rng.sample(items, 2)
            if canonical_pair_key(a, b) in excluded:
                continue

            gap = abs(scores.get(a.item_id, DEFAULT_DISPLAY) - scores.get(b.item_id, DEFAULT_DISPLAY))
            if best_gap is None or gap < best_gap:
                best, best_gap = (a, b), gap

        if best is None:
            best = fallback_pair(items)
            logger.debug(f"No novel pair found in {attempts} attempts, falling back to {best[0].item_id} vs {best[1].item_id}")
        else:
            logger.debug(f"Selected pair {best[0].item_id} vs {best[1].item_id} (gap {best_gap}) after {attempts} attempts")
        return best
