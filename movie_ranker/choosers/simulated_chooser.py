"""
Simulated chooser implementation.

Picks the preferred item of a pair from hidden ground-truth preferences with a
noise parameter, standing in for a human in demos and tests.
"""

import random

from typing_extensions import override

from ..interfaces import Chooser
from ..models import Item


class SimulatedChooser(Chooser):
    """
    Simulated user for testing purposes.

    Compares ground-truth preferences after adding Gaussian noise.
    """

    def __init__(self, ground_truth: dict[str, float], noise: float = 0.1, seed: int | None = None):
        """
        Initialize simulated chooser.

        Args:
            ground_truth: Dict mapping item_id to true preference (higher = preferred)
            noise: Amount of noise to add (0-1, where 1 = full noise)
            seed: Random seed for reproducible choices
        """
        self.ground_truth = ground_truth
        self.noise = max(0.0, min(1.0, noise))  # Clamp to [0, 1]
        self._rng = random.Random(seed)
        self.choices_made = 0

    def _noisy_preference(self, item: Item) -> float:
        """Ground-truth preference plus noise scaled by its magnitude."""
        score = self.ground_truth.get(item.item_id, 0.0)
        if self.noise == 0:
            return score
        return score + self._rng.gauss(0, abs(score) * self.noise)

    @override
    def choose(self, pair: tuple[Item, Item]) -> Item:
        first, second = pair
        self.choices_made += 1
        # Ties go to the first item of the pair
        if self._noisy_preference(second) > self._noisy_preference(first):
            return second
        return first

    def set_noise(self, noise: float) -> None:
        """Update noise level."""
        self.noise = max(0.0, min(1.0, noise))
