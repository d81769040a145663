"""
Selector implementations.

Provides implementations of the Selector interface for choosing which pair of
items to compare next.

Available implementations:
- ClosestScoreSelector: Randomized bounded search for the closest-scored novel pair
- NearestScoreSelector: Deterministic exhaustive nearest-by-score search
"""

from .closest_score_selector import ClosestScoreSelector
from .nearest_score_selector import NearestScoreSelector

__all__ = ["ClosestScoreSelector", "NearestScoreSelector"]
