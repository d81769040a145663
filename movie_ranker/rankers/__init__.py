"""
Rating implementations.

Provides the Elo-based rating transform that converts between 0-100 display
scores and internal ratings and applies pairwise updates.

Available implementations:
- RatingTransform: Elo update rule with a single configurable K-factor
"""

from .rating_transform import RatingTransform, to_display, to_internal, update

__all__ = ["RatingTransform", "to_display", "to_internal", "update"]
