"""
Elo rating transform tuned for 0-100 display scores.

Display scores map linearly onto an internal Elo scale (0..100 -> 1000..2000).
Updates are computed in the internal scale and converted back with clamping
and round-half-up.
"""

import math

from ..logging_config import get_logger
from ..models import MAX_DISPLAY, MIN_DISPLAY

INTERNAL_BASE = 1000.0
INTERNAL_PER_DISPLAY_POINT = 10.0
ELO_SCALE = 400.0
DEFAULT_K_FACTOR = 28.0

logger = get_logger("rating_transform")


def clamp_display(value: float) -> float:
    """Clamp a display-space value to [0, 100]."""
    return max(float(MIN_DISPLAY), min(float(MAX_DISPLAY), value))


def to_internal(display: int) -> float:
    """Convert a display score (0-100) to the internal rating (1000-2000)."""
    return INTERNAL_BASE + clamp_display(display) * INTERNAL_PER_DISPLAY_POINT


def to_display(internal: float) -> int:
    """Convert an internal rating back to a clamped, rounded display score."""
    value = clamp_display((internal - INTERNAL_BASE) / INTERNAL_PER_DISPLAY_POINT)
    # Round half up; value is non-negative after clamping
    return int(math.floor(value + 0.5))


def expected_score(rating: float, opponent: float) -> float:
    """
    Expected win probability of `rating` against `opponent`.

    Formula: 1 / (1 + 10^((opponent - rating) / 400))
    """
    return 1.0 / (1.0 + 10.0 ** ((opponent - rating) / ELO_SCALE))


def update(winner_display: int, loser_display: int, k: float = DEFAULT_K_FACTOR) -> tuple[int, int]:
    """
    Apply one comparison outcome.

    Args:
        winner_display: Current display score of the preferred item
        loser_display: Current display score of the other item
        k: K-factor, must be positive

    Returns:
        (new_winner_display, new_loser_display)
    """
    if k <= 0:
        raise ValueError(f"k must be positive, got {k}")

    winner_internal = to_internal(winner_display)
    loser_internal = to_internal(loser_display)

    expected_winner = expected_score(winner_internal, loser_internal)
    winner_internal += k * (1.0 - expected_winner)
    loser_internal -= k * expected_winner

    return to_display(winner_internal), to_display(loser_internal)


class RatingTransform:
    """Stateless rating update rule bound to a single K-factor."""

    def __init__(self, k_factor: float = DEFAULT_K_FACTOR):
        """
        Initialize rating transform.

        Args:
            k_factor: Step size for every comparison
        """
        if k_factor <= 0:
            raise ValueError(f"k_factor must be positive, got {k_factor}")
        self.k_factor: float = k_factor

    def to_internal(self, display: int) -> float:
        return to_internal(display)

    def to_display(self, internal: float) -> int:
        return to_display(internal)

    def update(self, winner_display: int, loser_display: int) -> tuple[int, int]:
        """Return updated (winner, loser) display scores."""
        new_winner, new_loser = update(winner_display, loser_display, self.k_factor)
        logger.debug(
            f"Elo update (K={self.k_factor}): winner {winner_display}->{new_winner}, loser {loser_display}->{new_loser}"
        )
        return new_winner, new_loser
