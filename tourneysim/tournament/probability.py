"""
Win probability models for rated competitors.

Both models map a rating difference onto a logistic curve:
- Elo: P(A) = 1 / (1 + 10^(-(R_a - R_b) / 400))
- TrueSkill (static): P(A) = 1 / (1 + e^(-(R_a - R_b) / (sqrt(2) * beta)))
"""

import math
from enum import Enum

from tourneysim.utils.constants import ELO_SCALE, TRUESKILL_BETA


class RatingSystem(Enum):
    """Supported rating models."""
    ELO = "elo"
    TRUESKILL = "trueskill"

    @classmethod
    def parse(cls, value) -> "RatingSystem":
        """
        Resolve a rating system name.

        Args:
            value: A RatingSystem or its (case-insensitive) name

        Returns:
            The matching RatingSystem

        Raises:
            ValueError: If the name is not a known rating system
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            known = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown rating system: {value!r} (expected one of: {known})")


def _logistic(x: float) -> float:
    # Split on sign so exp() never overflows for huge rating gaps
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def elo_win_probability(rating_a: float, rating_b: float) -> float:
    """Probability that A beats B on the 400-point Elo scale."""
    # 1 / (1 + 10^(-d/400)) == logistic(d * ln(10) / 400)
    return _logistic((rating_a - rating_b) * math.log(10) / ELO_SCALE)


def trueskill_win_probability(rating_a: float, rating_b: float, beta: float = TRUESKILL_BETA) -> float:
    """Probability that A beats B using a fixed-beta logistic approximation."""
    return _logistic((rating_a - rating_b) / (math.sqrt(2) * beta))


def win_probability(rating_a: float, rating_b: float, system: RatingSystem = RatingSystem.ELO) -> float:
    """
    Calculate the probability that A wins a single game against B.

    Args:
        rating_a: Rating of competitor A
        rating_b: Rating of competitor B
        system: Rating model to use

    Returns:
        Probability between 0 and 1 (exactly 0.5 for equal ratings)
    """
    system = RatingSystem.parse(system)
    if rating_a == rating_b:
        return 0.5
    if system is RatingSystem.TRUESKILL:
        return trueskill_win_probability(rating_a, rating_b)
    return elo_win_probability(rating_a, rating_b)
