"""
Competitors and the rated player-pool factory.
"""

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from tourneysim.utils.constants import DRAW_POINTS, PLAYER_ID_PREFIX, WIN_POINTS


class RatingDistribution(Enum):
    """How ratings are spread across the generated pool."""
    LINEAR = "linear"    # Evenly spaced, both endpoints included
    NORMAL = "normal"    # Bell curve around the midpoint, clamped to range

    @classmethod
    def parse(cls, value) -> "RatingDistribution":
        """Resolve a distribution name, raising ValueError if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            known = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown rating distribution: {value!r} (expected one of: {known})")


@dataclass
class Competitor:
    """A rated competitor with per-iteration result counters."""
    id: str
    rating: float
    wins: int = 0
    losses: int = 0
    draws: int = 0

    @property
    def score(self) -> float:
        return self.wins * WIN_POINTS + self.draws * DRAW_POINTS

    @property
    def differential(self) -> int:
        return self.wins - self.losses

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.draws

    def reset(self):
        """Clear counters before a new iteration."""
        self.wins = 0
        self.losses = 0
        self.draws = 0


def generate_players(
    count: int,
    min_rating: float,
    max_rating: float,
    distribution: RatingDistribution = RatingDistribution.LINEAR,
    rng: Optional[random.Random] = None
) -> List[Competitor]:
    """
    Generate a pool of rated competitors.

    Linear ratings are evenly spaced from min_rating to max_rating. Normal
    ratings are drawn around the midpoint with a standard deviation of a
    quarter of the range, clamped into range. All ratings are rounded to
    integers.

    Args:
        count: Number of competitors
        min_rating: Lowest allowed rating
        max_rating: Highest allowed rating
        distribution: Rating distribution
        rng: Random source for normal draws (fresh Random if None)

    Returns:
        List of competitors with ids player-1 .. player-N
    """
    distribution = RatingDistribution.parse(distribution)
    rng = rng or random.Random()

    step = (max_rating - min_rating) / (count - 1) if count > 1 else 0.0
    mean = (min_rating + max_rating) / 2
    std_dev = (max_rating - min_rating) / 4

    players = []
    for i in range(count):
        if distribution is RatingDistribution.LINEAR:
            rating = min_rating + i * step
        else:
            rating = min(max(rng.gauss(mean, std_dev), min_rating), max_rating)

        players.append(Competitor(
            id=f"{PLAYER_ID_PREFIX}{i + 1}",
            rating=math.floor(rating + 0.5)
        ))

    return players
