"""
Run configuration for tournament simulations.

Everything is validated up front so a bad format or rating range is rejected
before a single game is simulated.
"""

from dataclasses import dataclass, field
from typing import Optional

from tourneysim.tournament.match import MatchFormat
from tourneysim.tournament.players import RatingDistribution
from tourneysim.tournament.probability import RatingSystem
from tourneysim.utils.constants import (
    DEFAULT_DRAW_PROBABILITY,
    DEFAULT_ITERATIONS,
    DEFAULT_MAX_RATING,
    DEFAULT_MIN_RATING,
    DEFAULT_PLAYER_COUNT,
    DEFAULT_ROUNDS,
    MIN_NORMAL_RATING_RANGE,
)


@dataclass
class PlayerConfig:
    """How to build the competitor pool."""
    count: int = DEFAULT_PLAYER_COUNT
    min_rating: float = DEFAULT_MIN_RATING
    max_rating: float = DEFAULT_MAX_RATING
    distribution: RatingDistribution = RatingDistribution.LINEAR

    def __post_init__(self):
        self.distribution = RatingDistribution.parse(self.distribution)

    def validate(self):
        """Raise ValueError if the pool settings are unusable."""
        if self.count < 2:
            raise ValueError(f"Need at least 2 players (got {self.count})")
        if self.min_rating >= self.max_rating:
            raise ValueError(
                f"Minimum rating ({self.min_rating}) must be below maximum rating ({self.max_rating})"
            )
        if (self.distribution is RatingDistribution.NORMAL
                and self.max_rating - self.min_rating < MIN_NORMAL_RATING_RANGE):
            raise ValueError(
                f"Normal distribution needs a rating range of at least {MIN_NORMAL_RATING_RANGE}"
            )


@dataclass
class SimulationConfig:
    """How each simulated tournament is played."""
    format: MatchFormat = MatchFormat.BO1
    iterations: int = DEFAULT_ITERATIONS
    rounds: int = DEFAULT_ROUNDS
    draw_probability: float = DEFAULT_DRAW_PROBABILITY
    rating_system: RatingSystem = RatingSystem.ELO
    show_progress: bool = False
    seed: Optional[int] = None

    def __post_init__(self):
        self.format = MatchFormat.parse(self.format)
        self.rating_system = RatingSystem.parse(self.rating_system)

    def validate(self):
        """Raise ValueError if the simulation settings are unusable."""
        if self.iterations < 1:
            raise ValueError(f"Need at least 1 iteration (got {self.iterations})")
        if self.rounds < 1:
            raise ValueError(f"Need at least 1 round (got {self.rounds})")
        if not 0.0 <= self.draw_probability <= 1.0:
            raise ValueError(f"Draw probability must be between 0 and 1 (got {self.draw_probability})")


@dataclass
class TournamentConfig:
    """Complete configuration for a simulation run."""
    players: PlayerConfig = field(default_factory=PlayerConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)

    def validate(self) -> "TournamentConfig":
        """Validate both sections, returning self for chaining."""
        self.players.validate()
        self.simulation.validate()
        return self


def is_valid_config(config: TournamentConfig) -> bool:
    """Return True if the configuration passes validation."""
    try:
        config.validate()
    except ValueError:
        return False
    return True
