"""
Match resolution for a single pairing.

A match is one game (bo1) or exactly three independent games (bo3 variants).
Each game splits [0, 1) into three zones: A wins, draw, B wins. The draw zone
shrinks as the game gets more lopsided:

    adjusted_draw = draw_probability * (1 - |p - 0.5| * 2)

The resolver never touches competitor counters; it only returns an outcome.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tourneysim.tournament.players import Competitor
from tourneysim.tournament.probability import RatingSystem, win_probability
from tourneysim.utils.constants import BO3_GAMES, BO3_WINS_NEEDED


class MatchFormat(Enum):
    """Supported match formats."""
    BO1 = "bo1"                    # Single game decides the match
    BO3 = "bo3"                    # Best of three, draw if nobody reaches 2 wins
    BO3_NO_DRAWS = "bo3-no-draws"  # Best of three, coin flip if nobody reaches 2 wins

    @classmethod
    def parse(cls, value) -> "MatchFormat":
        """
        Resolve a match format name, including legacy aliases.

        Args:
            value: A MatchFormat or its name

        Returns:
            The matching MatchFormat

        Raises:
            ValueError: If the name is not a recognized format
        """
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        name = FORMAT_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            known = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown match format: {value!r} (expected one of: {known})")


# Names used by older configurations
FORMAT_ALIASES = {
    'bo3-no-tiebreak': 'bo3',
    'bo3_no_draws': 'bo3-no-draws',
    'bo3-nodraws': 'bo3-no-draws',
}


@dataclass(frozen=True)
class MatchOutcome:
    """
    Result of a match: either a winner and loser, or a draw.

    Use MatchOutcome.decisive() / MatchOutcome.drawn() to build one.
    """
    winner_id: Optional[str] = None
    loser_id: Optional[str] = None
    draw: bool = False

    def __post_init__(self):
        if self.draw:
            if self.winner_id is not None or self.loser_id is not None:
                raise ValueError("A drawn match cannot have a winner or loser")
        else:
            if self.winner_id is None or self.loser_id is None:
                raise ValueError("A decisive match needs both a winner and a loser")
            if self.winner_id == self.loser_id:
                raise ValueError(f"Winner and loser must differ (got {self.winner_id!r})")

    @classmethod
    def decisive(cls, winner_id: str, loser_id: str) -> "MatchOutcome":
        return cls(winner_id=winner_id, loser_id=loser_id)

    @classmethod
    def drawn(cls) -> "MatchOutcome":
        return cls(draw=True)

    @property
    def is_decisive(self) -> bool:
        return not self.draw


# Single game results
A_WINS = 1
B_WINS = 2
GAME_DRAW = 0


def adjusted_draw_probability(p: float, draw_probability: float) -> float:
    """Scale the configured draw probability by how even the game is."""
    return draw_probability * (1 - abs(p - 0.5) * 2)


def resolve_game(p: float, draw_probability: float, rng: random.Random) -> int:
    """
    Resolve one game given A's win probability.

    Args:
        p: Probability that A wins
        draw_probability: Configured (unadjusted) draw probability
        rng: Random source exposing random()

    Returns:
        A_WINS, B_WINS or GAME_DRAW
    """
    if draw_probability >= 1.0:
        return GAME_DRAW

    adjusted = adjusted_draw_probability(p, draw_probability)
    a_zone = p * (1 - adjusted)

    r = rng.random()
    if r < a_zone:
        return A_WINS
    if r < a_zone + adjusted:
        return GAME_DRAW
    return B_WINS


def resolve_match(
    competitor_a: Competitor,
    competitor_b: Competitor,
    match_format: MatchFormat,
    draw_probability: float,
    rating_system: RatingSystem,
    rng: random.Random
) -> MatchOutcome:
    """
    Resolve a full match between two competitors.

    Best-of-three always plays all three games. Draws count toward neither
    side. If nobody reaches two game wins, bo3 is a drawn match and
    bo3-no-draws is settled by a fair coin flip.

    Args:
        competitor_a: First competitor
        competitor_b: Second competitor
        match_format: Match format
        draw_probability: Configured draw probability in [0, 1]
        rating_system: Rating model used for win probability
        rng: Random source exposing random()

    Returns:
        MatchOutcome for the match
    """
    match_format = MatchFormat.parse(match_format)
    p = win_probability(competitor_a.rating, competitor_b.rating, rating_system)
    a_id, b_id = competitor_a.id, competitor_b.id

    if match_format is MatchFormat.BO1:
        result = resolve_game(p, draw_probability, rng)
        if result == A_WINS:
            return MatchOutcome.decisive(a_id, b_id)
        if result == B_WINS:
            return MatchOutcome.decisive(b_id, a_id)
        return MatchOutcome.drawn()

    a_wins = 0
    b_wins = 0
    for _ in range(BO3_GAMES):
        result = resolve_game(p, draw_probability, rng)
        if result == A_WINS:
            a_wins += 1
        elif result == B_WINS:
            b_wins += 1

    if a_wins >= BO3_WINS_NEEDED:
        return MatchOutcome.decisive(a_id, b_id)
    if b_wins >= BO3_WINS_NEEDED:
        return MatchOutcome.decisive(b_id, a_id)

    if match_format is MatchFormat.BO3_NO_DRAWS:
        if rng.random() < 0.5:
            return MatchOutcome.decisive(a_id, b_id)
        return MatchOutcome.decisive(b_id, a_id)

    return MatchOutcome.drawn()
