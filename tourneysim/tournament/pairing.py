"""
Round pairing.

Round 1 pairs a random permutation of the field. Later rounds use Swiss
pairing: standings sorted by win-loss differential, then rating, and paired
top-down. With an odd field the last competitor in the ordering gets a bye.
"""

import random
from dataclasses import dataclass
from typing import List, Sequence

from tourneysim.tournament.players import Competitor


@dataclass(frozen=True)
class Pairing:
    """Two distinct competitors meeting in one round."""
    competitor_a: str
    competitor_b: str

    def __post_init__(self):
        if self.competitor_a == self.competitor_b:
            raise ValueError(f"Cannot pair {self.competitor_a!r} against itself")

    @property
    def pairing_id(self) -> str:
        return f"{self.competitor_a}_vs_{self.competitor_b}"


def shuffle_competitors(competitors: Sequence[Competitor], rng: random.Random) -> List[Competitor]:
    """
    Return a uniformly random permutation of the competitors.

    Fisher-Yates driven only by rng.random(), so any object with a
    random() method can serve as the random source.
    """
    shuffled = list(competitors)
    for i in range(len(shuffled) - 1, 0, -1):
        j = min(int(rng.random() * (i + 1)), i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def swiss_order(competitors: Sequence[Competitor]) -> List[Competitor]:
    """Order by (wins - losses) descending, rating descending on ties."""
    return sorted(competitors, key=lambda c: (c.differential, c.rating), reverse=True)


def pair_sequential(ordered: Sequence[Competitor]) -> List[Pairing]:
    """Pair 0-1, 2-3, ...; an odd last competitor is left out."""
    pairings = []
    for i in range(0, len(ordered) - 1, 2):
        pairings.append(Pairing(ordered[i].id, ordered[i + 1].id))
    return pairings


def create_pairings(
    competitors: Sequence[Competitor],
    round_number: int,
    rng: random.Random
) -> List[Pairing]:
    """
    Create the pairings for a round.

    Args:
        competitors: Current field with up-to-date counters
        round_number: 1-based round number
        rng: Random source used for the first-round shuffle

    Returns:
        Disjoint pairings; empty for fewer than two competitors
    """
    if round_number == 1:
        ordered = shuffle_competitors(competitors, rng)
    else:
        ordered = swiss_order(competitors)
    return pair_sequential(ordered)
