"""
Shared fixtures for simulator tests.
"""

import pytest

from tourneysim.tournament.players import Competitor


class SequenceRandom:
    """Random source that replays a fixed list of values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        if self.calls >= len(self.values):
            raise AssertionError("Random source exhausted")
        value = self.values[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def sequence_random():
    """Factory for deterministic random sources."""
    return SequenceRandom


@pytest.fixture
def make_competitor():
    """Factory for competitors with preset counters."""
    def _make(cid, rating, wins=0, losses=0, draws=0):
        return Competitor(id=cid, rating=rating, wins=wins, losses=losses, draws=draws)
    return _make
