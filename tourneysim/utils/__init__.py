"""
Utilities module for the tournament simulator.
"""
from tourneysim.utils.constants import (
    ELO_SCALE, TRUESKILL_BETA,
    WIN_POINTS, DRAW_POINTS,
    BO3_GAMES, BO3_WINS_NEEDED,
    TOP_CUT_SIZE, MIN_NORMAL_RATING_RANGE,
)

__all__ = [
    'ELO_SCALE', 'TRUESKILL_BETA',
    'WIN_POINTS', 'DRAW_POINTS',
    'BO3_GAMES', 'BO3_WINS_NEEDED',
    'TOP_CUT_SIZE', 'MIN_NORMAL_RATING_RANGE',
]
