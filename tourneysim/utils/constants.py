"""
Constants for the tournament simulator.
"""

# Rating models
ELO_SCALE = 400.0
TRUESKILL_BETA = 25 / 6

# Scoring
WIN_POINTS = 1.0
DRAW_POINTS = 0.5

# Best-of-three needs this many game wins to take the match
BO3_GAMES = 3
BO3_WINS_NEEDED = 2

# Size of the "top cut" used for accuracy stats
TOP_CUT_SIZE = 8

# Normal distribution needs at least this much rating spread
MIN_NORMAL_RATING_RANGE = 400

# Defaults (match the command line defaults)
DEFAULT_PLAYER_COUNT = 100
DEFAULT_MIN_RATING = 1000
DEFAULT_MAX_RATING = 2000
DEFAULT_ITERATIONS = 100
DEFAULT_ROUNDS = 7
DEFAULT_DRAW_PROBABILITY = 0.1

PLAYER_ID_PREFIX = "player-"
