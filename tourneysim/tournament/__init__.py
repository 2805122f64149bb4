"""
Tournament simulation module.

Provides:
- win_probability: Elo / TrueSkill single-game win probability
- resolve_match: bo1 / bo3 / bo3-no-draws match resolution
- create_pairings: random first round, Swiss pairing afterwards
- run_round: plays one round and updates counters
- SimulationStats: cross-iteration statistics
- TournamentSimulation: drives a full Monte-Carlo run
"""

from tourneysim.tournament.probability import RatingSystem, win_probability
from tourneysim.tournament.players import Competitor, RatingDistribution, generate_players
from tourneysim.tournament.match import MatchFormat, MatchOutcome, resolve_match
from tourneysim.tournament.pairing import Pairing, create_pairings
from tourneysim.tournament.config import PlayerConfig, SimulationConfig, TournamentConfig
from tourneysim.tournament.stats import SimulationStats, PlayerSummary
from tourneysim.tournament.runner import TournamentSimulation, SimulationResult, run_round
from tourneysim.tournament.display import format_overall_results, format_tournament_stats

__all__ = [
    'RatingSystem',
    'win_probability',
    'Competitor',
    'RatingDistribution',
    'generate_players',
    'MatchFormat',
    'MatchOutcome',
    'resolve_match',
    'Pairing',
    'create_pairings',
    'PlayerConfig',
    'SimulationConfig',
    'TournamentConfig',
    'SimulationStats',
    'PlayerSummary',
    'TournamentSimulation',
    'SimulationResult',
    'run_round',
    'format_overall_results',
    'format_tournament_stats',
]
