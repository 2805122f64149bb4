"""
Command line interface for Monte-Carlo Swiss tournament simulations.

Usage:
    tourneysim --players 32 --rounds 5 --iterations 1000 --format bo3

Examples:
    # Quick check with a fixed seed
    tourneysim -p 16 -r 4 -i 200 --seed 42

    # TrueSkill model, normally distributed ratings, progress bar
    tourneysim -p 64 -d normal --rating trueskill -i 5000 --progress

    # Best of three without drawn matches, only the final tables
    tourneysim -f bo3-no-draws --draw 0.3 --quiet
"""

import argparse
import sys

from tourneysim.tournament.config import PlayerConfig, SimulationConfig, TournamentConfig
from tourneysim.tournament.display import format_overall_results, format_tournament_stats
from tourneysim.tournament.match import MatchFormat
from tourneysim.tournament.players import RatingDistribution
from tourneysim.tournament.probability import RatingSystem
from tourneysim.tournament.runner import TournamentSimulation
from tourneysim.utils.constants import (
    DEFAULT_DRAW_PROBABILITY,
    DEFAULT_ITERATIONS,
    DEFAULT_MAX_RATING,
    DEFAULT_MIN_RATING,
    DEFAULT_PLAYER_COUNT,
    DEFAULT_ROUNDS,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    formats = ", ".join(f.value for f in MatchFormat)

    parser = argparse.ArgumentParser(
        prog='tourneysim',
        description='Simulate many Swiss tournaments between rated players.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f'''
Match formats:
  {formats}

Examples:
  tourneysim -p 16 -r 4 -i 200 --seed 42
  tourneysim -p 64 -d normal --rating trueskill -i 5000 --progress
'''
    )

    parser.add_argument(
        '--players', '-p',
        type=int, default=DEFAULT_PLAYER_COUNT,
        help=f'Number of players (default: {DEFAULT_PLAYER_COUNT})'
    )
    parser.add_argument(
        '--min', '--min-rating',
        dest='min_rating', type=int, default=DEFAULT_MIN_RATING,
        help=f'Minimum player rating (default: {DEFAULT_MIN_RATING})'
    )
    parser.add_argument(
        '--max', '--max-rating',
        dest='max_rating', type=int, default=DEFAULT_MAX_RATING,
        help=f'Maximum player rating (default: {DEFAULT_MAX_RATING})'
    )
    parser.add_argument(
        '--distribution', '-d',
        type=str, default=RatingDistribution.LINEAR.value,
        help='Rating distribution: linear or normal (default: linear)'
    )
    parser.add_argument(
        '--format', '-f',
        type=str, default=MatchFormat.BO1.value,
        help='Match format (default: bo1)'
    )
    parser.add_argument(
        '--iterations', '-i',
        type=int, default=DEFAULT_ITERATIONS,
        help=f'Number of simulated tournaments (default: {DEFAULT_ITERATIONS})'
    )
    parser.add_argument(
        '--rounds', '-r',
        type=int, default=DEFAULT_ROUNDS,
        help=f'Rounds per tournament (default: {DEFAULT_ROUNDS})'
    )
    parser.add_argument(
        '--draw',
        type=float, default=DEFAULT_DRAW_PROBABILITY,
        help=f'Probability of a drawn game, 0-1 (default: {DEFAULT_DRAW_PROBABILITY})'
    )
    parser.add_argument(
        '--rating',
        type=str, default=RatingSystem.ELO.value,
        help='Rating system: elo or trueskill (default: elo)'
    )
    parser.add_argument(
        '--seed',
        type=int, default=None,
        help='Random seed for reproducible runs'
    )
    parser.add_argument(
        '--progress',
        action='store_true',
        help='Show a progress bar'
    )
    parser.add_argument(
        '--show-iterations',
        action='store_true',
        help='Print the standings of every iteration'
    )
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Minimal output (only final results)'
    )

    return parser


def build_config(args: argparse.Namespace) -> TournamentConfig:
    """
    Turn parsed arguments into a validated configuration.

    Raises:
        ValueError: If any setting is invalid
    """
    config = TournamentConfig(
        players=PlayerConfig(
            count=args.players,
            min_rating=args.min_rating,
            max_rating=args.max_rating,
            distribution=args.distribution
        ),
        simulation=SimulationConfig(
            format=args.format,
            iterations=args.iterations,
            rounds=args.rounds,
            draw_probability=args.draw,
            rating_system=args.rating,
            show_progress=args.progress,
            seed=args.seed
        )
    )
    return config.validate()


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ValueError as e:
        parser.error(str(e))

    simulation = TournamentSimulation(
        config,
        verbose=not args.quiet,
        show_iterations=args.show_iterations
    )
    result = simulation.run()

    # Display final results
    print("\n" + format_overall_results(result.players))
    print(format_tournament_stats(result.tournament_stats))

    return 130 if result.interrupted else 0


if __name__ == "__main__":
    sys.exit(main())
