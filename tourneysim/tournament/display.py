"""
Display formatting for simulation results.

Provides ASCII-formatted tables for terminal output.
"""

from typing import Dict, List, Sequence

from tourneysim.tournament.players import Competitor
from tourneysim.tournament.stats import PlayerSummary, rank_by_score


def format_rating(rating: float) -> str:
    """Show whole-number ratings without a trailing .0"""
    if float(rating).is_integer():
        return str(int(rating))
    return f"{rating:.1f}"


def format_simulation_header(
    num_players: int,
    match_format: str,
    rating_system: str,
    iterations: int,
    rounds: int,
    draw_probability: float
) -> str:
    """Format simulation header information."""
    lines = []
    lines.append(f"Players: {num_players}")
    lines.append(f"Format: {match_format} ({rating_system})")
    lines.append(f"Iterations: {iterations}")
    lines.append(f"Rounds per tournament: {rounds}")
    lines.append(f"Draw probability: {draw_probability:.2f}")
    lines.append("")
    return "\n".join(lines)


def format_iteration_results(iteration: int, competitors: Sequence[Competitor]) -> str:
    """
    Format the final standings of one iteration.

    Args:
        iteration: 1-based iteration number
        competitors: Competitors with that iteration's counters

    Returns:
        Standings table followed by the iteration winner
    """
    standings = rank_by_score(competitors)

    lines = []
    lines.append(f"Iteration {iteration} Results:")
    lines.append(f"{'Player ID':<14}{'Rating':<10}{'W-L-D':<12}{'Score':>8}")
    lines.append("-" * 44)

    for c in standings:
        wld = f"{c.wins}-{c.losses}-{c.draws}"
        lines.append(f"{c.id:<14}{format_rating(c.rating):<10}{wld:<12}{c.score:>8.1f}")

    if standings:
        winner = standings[0]
        lines.append("")
        lines.append(f"Winner of iteration {iteration}: {winner.id} "
                     f"(Rating: {format_rating(winner.rating)})")

    return "\n".join(lines)


def format_overall_results(results: List[PlayerSummary]) -> str:
    """
    Format the overall performance summary as an ASCII table.

    Args:
        results: Player summaries, already sorted

    Returns:
        Formatted string for terminal display
    """
    lines = []
    lines.append("=== OVERALL PERFORMANCE ===")
    lines.append("")

    # Header
    lines.append(f"{'Player ID':<14}{'Rating':<10}{'Mean Score':>12}{'Score Var':>12}"
                 f"{'Mean Place':>12}{'Place Var':>12}{'Streak':>8}")
    lines.append("-" * 80)

    # Rows
    for s in results:
        lines.append(f"{s.id:<14}{format_rating(s.rating):<10}{s.mean_score:>12.2f}"
                     f"{s.score_variance:>12.2f}{s.mean_placement:>12.1f}"
                     f"{s.placement_variance:>12.1f}{s.max_win_streak:>8}")

    return "\n".join(lines)


def format_tournament_stats(tournament_stats: Dict[str, float]) -> str:
    """Format tournament-wide accuracy metrics."""
    lines = []
    lines.append("")
    lines.append("Tournament Statistics:")
    lines.append(f"  Iterations: {tournament_stats['iterations']} of {tournament_stats['iterations_planned']}")
    lines.append(f"  Top Player Win Rate: {tournament_stats['top_player_win_rate']:.1%}")
    lines.append(f"  Average Top 8 Accuracy: {tournament_stats['top8_accuracy']:.1%}")
    return "\n".join(lines)


def format_completion(elapsed_seconds: float, iterations: int, matches: int) -> str:
    """Format the closing timing line."""
    rate = matches / elapsed_seconds if elapsed_seconds > 0 else 0
    return (f"\nSimulation completed in {elapsed_seconds:.3f}s "
            f"({iterations} iterations, {matches} matches, {rate:.1f} matches/s)")
