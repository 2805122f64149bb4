"""
Cross-iteration statistics for simulated tournaments.

Tracks per-competitor scores, placements and win streaks, plus how well the
ratings predicted each iteration's standings.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set

import numpy as np

from tourneysim.tournament.players import Competitor
from tourneysim.utils.constants import TOP_CUT_SIZE


@dataclass
class RunningPlayerStats:
    """Running totals for one competitor across iterations."""
    id: str
    rating: float
    total_wins: int = 0
    total_losses: int = 0
    total_draws: int = 0
    win_streak: int = 0
    max_win_streak: int = 0
    scores: List[float] = field(default_factory=list)
    placements: List[int] = field(default_factory=list)

    @property
    def total_games(self) -> int:
        return self.total_wins + self.total_losses + self.total_draws


@dataclass
class TournamentAccuracyStats:
    """How often ratings predicted the final standings."""
    iterations_recorded: int = 0
    top_player_wins: int = 0
    top_cut_overlap: float = 0.0

    @property
    def top_player_win_rate(self) -> float:
        if self.iterations_recorded == 0:
            return 0.0
        return self.top_player_wins / self.iterations_recorded

    @property
    def top_cut_accuracy(self) -> float:
        if self.iterations_recorded == 0:
            return 0.0
        return self.top_cut_overlap / self.iterations_recorded


@dataclass
class PlayerSummary:
    """Summary of one competitor over the whole run."""
    id: str
    rating: float
    mean_score: float
    score_variance: float
    mean_placement: float
    placement_variance: float
    max_win_streak: int
    total_wins: int = 0
    total_losses: int = 0
    total_draws: int = 0

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'rating': self.rating,
            'mean_score': self.mean_score,
            'score_variance': self.score_variance,
            'mean_placement': self.mean_placement,
            'placement_variance': self.placement_variance,
            'max_win_streak': self.max_win_streak,
            'total_wins': self.total_wins,
            'total_losses': self.total_losses,
            'total_draws': self.total_draws,
        }


def _mean(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def _population_variance(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.var(values))


def rank_by_score(competitors: Sequence[Competitor]) -> List[Competitor]:
    """Stable sort by score, highest first."""
    return sorted(competitors, key=lambda c: c.score, reverse=True)


class SimulationStats:
    """
    Aggregates results of many independent tournament iterations.

    Usage:
        stats = SimulationStats(players, iterations=100)
        for each iteration:
            ... run rounds ...
            stats.record_iteration_results(players)
        summaries = stats.get_overall_results()
    """

    def __init__(self, competitors: Sequence[Competitor], iterations: int):
        """
        Initialize the aggregator.

        Args:
            competitors: Full field; ratings are read once here
            iterations: Planned number of iterations
        """
        self.iterations_planned = iterations

        # Highest rated first; stable so ties keep input order
        self.players_by_rating = sorted(competitors, key=lambda c: c.rating, reverse=True)
        self.top_cut_size = min(TOP_CUT_SIZE, len(competitors))

        self.player_stats: Dict[str, RunningPlayerStats] = {
            c.id: RunningPlayerStats(id=c.id, rating=c.rating)
            for c in self.players_by_rating
        }
        self.tournament_stats = TournamentAccuracyStats()

    @property
    def top_rated_id(self):
        if not self.players_by_rating:
            return None
        return self.players_by_rating[0].id

    def record_iteration_results(self, competitors: Sequence[Competitor]):
        """
        Record the final standings of one iteration.

        Everything is read from the competitors before any running total
        changes, so an interrupt while reading leaves the stats untouched.

        Args:
            competitors: Every competitor with this iteration's final counters
        """
        standings = rank_by_score(competitors)
        placements = {c.id: place for place, c in enumerate(standings, 1)}
        snapshot = [
            (self.player_stats[c.id], c.wins, c.losses, c.draws, c.score, placements[c.id])
            for c in competitors
        ]
        top_scorer_id = standings[0].id if standings else None
        top_scoring = {c.id for c in standings[:self.top_cut_size]}

        for stats, wins, losses, draws, score, placement in snapshot:
            stats.total_wins += wins
            stats.total_losses += losses
            stats.total_draws += draws
            stats.scores.append(score)
            stats.placements.append(placement)

            # Streaks are counted per iteration, not per game
            if wins > 0:
                stats.win_streak += wins
                stats.max_win_streak = max(stats.max_win_streak, stats.win_streak)
            else:
                stats.win_streak = 0

        self._record_accuracy(top_scorer_id, top_scoring)

    def _record_accuracy(self, top_scorer_id, top_scoring: Set[str]):
        """Update the rating-vs-standings accuracy counters."""
        accuracy = self.tournament_stats

        if top_scorer_id is not None and top_scorer_id == self.top_rated_id:
            accuracy.top_player_wins += 1

        n = self.top_cut_size
        if n > 0:
            top_rated = {c.id for c in self.players_by_rating[:n]}
            accuracy.top_cut_overlap += len(top_rated & top_scoring) / n

        accuracy.iterations_recorded += 1

    def get_overall_results(self) -> List[PlayerSummary]:
        """
        Summarize every competitor over all recorded iterations.

        Returns:
            PlayerSummary list sorted by mean score (descending)
        """
        results = []
        for stats in self.player_stats.values():
            played = stats.total_games > 0

            mean_score = _mean(stats.scores)
            score_variance = _population_variance(stats.scores) if played else 0.0

            mean_placement = _mean(stats.placements) if played else 0.0
            placement_variance = _population_variance(stats.placements) if played else 0.0

            results.append(PlayerSummary(
                id=stats.id,
                rating=stats.rating,
                mean_score=mean_score,
                score_variance=score_variance,
                mean_placement=mean_placement,
                placement_variance=placement_variance,
                max_win_streak=stats.max_win_streak,
                total_wins=stats.total_wins,
                total_losses=stats.total_losses,
                total_draws=stats.total_draws
            ))

        results.sort(key=lambda s: s.mean_score, reverse=True)
        return results

    def get_tournament_stats(self) -> Dict[str, float]:
        """
        Tournament-wide accuracy averaged over recorded iterations.

        Returns:
            Dict with top_player_win_rate, top8_accuracy and iteration counts
        """
        return {
            'top_player_win_rate': self.tournament_stats.top_player_win_rate,
            'top8_accuracy': self.tournament_stats.top_cut_accuracy,
            'iterations': self.tournament_stats.iterations_recorded,
            'iterations_planned': self.iterations_planned,
        }
