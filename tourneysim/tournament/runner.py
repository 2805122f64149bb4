"""
Simulation runner that orchestrates repeated Swiss tournaments.

Handles round execution, counter updates, statistics recording and progress
reporting.
"""

import random
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from tqdm import tqdm

from tourneysim.tournament.config import SimulationConfig, TournamentConfig
from tourneysim.tournament.match import MatchOutcome, resolve_match
from tourneysim.tournament.pairing import Pairing, create_pairings
from tourneysim.tournament.players import Competitor, generate_players
from tourneysim.tournament.stats import PlayerSummary, SimulationStats
from tourneysim.tournament.display import (
    format_completion,
    format_iteration_results,
    format_simulation_header,
)


def _lookup(competitors_by_id: Dict[str, Competitor], competitor_id: str) -> Competitor:
    try:
        return competitors_by_id[competitor_id]
    except KeyError:
        raise RuntimeError(f"Pairing references unknown competitor: {competitor_id!r}") from None


def apply_outcome(competitors_by_id: Dict[str, Competitor], pairing: Pairing, outcome: MatchOutcome):
    """
    Apply one match result to the competitors' counters.

    Raises:
        RuntimeError: If the pairing names a competitor not in the field
    """
    a = _lookup(competitors_by_id, pairing.competitor_a)
    b = _lookup(competitors_by_id, pairing.competitor_b)

    if outcome.draw:
        a.draws += 1
        b.draws += 1
    else:
        competitors_by_id[outcome.winner_id].wins += 1
        competitors_by_id[outcome.loser_id].losses += 1


def run_round(
    competitors: Sequence[Competitor],
    round_number: int,
    config: SimulationConfig,
    rng: random.Random
) -> List[Tuple[Pairing, MatchOutcome]]:
    """
    Play one round: pair the field, resolve every match, update counters.

    Args:
        competitors: The field (counters are mutated in place)
        round_number: 1-based round number
        config: Match format, draw probability and rating system
        rng: Random source shared by pairing and match resolution

    Returns:
        List of (pairing, outcome) for every match played
    """
    by_id = {c.id: c for c in competitors}
    pairings = create_pairings(competitors, round_number, rng)

    played = []
    for pairing in pairings:
        outcome = resolve_match(
            _lookup(by_id, pairing.competitor_a),
            _lookup(by_id, pairing.competitor_b),
            config.format,
            config.draw_probability,
            config.rating_system,
            rng
        )
        apply_outcome(by_id, pairing, outcome)
        played.append((pairing, outcome))

    return played


@dataclass
class SimulationResult:
    """Complete results of a simulation run."""
    players: List[PlayerSummary]
    tournament_stats: Dict[str, float]
    iterations_completed: int
    iterations_planned: int
    matches_played: int = 0
    elapsed_seconds: float = 0.0
    interrupted: bool = False
    metadata: Dict = field(default_factory=dict)


class TournamentSimulation:
    """
    Runs many independent Swiss tournaments over one competitor pool.

    Usage:
        simulation = TournamentSimulation(config)
        result = simulation.run()
    """

    def __init__(
        self,
        config: TournamentConfig,
        players: Optional[List[Competitor]] = None,
        rng: Optional[random.Random] = None,
        verbose: bool = True,
        show_iterations: bool = False
    ):
        """
        Initialize the simulation.

        Args:
            config: Tournament configuration (validated here)
            players: Optional pre-built pool (generated from config if None)
            rng: Random source (seeded from config.simulation.seed if None)
            verbose: Print the run header and timing line
            show_iterations: Print standings after every iteration
        """
        self.config = config.validate()
        self.rng = rng or random.Random(config.simulation.seed)
        self.verbose = verbose
        self.show_iterations = show_iterations

        if players is None:
            p = config.players
            players = generate_players(p.count, p.min_rating, p.max_rating, p.distribution, self.rng)
        self.players = players

        self.stats = SimulationStats(self.players, config.simulation.iterations)

    def run_iteration(self) -> int:
        """
        Play one full tournament from fresh counters.

        Returns:
            Number of matches played
        """
        for player in self.players:
            player.reset()

        matches = 0
        for round_number in range(1, self.config.simulation.rounds + 1):
            matches += len(run_round(self.players, round_number, self.config.simulation, self.rng))
        return matches

    def run(self) -> SimulationResult:
        """
        Run every iteration and aggregate the results.

        A KeyboardInterrupt stops the run between iterations; the partial
        iteration is discarded and the result is marked interrupted.

        Returns:
            SimulationResult with per-player summaries and accuracy stats
        """
        sim = self.config.simulation

        if self.verbose:
            print(format_simulation_header(
                len(self.players),
                sim.format.value,
                sim.rating_system.value,
                sim.iterations,
                sim.rounds,
                sim.draw_probability
            ))

        iterations = range(1, sim.iterations + 1)
        if sim.show_progress:
            iterations = tqdm(iterations, desc="Simulating", unit="iter")

        start_time = time.time()
        completed = 0
        matches_played = 0
        interrupted = False

        try:
            for i in iterations:
                matches = self.run_iteration()
                self.stats.record_iteration_results(self.players)
                completed += 1
                matches_played += matches

                if self.show_iterations:
                    print(format_iteration_results(i, self.players))
                    print()
        except KeyboardInterrupt:
            interrupted = True
            if self.stats.tournament_stats.iterations_recorded > completed:
                # Stopped after recording but before the loop counted it
                completed += 1
                matches_played += matches
            if self.verbose:
                print(f"\nInterrupted after {completed} of {sim.iterations} iterations")

        elapsed = time.time() - start_time

        result = SimulationResult(
            players=self.stats.get_overall_results(),
            tournament_stats=self.stats.get_tournament_stats(),
            iterations_completed=completed,
            iterations_planned=sim.iterations,
            matches_played=matches_played,
            elapsed_seconds=elapsed,
            interrupted=interrupted,
            metadata={
                'format': sim.format.value,
                'rating_system': sim.rating_system.value,
                'rounds': sim.rounds,
                'draw_probability': sim.draw_probability,
                'seed': sim.seed,
            }
        )

        if self.verbose:
            print(format_completion(elapsed, completed, matches_played))

        return result
