"""
Integration tests for rounds and full simulation runs.
"""

import random

import pytest

from tourneysim.tournament.config import (
    PlayerConfig,
    SimulationConfig,
    TournamentConfig,
    is_valid_config,
)
from tourneysim.tournament.match import MatchFormat, MatchOutcome
from tourneysim.tournament.pairing import Pairing
from tourneysim.tournament.players import Competitor, RatingDistribution, generate_players
from tourneysim.tournament.probability import RatingSystem
from tourneysim.tournament.runner import (
    SimulationResult,
    TournamentSimulation,
    apply_outcome,
    run_round,
)


def quick_config(**overrides) -> TournamentConfig:
    players = PlayerConfig(count=overrides.pop('count', 8))
    simulation = SimulationConfig(
        iterations=overrides.pop('iterations', 20),
        rounds=overrides.pop('rounds', 3),
        **overrides
    )
    return TournamentConfig(players=players, simulation=simulation)


class TestRunRound:
    """Tests for round orchestration."""

    @pytest.mark.parametrize("match_format", list(MatchFormat))
    def test_every_player_plays_each_round(self, match_format):
        """Even field: wins + losses + draws == rounds for everyone."""
        players = generate_players(8, 1000, 2000)
        config = SimulationConfig(format=match_format, rounds=5, draw_probability=0.2)
        rng = random.Random(11)

        for round_number in range(1, 6):
            run_round(players, round_number, config, rng)

        for p in players:
            assert p.wins + p.losses + p.draws == 5
        assert sum(p.wins for p in players) == sum(p.losses for p in players)

    def test_odd_field_one_bye_per_round(self):
        players = generate_players(5, 1000, 2000)
        config = SimulationConfig(rounds=4)
        rng = random.Random(3)

        for round_number in range(1, 5):
            played = run_round(players, round_number, config, rng)
            assert len(played) == 2

        # Two matches per round, two players per match
        assert sum(p.games_played for p in players) == 4 * 2 * 2
        assert sum(p.wins for p in players) == sum(p.losses for p in players)

    def test_all_draws(self):
        players = generate_players(6, 1000, 2000)
        config = SimulationConfig(draw_probability=1.0)
        rng = random.Random(0)

        for round_number in range(1, 4):
            run_round(players, round_number, config, rng)

        for p in players:
            assert (p.wins, p.losses, p.draws) == (0, 0, 3)

    def test_returns_played_matches(self):
        players = generate_players(4, 1000, 2000)
        played = run_round(players, 1, SimulationConfig(), random.Random(1))
        assert len(played) == 2
        for pairing, outcome in played:
            assert isinstance(pairing, Pairing)
            assert isinstance(outcome, MatchOutcome)

    def test_single_player_no_matches(self):
        players = generate_players(1, 1000, 2000)
        assert run_round(players, 1, SimulationConfig(), random.Random(1)) == []
        assert players[0].games_played == 0

    def test_bo3_counts_match_once(self):
        """A best-of-three match adds exactly one result per player."""
        players = generate_players(2, 1000, 1100)
        config = SimulationConfig(format=MatchFormat.BO3, draw_probability=0.0)
        run_round(players, 1, config, random.Random(4))

        assert sum(p.games_played for p in players) == 2
        assert sum(p.wins for p in players) == 1

    def test_unknown_competitor_is_fatal(self, monkeypatch):
        """A pairing naming someone outside the field stops the round untouched."""
        players = generate_players(2, 1000, 1100)
        monkeypatch.setattr(
            'tourneysim.tournament.runner.create_pairings',
            lambda competitors, round_number, rng: [Pairing('player-1', 'ghost')]
        )

        with pytest.raises(RuntimeError, match="unknown competitor: 'ghost'"):
            run_round(players, 1, SimulationConfig(), random.Random(0))
        assert all(p.games_played == 0 for p in players)


class TestApplyOutcome:
    """Tests for counter updates."""

    def test_decisive(self):
        a, b = Competitor('a', 1000), Competitor('b', 1000)
        apply_outcome({'a': a, 'b': b}, Pairing('a', 'b'), MatchOutcome.decisive('b', 'a'))
        assert (a.wins, a.losses, a.draws) == (0, 1, 0)
        assert (b.wins, b.losses, b.draws) == (1, 0, 0)

    def test_draw(self):
        a, b = Competitor('a', 1000), Competitor('b', 1000)
        apply_outcome({'a': a, 'b': b}, Pairing('a', 'b'), MatchOutcome.drawn())
        assert a.draws == 1 and b.draws == 1

    def test_unknown_competitor_raises(self):
        a = Competitor('a', 1000)
        with pytest.raises(RuntimeError, match="unknown competitor"):
            apply_outcome({'a': a}, Pairing('a', 'ghost'), MatchOutcome.decisive('a', 'ghost'))


class TestGeneratePlayers:
    """Tests for the player-pool factory."""

    def test_linear_spacing(self):
        players = generate_players(10, 1000, 2000, RatingDistribution.LINEAR)

        assert len(players) == 10
        assert players[0].rating == 1000
        assert players[1].rating == 1111
        assert players[4].rating == 1444
        assert players[9].rating == 2000

    def test_linear_rounds_halves_up(self):
        """Exact .5 ratings round up rather than to the nearest even value."""
        players = generate_players(3, 1000, 2001, RatingDistribution.LINEAR)
        assert [p.rating for p in players] == [1000, 1501, 2001]

        players = generate_players(2, 1000.5, 2002.5, RatingDistribution.LINEAR)
        assert [p.rating for p in players] == [1001, 2003]

    def test_ids_unique(self):
        players = generate_players(25, 1000, 2000)
        assert [p.id for p in players][:3] == ['player-1', 'player-2', 'player-3']
        assert len({p.id for p in players}) == 25

    def test_normal_within_range(self):
        players = generate_players(100, 1000, 2000, 'normal', random.Random(0))
        for p in players:
            assert 1000 <= p.rating <= 2000
            assert p.rating == int(p.rating)

    def test_normal_shape(self):
        players = generate_players(1000, 1000, 2000, RatingDistribution.NORMAL, random.Random(1))
        ratings = [p.rating for p in players]
        mean = sum(ratings) / len(ratings)
        std = (sum((r - mean) ** 2 for r in ratings) / len(ratings)) ** 0.5

        assert 1450 < mean < 1550
        assert 200 < std < 300

    def test_single_player(self):
        players = generate_players(1, 1000, 2000)
        assert len(players) == 1
        assert players[0].rating == 1000

    def test_counters_start_at_zero(self):
        for p in generate_players(3, 1000, 2000):
            assert (p.wins, p.losses, p.draws) == (0, 0, 0)

    def test_unknown_distribution(self):
        with pytest.raises(ValueError, match="Unknown rating distribution"):
            generate_players(3, 1000, 2000, 'uniform')


class TestConfig:
    """Tests for configuration validation."""

    def test_defaults_valid(self):
        config = TournamentConfig()
        assert config.validate() is config
        assert config.simulation.format is MatchFormat.BO1
        assert config.simulation.rating_system is RatingSystem.ELO

    def test_string_fields_parsed(self):
        config = quick_config(format='bo3-no-draws', rating_system='trueskill')
        assert config.simulation.format is MatchFormat.BO3_NO_DRAWS
        assert config.simulation.rating_system is RatingSystem.TRUESKILL

    def test_unknown_format_rejected_at_construction(self):
        with pytest.raises(ValueError, match="Unknown match format"):
            SimulationConfig(format='bo7')

    @pytest.mark.parametrize("players", [
        PlayerConfig(count=1),
        PlayerConfig(min_rating=2000, max_rating=1000),
        PlayerConfig(min_rating=1500, max_rating=1500),
        PlayerConfig(distribution='normal', min_rating=1000, max_rating=1200),
    ])
    def test_invalid_players(self, players):
        config = TournamentConfig(players=players)
        assert not is_valid_config(config)
        with pytest.raises(ValueError):
            config.validate()

    @pytest.mark.parametrize("simulation", [
        SimulationConfig(iterations=0),
        SimulationConfig(rounds=0),
        SimulationConfig(draw_probability=-0.1),
        SimulationConfig(draw_probability=1.5),
    ])
    def test_invalid_simulation(self, simulation):
        assert not is_valid_config(TournamentConfig(simulation=simulation))

    def test_normal_with_wide_range(self):
        config = TournamentConfig(players=PlayerConfig(distribution='normal', min_rating=1000, max_rating=2000))
        assert is_valid_config(config)

    def test_draw_probability_bounds_inclusive(self):
        assert is_valid_config(TournamentConfig(simulation=SimulationConfig(draw_probability=0.0)))
        assert is_valid_config(TournamentConfig(simulation=SimulationConfig(draw_probability=1.0)))


class TestTournamentSimulation:
    """Tests for full simulation runs."""

    def test_run_returns_summary(self):
        simulation = TournamentSimulation(quick_config(seed=1), verbose=False)
        result = simulation.run()

        assert isinstance(result, SimulationResult)
        assert result.iterations_completed == 20
        assert result.iterations_planned == 20
        assert not result.interrupted
        assert len(result.players) == 8
        assert result.matches_played == 20 * 3 * 4

        scores = [p.mean_score for p in result.players]
        assert scores == sorted(scores, reverse=True)

    def test_seeded_runs_reproducible(self):
        first = TournamentSimulation(quick_config(seed=99, format='bo3'), verbose=False).run()
        second = TournamentSimulation(quick_config(seed=99, format='bo3'), verbose=False).run()

        assert [p.to_dict() for p in first.players] == [p.to_dict() for p in second.players]
        assert first.tournament_stats == second.tournament_stats

    def test_counters_reset_each_iteration(self):
        simulation = TournamentSimulation(quick_config(seed=5, rounds=4), verbose=False)
        simulation.run()
        for p in simulation.players:
            assert p.games_played == 4

    def test_mean_score_bounded_by_rounds(self):
        result = TournamentSimulation(quick_config(seed=2, rounds=3), verbose=False).run()
        for p in result.players:
            assert 0 <= p.mean_score <= 3
            assert 1 <= p.mean_placement <= 8

    def test_stronger_field_scores_higher(self):
        """With a wide rating spread the top-rated player out-scores the bottom."""
        config = TournamentConfig(
            players=PlayerConfig(count=8, min_rating=1000, max_rating=3000),
            simulation=SimulationConfig(iterations=200, rounds=3, seed=8)
        )
        result = TournamentSimulation(config, verbose=False).run()
        by_id = {p.id: p for p in result.players}
        assert by_id['player-8'].mean_score > by_id['player-1'].mean_score

    def test_accepts_prebuilt_players(self):
        players = [Competitor('x', 1200), Competitor('y', 1300)]
        result = TournamentSimulation(quick_config(seed=3), players=players, verbose=False).run()
        assert {p.id for p in result.players} == {'x', 'y'}

    def test_invalid_config_rejected(self):
        with pytest.raises(ValueError):
            TournamentSimulation(quick_config(iterations=0), verbose=False)

    def test_interrupt_keeps_completed_iterations(self, monkeypatch):
        simulation = TournamentSimulation(quick_config(seed=4, iterations=10), verbose=False)
        original = simulation.run_iteration
        calls = {'n': 0}

        def flaky_iteration():
            calls['n'] += 1
            if calls['n'] == 4:
                raise KeyboardInterrupt
            return original()

        monkeypatch.setattr(simulation, 'run_iteration', flaky_iteration)
        result = simulation.run()

        assert result.interrupted
        assert result.iterations_completed == 3
        assert result.tournament_stats['iterations'] == 3
        for p in simulation.stats.player_stats.values():
            assert len(p.scores) == 3

    def test_interrupt_after_recording_is_counted(self, monkeypatch):
        """An interrupt right after recording still counts that iteration."""
        simulation = TournamentSimulation(quick_config(seed=5, iterations=10), verbose=False)
        original = simulation.stats.record_iteration_results
        calls = {'n': 0}

        def record_then_interrupt(competitors):
            original(competitors)
            calls['n'] += 1
            if calls['n'] == 3:
                raise KeyboardInterrupt

        monkeypatch.setattr(simulation.stats, 'record_iteration_results', record_then_interrupt)
        result = simulation.run()

        assert result.interrupted
        assert result.iterations_completed == 3
        assert result.tournament_stats['iterations'] == 3
        assert result.tournament_stats['iterations_planned'] == 10
        # 8 players, 3 rounds, 4 matches per round
        assert result.matches_played == 3 * 3 * 4

    def test_verbose_output(self, capsys):
        TournamentSimulation(quick_config(seed=6, iterations=2), verbose=True, show_iterations=True).run()
        out = capsys.readouterr().out
        assert "Players: 8" in out
        assert "Iteration 2 Results:" in out
        assert "Winner of iteration 1" in out
        assert "Simulation completed" in out
