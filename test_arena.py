"""
Tests for tier-vs-tier matches.
"""
import json
import os

import pytest

from reversi.arena import Arena, TierPlayer, ELORatingSystem


def make_arena(*tiers):
    arena = Arena()
    for seed, tier in enumerate(tiers):
        arena.add_player(TierPlayer(tier, tier, seed=seed))
    return arena


def test_elo_update_is_zero_sum():
    elo = ELORatingSystem(k=32, initial_rating=1500.0)
    record = elo.update_ratings('a', 'b', 1.0)

    assert record['rating_a_after'] == pytest.approx(1516.0)
    assert record['rating_b_after'] == pytest.approx(1484.0)
    assert elo.get_rating('a') + elo.get_rating('b') == pytest.approx(3000.0)
    assert [p['player_id'] for p in elo.get_leaderboard()] == ['a', 'b']


def test_elo_save_and_load(tmp_path):
    elo = ELORatingSystem(k=16)
    elo.update_ratings('easy', 'hard', 0.0)
    path = str(tmp_path / "elo.json")
    elo.save_ratings(path)
    with open(path) as f:
        assert json.load(f)["players"]["easy"]["games_played"] == 1

    loaded = ELORatingSystem.load_ratings(path)
    assert loaded.k == 16
    assert loaded.ratings == pytest.approx(elo.ratings)
    assert loaded.games_played == {'easy': 1, 'hard': 1}


def test_new_players_start_at_the_initial_rating():
    elo = ELORatingSystem(initial_rating=1200.0)
    assert elo.get_rating('easy') == 1200.0

    elo.add_player('hard', rating=1600.0)
    elo.add_player('hard', rating=1000.0)
    assert elo.get_rating('hard') == 1600.0, "Adding a known player keeps its rating"
    assert elo.get_leaderboard() == [{'player_id': 'hard', 'rating': 1600.0, 'games_played': 0}]


def test_play_game():
    arena = make_arena('normal', 'hard')
    # Both tiers are deterministic, so the same game is played twice
    first = arena.play_game('normal', 'hard')
    assert first in (0.0, 0.5, 1.0)
    assert arena.play_game('normal', 'hard') == first


def test_unknown_player():
    arena = make_arena('easy', 'hard')
    with pytest.raises(ValueError):
        arena.play_game('easy', 'expert')


def test_tournament_needs_two_players():
    with pytest.raises(ValueError):
        make_arena('easy').run_tournament(games=1, show_progress=False)


def test_run_tournament(tmp_path):
    arena = make_arena('easy', 'normal', 'hard')
    results = arena.run_tournament(games=2, show_progress=False)

    assert results['games_played'] == 6
    assert len(results['matchups']) == 3
    for matchup in results['matchups'].values():
        assert matchup['games_played'] == 2
        assert matchup['wins1'] + matchup['wins2'] + matchup['draws'] == 2
    assert sum(p['games_played'] for p in results['leaderboard']) == 12

    path = str(tmp_path / "out" / "results.json")
    arena.save_results(results, path)
    assert os.path.exists(str(tmp_path / "out" / "results_elo.json"))
    with open(path) as f:
        assert json.load(f)['games_played'] == 6


if __name__ == "__main__":
    pytest.main([__file__])
