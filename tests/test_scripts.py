from abalone.config import GameConfig
from abalone.core import Board

from scripts.evaluate_level import run_evaluation
from scripts.profile_search import profile_levels


def test_run_evaluation_summary():
    game = GameConfig(board_size=7, level=1)
    summary = run_evaluation(game, episodes=2, max_ply=4, policy_name="random", seed=0, progress=False)

    assert summary["games_played"] == 2
    assert summary["human_wins"] + summary["machine_wins"] + summary["unfinished"] == 2
    assert summary["board_size"] == 7
    assert 0.0 <= summary["machine_winrate"] <= 1.0


def test_profile_levels_reports_each_level():
    board = Board(7, machine_opens=True)
    results = profile_levels(board, [1], repeats=1)

    assert len(results) == 1
    assert results[0]["level"] == 1
    assert results[0]["nodes"] == results[0]["candidates"] + 1
    assert results[0]["best_time_sec"] >= 0.0
