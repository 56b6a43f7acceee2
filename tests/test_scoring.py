"""
Tests for ScoreKeeper and the difficulty interval helpers.

Run with: pytest tests/test_scoring.py -v
"""

from unittest.mock import Mock

import pytest

from models import ScoreState
from retroverse.games.persistence import InMemoryHighScoreStore
from retroverse.games.scoring import ScoreKeeper, decaying_interval, speed_interval


class TestScoreKeeper:
    """Immutable score bookkeeping."""

    def test_operations_return_new_keepers(self):
        keeper = ScoreKeeper()
        updated = keeper.add_points(10).record_combo().record_combo()
        assert updated.state.score == 10
        assert updated.state.combo == 2
        assert keeper.state == ScoreState()

    def test_negative_points_rejected(self):
        with pytest.raises(ValueError):
            ScoreKeeper().add_points(-1)

    def test_reset_combo(self):
        keeper = ScoreKeeper(ScoreState(combo=3))
        assert keeper.reset_combo().state.combo == 0
        zero = ScoreKeeper()
        assert zero.reset_combo() is zero

    def test_levels_never_decrease(self):
        keeper = ScoreKeeper(ScoreState(level=4))
        assert keeper.raise_level(2).state.level == 4
        assert keeper.raise_level(6).state.level == 6
        assert keeper.next_level().state.level == 5


class TestHighScore:
    """Committing to a PersistencePort."""

    def test_commit_writes_strictly_higher_score(self):
        store = InMemoryHighScoreStore({'snake': 10})
        keeper = ScoreKeeper(ScoreState(score=12, high_score=10)).commit_high_score(store, 'snake')
        assert store.get_high_score('snake') == 12
        assert keeper.state.high_score == 12

    def test_equal_score_is_not_written(self):
        store = InMemoryHighScoreStore({'snake': 10})
        ScoreKeeper(ScoreState(score=10, high_score=10)).commit_high_score(store, 'snake')
        assert store.writes == 0

    def test_store_failure_is_logged_not_raised(self):
        store = Mock()
        store.set_high_score.side_effect = OSError("disk full")
        keeper = ScoreKeeper(ScoreState(score=5)).commit_high_score(store, 'pong')
        assert keeper.state.high_score == 5

    def test_load(self):
        store = InMemoryHighScoreStore({'tetris': 900})
        assert ScoreKeeper.load(store, 'tetris').state.high_score == 900
        assert ScoreKeeper.load(store, 'pong').state.high_score == 0

    def test_load_failure_reads_zero(self):
        store = Mock()
        store.get_high_score.side_effect = OSError("unreadable")
        assert ScoreKeeper.load(store, 'pong').state.high_score == 0


class TestIntervals:
    """Difficulty curves."""

    def test_speed_interval(self):
        assert speed_interval(8) == pytest.approx(0.125)
        with pytest.raises(ValueError):
            speed_interval(0)

    @pytest.mark.parametrize('level,expected', [(1, 0.8), (2, 0.68), (20, 0.1)])
    def test_decaying_interval(self, level, expected):
        assert decaying_interval(800, 0.85, level, 100) == pytest.approx(expected)
