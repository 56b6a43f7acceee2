"""
Tests for BaseGame: input gating, sounds, high scores and overlays.

Run with: pytest tests/test_base_game.py -v
"""

from unittest.mock import Mock, patch

import pytest

from models import Point2D
from models.render import RectPrimitive, TextPrimitive
from retroverse.games.game_state import GameState
from retroverse.games.input.intent import Intent, IntentFrame


def press(*intents):
    return IntentFrame(pressed=tuple(intents))


def texts(frame):
    return [p.text for p in frame if isinstance(p, TextPrimitive)]


def play_session(game, actions=0):
    game.handle_input(press(Intent.START))
    for i in range(game.sim_state.limit):
        if i < actions:
            game.handle_input(press(Intent.ACTION))
        game.step(0.1)


class TestMetadata:
    """Plugin class attributes."""

    def test_arguments_include_seed(self, counter_game):
        names = [arg['name'] for arg in type(counter_game).get_arguments()]
        assert names == ['--limit', '--seed']

    def test_info(self, counter_game):
        info = type(counter_game).get_info()
        assert info['name'] == 'Counter'
        assert info['game_id'] == 'counter'

    def test_unknown_kwargs_ignored(self, counter_game):
        game = type(counter_game)(seed=1, difficulty='hard')
        assert game.state == GameState.WAITING


class TestInputGating:
    """Intents move entities only while playing."""

    def test_no_steps_while_waiting(self, counter_game):
        counter_game.step(0.1)
        assert counter_game.sim_state.ticks == 0

    def test_presses_before_start_are_dropped(self, counter_game):
        counter_game.handle_input(press(Intent.ACTION))
        counter_game.handle_input(press(Intent.START))
        counter_game.step(0.1)
        assert counter_game.get_score() == 0
        assert counter_game.sim_state.ticks == 1

    def test_presses_buffer_until_next_step(self, counter_game, audio):
        counter_game.handle_input(press(Intent.START))
        counter_game.handle_input(press(Intent.ACTION))
        counter_game.step(0.1)
        counter_game.step(0.1)
        assert counter_game.get_score() == 1
        assert len(audio.played) == 1

    def test_pause_freezes_simulation(self, counter_game):
        counter_game.handle_input(press(Intent.START))
        counter_game.handle_input(press(Intent.PAUSE_TOGGLE))
        counter_game.step(0.1)
        assert counter_game.sim_state.ticks == 0
        assert 'PAUSED' in texts(counter_game.frame())
        counter_game.handle_input(press(Intent.PAUSE_TOGGLE))
        counter_game.step(0.1)
        assert counter_game.sim_state.ticks == 1

    def test_held_transitions_never_reach_simulation(self, counter_game):
        counter_game.handle_input(press(Intent.START))
        counter_game.handle_input(IntentFrame(held=frozenset({Intent.START, Intent.LEFT})))
        with patch.object(counter_game, 'simulate', wraps=counter_game.simulate) as simulate:
            counter_game.step(0.1)
        frame = simulate.call_args[0][1]
        assert frame.held == frozenset({Intent.LEFT})

    def test_pointer_persists_between_frames(self, counter_game):
        counter_game.handle_input(press(Intent.START))
        counter_game.handle_input(IntentFrame(pointer=Point2D(x=5, y=6)))
        counter_game.handle_input(IntentFrame())
        with patch.object(counter_game, 'simulate', wraps=counter_game.simulate) as simulate:
            counter_game.step(0.1)
        assert simulate.call_args[0][1].pointer == Point2D(x=5, y=6)

    def test_presses_survive_failed_step(self, counter_game):
        counter_game.handle_input(press(Intent.START))
        counter_game.handle_input(press(Intent.ACTION))
        with patch.object(counter_game, 'simulate', side_effect=RuntimeError("bug")):
            with pytest.raises(RuntimeError):
                counter_game.step(0.1)
        counter_game.step(0.1)
        assert counter_game.get_score() == 1


class TestSessions:
    """Game over, high scores and reset."""

    def test_game_over_commits_high_score(self, counter_game, store):
        with patch('retroverse.games.base_game.emit_record') as emit:
            play_session(counter_game, actions=2)
        assert counter_game.state == GameState.GAME_OVER
        assert store.get_high_score('counter') == 2
        assert counter_game.high_score == 2
        emit.assert_called_once()
        assert emit.call_args[0][1]['score'] == 2
        assert emit.call_args[0][1]['seed'] == 3

    def test_lower_score_is_not_written(self, counter_game, store):
        store.set_high_score('counter', 10)
        game = type(counter_game)(seed=3, store=store)
        play_session(game, actions=1)
        assert store.get_high_score('counter') == 10
        assert store.writes == 1

    def test_reset_gives_identical_initial_state(self, counter_game):
        initial = counter_game.sim_state
        play_session(counter_game, actions=3)
        counter_game.handle_input(press(Intent.RESET))
        assert counter_game.state == GameState.WAITING
        assert counter_game.sim_state == initial.__class__(
            limit=initial.limit, score=initial.score.model_copy(update={'high_score': 3}), seed=3)

    def test_game_over_overlay(self, counter_game):
        play_session(counter_game, actions=1)
        lines = texts(counter_game.frame())
        assert lines[0] == 'GAME OVER'
        assert 'Score: 1' in lines

    def test_shutdown_persists_score_mid_session(self, counter_game, store):
        counter_game.handle_input(press(Intent.START))
        counter_game.handle_input(press(Intent.ACTION))
        counter_game.step(0.1)
        counter_game.shutdown()
        assert store.get_high_score('counter') == 1


class TestPorts:
    """Audio failures never reach the simulation."""

    def test_failing_audio_is_logged(self, counter_game):
        audio = Mock()
        audio.play.side_effect = RuntimeError("mixer gone")
        game = type(counter_game)(seed=3, audio=audio)
        game.handle_input(press(Intent.START))
        game.handle_input(press(Intent.ACTION))
        game.step(0.1)
        assert game.get_score() == 1
        audio.play.assert_called_once()


class TestFrame:
    """Overlay drawing."""

    def test_waiting_overlay(self, counter_game):
        frame = counter_game.frame()
        overlay = [p for p in frame if isinstance(p, RectPrimitive) and p.width == 100]
        assert len(overlay) == 1
        assert overlay[0].color.a == 178
        assert texts(frame) == ['COUNTER', 'Press SPACE or tap to start']

    def test_no_overlay_while_playing(self, counter_game):
        counter_game.handle_input(press(Intent.START))
        assert texts(counter_game.frame()) == []
