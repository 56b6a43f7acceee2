"""
Tests for SpaceInvadersMode.
"""

from dataclasses import replace
from types import SimpleNamespace
from unittest.mock import patch

import pygame
import pytest

from games.SpaceInvaders.game.entities import Enemy
from games.SpaceInvaders.game_mode import SpaceInvadersMode
from models.render import TextPrimitive
from retroverse.games.audio import NullAudio
from retroverse.games.game_state import GameState
from retroverse.games.host import GameHost
from retroverse.games.input.input_manager import InputManager
from retroverse.games.input.intent import Intent, IntentFrame
from retroverse.games.input.sources.keyboard import KeyboardInputSource
from retroverse.games.persistence import InMemoryHighScoreStore
from retroverse.games.render import RecordingSurface


def press(*intents):
    return IntentFrame(pressed=tuple(intents))


def texts(frame):
    return [p.text for p in frame if isinstance(p, TextPrimitive)]


@pytest.fixture
def store():
    return InMemoryHighScoreStore({'space_invaders': 50})


@pytest.fixture
def game(store):
    return SpaceInvadersMode(seed=8, store=store, audio=NullAudio(), enemy_fire_rate=0.0)


class TestMetadata:
    """Test plugin metadata."""

    def test_arguments(self):
        names = [arg['name'] for arg in SpaceInvadersMode.get_arguments()]
        assert names == ['--lives', '--enemy-fire-rate', '--seed']

    def test_tick_rate(self, game):
        assert game.interval == pytest.approx(1 / 75)
        assert game.screen_size == (500, 500)

    def test_invalid_lives(self):
        with pytest.raises(ValueError):
            SpaceInvadersMode(lives=0)


class TestPlay:
    """Test play through the state machine."""

    def test_waiting_overlay(self, game):
        assert 'SPACE INVADERS' in texts(game.frame())

    def test_tap_fires_once_playing(self, game):
        game.handle_input(press(Intent.START))
        game.handle_input(press(Intent.ACTION))
        game.step(game.interval)
        assert len(game.sim_state.bullets) == 1

    def test_landing_ends_game_and_keeps_higher_stored_score(self, game, store):
        game.handle_input(press(Intent.START))
        score = game.sim_state.score.model_copy(update={'score': 40})
        game._state = replace(game.sim_state, enemies=(Enemy(x=200, y=440),), score=score)
        game.step(game.interval)

        assert game.state == GameState.GAME_OVER
        assert store.get_high_score('space_invaders') == 50
        lines = texts(game.frame())
        assert 'FINAL SCORE: 40' in lines
        assert 'HIGH SCORE: 50' in lines

    def test_reset_restores_formation(self, game):
        initial = game.sim_state
        game.handle_input(press(Intent.START))
        for _ in range(10):
            game.step(game.interval)
        game.machine.lose()
        game.handle_input(press(Intent.RESET))
        assert game.sim_state.enemies == initial.enemies
        assert game.sim_state.lives == 3


class TestDrawing:
    """Test frame primitives."""

    def test_hud(self, game):
        game.handle_input(press(Intent.START))
        lines = texts(game.frame())
        assert 'SCORE: 0' in lines
        assert 'LEVEL: 1' in lines
        assert 'LIVES: 3' in lines


class TestHosted:
    """Test the mode under GameHost at the default frame rate."""

    def test_sixty_fps_host_steps_every_frame_without_stall_warnings(self, game):
        keyboard = KeyboardInputSource()
        host = GameHost(game, InputManager(keyboard), RecordingSurface())
        host.start(0.0)
        keyboard.handle_event(SimpleNamespace(type=pygame.KEYDOWN, key=pygame.K_RETURN))
        with patch('retroverse.games.scheduler.log') as log:
            for frame in range(1, 601):
                host.tick(frame / 60)
        log.warning.assert_not_called()
        assert host.scheduler.ticks_simulated >= 590
