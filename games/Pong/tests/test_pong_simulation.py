"""
Tests for Pong physics, AI and match rules.
"""

import math
import random
from dataclasses import replace

import pytest

from games.Pong.config import AI_PROFILES, PongRules, get_ai_profile
from games.Pong.game.ai import update_ai
from games.Pong.game.entities import Ball, Paddle
from games.Pong.game.physics.collision import check_paddle_collision, check_wall_collision
from games.Pong.game.simulation import (
    COMPUTER_POINT_TONE, PADDLE_TONE, PLAYER_POINT_TONE, WALL_TONE,
    create_state, simulate,
)
from models import Point2D
from retroverse.games.input.intent import Intent, IntentFrame

EMPTY = IntentFrame()


@pytest.fixture
def state():
    return create_state(seed=3)


class TestConfig:
    """Test rule validation and AI profiles."""

    def test_ai_profiles_match_difficulties(self):
        assert AI_PROFILES['easy'].paddle_speed == 3
        assert AI_PROFILES['medium'].reaction == 25
        assert AI_PROFILES['hard'].error == 2.5

    def test_unknown_difficulty_rejected(self):
        with pytest.raises(ValueError):
            get_ai_profile('impossible')
        with pytest.raises(ValueError):
            PongRules(difficulty='impossible')

    def test_win_score_must_be_positive(self):
        with pytest.raises(ValueError):
            PongRules(win_score=0)


class TestInitialState:
    """Test match setup."""

    def test_paddles_centered(self, state):
        assert state.player.x == 10
        assert state.computer.x == 580
        assert state.player.y == 160
        assert state.computer.center_y == 200

    def test_ball_served_from_centre(self, state):
        assert (state.ball.x, state.ball.y) == (300, 200)
        assert abs(state.ball.vx) == 5
        assert abs(state.ball.vy) == 5

    def test_computer_speed_follows_difficulty(self):
        hard = create_state(seed=1, rules=PongRules(difficulty='hard'))
        assert hard.computer.speed == 7


class TestWallCollision:
    """Test top and bottom wall reflection."""

    def test_bottom_wall_reflects_without_moving(self):
        ball = Ball(x=300, y=389, vx=5, vy=5)
        reflected = check_wall_collision(ball, 400)
        assert (reflected.vx, reflected.vy) == (5, -5)
        assert (reflected.x, reflected.y) == (300, 389)

    def test_top_wall_reflects(self):
        ball = Ball(x=300, y=10, vx=5, vy=-5)
        reflected = check_wall_collision(ball, 400)
        assert reflected.vy == 5

    def test_clear_path_no_reflection(self):
        assert check_wall_collision(Ball(x=300, y=200, vx=5, vy=5), 400) is None

    def test_simulate_reports_wall_sound(self, state):
        state = replace(state, ball=Ball(x=300, y=389, vx=5, vy=5))
        after = simulate(state, EMPTY, 1 / 60)
        assert after.ball.vy == -5
        assert (after.ball.x, after.ball.y) == (300, 389)
        assert WALL_TONE in after.sounds


class TestPaddleCollision:
    """Test paddle deflection."""

    def test_centre_hit_returns_straight_and_faster(self):
        paddle = Paddle(x=10, y=160)
        ball = Ball(x=22, y=200, vx=-5, vy=0)
        hit = check_paddle_collision(ball, paddle, 1, 1.05, 15)
        assert hit.vx == pytest.approx(5.25)
        assert hit.vy == pytest.approx(0)

    def test_edge_hit_angles_at_most_45_degrees(self):
        paddle = Paddle(x=10, y=160)
        ball = Ball(x=22, y=245, vx=-5, vy=0)
        hit = check_paddle_collision(ball, paddle, 1, 1.05, 15)
        assert hit.vx == pytest.approx(hit.vy)
        assert math.atan2(hit.vy, hit.vx) == pytest.approx(math.pi / 4)

    def test_speed_capped(self):
        paddle = Paddle(x=580, y=160)
        ball = Ball(x=578, y=200, vx=14.9, vy=0)
        hit = check_paddle_collision(ball, paddle, -1, 1.05, 15)
        assert hit.speed == pytest.approx(15)
        assert hit.vx < 0

    def test_speed_never_decreases_above_cap(self):
        paddle = Paddle(x=10, y=160)
        ball = Ball(x=22, y=200, vx=-16, vy=0)
        hit = check_paddle_collision(ball, paddle, 1, 1.05, 15)
        assert hit.speed == pytest.approx(16)

    def test_ball_moving_away_ignored(self):
        paddle = Paddle(x=10, y=160)
        ball = Ball(x=22, y=200, vx=5, vy=0)
        assert check_paddle_collision(ball, paddle, 1, 1.05, 15) is None

    def test_touching_edge_is_not_a_hit(self):
        paddle = Paddle(x=10, y=160)
        ball = Ball(x=28, y=200, vx=-5, vy=0)  # left edge at x=20, paddle right edge 20
        assert check_paddle_collision(ball, paddle, 1, 1.05, 15) is None

    def test_simulate_paddle_hit(self, state):
        state = replace(state, ball=Ball(x=27, y=200, vx=-5, vy=0))
        after = simulate(state, EMPTY, 1 / 60)
        assert after.ball.vx > 0
        assert PADDLE_TONE in after.sounds


class TestAI:
    """Test computer paddle behaviour."""

    def test_tracks_approaching_ball(self):
        paddle = Paddle(x=580, y=160, speed=5)
        ball = Ball(x=300, y=350, vx=5, vy=0)
        moved = update_ai(paddle, ball, get_ai_profile('medium'), 400, random.Random(0))
        assert moved.y == 165

    def test_dead_zone(self):
        paddle = Paddle(x=580, y=160, speed=5)
        ball = Ball(x=300, y=210, vx=5, vy=0)
        moved = update_ai(paddle, ball, get_ai_profile('medium'), 400, random.Random(0))
        assert moved.y == 160

    def test_returns_to_centre_at_half_speed(self):
        paddle = Paddle(x=580, y=260, speed=5)
        ball = Ball(x=300, y=350, vx=-5, vy=0)
        moved = update_ai(paddle, ball, get_ai_profile('medium'), 400, random.Random(0))
        assert moved.y == 257.5

    def test_clamped_to_field(self):
        paddle = Paddle(x=580, y=318, speed=5)
        ball = Ball(x=300, y=399, vx=5, vy=0)
        moved = update_ai(paddle, ball, get_ai_profile('medium'), 400, random.Random(0))
        assert moved.y == 320


class TestPlayerControl:
    """Test keyboard and pointer movement."""

    def test_held_up_moves_paddle(self, state):
        after = simulate(state, IntentFrame(held=frozenset({Intent.UP})), 1 / 60)
        assert after.player.y == 152

    def test_paddle_clamped_at_top(self, state):
        state = replace(state, player=replace(state.player, y=3))
        after = simulate(state, IntentFrame(pressed=(Intent.UP,)), 1 / 60)
        assert after.player.y == 0

    def test_pointer_centres_paddle(self, state):
        after = simulate(state, IntentFrame(pointer=Point2D(x=20, y=100)), 1 / 60)
        assert after.player.center_y == 100


class TestScoring:
    """Test points and match end."""

    def test_player_scores_when_ball_passes_right(self, state):
        state = replace(state, ball=Ball(x=598, y=100, vx=5, vy=0))
        after = simulate(state, EMPTY, 1 / 60)
        assert after.player_points == 1
        assert PLAYER_POINT_TONE in after.sounds
        assert (after.ball.x, after.ball.y) == (300, 200)
        assert not after.over

    def test_computer_scores_when_ball_passes_left(self, state):
        state = replace(state, ball=Ball(x=2, y=20, vx=-5, vy=0))
        after = simulate(state, EMPTY, 1 / 60)
        assert after.computer_points == 1
        assert after.player_points == 0
        assert COMPUTER_POINT_TONE in after.sounds

    def test_match_ends_at_win_score(self, state):
        score = state.score.model_copy(update={'score': 4})
        state = replace(state, score=score, ball=Ball(x=598, y=100, vx=5, vy=0))
        after = simulate(state, EMPTY, 1 / 60)
        assert after.over
        assert after.player_won

    def test_speed_non_decreasing_within_rally(self, state):
        previous = state
        for _ in range(3000):
            current = simulate(previous, EMPTY, 1 / 60)
            if current.over:
                break
            rally_continues = (current.player_points == previous.player_points and
                               current.computer_points == previous.computer_points)
            if rally_continues:
                assert current.ball.speed >= previous.ball.speed - 1e-9
            assert current.ball.speed <= 15 + 1e-9
            previous = current
