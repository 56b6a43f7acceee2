"""Pure Pong simulation.

One call advances the match by one tick (1/60 s): player paddle, AI
paddle, ball kinematics, wall and paddle deflection, then scoring.
"""
import random
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from models import ScoreState
from retroverse.games.audio import Tone, Waveform
from retroverse.games.input.intent import Intent, IntentFrame
from retroverse.games.scoring import ScoreKeeper

from games.Pong.config import PongRules
from .ai import update_ai
from .entities import Ball, Paddle
from .physics.collision import check_paddle_collision, check_wall_collision

WALL_TONE = Tone(150, 0.1, Waveform.SQUARE)
PADDLE_TONE = Tone(300, 0.2, Waveform.SINE)
PLAYER_POINT_TONE = Tone(700, 0.3, Waveform.SAWTOOTH)
COMPUTER_POINT_TONE = Tone(400, 0.3, Waveform.SAWTOOTH)


@dataclass(frozen=True)
class PongState:
    """Complete Pong match state.

    ``score.score`` holds the player's points; the computer's points are
    kept separately since they never count toward the high score.
    """
    player: Paddle
    computer: Paddle
    ball: Ball
    computer_points: int = 0
    score: ScoreState = field(default_factory=ScoreState)
    over: bool = False
    seed: int = 0
    sounds: Tuple[Tone, ...] = ()
    pointer_y: Optional[float] = None
    rules: PongRules = field(default_factory=PongRules)

    @property
    def player_points(self) -> int:
        return self.score.score

    @property
    def player_won(self) -> bool:
        return self.over and self.player_points > self.computer_points


def serve(rng: random.Random, rules: PongRules) -> Ball:
    """Ball at the centre moving diagonally in a random direction."""
    vx = rules.ball_speed * (1 if rng.random() > 0.5 else -1)
    vy = rules.ball_speed * (1 if rng.random() > 0.5 else -1)
    return Ball(x=rules.width / 2, y=rules.height / 2, vx=vx, vy=vy, radius=rules.ball_radius)


def create_state(seed: int, high_score: int = 0, rules: Optional[PongRules] = None) -> PongState:
    rules = rules or PongRules()
    rng = random.Random(seed)
    paddle_y = (rules.height - rules.paddle_height) / 2
    player = Paddle(x=rules.paddle_margin, y=paddle_y, width=rules.paddle_width,
                    height=rules.paddle_height, speed=rules.player_speed)
    computer = Paddle(x=rules.ai_x, y=paddle_y, width=rules.paddle_width,
                      height=rules.paddle_height, speed=rules.ai.paddle_speed)
    return PongState(
        player=player,
        computer=computer,
        ball=serve(rng, rules),
        score=ScoreState(high_score=high_score),
        seed=rng.randrange(2 ** 31),
        rules=rules,
    )


def move_player(state: PongState, frame: IntentFrame) -> Tuple[Paddle, Optional[float]]:
    """Keyboard moves the paddle by its speed; a new pointer position centres it."""
    rules = state.rules
    paddle = state.player
    pointer_y = state.pointer_y
    up = frame.is_active(Intent.UP)
    down = frame.is_active(Intent.DOWN)
    if up and not down:
        paddle = paddle.move(-paddle.speed, rules.height)
    elif down and not up:
        paddle = paddle.move(paddle.speed, rules.height)
    elif frame.pointer is not None and frame.pointer.y != state.pointer_y:
        pointer_y = frame.pointer.y
        if 0 < pointer_y < rules.height:
            paddle = paddle.center_on(pointer_y, rules.height)
    return paddle, pointer_y


def simulate(state: PongState, frame: IntentFrame, dt: float) -> PongState:
    """Advance the match one tick.

    Args:
        state: Current state
        frame: Held/pressed intents and pointer for this tick
        dt: Step length in seconds (kinematics are per tick)

    Returns:
        New state
    """
    if state.over:
        return replace(state, sounds=())

    rules = state.rules
    rng = random.Random(state.seed)
    sounds = []

    player, pointer_y = move_player(state, frame)
    computer = update_ai(state.computer, state.ball, rules.ai, rules.height, rng)

    ball = state.ball
    reflected = check_wall_collision(ball, rules.height)
    if reflected is not None:
        ball = reflected
        sounds.append(WALL_TONE)
    else:
        ball = ball.moved()

    for paddle, direction in ((player, 1), (computer, -1)):
        deflected = check_paddle_collision(ball, paddle, direction, rules.speedup, rules.max_ball_speed)
        if deflected is not None:
            ball = deflected
            sounds.append(PADDLE_TONE)
            break

    keeper = ScoreKeeper(state.score)
    computer_points = state.computer_points
    scored = False
    if ball.x > rules.width:
        keeper = keeper.add_points(1)
        sounds.append(PLAYER_POINT_TONE)
        scored = True
    elif ball.x < 0:
        computer_points += 1
        sounds.append(COMPUTER_POINT_TONE)
        scored = True

    over = keeper.state.score >= rules.win_score or computer_points >= rules.win_score
    if scored and not over:
        ball = serve(rng, rules)

    return replace(
        state,
        player=player,
        computer=computer,
        ball=ball,
        computer_points=computer_points,
        score=keeper.state,
        over=over,
        seed=rng.randrange(2 ** 31),
        sounds=tuple(sounds),
        pointer_y=pointer_y,
    )
