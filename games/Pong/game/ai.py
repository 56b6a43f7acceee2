"""Computer paddle AI.

The paddle chases the ball only while it approaches, with a dead zone
and a random aiming error that depend on difficulty. While the ball
moves away it drifts back toward the field centre at half speed.
"""
import random

from games.Pong.config import AIProfile

from .entities.ball import Ball
from .entities.paddle import Paddle


def update_ai(paddle: Paddle, ball: Ball, profile: AIProfile,
              field_height: float, rng: random.Random) -> Paddle:
    """Move the computer paddle for one tick."""
    paddle_center = paddle.center_y

    if ball.vx > 0:
        error = rng.uniform(-profile.error, profile.error)
        if paddle_center < ball.y - profile.reaction + error:
            return paddle.move(paddle.speed, field_height)
        if paddle_center > ball.y + profile.reaction + error:
            return paddle.move(-paddle.speed, field_height)
        return paddle

    middle = field_height / 2
    if paddle_center < middle - profile.return_band:
        return paddle.move(paddle.speed / 2, field_height)
    if paddle_center > middle + profile.return_band:
        return paddle.move(-paddle.speed / 2, field_height)
    return paddle
