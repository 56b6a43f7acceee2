"""Collision detection and physics for Pong.

Handles ball-wall and ball-paddle collisions.
"""

import math
from typing import Optional

from retroverse.games.collision import aabb_overlap

from ..entities.ball import Ball
from ..entities.paddle import Paddle

MAX_BOUNCE_ANGLE = math.pi / 4


def check_wall_collision(ball: Ball, field_height: float) -> Optional[Ball]:
    """Reflect the ball if its next position would leave the field vertically.

    The reflected ball keeps its current position for this tick; only
    the vertical velocity flips.

    Args:
        ball: Ball to check
        field_height: Field height in pixels

    Returns:
        Reflected ball, or None if the next move is clear
    """
    next_y = ball.y + ball.vy
    if ball.vy < 0 and next_y - ball.radius <= 0:
        return ball.bounce_vertical()
    if ball.vy > 0 and next_y + ball.radius >= field_height:
        return ball.bounce_vertical()
    return None


def check_paddle_collision(
    ball: Ball,
    paddle: Paddle,
    direction: int,
    speedup: float,
    max_speed: float,
) -> Optional[Ball]:
    """Deflect the ball off a paddle.

    Only a ball moving toward the paddle can hit it, which prevents
    double bounces while the ball is still inside the paddle. The
    outgoing angle is proportional to the offset from the paddle centre
    (at most 45 degrees) and the speed grows by ``speedup`` up to
    ``max_speed``, never decreasing.

    Args:
        ball: Ball after this tick's movement
        paddle: Paddle to test
        direction: +1 sends the ball right (player paddle), -1 left
        speedup: Speed multiplier per hit
        max_speed: Speed cap in pixels/tick

    Returns:
        Deflected ball, or None if there was no hit
    """
    if ball.vx * direction >= 0:
        return None
    if not aabb_overlap(ball.bounds, paddle):
        return None

    hit_position = (ball.y - paddle.center_y) / (paddle.height / 2)
    hit_position = max(-1.0, min(1.0, hit_position))
    angle = hit_position * MAX_BOUNCE_ANGLE

    speed = ball.speed
    new_speed = max(speed, min(speed * speedup, max_speed))
    return ball.with_velocity(direction * new_speed * math.cos(angle),
                              new_speed * math.sin(angle))
