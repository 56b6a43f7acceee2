"""Invader formation.

All invaders share one horizontal direction. When any invader would
reach a side wall the whole formation drops one row and reverses in
the same tick, without moving sideways.
"""

from typing import Sequence, Tuple

from games.SpaceInvaders import config

from .entities import Enemy, EnemyType

Formation = Tuple[Enemy, ...]


def formation_size(level: int) -> Tuple[int, int]:
    """(rows, cols) for a level; denser formations as the level rises."""
    rows = min(3 + level // 2, config.MAX_ROWS)
    cols = min(6 + level // 3, config.MAX_COLS)
    return rows, cols


def create_formation(level: int) -> Formation:
    """Fresh formation for ``level`` in row-major order."""
    rows, cols = formation_size(level)
    step_x = config.ENEMY_WIDTH + config.ENEMY_PADDING
    step_y = config.ENEMY_HEIGHT + config.ENEMY_PADDING
    return tuple(
        Enemy(
            x=col * step_x + config.ENEMY_PADDING,
            y=row * step_y + config.FORMATION_TOP,
            kind=EnemyType.for_row(row),
        )
        for row in range(rows)
        for col in range(cols)
    )


def at_edge(enemies: Sequence[Enemy], direction: int, speed: float, field_width: float) -> bool:
    """True if moving one more step would take an invader to a side wall."""
    for enemy in enemies:
        if direction == 1 and enemy.x + enemy.width + speed >= field_width:
            return True
        if direction == -1 and enemy.x - speed <= 0:
            return True
    return False


def step_formation(enemies: Sequence[Enemy], direction: int, speed: float,
                   drop: float, field_width: float) -> Tuple[Formation, int]:
    """Advance the formation one tick.

    Returns:
        (new formation, new direction)
    """
    if at_edge(enemies, direction, speed, field_width):
        return tuple(enemy.moved(0, drop) for enemy in enemies), -direction
    return tuple(enemy.moved(speed * direction, 0) for enemy in enemies), direction


def reached_player(enemies: Sequence[Enemy], player_y: float) -> bool:
    return any(enemy.y + enemy.height >= player_y for enemy in enemies)
