"""Space Invaders - hold back the descending formation.

Features:
- Formation marches, drops and reverses as one; denser every level
- Shields that wear down under fire
- Power-ups: rapid fire, multi-shot and a personal shield
"""
import random
from typing import Any, Dict, List, Tuple

from models import Color
from models.render import DrawList, RectPrimitive, TextPrimitive
from retroverse.games import BaseGame, GameState
from retroverse.games.input.intent import IntentFrame

from . import config
from .config import InvaderRules
from .game import simulation
from .game.entities import Enemy, EnemyType, PowerUpType
from .game.simulation import InvadersState

STAR_COUNT = 60


class SpaceInvadersMode(BaseGame[InvadersState]):
    """Space Invaders game mode."""

    # Game metadata
    NAME = "Space Invaders"
    GAME_ID = "space_invaders"
    DESCRIPTION = "Shoot down the invader formation before it lands."
    VERSION = "1.0.0"
    AUTHOR = "RetroVerse Team"

    ARGUMENTS: List[Dict[str, Any]] = [
        {
            'name': '--lives',
            'type': int,
            'default': config.LIVES,
            'help': 'Lives at the start of a session'
        },
        {
            'name': '--enemy-fire-rate',
            'type': float,
            'default': config.ENEMY_FIRE_RATE,
            'help': 'Chance per invader per tick to fire'
        },
    ]

    def __init__(self, lives: int = config.LIVES,
                 enemy_fire_rate: float = config.ENEMY_FIRE_RATE, **kwargs):
        self._rules = InvaderRules(lives=lives, enemy_fire_rate=enemy_fire_rate)
        self._colors = {
            'player': Color.from_hex(config.PLAYER_COLOR),
            'cannon': Color.from_hex(config.CANNON_COLOR),
            'bullet': Color.from_hex(config.BULLET_COLOR),
            'enemy_bullet': Color.from_hex(config.ENEMY_BULLET_COLOR),
            'shield': Color.from_hex(config.SHIELD_COLOR),
            'star': Color.from_hex(config.STAR_COLOR, alpha=128),
            'text': Color.from_hex(config.TEXT_COLOR),
            'eye': Color.from_hex('#000000'),
        }
        self._enemy_colors = {kind: Color.from_hex(config.ENEMY_COLORS[kind.value]) for kind in EnemyType}
        self._power_colors = {kind: Color.from_hex(config.POWER_UP_COLORS[kind.value]) for kind in PowerUpType}
        star_rng = random.Random(0)
        self._stars = [(star_rng.random() * self._rules.width, star_rng.random() * self._rules.height,
                        1 + star_rng.random() * 1.5) for _ in range(STAR_COUNT)]
        super().__init__(**kwargs)

    @property
    def rules(self) -> InvaderRules:
        return self._rules

    @property
    def screen_size(self) -> Tuple[int, int]:
        return (int(self._rules.width), int(self._rules.height))

    def create_state(self, seed: int, high_score: int) -> InvadersState:
        return simulation.create_state(seed, high_score, self._rules)

    def simulate(self, state: InvadersState, frame: IntentFrame, dt: float) -> InvadersState:
        return simulation.simulate(state, frame, dt)

    def tick_interval(self, state: InvadersState) -> float:
        return 1.0 / config.TICK_RATE

    def overlay_text(self, state: InvadersState) -> List[str]:
        if self.state == GameState.GAME_OVER:
            return ["GAME OVER", f"FINAL SCORE: {state.score.score}",
                    f"HIGH SCORE: {max(self.high_score, state.score.score)}",
                    "Press R to play again"]
        if self.state == GameState.WAITING:
            return ["SPACE INVADERS", "Press SPACE to start",
                    "Arrows or WASD to move, SPACE to shoot", "P to pause"]
        return super().overlay_text(state)

    # =========================================================================
    # Drawing
    # =========================================================================

    def _enemy(self, enemy: Enemy) -> DrawList:
        x, y = enemy.x, enemy.y
        eye = self._colors['eye']
        primitives: DrawList = [RectPrimitive(x=x, y=y, width=enemy.width, height=enemy.height,
                                              color=self._enemy_colors[enemy.kind])]
        if enemy.kind == EnemyType.ADVANCED:
            for offset in (5, 13, 21):
                primitives.append(RectPrimitive(x=x + offset, y=y + 5, width=4, height=4, color=eye))
            primitives.append(RectPrimitive(x=x + enemy.width / 2 - 1, y=y - 4, width=2, height=4,
                                            color=self._enemy_colors[enemy.kind]))
        elif enemy.kind == EnemyType.MEDIUM:
            for offset in (7, 19):
                primitives.append(RectPrimitive(x=x + offset, y=y + 5, width=4, height=4, color=eye))
            for offset in (2, 22):
                primitives.append(RectPrimitive(x=x + offset, y=y + 12, width=6, height=3, color=eye))
        else:
            for offset in (7, 19):
                primitives.append(RectPrimitive(x=x + offset, y=y + 7, width=4, height=4, color=eye))
        return primitives

    def draw(self, state: InvadersState) -> DrawList:
        width, _ = self.screen_size
        primitives: DrawList = [
            RectPrimitive(x=sx, y=sy, width=size, height=size, color=self._colors['star'])
            for sx, sy, size in self._stars
        ]

        player = state.player
        primitives.append(RectPrimitive(x=player.x, y=player.y, width=player.width,
                                        height=player.height, color=self._colors['player']))
        primitives.append(RectPrimitive(x=player.muzzle_x - 2, y=player.y - 10, width=4, height=10,
                                        color=self._colors['cannon']))
        if state.active_power == PowerUpType.SHIELD:
            primitives.append(RectPrimitive(x=player.x - 4, y=player.y - 14, width=player.width + 8,
                                            height=player.height + 18,
                                            color=self._power_colors[PowerUpType.SHIELD],
                                            filled=False, line_width=2))

        for bullet in state.bullets:
            primitives.append(RectPrimitive(x=bullet.x, y=bullet.y, width=bullet.width,
                                            height=bullet.height, color=self._colors['bullet']))
        for enemy in state.enemies:
            primitives.extend(self._enemy(enemy))
        for bullet in state.enemy_bullets:
            primitives.append(RectPrimitive(x=bullet.x, y=bullet.y, width=bullet.width,
                                            height=bullet.height, color=self._colors['enemy_bullet']))
        for shield in state.shields:
            alpha = min(255, int(shield.health * 0.3 * 255))
            primitives.append(RectPrimitive(x=shield.x, y=shield.y, width=shield.width,
                                            height=shield.height,
                                            color=self._colors['shield'].with_alpha(alpha)))
        if state.power_up is not None:
            power_up = state.power_up
            primitives.append(RectPrimitive(x=power_up.x, y=power_up.y, width=power_up.width,
                                            height=power_up.height,
                                            color=self._power_colors[power_up.kind]))

        text = self._colors['text']
        primitives.append(TextPrimitive(text=f"SCORE: {state.score.score}", x=10, y=20, color=text))
        primitives.append(TextPrimitive(text=f"LEVEL: {state.score.level}", x=width / 2, y=20,
                                        color=text, align='center'))
        primitives.append(TextPrimitive(text=f"LIVES: {state.lives}", x=width - 10, y=20,
                                        color=text, align='right'))
        if state.active_power is not None:
            primitives.append(TextPrimitive(
                text=f"POWER-UP: {state.active_power.label} ({state.power_remaining:.0f}s)",
                x=10, y=40, color=text))
        return primitives
