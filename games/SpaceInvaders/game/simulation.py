"""Pure Space Invaders simulation.

One call advances the game by one tick (1/75 s). Order within a tick:
player movement and firing, bullet movement, formation step, invader
fire, collisions, power-ups, then level and loss checks.

Collision order is fixed: each player bullet destroys the first invader
it overlaps in formation order; each invader bullet hits the player
before any shield, and otherwise the first shield it overlaps.
"""
import random
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from models import ScoreState
from retroverse.games.audio import Tone, Waveform
from retroverse.games.collision import aabb_overlap, first_overlap
from retroverse.games.input.intent import Intent, IntentFrame
from retroverse.games.scoring import ScoreKeeper

from games.SpaceInvaders import config
from games.SpaceInvaders.config import InvaderRules
from .entities import (
    POWER_UP_TYPES, Bullet, Enemy, EnemyBullet, Player, PowerUp, PowerUpType, Shield,
    create_shields,
)
from .formation import create_formation, reached_player, step_formation

SHOOT_TONE = Tone(440, 0.1, Waveform.SQUARE)
ENEMY_SHOOT_TONE = Tone(220, 0.1, Waveform.SAWTOOTH)
EXPLOSION_TONE = Tone(80, 0.3, Waveform.SQUARE)
PLAYER_HIT_TONE = Tone(830, 0.2, Waveform.SINE)
LEVEL_UP_TONE = Tone(440, 0.4, Waveform.SINE)
GAME_OVER_TONE = Tone(440, 1.0, Waveform.SAWTOOTH)
POWER_UP_TONE = Tone(440, 0.2, Waveform.TRIANGLE)


@dataclass(frozen=True)
class InvadersState:
    """Complete Space Invaders session state.

    Attributes:
        player: Player ship
        enemies: Formation in row-major order
        direction: Formation direction, +1 right or -1 left
        bullets: Player bullets in flight
        enemy_bullets: Invader bullets in flight
        shields: Remaining shields
        power_up: Falling power-up, if any
        active_power: Power-up currently in effect
        power_remaining: Seconds left on the active power-up
        lives: Lives left
        clock: Seconds of play so far
        last_shot: ``clock`` value of the last shot
        tick: Ticks simulated so far
        pointer_x: Last pointer x used to steer the ship
        score: Score state; ``level`` is the formation number
        over: True once the formation landed or lives ran out
        seed: Seed for the next tick's random choices
        sounds: Tones reported by the tick that produced this state
        rules: Field and difficulty constants
    """
    player: Player
    enemies: Tuple[Enemy, ...]
    direction: int = 1
    bullets: Tuple[Bullet, ...] = ()
    enemy_bullets: Tuple[EnemyBullet, ...] = ()
    shields: Tuple[Shield, ...] = ()
    power_up: Optional[PowerUp] = None
    active_power: Optional[PowerUpType] = None
    power_remaining: float = 0.0
    lives: int = config.LIVES
    clock: float = 0.0
    last_shot: float = float('-inf')
    tick: int = 0
    pointer_x: Optional[float] = None
    score: ScoreState = field(default_factory=ScoreState)
    over: bool = False
    seed: int = 0
    sounds: Tuple[Tone, ...] = ()
    rules: InvaderRules = field(default_factory=InvaderRules)

    @property
    def cooldown(self) -> float:
        if self.active_power == PowerUpType.RAPID_FIRE:
            return self.rules.bullet_cooldown / 2
        return self.rules.bullet_cooldown

    @property
    def bullet_cap(self) -> int:
        if self.active_power == PowerUpType.RAPID_FIRE:
            return self.rules.max_bullets * 2
        return self.rules.max_bullets


def create_state(seed: int, high_score: int = 0, rules: Optional[InvaderRules] = None) -> InvadersState:
    rules = rules or InvaderRules()
    rng = random.Random(seed)
    return InvadersState(
        player=Player.centered(rules.width, rules.height, rules.player_speed),
        enemies=create_formation(1),
        shields=create_shields(rules.width, rules.height),
        lives=rules.lives,
        score=ScoreState(high_score=high_score),
        seed=rng.randrange(2 ** 31),
        rules=rules,
    )


def move_player(state: InvadersState, frame: IntentFrame) -> Tuple[Player, Optional[float]]:
    """Held keys move the ship by its speed; a new pointer position centres it."""
    width = state.rules.width
    player = state.player
    pointer_x = state.pointer_x
    left = frame.is_active(Intent.LEFT)
    right = frame.is_active(Intent.RIGHT)
    if left and not right:
        player = player.move(-player.speed, width)
    elif right and not left:
        player = player.move(player.speed, width)
    elif frame.pointer is not None and frame.pointer.x != state.pointer_x:
        pointer_x = frame.pointer.x
        player = player.center_on(pointer_x, width)
    return player, pointer_x


def fire(state: InvadersState, player: Player, clock: float) -> Tuple[Tuple[Bullet, ...], float, bool]:
    """Fire from the ship's cannon if the cooldown and bullet cap allow it.

    Multi-shot fires a fan of three bullets; the bullet cap still applies.

    Returns:
        (bullets, last shot time, whether a shot was fired)
    """
    cap = state.bullet_cap
    if clock - state.last_shot <= state.cooldown or len(state.bullets) >= cap:
        return state.bullets, state.last_shot, False
    if state.active_power == PowerUpType.MULTI_SHOT:
        angles = config.MULTI_SHOT_ANGLES
    else:
        angles = (0.0,)
    new = tuple(
        Bullet(x=player.muzzle_x - config.BULLET_WIDTH / 2, y=player.y - config.BULLET_HEIGHT, angle=angle)
        for angle in angles
    )
    return (state.bullets + new)[:cap], clock, True


def resolve_player_bullets(bullets, enemies) -> Tuple[Tuple[Bullet, ...], Tuple[Enemy, ...], List[Enemy]]:
    """Each bullet destroys the first invader it overlaps.

    Returns:
        (surviving bullets, surviving invaders, destroyed invaders)
    """
    remaining = list(enemies)
    surviving = []
    destroyed = []
    for bullet in bullets:
        index = first_overlap(bullet, remaining)
        if index is None:
            surviving.append(bullet)
        else:
            destroyed.append(remaining.pop(index))
    return tuple(surviving), tuple(remaining), destroyed


def resolve_enemy_bullets(bullets, player: Player, shields,
                          shielded: bool) -> Tuple[Tuple[EnemyBullet, ...], Tuple[Shield, ...], int]:
    """Invader bullets hit the player first, then the first overlapping shield.

    Returns:
        (surviving bullets, remaining shields, hits taken by the player)
    """
    remaining = list(shields)
    surviving = []
    hits = 0
    for bullet in bullets:
        if aabb_overlap(bullet, player):
            if not shielded:
                hits += 1
            continue
        index = first_overlap(bullet, remaining)
        if index is None:
            surviving.append(bullet)
            continue
        damaged = remaining[index].damaged()
        if damaged is None:
            del remaining[index]
        else:
            remaining[index] = damaged
    return tuple(surviving), tuple(remaining), hits


def update_power_up(state: InvadersState, player: Player, tick: int,
                    rng: random.Random) -> Tuple[Optional[PowerUp], Optional[PowerUpType]]:
    """Fall, spawn and catch.

    Every third tick with no power-up on screen there is a small chance a
    new one appears. Returns the falling power-up and the kind caught
    this tick, if any.
    """
    rules = state.rules
    power_up = state.power_up
    if power_up is not None:
        power_up = power_up.fallen()
        if power_up.y >= rules.height:
            power_up = None
    if power_up is None and tick % config.POWER_UP_EVERY == 0 and rng.random() < rules.power_up_chance:
        kind = rng.choice(POWER_UP_TYPES)
        power_up = PowerUp(x=rng.random() * (rules.width - config.POWER_UP_SIZE),
                           y=config.POWER_UP_SPAWN_Y, kind=kind)
    if power_up is not None and aabb_overlap(power_up, player):
        return None, power_up.kind
    return power_up, None


def simulate(state: InvadersState, frame: IntentFrame, dt: float) -> InvadersState:
    """Advance the game one tick.

    Args:
        state: Current state
        frame: Held/pressed intents and pointer for this tick
        dt: Tick length in seconds (drives cooldown and power-up timers)

    Returns:
        New state
    """
    if state.over:
        return replace(state, sounds=())

    rules = state.rules
    rng = random.Random(state.seed)
    sounds = []
    tick = state.tick + 1
    clock = state.clock + dt

    active = state.active_power
    remaining_power = state.power_remaining
    if active is not None:
        remaining_power -= dt
        if remaining_power <= 0:
            active, remaining_power = None, 0.0
    state = replace(state, active_power=active, power_remaining=remaining_power)

    player, pointer_x = move_player(state, frame)

    bullets, last_shot = state.bullets, state.last_shot
    if frame.is_active(Intent.ACTION):
        bullets, last_shot, fired = fire(state, player, clock)
        if fired:
            sounds.append(SHOOT_TONE)
    bullets = tuple(b for b in (bullet.moved() for bullet in bullets) if b.y > 0)

    enemies, direction = step_formation(state.enemies, state.direction, rules.enemy_speed,
                                        rules.enemy_drop, rules.width)

    enemy_bullets = tuple(b for b in (bullet.moved() for bullet in state.enemy_bullets)
                          if b.y < rules.height)
    shots = tuple(EnemyBullet(x=enemy.x + enemy.width / 2, y=enemy.y + enemy.height)
                  for enemy in enemies if rng.random() < rules.enemy_fire_rate)
    if shots:
        enemy_bullets += shots
        sounds.append(ENEMY_SHOOT_TONE)

    keeper = ScoreKeeper(state.score)
    bullets, enemies, destroyed = resolve_player_bullets(bullets, enemies)
    for enemy in destroyed:
        keeper = keeper.add_points(enemy.points)
        sounds.append(EXPLOSION_TONE)

    enemy_bullets, shields, hits = resolve_enemy_bullets(
        enemy_bullets, player, state.shields, shielded=active == PowerUpType.SHIELD)
    lives = max(0, state.lives - hits)
    if hits:
        sounds.append(PLAYER_HIT_TONE)

    power_up, caught = update_power_up(state, player, tick, rng)
    if caught is not None:
        active, remaining_power = caught, config.POWER_UP_DURATION
        sounds.append(POWER_UP_TONE)

    if not enemies:
        keeper = keeper.next_level()
        enemies = create_formation(keeper.state.level)
        direction = 1
        bullets, enemy_bullets = (), ()
        sounds.append(LEVEL_UP_TONE)

    over = lives <= 0 or reached_player(enemies, player.y)
    if over:
        sounds.append(GAME_OVER_TONE)

    return replace(
        state,
        player=player,
        enemies=enemies,
        direction=direction,
        bullets=bullets,
        enemy_bullets=enemy_bullets,
        shields=shields,
        power_up=power_up,
        active_power=active,
        power_remaining=remaining_power,
        lives=lives,
        clock=clock,
        last_shot=last_shot,
        tick=tick,
        pointer_x=pointer_x,
        score=keeper.state,
        over=over,
        seed=rng.randrange(2 ** 31),
        sounds=tuple(sounds),
    )
