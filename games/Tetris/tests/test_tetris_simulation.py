"""
Tests for the pure Tetris simulation.

Covers the board model, rotation with wall kicks, drops, hold, line
clearing, scoring, levels and top-out.
"""

import random
from dataclasses import replace
from types import SimpleNamespace

import pygame
import pytest

from games.Tetris.game.entities import (
    SHAPES, Piece, clear_lines, collides, drop_distance, empty_board, merge, rotate_clockwise,
)
from games.Tetris.game.simulation import (
    GAME_OVER_TONE, HARD_DROP_TONE, HOLD_TONE, LOCK_TONE, MOVE_TONE, ROTATE_TONE,
    create_state, hard_drop, hold, level_for_lines, level_up_tone, line_clear_points,
    line_clear_tone, lock, simulate,
)
from retroverse.games.input.intent import Intent, IntentFrame
from retroverse.games.input.sources.keyboard import KeyboardInputSource

I, J, L, O, S, T, Z = SHAPES
EMPTY = IntentFrame()


def pressed(*intents):
    return IntentFrame(pressed=tuple(intents))


def board_with(rows, cols=10, height=20):
    """Empty board with some rows replaced, keyed by row index."""
    board = [list(row) for row in empty_board(cols, height)]
    for index, row in rows.items():
        board[index] = list(row)
    return tuple(tuple(row) for row in board)


GAP_IN_MIDDLE = (1, 1, 1, 1, 0, 0, 1, 1, 1, 1)


@pytest.fixture
def state():
    return create_state(seed=1)


class TestPieces:
    """Test shapes and rotation."""

    def test_seven_shapes_with_colour_ids(self):
        assert [Piece(shape=shape, x=0).color for shape in SHAPES] == [1, 2, 3, 4, 5, 6, 7]

    def test_rotate_t_clockwise(self):
        assert rotate_clockwise(T) == ((0, 6, 0), (0, 6, 6), (0, 6, 0))

    def test_four_rotations_identity(self):
        shape = L
        for _ in range(4):
            shape = rotate_clockwise(shape)
        assert shape == L

    def test_spawn_position(self):
        assert Piece.spawn(I, 10).x == 3
        assert Piece.spawn(O, 10).x == 4
        assert Piece.spawn(T, 10).x == 4


class TestBoard:
    """Test collision and line clearing."""

    def test_cells_above_top_collide(self):
        board = empty_board(10, 20)
        assert collides(board, Piece(shape=T, x=3, y=-1))
        assert not collides(board, Piece(shape=T, x=3, y=0))

    def test_walls_and_floor_collide(self):
        board = empty_board(10, 20)
        assert collides(board, Piece(shape=O, x=-1, y=5))
        assert collides(board, Piece(shape=O, x=9, y=5))
        assert collides(board, Piece(shape=O, x=4, y=19))

    def test_locked_cells_collide(self):
        board = board_with({10: (0, 0, 0, 0, 1, 0, 0, 0, 0, 0)})
        assert collides(board, Piece(shape=O, x=4, y=9))
        assert drop_distance(board, Piece(shape=O, x=4, y=0)) == 8

    def test_merge_writes_colour(self):
        merged = merge(empty_board(10, 20), Piece(shape=O, x=0, y=18))
        assert merged[19][:2] == (4, 4)
        assert merged[18][:2] == (4, 4)

    def test_rows_removed_equals_rows_prepended(self):
        full = (1,) * 10
        board = board_with({5: full, 17: GAP_IN_MIDDLE, 18: full, 19: full})
        cleared_board, cleared = clear_lines(board)
        assert cleared == 3
        assert len(cleared_board) == 20
        assert cleared_board[:3] == ((0,) * 10,) * 3
        assert cleared_board[19] == GAP_IN_MIDDLE

    def test_no_full_rows_is_unchanged(self):
        board = board_with({19: GAP_IN_MIDDLE})
        assert clear_lines(board) == (board, 0)


class TestScoringRules:
    """Test point, level and interval formulas."""

    @pytest.mark.parametrize("lines,level,combo,expected", [
        (0, 1, 1, 0),
        (1, 1, 1, 100),
        (2, 1, 1, 300),
        (4, 1, 1, 800),
        (5, 1, 1, 1000),
        (1, 1, 2, 110),
        (1, 2, 1, 120),
    ])
    def test_line_clear_points(self, lines, level, combo, expected):
        assert line_clear_points(lines, level, combo) == expected

    @pytest.mark.parametrize("lines,level", [
        (0, 1), (9, 1), (10, 2), (49, 5), (50, 5), (100, 9), (10000, 16),
    ])
    def test_level_for_lines(self, lines, level):
        assert level_for_lines(lines) == level

    def test_drop_interval_by_level(self, state):
        assert state.drop_interval == pytest.approx(0.8)
        level_2 = replace(state, score=state.score.model_copy(update={'level': 2}))
        assert level_2.drop_interval == pytest.approx(0.68)
        level_20 = replace(state, score=state.score.model_copy(update={'level': 20}))
        assert level_20.drop_interval == pytest.approx(0.1)


class TestLock:
    """Test locking, line clears and top-out."""

    def test_two_line_clear_at_level_one(self, state):
        """Clearing 2 lines at level 1 with combo 1 scores 300."""
        board = board_with({18: GAP_IN_MIDDLE, 19: GAP_IN_MIDDLE})
        state = replace(state, board=board, piece=Piece(shape=O, x=4, y=18))
        after = lock(state, random.Random(0))

        assert after.score.score == 300
        assert after.score.combo == 1
        assert after.lines == 2
        assert after.board == empty_board(10, 20)
        assert after.sounds[0] == line_clear_tone(2)
        assert after.sounds[0].frequency_hz == 500

    def test_next_piece_becomes_current(self, state):
        state = replace(state, piece=Piece(shape=O, x=0, y=18))
        after = lock(state, random.Random(0))
        assert after.piece == Piece.spawn(state.next_shape, 10)
        assert after.sounds == (LOCK_TONE,)

    def test_non_clearing_lock_resets_combo(self, state):
        score = state.score.model_copy(update={'combo': 3})
        state = replace(state, score=score, piece=Piece(shape=O, x=0, y=18))
        after = lock(state, random.Random(0))
        assert after.score.combo == 0

    def test_level_up_plays_tone(self, state):
        board = board_with({19: (1, 1, 1, 1, 1, 1, 1, 1, 0, 0)})
        state = replace(state, board=board, lines=9, piece=Piece(shape=O, x=8, y=18))
        after = lock(state, random.Random(0))
        assert after.lines == 10
        assert after.score.level == 2
        assert after.score.score == 100
        assert level_up_tone(2) in after.sounds
        assert level_up_tone(2).frequency_hz == 540

    def test_blocked_spawn_tops_out(self, state):
        board = board_with({0: (0, 0, 0, 1, 1, 1, 1, 0, 0, 0), 1: (0, 0, 0, 1, 1, 1, 1, 0, 0, 0)})
        state = replace(state, board=board, piece=Piece(shape=O, x=0, y=18))
        after = lock(state, random.Random(0))
        assert after.over
        assert after.sounds[-1] == GAME_OVER_TONE

    def test_lock_restores_hold(self, state):
        state = replace(state, can_hold=False, piece=Piece(shape=O, x=0, y=18))
        assert lock(state, random.Random(0)).can_hold


class TestPlayerMoves:
    """Test intents applied by simulate."""

    def test_move_right(self, state):
        after = simulate(state, pressed(Intent.RIGHT), 1 / 60)
        assert after.piece.x == state.piece.x + 1
        assert MOVE_TONE in after.sounds

    def test_held_key_auto_shift(self, state):
        """Each repeated KEYDOWN of a held arrow shifts the piece one column."""
        keyboard = KeyboardInputSource()
        state = replace(state, piece=Piece(shape=T, x=5, y=5))
        for _ in range(3):
            keyboard.handle_event(SimpleNamespace(type=pygame.KEYDOWN, key=pygame.K_LEFT))
        after = simulate(state, keyboard.poll_frame(), 1 / 60)
        assert after.piece.x == 2

    def test_move_into_wall_ignored(self, state):
        state = replace(state, piece=Piece(shape=O, x=0, y=5))
        after = simulate(state, pressed(Intent.LEFT), 1 / 60)
        assert after.piece.x == 0
        assert MOVE_TONE not in after.sounds

    def test_rotate(self, state):
        state = replace(state, piece=Piece(shape=T, x=4, y=5))
        after = simulate(state, pressed(Intent.UP), 1 / 60)
        assert after.piece.shape == rotate_clockwise(T)
        assert (after.piece.x, after.piece.y) == (4, 5)
        assert ROTATE_TONE in after.sounds

    def test_rotation_wall_kick(self, state):
        vertical_i = rotate_clockwise(I)
        state = replace(state, piece=Piece(shape=vertical_i, x=-1, y=5))
        after = simulate(state, pressed(Intent.UP), 1 / 60)
        assert after.piece.x == 0
        assert after.piece.y == 5

    def test_rotation_rejected_when_no_kick_fits(self, state):
        vertical_i = rotate_clockwise(I)
        state = replace(state, piece=Piece(shape=vertical_i, x=-2, y=5))
        after = simulate(state, pressed(Intent.UP), 1 / 60)
        assert after.piece.shape == vertical_i
        assert ROTATE_TONE not in after.sounds

    def test_soft_drop(self, state):
        after = simulate(state, pressed(Intent.DOWN), 1 / 60)
        assert after.piece.y == 1

    def test_hard_drop_scores_and_locks(self, state):
        board = board_with({18: GAP_IN_MIDDLE, 19: GAP_IN_MIDDLE})
        state = replace(state, board=board, piece=Piece(shape=O, x=4, y=0))
        after = hard_drop(state, random.Random(0))
        assert after.score.score == 18 * 2 + 300
        assert after.sounds[:2] == (HARD_DROP_TONE, line_clear_tone(2))

    def test_hard_drop_via_action(self, state):
        after = simulate(state, pressed(Intent.ACTION), 1 / 60)
        assert after.score.score == 36
        assert any(any(row) for row in after.board)
        assert after.piece.y == 0

    def test_hold_swaps_in_next_piece(self, state):
        after = hold(state, random.Random(0))
        assert after.hold_shape == state.piece.shape
        assert after.piece.shape == state.next_shape
        assert not after.can_hold
        assert after.sounds == (HOLD_TONE,)

    def test_hold_once_per_piece(self, state):
        once = simulate(state, pressed(Intent.HOLD), 1 / 60)
        twice = simulate(once, pressed(Intent.HOLD), 1 / 60)
        assert twice.hold_shape == once.hold_shape
        assert twice.piece.shape == once.piece.shape

    def test_hold_swaps_with_held_shape(self, state):
        state = replace(state, hold_shape=I, piece=Piece.spawn(O, 10))
        after = hold(state, random.Random(0))
        assert after.piece == Piece.spawn(I, 10)
        assert after.hold_shape == O
        assert after.next_shape == state.next_shape


class TestGravity:
    """Test the drop accumulator."""

    def test_drops_after_interval(self, state):
        first = simulate(state, EMPTY, 0.5)
        assert first.piece.y == 0
        second = simulate(first, EMPTY, 0.5)
        assert second.piece.y == 1
        assert second.drop_timer == pytest.approx(0.2)

    def test_blocked_gravity_locks(self, state):
        landed = state.ghost
        state = replace(state, piece=landed, drop_timer=0.79)
        after = simulate(state, EMPTY, 0.02)
        assert LOCK_TONE in after.sounds
        assert any(any(row) for row in after.board)

    def test_ghost_on_floor(self, state):
        state = replace(state, piece=Piece(shape=O, x=4, y=0))
        assert state.ghost.y == 18

    def test_over_state_is_frozen(self, state):
        state = replace(state, over=True)
        after = simulate(state, pressed(Intent.LEFT), 1.0)
        assert after.piece == state.piece


class TestDeterminism:
    """Same seed, same game."""

    def test_same_seed_same_pieces(self):
        def play(seed):
            state = create_state(seed=seed)
            shapes = []
            for _ in range(10):
                state = simulate(state, pressed(Intent.ACTION), 1 / 60)
                shapes.append(state.piece.shape)
            return shapes

        assert play(9) == play(9)

    def test_input_state_not_mutated(self, state):
        before = state.piece
        simulate(state, pressed(Intent.RIGHT, Intent.ACTION), 1 / 60)
        assert state.piece == before
        assert state.board == empty_board(10, 20)
