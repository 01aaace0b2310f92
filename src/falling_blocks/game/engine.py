"""State transitions for the falling-block engine.

Every function here takes a `GameState` and returns the next one; nothing is
mutated in place. Randomness comes from the `random.Random` passed in, so a
seeded generator replays the same game.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, Optional, Union

from .grid import can_place, clear_full_lines, drop_row, empty_board, is_top_reached, lock_and_merge
from .pieces import ActivePiece, PieceKind, random_kind
from .rules import ScoringRules
from .scheduler import poll
from .state import GameConfig, GameState, Status


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    HOLD = 6
    TOGGLE_PAUSE = 7
    RESET = 8
    NONE = 9


@dataclass(frozen=True)
class Tick:
    now: float


Event = Union[Command, Tick]

DEFAULT_CONFIG = GameConfig()
DEFAULT_RULES = ScoringRules()


def new_game(rng: random.Random, config: Optional[GameConfig] = None) -> GameState:
    config = config or DEFAULT_CONFIG
    first = random_kind(rng)
    state = GameState(
        board=empty_board(config.width, config.height),
        active=None,
        next_kind=random_kind(rng),
    )
    return spawn(state, first, config)


def spawn(state: GameState, kind: PieceKind, config: Optional[GameConfig] = None) -> GameState:
    config = config or DEFAULT_CONFIG
    piece = ActivePiece(kind=kind, rotation=0, x=config.spawn_x, y=config.spawn_y)
    if not can_place(state.board, piece.shape(), piece.x, piece.y):
        return replace(state, status=Status.GAME_OVER)
    return replace(state, active=piece, can_hold=True)


def _shift(state: GameState, dx: int, dy: int) -> GameState:
    assert state.active is not None
    moved = state.active.moved(dx, dy)
    if can_place(state.board, moved.shape(), moved.x, moved.y):
        return replace(state, active=moved)
    return state


def move_left(state: GameState) -> GameState:
    return _shift(state, -1, 0)


def move_right(state: GameState) -> GameState:
    return _shift(state, 1, 0)


def soft_drop(state: GameState) -> GameState:
    return _shift(state, 0, 1)


def rotate(state: GameState, delta: int, config: Optional[GameConfig] = None) -> GameState:
    """Rotate by `delta` states, trying each horizontal kick offset in order."""
    config = config or DEFAULT_CONFIG
    assert state.active is not None
    piece = state.active
    turned = piece.rotated(delta)
    mask = turned.shape()
    for offset in config.kick_offsets:
        if can_place(state.board, mask, piece.x + offset, piece.y):
            candidate = replace(turned, x=piece.x + offset)
            # Single-state kinds (O) turn into themselves
            return state if candidate == piece else replace(state, active=candidate)
    return state


def lock(
    state: GameState,
    rng: random.Random,
    config: Optional[GameConfig] = None,
    rules: Optional[ScoringRules] = None,
) -> GameState:
    """Merge the active piece, clear lines, score, and spawn the queued piece."""
    config = config or DEFAULT_CONFIG
    rules = rules or DEFAULT_RULES
    piece = state.active
    assert piece is not None
    merged = lock_and_merge(state.board, piece.shape(), piece.x, piece.y, int(piece.kind))
    board, cleared = clear_full_lines(merged)
    if is_top_reached(board):
        return replace(state, board=board, active=None, status=Status.GAME_OVER)

    lines = state.lines + cleared
    locked = replace(
        state,
        board=board,
        active=None,
        score=state.score + rules.score_for_lines(cleared, state.level),
        lines=lines,
        level=rules.level_after(state.level, lines),
        next_kind=random_kind(rng),
    )
    return spawn(locked, state.next_kind, config)


def hard_drop(
    state: GameState,
    rng: random.Random,
    config: Optional[GameConfig] = None,
    rules: Optional[ScoringRules] = None,
) -> GameState:
    piece = state.active
    assert piece is not None
    landed = replace(piece, y=drop_row(state.board, piece.shape(), piece.x, piece.y))
    return lock(replace(state, active=landed), rng, config, rules)


def hold(state: GameState, rng: random.Random, config: Optional[GameConfig] = None) -> GameState:
    if not state.can_hold:
        return state
    assert state.active is not None
    stashed = state.active.kind
    if state.hold_kind is None:
        held = replace(state, hold_kind=stashed, active=None, next_kind=random_kind(rng))
        spawned = spawn(held, state.next_kind, config)
    else:
        held = replace(state, hold_kind=stashed, active=None)
        spawned = spawn(held, state.hold_kind, config)
    # The spawn above re-arms hold; only the spawn after the next lock may do that
    return replace(spawned, can_hold=False)


def toggle_pause(state: GameState) -> GameState:
    if state.status is Status.RUNNING:
        return replace(state, status=Status.PAUSED, last_drop=None)
    if state.status is Status.PAUSED:
        return replace(state, status=Status.RUNNING, last_drop=None)
    return state


def tick(
    state: GameState,
    now: float,
    rng: random.Random,
    config: Optional[GameConfig] = None,
    rules: Optional[ScoringRules] = None,
) -> GameState:
    """Apply at most one gravity step for a tick delivered at `now`."""
    rules = rules or DEFAULT_RULES
    if state.status is not Status.RUNNING:
        return state
    due, mark = poll(state.last_drop, now, rules.drop_interval(state.level))
    if not due:
        return state if mark == state.last_drop else replace(state, last_drop=mark)
    state = replace(state, last_drop=mark)
    assert state.active is not None
    piece = state.active.moved(0, 1)
    if can_place(state.board, piece.shape(), piece.x, piece.y):
        return replace(state, active=piece)
    return lock(state, rng, config, rules)


def transition(
    state: GameState,
    event: Event,
    rng: random.Random,
    config: Optional[GameConfig] = None,
    rules: Optional[ScoringRules] = None,
) -> GameState:
    if isinstance(event, Tick):
        return tick(state, event.now, rng, config, rules)
    if not isinstance(event, Command):
        raise TypeError(f"Unsupported event: {event!r}")

    if event == Command.RESET:
        return new_game(rng, config)
    if event == Command.TOGGLE_PAUSE:
        return toggle_pause(state)
    if state.status is not Status.RUNNING:
        return state

    if event == Command.MOVE_LEFT:
        return move_left(state)
    if event == Command.MOVE_RIGHT:
        return move_right(state)
    if event == Command.SOFT_DROP:
        return soft_drop(state)
    if event == Command.ROTATE_CW:
        return rotate(state, 1, config)
    if event == Command.ROTATE_CCW:
        return rotate(state, -1, config)
    if event == Command.HARD_DROP:
        return hard_drop(state, rng, config, rules)
    if event == Command.HOLD:
        return hold(state, rng, config)
    return state


def available_commands(state: GameState, config: Optional[GameConfig] = None) -> Dict[Command, bool]:
    """Which commands would change `state` if dispatched now."""
    available = {command: False for command in Command}
    available[Command.RESET] = True
    available[Command.NONE] = True
    available[Command.TOGGLE_PAUSE] = state.status is not Status.GAME_OVER
    if state.status is not Status.RUNNING or state.active is None:
        return available
    available[Command.MOVE_LEFT] = move_left(state) is not state
    available[Command.MOVE_RIGHT] = move_right(state) is not state
    available[Command.SOFT_DROP] = soft_drop(state) is not state
    available[Command.ROTATE_CW] = rotate(state, 1, config) is not state
    available[Command.ROTATE_CCW] = rotate(state, -1, config) is not state
    available[Command.HARD_DROP] = True
    available[Command.HOLD] = state.can_hold
    return available
