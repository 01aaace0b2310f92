from __future__ import annotations

import random
from typing import Optional

import numpy as np
import pytest

from falling_blocks.game.grid import empty_board
from falling_blocks.game.pieces import ActivePiece, PieceKind
from falling_blocks.game.state import GameState


def make_state(
    board: Optional[np.ndarray] = None,
    kind: PieceKind = PieceKind.T,
    rotation: int = 0,
    x: int = 3,
    y: int = 0,
    **kwargs,
) -> GameState:
    if board is None:
        board = empty_board()
    kwargs.setdefault("next_kind", PieceKind.I)
    return GameState(board=board, active=ActivePiece(kind, rotation, x, y), **kwargs)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
