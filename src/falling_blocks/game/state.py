from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .grid import BOARD_HEIGHT, BOARD_WIDTH, Board, drop_row
from .pieces import ActivePiece, PieceKind


class Status(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameConfig:
    width: int = BOARD_WIDTH
    height: int = BOARD_HEIGHT
    spawn_y: int = -2
    kick_offsets: Tuple[int, ...] = (0, -1, 1, -2, 2)
    random_seed: Optional[int] = None

    @property
    def spawn_x(self) -> int:
        return self.width // 2 - 2


@dataclass(frozen=True, eq=False)
class GameState:
    """Complete engine state. Treated as a value: transitions build new instances."""

    board: Board
    active: Optional[ActivePiece]
    next_kind: PieceKind
    hold_kind: Optional[PieceKind] = None
    can_hold: bool = True
    score: int = 0
    lines: int = 0
    level: int = 1
    status: Status = Status.RUNNING
    last_drop: Optional[float] = None

    @property
    def game_over(self) -> bool:
        return self.status is Status.GAME_OVER

    @property
    def ghost_row(self) -> Optional[int]:
        if self.active is None:
            return None
        return drop_row(self.board, self.active.shape(), self.active.x, self.active.y)

    def snapshot(self) -> Dict[str, Any]:
        active = None
        if self.active is not None:
            active = {
                "kind": self.active.kind,
                "rotation": self.active.rotation,
                "x": self.active.x,
                "y": self.active.y,
            }
        return {
            "board": np.array(self.board, copy=True),
            "active": active,
            "ghost_row": self.ghost_row,
            "hold": self.hold_kind,
            "can_hold": self.can_hold,
            "next": self.next_kind,
            "score": self.score,
            "level": self.level,
            "lines": self.lines,
            "status": self.status,
        }
