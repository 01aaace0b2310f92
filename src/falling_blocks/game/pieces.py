from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Sequence, Tuple

import numpy as np


class PieceKind(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray
Coordinate = Tuple[int, int]


def _states(*rows: Sequence[Sequence[int]]) -> Tuple[Shape, ...]:
    masks = []
    for r in rows:
        mask = np.array(r, dtype=np.int8)
        mask.setflags(write=False)
        masks.append(mask)
    return tuple(masks)


@dataclass(frozen=True, eq=False)
class PieceDefinition:
    """Static description of a kind: its display color and every orientation."""

    kind: PieceKind
    color: str
    rotations: Tuple[Shape, ...]

    @property
    def num_rotations(self) -> int:
        return len(self.rotations)

    @property
    def rgb(self) -> Tuple[int, int, int]:
        h = self.color.lstrip("#")
        return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


CATALOG: Dict[PieceKind, PieceDefinition] = {
    PieceKind.I: PieceDefinition(PieceKind.I, "#22d3ee", _states(
        [[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]],
        [[0, 0, 1, 0], [0, 0, 1, 0], [0, 0, 1, 0], [0, 0, 1, 0]],
    )),
    PieceKind.J: PieceDefinition(PieceKind.J, "#60a5fa", _states(
        [[1, 0, 0], [1, 1, 1], [0, 0, 0]],
        [[0, 1, 1], [0, 1, 0], [0, 1, 0]],
        [[0, 0, 0], [1, 1, 1], [0, 0, 1]],
        [[0, 1, 0], [0, 1, 0], [1, 1, 0]],
    )),
    PieceKind.L: PieceDefinition(PieceKind.L, "#fb923c", _states(
        [[0, 0, 1], [1, 1, 1], [0, 0, 0]],
        [[0, 1, 0], [0, 1, 0], [0, 1, 1]],
        [[0, 0, 0], [1, 1, 1], [1, 0, 0]],
        [[1, 1, 0], [0, 1, 0], [0, 1, 0]],
    )),
    PieceKind.O: PieceDefinition(PieceKind.O, "#fde047", _states(
        [[1, 1], [1, 1]],
    )),
    PieceKind.S: PieceDefinition(PieceKind.S, "#34d399", _states(
        [[0, 1, 1], [1, 1, 0], [0, 0, 0]],
        [[0, 1, 0], [0, 1, 1], [0, 0, 1]],
    )),
    PieceKind.T: PieceDefinition(PieceKind.T, "#a78bfa", _states(
        [[0, 1, 0], [1, 1, 1], [0, 0, 0]],
        [[0, 1, 0], [0, 1, 1], [0, 1, 0]],
        [[0, 0, 0], [1, 1, 1], [0, 1, 0]],
        [[0, 1, 0], [1, 1, 0], [0, 1, 0]],
    )),
    PieceKind.Z: PieceDefinition(PieceKind.Z, "#f472b6", _states(
        [[1, 1, 0], [0, 1, 1], [0, 0, 0]],
        [[0, 0, 1], [0, 1, 1], [0, 1, 0]],
    )),
}


def normalize_rotation(kind: PieceKind, rotation: int) -> int:
    # Python's % is non-negative for a positive modulus, so -1 wraps to the last state
    return rotation % CATALOG[kind].num_rotations


def rotate(kind: PieceKind, rotation: int) -> Shape:
    """Return the mask of `kind` at `rotation` (any integer, wrapped)."""
    return CATALOG[kind].rotations[normalize_rotation(kind, rotation)]


def cells_at(mask: Shape, origin_x: int, origin_y: int) -> List[Coordinate]:
    h, w = mask.shape
    cells: List[Coordinate] = []
    for dy in range(h):
        for dx in range(w):
            if mask[dy, dx]:
                cells.append((origin_x + dx, origin_y + dy))
    return cells


def random_kind(rng: random.Random) -> PieceKind:
    return rng.choice(list(PieceKind))


@dataclass(frozen=True)
class ActivePiece:
    kind: PieceKind
    rotation: int = 0
    x: int = 0
    y: int = 0

    def shape(self) -> Shape:
        return rotate(self.kind, self.rotation)

    def cells(self) -> List[Coordinate]:
        return cells_at(self.shape(), self.x, self.y)

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self, delta: int) -> "ActivePiece":
        return replace(self, rotation=normalize_rotation(self.kind, self.rotation + delta))
