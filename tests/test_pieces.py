import random

import numpy as np
import pytest

from falling_blocks.game.pieces import CATALOG, ActivePiece, PieceKind, cells_at, random_kind, rotate


@pytest.mark.parametrize(
    "kind,count",
    [
        (PieceKind.I, 2),
        (PieceKind.J, 4),
        (PieceKind.L, 4),
        (PieceKind.O, 1),
        (PieceKind.S, 2),
        (PieceKind.T, 4),
        (PieceKind.Z, 2),
    ],
)
def test_rotation_state_counts(kind, count):
    assert CATALOG[kind].num_rotations == count


def test_every_mask_has_four_cells():
    for definition in CATALOG.values():
        for mask in definition.rotations:
            assert int(mask.sum()) == 4


def test_masks_are_read_only():
    mask = rotate(PieceKind.T, 0)
    with pytest.raises(ValueError):
        mask[0, 0] = 1


def test_rotate_wraps_negative_and_large_indices():
    t = CATALOG[PieceKind.T].rotations
    assert rotate(PieceKind.T, -1) is t[3]
    assert rotate(PieceKind.T, -4) is t[0]
    assert rotate(PieceKind.I, 5) is CATALOG[PieceKind.I].rotations[1]
    assert rotate(PieceKind.O, -7) is CATALOG[PieceKind.O].rotations[0]


def test_cells_at_offsets_mask():
    mask = rotate(PieceKind.O, 0)
    assert sorted(cells_at(mask, 3, -2)) == [(3, -2), (3, -1), (4, -2), (4, -1)]


def test_active_piece_rotation_is_normalized():
    piece = ActivePiece(PieceKind.T, 0, 3, 0)
    assert piece.rotated(-1).rotation == 3
    assert piece.rotated(5).rotation == 1
    assert ActivePiece(PieceKind.S, 1).rotated(1).rotation == 0


def test_active_piece_cells_follow_anchor():
    piece = ActivePiece(PieceKind.I, 1, -2, 16)
    assert sorted(piece.cells()) == [(0, 16), (0, 17), (0, 18), (0, 19)]


def test_catalog_colors():
    assert CATALOG[PieceKind.I].color == "#22d3ee"
    assert CATALOG[PieceKind.I].rgb == (34, 211, 238)


def test_random_kind_covers_all_kinds():
    rng = random.Random(0)
    drawn = {random_kind(rng) for _ in range(500)}
    assert drawn == set(PieceKind)


def test_rotation_tables_are_distinct_per_state():
    for definition in CATALOG.values():
        for i, a in enumerate(definition.rotations):
            for b in definition.rotations[i + 1:]:
                assert not (a.shape == b.shape and np.array_equal(a, b))
