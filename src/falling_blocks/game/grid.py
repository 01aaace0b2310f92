from __future__ import annotations

from typing import Dict, List, Tuple

import numpy as np

from .pieces import Shape, cells_at


BOARD_WIDTH = 10
BOARD_HEIGHT = 20
EMPTY = 0

Board = np.ndarray


def empty_board(width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> Board:
    """A (height, width) int8 board; 0 marks an empty cell, 1..7 a locked piece kind.

    Row 0 is the top of the well. Board functions below never write into
    their input: they return a new array, or the same one when nothing changes.
    """
    return np.zeros((height, width), dtype=np.int8)


def can_place(board: Board, mask: Shape, x: int, y: int) -> bool:
    height, width = board.shape
    for cx, cy in cells_at(mask, x, y):
        if cx < 0 or cx >= width or cy >= height:
            return False
        # Rows above the top are legal while a piece is still entering
        if cy >= 0 and board[cy, cx] != EMPTY:
            return False
    return True


def lock_and_merge(board: Board, mask: Shape, x: int, y: int, tag: int) -> Board:
    height, width = board.shape
    merged = board.copy()
    for cx, cy in cells_at(mask, x, y):
        if 0 <= cy < height and 0 <= cx < width:
            merged[cy, cx] = tag
    return merged


def clear_full_lines(board: Board) -> Tuple[Board, int]:
    full = np.all(board != EMPTY, axis=1)
    cleared = int(full.sum())
    if cleared == 0:
        return board, 0
    new_rows = np.zeros((cleared, board.shape[1]), dtype=board.dtype)
    return np.vstack((new_rows, board[~full])), cleared


def is_top_reached(board: Board) -> bool:
    return bool(np.any(board[0] != EMPTY))


def drop_row(board: Board, mask: Shape, x: int, y: int) -> int:
    """Lowest row at or below `y` where `mask` still fits in column `x`."""
    while can_place(board, mask, x, y + 1):
        y += 1
    return y


def column_heights(board: Board) -> List[int]:
    height = board.shape[0]
    heights: List[int] = []
    for col in board.T:
        filled = np.flatnonzero(col != EMPTY)
        heights.append(height - int(filled[0]) if filled.size else 0)
    return heights


def count_holes(board: Board) -> int:
    holes = 0
    for col in board.T:
        seen_block = False
        for cell in col:
            if cell != EMPTY:
                seen_block = True
            elif seen_block:
                holes += 1
    return holes


def board_features(board: Board) -> Dict[str, float]:
    heights = column_heights(board)
    bumpiness = sum(abs(heights[i] - heights[i + 1]) for i in range(len(heights) - 1))
    return {
        "max_height": max(heights) if heights else 0,
        "avg_height": float(np.mean(heights)) if heights else 0.0,
        "holes": count_holes(board),
        "bumpiness": bumpiness,
        "filled_cells": int(np.count_nonzero(board)),
    }
