import pytest

pygame = pytest.importorskip("pygame")

from falling_blocks.game import Command, Status
from falling_blocks.game.grid import empty_board
from falling_blocks.game.pieces import CATALOG, PieceKind
from falling_blocks.visualization.human_play import KEY_TO_COMMAND
from falling_blocks.visualization.renderer import GHOST, Renderer

from conftest import make_state


def _rgb(surface, x, y):
    return tuple(surface.get_at((x, y)))[:3]


def test_board_surface_draws_locked_active_and_ghost():
    board = empty_board()
    board[19, 9] = int(PieceKind.T)
    state = make_state(board=board, kind=PieceKind.O, x=0, y=0)
    renderer = Renderer(cell_size=10)
    surf = renderer.board_surface(state)
    assert surf.get_size() == (100, 200)
    assert _rgb(surf, 91, 191) == CATALOG[PieceKind.T].rgb
    assert _rgb(surf, 1, 1) == CATALOG[PieceKind.O].rgb
    # Ghost outline where the O would land (rows 18-19)
    assert _rgb(surf, 0, 180) == GHOST


def test_board_surface_hides_piece_after_game_over():
    state = make_state(kind=PieceKind.O, x=0, y=0, status=Status.GAME_OVER)
    surf = Renderer(cell_size=10).board_surface(state)
    assert _rgb(surf, 1, 1) != CATALOG[PieceKind.O].rgb


def test_window_size_fits_board_and_panel():
    renderer = Renderer(cell_size=10, margin=5, panel_cells=6)
    assert renderer.window_size(make_state()) == (5 * 3 + 16 * 10, 5 * 2 + 200)


def test_keyboard_covers_every_player_command():
    assert set(KEY_TO_COMMAND.values()) == set(Command) - {Command.NONE}
