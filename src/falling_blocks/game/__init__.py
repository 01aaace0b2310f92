"""Game module for Falling Blocks.

Exports the engine and supporting types:
- PieceKind / PieceDefinition / CATALOG: the seven kinds and their rotation tables
- ActivePiece: the falling piece (kind, rotation, anchor)
- board helpers: can_place, lock_and_merge, clear_full_lines
- ScoringRules: score table, level progression and drop interval
- GameState / GameConfig / Status: the value the engine transitions
- Command / Tick / transition: the event contract
- FallingBlockGame: host-side owner of the live state
"""

from .pieces import CATALOG, ActivePiece, PieceDefinition, PieceKind, rotate
from .grid import can_place, clear_full_lines, empty_board, lock_and_merge
from .rules import ScoringRules
from .state import GameConfig, GameState, Status
from .engine import Command, Tick, available_commands, new_game, transition
from .core import FallingBlockGame

__all__ = [
    "CATALOG",
    "ActivePiece",
    "PieceDefinition",
    "PieceKind",
    "rotate",
    "can_place",
    "clear_full_lines",
    "empty_board",
    "lock_and_merge",
    "ScoringRules",
    "GameConfig",
    "GameState",
    "Status",
    "Command",
    "Tick",
    "available_commands",
    "new_game",
    "transition",
    "FallingBlockGame",
]
