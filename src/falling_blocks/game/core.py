from __future__ import annotations

import random
import threading
from typing import Any, Dict, Optional, Sequence, Union

import numpy as np

from .engine import Command, Event, Tick, available_commands, new_game, transition
from .rules import ScoringRules
from .state import GameConfig, GameState, Status


class FallingBlockGame:
    """Owns the single live `GameState` and feeds it commands and ticks.

    Dispatches are serialized with a lock so a host may deliver ticks from a
    timer thread while input arrives on another.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self._lock = threading.Lock()
        self.state: GameState = new_game(self.rng, self.config)

    def reset(self, seed: Optional[int] = None) -> GameState:
        with self._lock:
            if seed is not None:
                self.rng.seed(seed)
            self.state = transition(self.state, Command.RESET, self.rng, self.config, self.rules)
            return self.state

    def dispatch(self, event: Event) -> GameState:
        with self._lock:
            self.state = transition(self.state, event, self.rng, self.config, self.rules)
            return self.state

    def step(self, command: Union[Command, int]) -> GameState:
        return self.dispatch(Command(command))

    def tick(self, now: float) -> GameState:
        return self.dispatch(Tick(float(now)))

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def lines(self) -> int:
        return self.state.lines

    @property
    def level(self) -> int:
        return self.state.level

    @property
    def status(self) -> Status:
        return self.state.status

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def drop_interval(self) -> int:
        return self.rules.drop_interval(self.state.level)

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the board for observation
        state = self.state
        overlay = state.board.copy()
        if state.active is not None and not state.game_over:
            height, width = overlay.shape
            for x, y in state.active.cells():
                if 0 <= y < height and 0 <= x < width:
                    # Negative marks the falling piece
                    overlay[y, x] = -int(state.active.kind)
        return overlay

    def snapshot(self) -> Dict[str, Any]:
        snap = self.state.snapshot()
        snap["drop_interval"] = self.drop_interval
        return snap

    def action_mask(self, commands: Sequence[Command] = tuple(Command)) -> np.ndarray:
        available = available_commands(self.state, self.config)
        return np.array([available[c] for c in commands], dtype=np.bool_)
