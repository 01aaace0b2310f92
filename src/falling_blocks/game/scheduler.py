"""Gravity timing.

The engine never reads a clock itself. Hosts deliver timestamps (milliseconds)
with every tick; `poll` turns the elapsed time since the last gravity step
into at most one step per tick. Time beyond one interval is not carried over.
"""

from __future__ import annotations

from typing import Optional, Tuple


def poll(last_drop: Optional[float], now: float, interval: float) -> Tuple[bool, float]:
    """Return (step_due, new_mark) for a tick arriving at `now`."""
    if last_drop is None:
        return False, now
    if now - last_drop >= interval:
        return True, now
    return False, last_drop


class SimulatedClock:
    """Deterministic clock advancing a fixed amount per call, for agents and tests."""

    def __init__(self, step_ms: float = 50.0, start: float = 0.0) -> None:
        self.step_ms = float(step_ms)
        self.start = float(start)
        self.now = self.start

    def reset(self) -> float:
        self.now = self.start
        return self.now

    def advance(self, steps: int = 1) -> float:
        self.now += self.step_ms * steps
        return self.now
