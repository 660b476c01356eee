"""Deferred end-turn for presentation layers.

After a reveal-producing action a front-end may move on to the next player by
itself after a short delay. The engine never depends on this: the scheduled
transition is tied to the snapshot version it was planned for and is dropped
when anything else changed the state first.
"""

from __future__ import annotations

from typing import Callable, Optional
import threading

from .core import GameState, end_turn
from .types import TurnPhase


def wants_auto_advance(state: GameState) -> bool:
    phase = state.phase
    return isinstance(phase, TurnPhase) and phase.acted and phase.held is None


def advance_if_current(state: GameState, version: int) -> GameState:
    # Superseded: somebody already moved the game on
    if state.version != version or not wants_auto_advance(state):
        return state
    return end_turn(state)


class AutoAdvance:
    """A single cancellable timer; scheduling again replaces the pending one."""

    def __init__(self, delay: float, fire: Callable[[int], None]) -> None:
        self.delay = delay
        self._fire = fire
        self._timer: Optional[threading.Timer] = None
        self._version: Optional[int] = None
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.delay > 0

    @property
    def pending_version(self) -> Optional[int]:
        with self._lock:
            return self._version

    def schedule(self, version: int) -> bool:
        if not self.enabled:
            return False
        with self._lock:
            self._cancel_locked()
            self._version = version
            self._timer = threading.Timer(self.delay, self._run, args=(version,))
            self._timer.daemon = True
            self._timer.start()
        return True

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._version = None

    def _run(self, version: int) -> None:
        with self._lock:
            if self._version != version:
                return
            self._timer = None
            self._version = None
        self._fire(version)
