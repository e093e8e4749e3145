from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .actions import Action
from .core import FallingTilesGame


logger = logging.getLogger(__name__)


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class Timer:
    """Single-shot timer polled by the caller's event loop.

    At most one callback is pending; scheduling replaces it and `cancel()`
    drops it before it fires.
    """

    def __init__(self, clock: Callable[[], int] = _monotonic_ms) -> None:
        self.clock = clock
        self._due: Optional[int] = None
        self._callback: Optional[Callable[[], None]] = None

    @property
    def pending(self) -> bool:
        return self._callback is not None

    @property
    def due(self) -> Optional[int]:
        return self._due

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self._due = self.clock() + int(delay_ms)
        self._callback = callback

    def cancel(self) -> None:
        self._due = None
        self._callback = None

    def poll(self, now_ms: Optional[int] = None) -> bool:
        """Fire the pending callback if it is due. Returns True if it fired."""
        if self._callback is None or self._due is None:
            return False
        now = self.clock() if now_ms is None else now_ms
        if now < self._due:
            return False
        callback = self._callback
        self.cancel()
        callback()
        return True


class GameLoop:
    """Connects a game to its two triggers: the step timer and player input.

    Each entry runs to completion. An action-only tick cancels the pending
    timer, runs, then schedules a fresh full step so gravity never steps twice.
    """

    def __init__(self, game: FallingTilesGame, timer: Optional[Timer] = None) -> None:
        self.game = game
        self.timer = timer or Timer()

    def start(self) -> None:
        self._run(actions_only=False)

    def on_action(self, action: Action) -> None:
        if self.game.game_over:
            return
        self.game.queue_action(action)
        if self.game.clearing:
            # applied at the start of the next full step
            return
        self._run(actions_only=True)

    def update(self, now_ms: Optional[int] = None) -> bool:
        return self.timer.poll(now_ms)

    @property
    def halted(self) -> bool:
        return self.game.game_over and not self.timer.pending

    def _on_timer(self) -> None:
        self._run(actions_only=False)

    def _run(self, actions_only: bool) -> None:
        self.timer.cancel()
        delay = self.game.tick(actions_only)
        if delay is None:
            logger.debug("no further step scheduled")
            return
        self.timer.schedule(delay, self._on_timer)
