from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Optional, Tuple

from .actions import Action, apply_actions
from .board import (
    Board,
    compact_board,
    count_contiguous_bottom_rows,
    diff,
    drop_floating_tiles,
    is_game_over,
    new_board,
    remove_bottom_rows,
)
from .tiles import Float, new_float


logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    step_interval_ms: int = 300
    clear_interval_ms: int = 150
    group_size: int = 4
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        assert self.width > 0 and self.height > 0, "board dimensions must be positive"
        assert self.step_interval_ms >= 0 and self.clear_interval_ms >= 0, "intervals must not be negative"
        assert self.group_size >= 1, "group size must be at least 1"
        # A straight group spans group_size cells on either axis
        assert self.width >= self.group_size and self.height >= self.group_size, "board too small for group"


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the engine state handed to render sinks."""

    board: Board
    float: Optional[Float]
    highlight: Board
    game_over: bool
    rows_cleared: int


RenderCallback = Callable[[Snapshot], None]


def advance_board(board: Board, float_: Optional[Float]) -> Tuple[Board, Optional[Float]]:
    """Advance gravity one unit for the board and the float together.

    Collision is tested against the board as it was before compaction. When
    the advanced float would hit an occupied cell or pass the bottom edge, the
    float is merged into the compacted board and removed.
    """
    next_board = compact_board(board)
    if float_ is None:
        return next_board, None

    height = board.shape[1]
    next_float = float_.moved(dy=1)
    for x, y in next_float.cells():
        if y >= height or board[x, y]:
            return drop_floating_tiles(next_board, float_), None
    return next_board, next_float


class FallingTilesGame:
    """Owns the board, the float, the highlight and the pending action queue.

    `tick()` is re-entered by two triggers: a timer driving full simulation
    steps and key presses driving action-only ticks. A full step that finds
    complete bottom rows enters a clearing phase, removing one row per timer
    callback before gravity advances.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        render: Optional[RenderCallback] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.random_seed)
        self._listeners: List[RenderCallback] = []
        if render is not None:
            self._listeners.append(render)
        self._actions: Deque[Action] = deque()
        self.board: Board = new_board(self.config.width, self.config.height)
        self.highlight: Board = new_board(self.config.width, self.config.height)
        self.float: Optional[Float] = None
        self._pending_clears = 0
        self._clearing = False
        self._rows_cleared = 0
        self._halt_logged = False

    def reset(self) -> None:
        self.board = new_board(self.config.width, self.config.height)
        self.highlight = new_board(self.config.width, self.config.height)
        self.float = None
        self._actions.clear()
        self._pending_clears = 0
        self._clearing = False
        self._rows_cleared = 0
        self._halt_logged = False
        logger.info("game reset (%dx%d)", self.config.width, self.config.height)

    # ----- state queries -----
    @property
    def game_over(self) -> bool:
        return is_game_over(self.board)

    @property
    def clearing(self) -> bool:
        return self._clearing

    @property
    def rows_cleared(self) -> int:
        return self._rows_cleared

    @property
    def pending_actions(self) -> Tuple[Action, ...]:
        return tuple(self._actions)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            board=self.board,
            float=self.float,
            highlight=self.highlight,
            game_over=self.game_over,
            rows_cleared=self._rows_cleared,
        )

    def subscribe(self, callback: RenderCallback) -> None:
        self._listeners.append(callback)

    # ----- input -----
    def queue_action(self, action: Action) -> None:
        self._actions.append(Action(action))

    def _drain_actions(self) -> List[Action]:
        actions = list(self._actions)
        self._actions.clear()
        return actions

    # ----- ticks -----
    def tick(self, actions_only: bool = False) -> Optional[int]:
        """Run one tick and return the delay in ms before the next timer callback.

        Returns None once the game is over, and for action-only ticks during
        the clearing phase; those leave their actions queued for the next full
        step.
        """
        if self.game_over:
            if not self._halt_logged:
                logger.info("game over after %d cleared rows", self._rows_cleared)
                self._halt_logged = True
            return None
        if self._clearing:
            if actions_only:
                return None
            return self._continue_clear()

        if self.float is None:
            self.float = new_float(self.config.width, self.rng, self.config.group_size)
        self._apply_pending_actions()
        self._render()
        if actions_only:
            return self.config.step_interval_ms

        self._pending_clears = count_contiguous_bottom_rows(self.board)
        if self._pending_clears:
            return self._clear_next_row()
        self._advance_gravity()
        return self.config.step_interval_ms

    def advance(self) -> None:
        """Run one full step synchronously, including any row-clear animation."""
        delay = self.tick()
        while delay is not None and self._clearing:
            delay = self.tick()

    def _apply_pending_actions(self) -> None:
        board, float_, highlight = apply_actions(self.board, self.float, self._drain_actions())
        if highlight is not None:
            self.highlight = highlight
            logger.debug("float dropped by player")
        self.board, self.float = board, float_

    def _clear_next_row(self) -> int:
        self.board = remove_bottom_rows(self.board)
        self._pending_clears -= 1
        self._rows_cleared += 1
        self._clearing = True
        logger.debug("cleared bottom row (%d pending)", self._pending_clears)
        return self.config.clear_interval_ms

    def _continue_clear(self) -> int:
        self._render()
        if self._pending_clears:
            return self._clear_next_row()
        self._clearing = False
        self._advance_gravity()
        return self.config.step_interval_ms

    def _advance_gravity(self) -> None:
        next_board, next_float = advance_board(self.board, self.float)
        if self.float is not None and next_float is None:
            logger.debug("float settled at x=%d y=%d", self.float.x, self.float.y)
        self.highlight = diff(self.board, next_board)
        self.board, self.float = next_board, next_float

    def _render(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for callback in self._listeners:
            callback(snapshot)
