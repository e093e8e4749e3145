from __future__ import annotations

from dataclasses import replace
from enum import IntEnum
from typing import Iterable, Optional, Tuple

from .board import Board, diff, drop_floating_tiles, is_game_over
from .tiles import Float, rotate_group


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    DROP = 2
    ROTATE = 3


ActionResult = Tuple[Board, Optional[Float], Optional[Board]]


def apply_actions(board: Board, float_: Optional[Float], actions: Iterable[Action]) -> ActionResult:
    """Apply queued actions in order to a working copy of (board, float).

    Returns the new board, the new float and the highlight diff of a drop, or
    None when no drop happened. A game-over board is returned untouched.
    """
    if is_game_over(board):
        return board, float_, None

    width, height = board.shape
    next_board = board
    highlight: Optional[Board] = None
    for action in actions:
        if float_ is None:
            continue
        action = Action(action)
        if action == Action.LEFT:
            float_ = replace(float_, x=max(float_.x - 1, 0))
        elif action == Action.RIGHT:
            # Keeps one spare column at the right edge.
            float_ = replace(float_, x=min(float_.x + 1, width - float_.width - 1))
        elif action == Action.DROP:
            merged = drop_floating_tiles(next_board, float_)
            highlight = diff(next_board, merged)
            next_board = merged
            float_ = None
        elif action == Action.ROTATE:
            rotated = replace(float_, group=rotate_group(float_.group))
            float_ = replace(
                rotated,
                x=max(min(rotated.x, width - rotated.width - 1), 0),
                y=max(min(rotated.y, height - rotated.height - 1), 0),
            )

    return next_board, float_, highlight
