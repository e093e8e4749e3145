from __future__ import annotations

from typing import Callable, Optional

import numpy as np

from .tiles import Float


Board = np.ndarray  # shape (width, height), indexed board[x, y]; y == 0 is the top row

CELL_DTYPE = np.int8


def _freeze(board: Board) -> Board:
    board.flags.writeable = False
    return board


def new_board(width: int, height: int, fill: Optional[Callable[[], int]] = None) -> Board:
    """Create a read-only width x height board.

    `fill` is called once per cell; without it every cell is empty.
    """
    assert width > 0 and height > 0, "board must have at least one cell"
    if fill is None:
        board = np.zeros((width, height), dtype=CELL_DTYPE)
    else:
        board = np.array(
            [[fill() for _ in range(height)] for _ in range(width)],
            dtype=CELL_DTYPE,
        )
    return _freeze(board)


def clone_board(board: Board) -> Board:
    """Writable copy sharing no memory with `board`."""
    return np.array(board, dtype=CELL_DTYPE, copy=True)


def copy_into(source: Board, dest: Board) -> None:
    assert source.shape == dest.shape, "boards must have the same dimensions"
    dest[...] = source


def diff(board_a: Board, board_b: Board) -> Board:
    """Cells set to 1 wherever the two boards differ."""
    assert board_a.shape == board_b.shape, "boards must have the same dimensions"
    return _freeze((board_a != board_b).astype(CELL_DTYPE))


def compact_column(cells: np.ndarray) -> np.ndarray:
    """Apply one gravity step to a single column (index 0 is the top).

    The lowest empty cell is removed and a new empty cell is inserted at the
    top, so everything above the gap shifts down by one.
    """
    empties = np.flatnonzero(cells == 0)
    if empties.size == 0:
        return np.array(cells, dtype=CELL_DTYPE, copy=True)
    rest = np.delete(cells, empties[-1])
    return np.concatenate((np.zeros(1, dtype=CELL_DTYPE), rest)).astype(CELL_DTYPE)


def compact_board(board: Board) -> Board:
    return _freeze(np.stack([compact_column(column) for column in board]))


def remove_bottom_rows(board: Board, count: int = 1) -> Board:
    """Drop `count` rows from the bottom and pad the top with empty rows."""
    width, height = board.shape
    assert 0 <= count <= height, "row count out of range"
    if count == 0:
        return _freeze(clone_board(board))
    padding = np.zeros((width, count), dtype=CELL_DTYPE)
    return _freeze(np.concatenate((padding, board[:, :-count]), axis=1).astype(CELL_DTYPE))


def count_contiguous_bottom_rows(board: Board) -> int:
    """Number of fully occupied rows counted upward from the bottom edge."""
    full_rows = np.all(board != 0, axis=0)[::-1]
    if full_rows.all():
        return int(full_rows.size)
    return int(np.argmin(full_rows))


def is_game_over(board: Board) -> bool:
    """True when at least one column has no empty cell left."""
    return bool(np.any(np.all(board != 0, axis=1)))


def drop_floating_tiles(board: Board, float_: Optional[Float]) -> Board:
    """Merge the float into a copy of `board`.

    Every float cell falls to the lowest empty row of its column. Cells are
    processed in the group's order, so several cells sharing a column stack on
    consecutive free slots. A cell whose column is already full is discarded.
    """
    next_board = clone_board(board)
    if float_ is None:
        return _freeze(next_board)
    for x, _ in float_.cells():
        cells = next_board[x]
        empties = np.flatnonzero(cells == 0)
        if empties.size == 0:
            continue
        cells[empties[-1]] = 1
    return _freeze(next_board)


def overlay_float(board: Board, float_: Optional[Float], value: int = 1) -> Board:
    """Copy of `board` with the float's cells painted in at their current offsets."""
    width, height = board.shape
    composed = clone_board(board)
    if float_ is None:
        return composed
    for x, y in float_.cells():
        if 0 <= x < width and 0 <= y < height:
            composed[x, y] = value
    return composed
