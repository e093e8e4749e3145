"""Game module for Falling Tiles.

Exports the board engine and supporting pieces:
- board operations: grid creation, diffing, column gravity and row clears
- tile-group geometry and the Float value
- Action and apply_actions: player input applied to the float
- FallingTilesGame: tick orchestration and state ownership
- Timer / GameLoop: scheduling of full steps and action-only ticks
"""

from .actions import Action, apply_actions
from .board import (
    Board,
    clone_board,
    compact_board,
    compact_column,
    copy_into,
    count_contiguous_bottom_rows,
    diff,
    drop_floating_tiles,
    is_game_over,
    new_board,
    overlay_float,
    remove_bottom_rows,
)
from .core import FallingTilesGame, GameConfig, Snapshot, advance_board
from .loop import GameLoop, Timer
from .tiles import (
    Float,
    TileGroup,
    group_height,
    group_width,
    is_connected,
    new_float,
    normalize,
    random_group,
    rotate_group,
)

__all__ = [
    "Action",
    "apply_actions",
    "Board",
    "clone_board",
    "compact_board",
    "compact_column",
    "copy_into",
    "count_contiguous_bottom_rows",
    "diff",
    "drop_floating_tiles",
    "is_game_over",
    "new_board",
    "overlay_float",
    "remove_bottom_rows",
    "FallingTilesGame",
    "GameConfig",
    "Snapshot",
    "advance_board",
    "GameLoop",
    "Timer",
    "Float",
    "TileGroup",
    "group_height",
    "group_width",
    "is_connected",
    "new_float",
    "normalize",
    "random_group",
    "rotate_group",
]
