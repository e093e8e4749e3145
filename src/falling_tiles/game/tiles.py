from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Iterator, Optional, Tuple


Coordinate = Tuple[int, int]
TileGroup = Tuple[Coordinate, ...]


def normalize(group: TileGroup) -> TileGroup:
    """Translate the group so its minimum x and minimum y are both 0."""
    assert len(group) > 0, "tile group must not be empty"
    min_x = min(x for x, _ in group)
    min_y = min(y for _, y in group)
    return tuple((x - min_x, y - min_y) for x, y in group)


def rotate_group(group: TileGroup) -> TileGroup:
    """Rotate by 90 degrees about the origin, (x, y) -> (-y, x), then normalize."""
    return normalize(tuple((-y, x) for x, y in group))


def group_width(group: TileGroup) -> int:
    """Bounding-box span on x (max - min), not a cell count."""
    xs = [x for x, _ in group]
    return max(xs) - min(xs)


def group_height(group: TileGroup) -> int:
    """Bounding-box span on y (max - min), not a cell count."""
    ys = [y for _, y in group]
    return max(ys) - min(ys)


def is_connected(group: TileGroup) -> bool:
    """True if every cell is reachable from the first through orthogonal unit steps."""
    cells = set(group)
    if not cells:
        return False
    seen = {group[0]}
    stack = [group[0]]
    while stack:
        x, y = stack.pop()
        for neighbour in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)):
            if neighbour in cells and neighbour not in seen:
                seen.add(neighbour)
                stack.append(neighbour)
    return seen == cells


def random_group(n: int = 4, rng: Optional[random.Random] = None) -> TileGroup:
    """Build a connected group of `n` unique cells with a random walk from (0, 0).

    Each step moves one unit on exactly one axis: x first, and only when the x
    step is 0 is a y step drawn. Revisited cells are ignored and the walk goes
    on until `n` unique cells are collected.
    """
    assert n >= 1, "tile group needs at least one cell"
    rng = rng or random.Random()
    last: Coordinate = (0, 0)
    cells = {last}
    while len(cells) < n:
        dx = rng.randint(-1, 1)
        dy = 0 if dx else rng.randint(-1, 1)
        last = (last[0] + dx, last[1] + dy)
        cells.add(last)
    ordered = sorted(cells, key=lambda c: f"{c[0]},{c[1]}")
    return normalize(tuple(ordered))


@dataclass(frozen=True)
class Float:
    """The falling group and the board offset of its local origin."""

    group: TileGroup
    x: int = 0
    y: int = 0

    @property
    def width(self) -> int:
        return group_width(self.group)

    @property
    def height(self) -> int:
        return group_height(self.group)

    def cells(self) -> Iterator[Coordinate]:
        for dx, dy in self.group:
            yield (self.x + dx, self.y + dy)

    def moved(self, dx: int = 0, dy: int = 0) -> "Float":
        return replace(self, x=self.x + dx, y=self.y + dy)


def new_float(board_width: int, rng: Optional[random.Random] = None, n: int = 4) -> Float:
    """Spawn a random group centred horizontally on the top row."""
    group = random_group(n, rng)
    return Float(group=group, x=(board_width - group_width(group)) // 2, y=0)
