"""Cursor movement rules.

Every function here is pure: it takes the grid and a position and returns
the new position without touching either.
"""
from enum import Enum

from puzterm.models.grid import Grid

type Position = tuple[int, int]


class Direction(Enum):
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UP = (0, -1)
    DOWN = (0, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


def select_move(grid: Grid, x: int, y: int, direction: Direction) -> Position:
    """One step with wraparound at every edge. Blocks are visited like any cell."""
    return (x + direction.dx) % grid.width, (y + direction.dy) % grid.height


def edit_move(grid: Grid, x: int, y: int, direction: Direction) -> Position:
    """One step that neither wraps nor lands on a block; refused moves stay put."""
    nx, ny = x + direction.dx, y + direction.dy
    if not grid.in_bounds(nx, ny) or grid.is_block(nx, ny):
        return x, y
    return nx, ny

