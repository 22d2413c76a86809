"""Derives clue numbers from the block layout and hands out clue text."""
from typing import Sequence, Tuple

from puzterm.algorithm.navigation import Direction
from puzterm.errors import ClueCountMismatchError
from puzterm.models.grid import Grid


def starts_across(grid: Grid, x: int, y: int) -> bool:
    """Open cell with a wall (or edge) to its left and an open cell to its right."""
    if grid.is_block(x, y):
        return False
    left_closed = x == 0 or grid.is_block(x - 1, y)
    right_open = x + 1 < grid.width and not grid.is_block(x + 1, y)
    return left_closed and right_open


def starts_down(grid: Grid, x: int, y: int) -> bool:
    """Open cell with a wall (or edge) above it and an open cell below it."""
    if grid.is_block(x, y):
        return False
    top_closed = y == 0 or grid.is_block(x, y - 1)
    bottom_open = y + 1 < grid.height and not grid.is_block(x, y + 1)
    return top_closed and bottom_open


def number_clues(grid: Grid, clues: Sequence[str]) -> int:
    """Number entry starts in row-major order and attach clues in file order.

    A cell that starts both an across and a down entry gets one number and
    takes two clues, across first. Returns how many clues were used, which
    is always len(clues): anything else raises ClueCountMismatchError.
    """
    clue_number = 1
    clue_index = 0

    for x, y in grid.positions():
        across = starts_across(grid, x, y)
        down = starts_down(grid, x, y)
        if not (across or down):
            continue

        needed = clue_index + across + down
        if needed > len(clues):
            raise ClueCountMismatchError(expected=len(clues), consumed=count_entries(grid))

        cell = grid.cell(x, y)
        if across:
            cell.clue_across = clues[clue_index]
            clue_index += 1
        if down:
            cell.clue_down = clues[clue_index]
            clue_index += 1

        cell.clue_number = clue_number
        clue_number += 1

    if clue_index != len(clues):
        raise ClueCountMismatchError(expected=len(clues), consumed=clue_index)

    return clue_index


def count_entries(grid: Grid) -> int:
    """How many clues the layout needs, without touching any cell."""
    return sum(
        starts_across(grid, x, y) + starts_down(grid, x, y)
        for x, y in grid.positions()
    )


def entry_start(grid: Grid, x: int, y: int, direction: Direction) -> Tuple[int, int] | None:
    """First cell of the across/down run through (x, y), or None on a block."""
    if grid.is_block(x, y):
        return None
    if direction in (Direction.LEFT, Direction.RIGHT):
        while x > 0 and not grid.is_block(x - 1, y):
            x -= 1
    else:
        while y > 0 and not grid.is_block(x, y - 1):
            y -= 1
    return x, y
