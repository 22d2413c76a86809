from puzterm.models.game_status import GameStatus
from puzterm.models.grid import Grid


def evaluate(grid: Grid) -> GameStatus:
    """Count playable cells, filled cells and wrong guesses from scratch."""
    cells = guesses = errors = 0
    for cell in grid:
        if not cell.is_block:
            cells += 1
        if cell.guess is not None:
            guesses += 1
        if cell.is_wrong:
            errors += 1
    return GameStatus(cells=cells, guesses=guesses, errors=errors)


def is_solved(grid: Grid) -> bool:
    status = evaluate(grid)
    return status.errors == 0 and status.cells == status.guesses
