from dataclasses import dataclass
from typing import Iterator, List, Optional

from puzterm.models.puzzle_file import BLOCK, PuzzleFile


@dataclass(slots=True)
class Cell:
    truth: Optional[str] = None
    guess: Optional[str] = None
    clue_number: Optional[int] = None
    clue_across: Optional[str] = None
    clue_down: Optional[str] = None

    @property
    def is_block(self) -> bool:
        return self.truth is None

    @property
    def is_wrong(self) -> bool:
        return self.truth is not None and self.guess is not None and self.guess != self.truth


class Grid:
    """Fixed-shape, row-major board of cells."""

    def __init__(self, width: int, height: int, cells: List[Cell]):
        if width < 1 or height < 1:
            raise ValueError(f"Grid must be at least 1x1, got {width}x{height}")
        if len(cells) != width * height:
            raise ValueError(f"Expected {width * height} cells, got {len(cells)}")
        self.__width = width
        self.__height = height
        self.__cells = cells

    @property
    def width(self) -> int:
        return self.__width

    @property
    def height(self) -> int:
        return self.__height

    @property
    def cells(self) -> List[Cell]:
        return self.__cells

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.__width and 0 <= y < self.__height

    def index(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside a {self.__width}x{self.__height} grid")
        return y * self.__width + x

    def cell(self, x: int, y: int) -> Cell:
        return self.__cells[self.index(x, y)]

    def is_block(self, x: int, y: int) -> bool:
        return self.cell(x, y).is_block

    def positions(self) -> Iterator[tuple[int, int]]:
        """Every (x, y) in row-major order."""
        for y in range(self.__height):
            for x in range(self.__width):
                yield x, y

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.__cells)

    def __len__(self) -> int:
        return len(self.__cells)


def build_grid(puzzle_file: PuzzleFile) -> Grid:
    """Allocate one blank cell per square. The file's saved fill is ignored."""
    cells = [
        Cell(truth=None if c == BLOCK else c)
        for c in puzzle_file.puzzle
    ]
    return Grid(puzzle_file.width, puzzle_file.height, cells)
