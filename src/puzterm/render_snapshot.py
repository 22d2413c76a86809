from dataclasses import dataclass, field
from typing import Optional, Tuple

from puzterm.models.game_status import GameStatus
from puzterm.models.mode import Mode


@dataclass(frozen=True, slots=True)
class CellView:
    is_block: bool
    guess: Optional[str] = None
    clue_number: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ClueLine:
    text: str
    is_heading: bool = False
    is_current: bool = False


@dataclass(frozen=True, slots=True)
class RenderModel:
    """Read-only picture of a session for the presentation layer."""

    width: int
    height: int
    cursor_x: int
    cursor_y: int
    mode: Mode
    status: GameStatus
    elapsed: float
    hint_num_errors: bool
    clues_scroll: int
    title: str = ""
    author: str = ""
    version: str = ""

    cells: Tuple[CellView, ...] = field(default_factory=tuple)
    clue_lines: Tuple[ClueLine, ...] = field(default_factory=tuple)

    def cell(self, x: int, y: int) -> CellView:
        return self.cells[y * self.width + x]

    def visible_clue_lines(self, rows: int) -> Tuple[ClueLine, ...]:
        """The clue lines that fit in `rows`, starting at the scroll offset."""
        return self.clue_lines[self.clues_scroll:self.clues_scroll + rows]
