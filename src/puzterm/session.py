"""The solving session: cursor, modes, guesses and the clock."""
from typing import Callable, List, Optional

import structlog

from puzterm.algorithm.clue_numbering import entry_start, number_clues
from puzterm.algorithm.navigation import Direction, edit_move, select_move
from puzterm.algorithm.progress import evaluate, is_solved
from puzterm.decoder.checksums import verify_checksums
from puzterm.errors import ScrambledPuzzleError
from puzterm.models.game_status import GameStatus
from puzterm.models.grid import Grid, build_grid
from puzterm.models.key_event import Key, KeyEvent
from puzterm.models.mode import Mode
from puzterm.models.puzzle_file import PuzzleFile
from puzterm.render_snapshot import CellView, ClueLine, RenderModel
from puzterm.stopwatch import Stopwatch

log = structlog.get_logger(__name__)

SELECT_MOVE_CHARS = {
    "h": Direction.LEFT,
    "a": Direction.LEFT,
    "j": Direction.DOWN,
    "s": Direction.DOWN,
    "k": Direction.UP,
    "w": Direction.UP,
    "l": Direction.RIGHT,
    "d": Direction.RIGHT,
}

ARROW_KEYS = {
    Key.LEFT: Direction.LEFT,
    Key.RIGHT: Direction.RIGHT,
    Key.UP: Direction.UP,
    Key.DOWN: Direction.DOWN,
}

FORWARD = {Mode.EDIT_ACROSS: Direction.RIGHT, Mode.EDIT_DOWN: Direction.DOWN}
BACKWARD = {Mode.EDIT_ACROSS: Direction.LEFT, Mode.EDIT_DOWN: Direction.UP}


class Session:
    """One solving session over a numbered grid.

    All state changes go through handle(), one KeyEvent at a time.
    """

    def __init__(
        self,
        grid: Grid,
        *,
        title: str = "",
        author: str = "",
        version: str = "",
        clues_scroll_step: int = 5,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.grid = grid
        self.title = title
        self.author = author
        self.version = version
        self.clues_scroll_step = clues_scroll_step
        self.stopwatch = Stopwatch(clock) if clock is not None else Stopwatch()

        self.cursor_x = 0
        self.cursor_y = 0
        self.mode = Mode.SELECT
        self.last_edit_mode = Mode.EDIT_ACROSS
        self.clues_scroll = 0
        self.hint_num_errors = False
        self.running = True

    @classmethod
    def from_puzzle_file(cls, puzzle_file: PuzzleFile, **kwargs) -> "Session":
        """Build and number the grid. Checksum problems are only logged."""
        if puzzle_file.is_scrambled:
            raise ScrambledPuzzleError(
                f"Puzzle solution is scrambled (flag {puzzle_file.scrambled:#06x}); unscrambling is not supported"
            )

        for mismatch in verify_checksums(puzzle_file):
            log.warning(
                "checksum mismatch",
                field=mismatch.field,
                stored=f"{mismatch.stored:#06x}",
                computed=f"{mismatch.computed:#06x}",
            )

        grid = build_grid(puzzle_file)
        number_clues(grid, puzzle_file.clues)
        return cls(grid, title=puzzle_file.title, author=puzzle_file.author, **kwargs)

    # ---- Lifecycle ----
    def start(self) -> None:
        self.stopwatch.start()
        log.info("session started", width=self.grid.width, height=self.grid.height)
        self._check_completion()

    def quit(self) -> None:
        self.stopwatch.stop()
        self.running = False
        log.info("session ended", mode=self.mode.value, elapsed=round(self.stopwatch.elapsed(), 1))

    def handle(self, event: KeyEvent) -> bool:
        """Apply one key press. Returns False once the session is over."""
        if not self.running:
            return False

        if self.mode is Mode.PAUSE:
            self._handle_pause(event)
        elif self.mode is Mode.SELECT:
            self._handle_select(event)
        elif self.mode.is_edit:
            self._handle_edit(event)
        else:
            self.quit()

        return self.running

    def _handle_pause(self, event: KeyEvent) -> None:
        if event.is_char("p") or event.key in (Key.ENTER, Key.ESCAPE):
            self.unpause()
        elif event.is_char("q") or event.key is Key.CTRL_C:
            self.quit()

    def _handle_select(self, event: KeyEvent) -> None:
        if event.key is Key.PAGE_UP:
            self.scroll_clues_up()
        elif event.key is Key.PAGE_DOWN:
            self.scroll_clues_down()
        elif event.key in ARROW_KEYS:
            self.select_move(ARROW_KEYS[event.key])
        elif event.key is Key.CHAR and event.char in SELECT_MOVE_CHARS:
            self.select_move(SELECT_MOVE_CHARS[event.char])
        elif event.is_char("q", "p") or event.key in (Key.CTRL_C, Key.ESCAPE):
            self.pause()
        elif event.is_char("e"):
            self.toggle_hint_num_errors()
        elif event.is_char("i") or event.key is Key.ENTER:
            self.enter_edit_mode()

    def _handle_edit(self, event: KeyEvent) -> None:
        if event.key is Key.DELETE:
            self.clear_guess()
        elif event.key is Key.PAGE_UP:
            self.scroll_clues_up()
        elif event.key is Key.PAGE_DOWN:
            self.scroll_clues_down()
        elif event.key is Key.BACKSPACE:
            self.edit_prev()
        elif event.key in ARROW_KEYS:
            self.edit_move(ARROW_KEYS[event.key])
        elif event.key in (Key.ENTER, Key.ESCAPE):
            self.enter_select_mode()
        elif event.is_char(" "):
            self.toggle_edit_direction()
        elif event.key is Key.CHAR and event.char.isalnum():
            self.input_guess(event.char)

    # ---- Modes ----
    def _set_mode(self, mode: Mode) -> None:
        if mode is not self.mode:
            log.debug("mode changed", old=self.mode.value, new=mode.value)
        self.mode = mode

    def enter_edit_mode(self) -> None:
        """Pick a direction from the clues that start here, else the last one used."""
        cell = self.grid.cell(self.cursor_x, self.cursor_y)
        if cell.is_block:
            return

        if cell.clue_across is not None and cell.clue_down is None:
            mode = Mode.EDIT_ACROSS
        elif cell.clue_down is not None and cell.clue_across is None:
            mode = Mode.EDIT_DOWN
        else:
            mode = self.last_edit_mode

        self._set_mode(mode)
        self.last_edit_mode = mode

    def toggle_edit_direction(self) -> None:
        mode = Mode.EDIT_ACROSS if self.mode is Mode.EDIT_DOWN else Mode.EDIT_DOWN
        self._set_mode(mode)
        self.last_edit_mode = mode

    def enter_select_mode(self) -> None:
        self._set_mode(Mode.SELECT)

    def pause(self) -> None:
        self._set_mode(Mode.PAUSE)
        self.stopwatch.stop()

    def unpause(self) -> None:
        self._set_mode(Mode.SELECT)
        self.stopwatch.start()

    def toggle_hint_num_errors(self) -> None:
        self.hint_num_errors = not self.hint_num_errors

    # ---- Movement ----
    def select_move(self, direction: Direction) -> None:
        self.cursor_x, self.cursor_y = select_move(self.grid, self.cursor_x, self.cursor_y, direction)

    def edit_move(self, direction: Direction) -> None:
        self.cursor_x, self.cursor_y = edit_move(self.grid, self.cursor_x, self.cursor_y, direction)

    def edit_next(self) -> None:
        if self.mode in FORWARD:
            self.edit_move(FORWARD[self.mode])

    def edit_prev(self) -> None:
        if self.mode in BACKWARD:
            self.edit_move(BACKWARD[self.mode])

    def scroll_clues_up(self) -> None:
        self.clues_scroll = max(0, self.clues_scroll - self.clues_scroll_step)

    def scroll_clues_down(self) -> None:
        self.clues_scroll += self.clues_scroll_step

    # ---- Guesses ----
    def input_guess(self, char: str) -> None:
        """Store `char` upper-cased at the cursor and move on.

        Only the first character of a multi-character upper-case form is
        kept ("ß" becomes "S").
        """
        cell = self.grid.cell(self.cursor_x, self.cursor_y)
        if cell.is_block:
            return
        cell.guess = char.upper()[0]
        self.edit_next()
        self._check_completion()

    def clear_guess(self) -> None:
        cell = self.grid.cell(self.cursor_x, self.cursor_y)
        if cell.is_block:
            return
        cell.guess = None
        self._check_completion()

    def _check_completion(self) -> None:
        if self.mode is Mode.GAME_OVER or not is_solved(self.grid):
            return
        self._set_mode(Mode.GAME_OVER)
        self.stopwatch.stop()
        log.info("puzzle solved", elapsed=round(self.stopwatch.elapsed(), 1))

    # ---- Snapshot handoff to UI ----
    def status(self) -> GameStatus:
        return evaluate(self.grid)

    def clue_lines(self) -> List[ClueLine]:
        """Across and Down clue lists with the clues under the cursor marked."""
        current_across = self._entry_number(Direction.RIGHT)
        current_down = self._entry_number(Direction.DOWN)

        lines = [ClueLine("Across", is_heading=True), ClueLine("")]
        for cell in self.grid:
            if cell.clue_across is not None:
                lines.append(ClueLine(
                    f"{cell.clue_number}. {cell.clue_across}",
                    is_current=cell.clue_number == current_across,
                ))

        lines += [ClueLine(""), ClueLine("Down", is_heading=True), ClueLine("")]
        for cell in self.grid:
            if cell.clue_down is not None:
                lines.append(ClueLine(
                    f"{cell.clue_number}. {cell.clue_down}",
                    is_current=cell.clue_number == current_down,
                ))
        return lines

    def _entry_number(self, direction: Direction) -> Optional[int]:
        start = entry_start(self.grid, self.cursor_x, self.cursor_y, direction)
        if start is None:
            return None
        cell = self.grid.cell(*start)
        clue = cell.clue_across if direction is Direction.RIGHT else cell.clue_down
        return cell.clue_number if clue is not None else None

    def snapshot(self) -> RenderModel:
        return RenderModel(
            width=self.grid.width,
            height=self.grid.height,
            cursor_x=self.cursor_x,
            cursor_y=self.cursor_y,
            mode=self.mode,
            status=self.status(),
            elapsed=self.stopwatch.elapsed(),
            hint_num_errors=self.hint_num_errors,
            clues_scroll=self.clues_scroll,
            title=self.title,
            author=self.author,
            version=self.version,
            cells=tuple(
                CellView(is_block=cell.is_block, guess=cell.guess, clue_number=cell.clue_number)
                for cell in self.grid
            ),
            clue_lines=tuple(self.clue_lines()),
        )
