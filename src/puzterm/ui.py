from typing import Deque, List, Optional, Tuple

from rich import box
from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from puzterm import logs
from puzterm.config import Settings
from puzterm.event_queue import EventQueue
from puzterm.models.key_event import KeyEvent
from puzterm.models.mode import Mode
from puzterm.render_snapshot import CellView, ClueLine, RenderModel
from puzterm.session import Session
from puzterm.utils import format_elapsed


COLORS = {
    "block": "grey23",
    "number": "dim",
    "guess": "bold",
    "cursor": "reverse",
    "arrow": "bright_red",
    "heading": "bold underline",
    "current_clue": "bold yellow",
    "status": "black on white",
}

ARROWS = {Mode.EDIT_ACROSS: "▶", Mode.EDIT_DOWN: "▼"}

PAUSE_MESSAGES = ["Game Paused", "", "Press p to continue.", "Press q to quit."]
GAME_OVER_MESSAGES = ["Game Over.", "", "Press any key to quit."]

CELL_WIDTH = 3
LOG_LINES_VISIBLE = 6


def status_line(model: RenderModel) -> str:
    """`puzterm <version> G<guesses>/<cells> E<errors> T<h:mm:ss>`, errors hidden unless hinted."""
    errors = str(model.status.errors) if model.hint_num_errors else "?"
    return (
        f"puzterm {model.version} "
        f"G{model.status.guesses}/{model.status.cells} "
        f"E{errors} "
        f"T{format_elapsed(model.elapsed)}"
    )


def cell_text(cell: CellView, is_cursor: bool, mode: Mode) -> Text:
    """Two lines per cell: clue number on top, guess below."""
    if cell.is_block:
        return Text("█" * CELL_WIDTH + "\n" + "█" * CELL_WIDTH, style=COLORS["block"])

    number = "" if cell.clue_number is None else str(cell.clue_number)
    text = Text(f"{number:<{CELL_WIDTH}}"[:CELL_WIDTH], style=COLORS["number"])
    text.append("\n ")
    text.append(cell.guess or " ", style=COLORS["guess"])

    if is_cursor and mode in ARROWS:
        text.append(ARROWS[mode], style=COLORS["arrow"])
    else:
        text.append(" ")

    if is_cursor:
        text.stylize(COLORS["cursor"])
    return text


def render_grid(model: RenderModel) -> Table:
    t = Table(show_header=False, show_lines=True, box=box.HEAVY, padding=(0, 0))
    for _ in range(model.width):
        t.add_column(width=CELL_WIDTH, no_wrap=True, overflow="crop")

    for y in range(model.height):
        t.add_row(*[
            cell_text(model.cell(x, y), (x, y) == (model.cursor_x, model.cursor_y), model.mode)
            for x in range(model.width)
        ])
    return t


def render_clues(lines: Tuple[ClueLine, ...]) -> Panel:
    """One cropped row per clue line; headings and the clues under the cursor stand out."""
    grid = Table.grid(padding=(0, 0))
    grid.add_column(no_wrap=True, overflow="crop")
    for line in lines:
        if line.is_heading:
            grid.add_row(Text(line.text, style=COLORS["heading"]))
        elif line.is_current:
            grid.add_row(Text(line.text, style=COLORS["current_clue"]))
        else:
            grid.add_row(Text(line.text))
    return Panel(grid, title="Clues", padding=(0, 1))


def render_log_panel(buffer: Deque[Tuple[int, str]], title: str, max_lines: int) -> Panel:
    """Render exactly max_lines log entries (cropped to width, no wrap)."""
    # take the last max_lines entries; pad with blanks if fewer
    items = list(buffer)[-max_lines:]
    if len(items) < max_lines:
        items = [(0, "")] * (max_lines - len(items)) + items

    grid = Table.grid(padding=(0, 0))
    grid.add_column(no_wrap=True, overflow="crop")
    for lvl, msg in items:
        style = logs.LEVEL_STYLE.get(lvl, "")
        grid.add_row(Text(msg, style=style))
    return Panel(grid, title=title, padding=(0, 1))


def render_message_screen(messages: List[str]) -> RenderableType:
    lines = Text(justify="center")
    for i, message in enumerate(messages):
        if i:
            lines.append("\n")
        lines.append(message, style="bold" if i == 0 else "")
    return Align.center(lines, vertical="middle")


def render(model: RenderModel, height: int, show_log: bool = False) -> Layout:
    """Lay out the whole screen for one snapshot."""
    layout = Layout()
    parts = [Layout(name="main")]
    if show_log:
        parts.append(Layout(name="log", size=LOG_LINES_VISIBLE + 2))
    parts.append(Layout(name="status", size=1))
    layout.split_column(*parts)

    if model.mode is Mode.PAUSE:
        layout["main"].update(render_message_screen(PAUSE_MESSAGES))
    elif model.mode is Mode.GAME_OVER:
        layout["main"].update(render_message_screen(GAME_OVER_MESSAGES))
    else:
        board_width = model.width * (CELL_WIDTH + 1) + 1
        board = Group(
            render_grid(model),
            Text(model.title, no_wrap=True, overflow="crop"),
            Text(model.author, no_wrap=True, overflow="crop"),
        )
        clue_rows = max(0, height - 1 - 2 - (LOG_LINES_VISIBLE + 2 if show_log else 0))
        layout["main"].split_row(
            Layout(board, name="board", size=board_width),
            Layout(render_clues(model.visible_clue_lines(clue_rows)), name="clues"),
        )

    if show_log:
        layout["log"].update(render_log_panel(logs.LOG_BUFFER, "Log", LOG_LINES_VISIBLE))
    layout["status"].update(Align.left(Text(status_line(model)), style=COLORS["status"]))
    return layout


def ui_loop(
    session: Session,
    events: EventQueue[KeyEvent],
    settings: Settings,
    console: Optional[Console] = None,
) -> None:
    """Drain input, apply it, redraw. Returns when the session ends or input closes."""
    console = console or Console()

    def frame() -> Layout:
        return render(session.snapshot(), console.size.height, settings.show_log)

    session.start()
    tick = 0
    with Live(frame(), console=console, refresh_per_second=settings.refresh_per_second, screen=True) as live:
        while session.running:
            tick += 1
            batch = events.drain(timeout=settings.poll_interval)
            if batch is None:
                break

            for event in batch:
                if not session.handle(event):
                    break

            # The clock keeps moving even without input.
            if batch or tick % settings.status_refresh_ticks == 0:
                live.update(frame())
