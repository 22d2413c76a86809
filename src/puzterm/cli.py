import click
import structlog

from puzterm.config import Settings
from puzterm.errors import PuzzleError
from puzterm.event_queue import EventQueue
from puzterm.logs import configure_logging
from puzterm.models.key_event import KeyEvent
from puzterm.session import Session
from puzterm.terminal import terminal_session
from puzterm.ui import ui_loop
from puzterm.utils import load_puzzle, package_version

log = structlog.get_logger(__name__)


def play(session: Session, settings: Settings) -> None:
    """Run the interactive player until the user quits."""
    events: EventQueue[KeyEvent] = EventQueue()
    with terminal_session(events):
        ui_loop(session, events, settings)


@click.command()
@click.argument("puzzle_path", type=click.Path(exists=True, dir_okay=False, readable=True))
def cli(puzzle_path: str):
    """Solve the crossword in PUZZLE_PATH (an Across Lite .puz file)."""
    settings = Settings.from_env()
    configure_logging(settings)

    try:
        puzzle_file = load_puzzle(puzzle_path)
        session = Session.from_puzzle_file(
            puzzle_file,
            version=package_version(),
            clues_scroll_step=settings.clues_scroll_step,
        )
    except OSError as e:
        raise click.ClickException(f"Cannot read {puzzle_path}: {e.strerror or e}")
    except PuzzleError as e:
        raise click.ClickException(f"Cannot load {puzzle_path}: {e}")

    log.info("puzzle loaded", path=puzzle_path, title=puzzle_file.title)
    play(session, settings)


if __name__ == "__main__":
    cli()
