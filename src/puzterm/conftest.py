import pytest
import structlog

from puzterm.decoder.puz_encoder import encode, new_puzzle_file
from puzterm.models.puzzle_file import PuzzleFile
from puzterm.session import Session

SMALL_PUZZLE = "PUZ" "O.O" "POO"
SMALL_CLUES = ("Format of this file", "Soda, to some", "Animal park", "Bear of note")


class FakeClock:
    """Manual clock for Stopwatch tests."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def small_puzzle_file() -> PuzzleFile:
    return new_puzzle_file(
        3,
        3,
        SMALL_PUZZLE,
        SMALL_CLUES,
        title="Tiny",
        author="Created by Test",
        copyright="2017 Test",
        notes="",
    )


@pytest.fixture
def small_puzzle_bytes(small_puzzle_file) -> bytes:
    return encode(small_puzzle_file)


@pytest.fixture
def small_session(small_puzzle_file, clock) -> Session:
    session = Session.from_puzzle_file(small_puzzle_file, version="test", clock=clock)
    session.start()
    return session
