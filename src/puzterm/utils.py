from importlib.metadata import PackageNotFoundError, version

from puzterm.decoder.puz_decoder import decode
from puzterm.models.puzzle_file import PuzzleFile

DIST_NAME = "puzterm"


def load_puzzle(file_path: str) -> PuzzleFile:
    """Read and decode a .puz file."""
    with open(file_path, "rb") as f:
        data = f.read()
    return decode(data)


def format_elapsed(seconds: float) -> str:
    """H:MM:SS, hours unpadded."""
    total = int(seconds)
    return f"{total // 3600}:{(total // 60) % 60:02}:{total % 60:02}"


def package_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return "dev"
