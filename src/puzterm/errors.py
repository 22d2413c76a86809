from typing import Optional


class PuzzleError(Exception):
    """Base class for everything that makes a puzzle file unplayable."""


class DecodeError(PuzzleError):
    """The byte stream could not be decoded into a puzzle."""

    def __init__(self, message: str, offset: Optional[int] = None):
        if offset is not None:
            message = f"{message} (at offset {offset})"
        super().__init__(message)
        self.offset = offset


class TruncatedError(DecodeError):
    """The buffer ran out in the middle of a field."""


class MalformedHeaderError(DecodeError):
    """The ACROSS&DOWN header is missing or inconsistent."""


class InvalidCharacterGridError(DecodeError):
    """A solution or state grid is not 7-bit text."""


class ClueCountMismatchError(PuzzleError):
    """The grid layout asks for a different number of clues than the file holds."""

    def __init__(self, expected: int, consumed: int):
        super().__init__(
            f"Puzzle declares {expected} clues but the grid layout needs {consumed}"
        )
        self.expected = expected
        self.consumed = consumed


class ScrambledPuzzleError(PuzzleError):
    """The solution is scrambled and cannot be played."""
