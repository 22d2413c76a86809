from dataclasses import dataclass, field
from typing import Tuple

MAGIC = "ACROSS&DOWN"
BLOCK = "."
EMPTY = "-"


@dataclass(frozen=True, slots=True)
class PuzzleFile:
    """Every field of a .puz file, exactly as stored."""

    preamble: bytes
    checksum: int
    magic: str
    cib_checksum: int
    masked_low_checksum_1: int
    masked_low_checksum_2: int
    masked_high_checksum_1: int
    masked_high_checksum_2: int
    version: str
    reserved_1: int
    scrambled_checksum: int
    reserved_2: bytes
    width: int
    height: int
    num_clues: int
    unknown_bitmask: int
    scrambled: int
    puzzle: str
    state: str
    title: str = ""
    author: str = ""
    copyright: str = ""
    clues: Tuple[str, ...] = field(default_factory=tuple)
    notes: str = ""

    @property
    def is_scrambled(self) -> bool:
        return self.scrambled != 0

    @property
    def cell_count(self) -> int:
        return self.width * self.height
