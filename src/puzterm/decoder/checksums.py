"""Across Lite checksum arithmetic.

Files in the wild are often written by tools that get these wrong, so a
mismatch is reported to the caller and never treated as a decode failure.
"""
import re
import struct
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from puzterm.decoder.byte_cursor import TEXT_ENCODING
from puzterm.models.puzzle_file import PuzzleFile

CIB_FORMAT = "<BBHHH"
MASK_LOW = b"ICHE"
MASK_HIGH = b"ATED"
VERSION_RE = re.compile(r"\d+(?:\.\d+)*")


@dataclass(frozen=True, slots=True)
class ChecksumMismatch:
    field: str
    stored: int
    computed: int


def data_checksum(data: bytes, seed: int = 0) -> int:
    """Rotate right by one, add the byte, keep 16 bits."""
    checksum = seed
    for b in data:
        if checksum & 0x0001:
            checksum = (checksum >> 1) | 0x8000
        else:
            checksum = checksum >> 1
        checksum = (checksum + b) & 0xFFFF
    return checksum


def version_tuple(version: str) -> Tuple[int, ...]:
    """Leading dotted number of a version field, so "1.3b" gives (1, 3)."""
    match = VERSION_RE.match(version.split("\x00", 1)[0].strip())
    if match is None:
        return (0,)
    return tuple(int(part) for part in match.group().split("."))


def _zstring(text: str) -> bytes:
    return text.encode(TEXT_ENCODING, errors="replace") + b"\x00"


def cib_checksum(width: int, height: int, num_clues: int, unknown_bitmask: int, scrambled: int) -> int:
    return data_checksum(struct.pack(CIB_FORMAT, width, height, num_clues, unknown_bitmask, scrambled))


def text_checksum(
    title: str,
    author: str,
    copyright: str,
    clues: Iterable[str],
    notes: str,
    version: str,
    seed: int = 0,
) -> int:
    checksum = seed
    for text in (title, author, copyright):
        if text:
            checksum = data_checksum(_zstring(text), checksum)
    for clue in clues:
        if clue:
            checksum = data_checksum(clue.encode(TEXT_ENCODING, errors="replace"), checksum)
    # notes only count from format 1.3 on
    if notes and version_tuple(version) >= (1, 3):
        checksum = data_checksum(_zstring(notes), checksum)
    return checksum


def _parts(p: PuzzleFile) -> List[int]:
    """The four checksums that feed both the global and the masked checksum."""
    return [
        cib_checksum(p.width, p.height, p.num_clues, p.unknown_bitmask, p.scrambled),
        data_checksum(p.puzzle.encode("ascii")),
        data_checksum(p.state.encode("ascii")),
        text_checksum(p.title, p.author, p.copyright, p.clues, p.notes, p.version),
    ]


def global_checksum(p: PuzzleFile) -> int:
    checksum = cib_checksum(p.width, p.height, p.num_clues, p.unknown_bitmask, p.scrambled)
    checksum = data_checksum(p.puzzle.encode("ascii"), checksum)
    checksum = data_checksum(p.state.encode("ascii"), checksum)
    return text_checksum(p.title, p.author, p.copyright, p.clues, p.notes, p.version, checksum)


def masked_checksums(p: PuzzleFile) -> Tuple[int, int, int, int]:
    """(masked_low_1, masked_low_2, masked_high_1, masked_high_2)."""
    parts = _parts(p)
    low = bytes(MASK_LOW[i] ^ (c & 0xFF) for i, c in enumerate(parts))
    high = bytes(MASK_HIGH[i] ^ (c >> 8) for i, c in enumerate(parts))
    return struct.unpack("<HHHH", low + high)


def verify_checksums(p: PuzzleFile) -> List[ChecksumMismatch]:
    """Compare every stored checksum with the recomputed value."""
    low_1, low_2, high_1, high_2 = masked_checksums(p)
    expected = [
        ("checksum", p.checksum, global_checksum(p)),
        ("cib_checksum", p.cib_checksum, _parts(p)[0]),
        ("masked_low_checksum_1", p.masked_low_checksum_1, low_1),
        ("masked_low_checksum_2", p.masked_low_checksum_2, low_2),
        ("masked_high_checksum_1", p.masked_high_checksum_1, high_1),
        ("masked_high_checksum_2", p.masked_high_checksum_2, high_2),
    ]
    return [
        ChecksumMismatch(field=name, stored=stored, computed=computed)
        for name, stored, computed in expected
        if stored != computed
    ]
