"""Writes PuzzleFile records back out in .puz layout."""
import struct
from dataclasses import replace
from typing import Sequence

from puzterm.decoder.byte_cursor import TEXT_ENCODING
from puzterm.decoder.checksums import (
    cib_checksum,
    global_checksum,
    masked_checksums,
)
from puzterm.models.puzzle_file import BLOCK, EMPTY, MAGIC, PuzzleFile

HEADER_FORMAT = "<H12sHHHHH4sHH12sBBHHH"
DEFAULT_VERSION = "1.3\x00"


def _zstring(text: str) -> bytes:
    return text.encode(TEXT_ENCODING, errors="replace") + b"\x00"


def encode(p: PuzzleFile) -> bytes:
    """Serialize `p` so that decode(encode(p)) == p."""
    if len(p.puzzle) != p.cell_count or len(p.state) != p.cell_count:
        raise ValueError(f"Grids must hold {p.cell_count} cells for a {p.width}x{p.height} puzzle")
    if len(p.clues) != p.num_clues:
        raise ValueError(f"num_clues is {p.num_clues} but {len(p.clues)} clues were given")

    header = struct.pack(
        HEADER_FORMAT,
        p.checksum,
        p.magic.encode("ascii") + b"\x00",
        p.cib_checksum,
        p.masked_low_checksum_1,
        p.masked_low_checksum_2,
        p.masked_high_checksum_1,
        p.masked_high_checksum_2,
        p.version.encode("iso-8859-1"),
        p.reserved_1,
        p.scrambled_checksum,
        p.reserved_2,
        p.width,
        p.height,
        p.num_clues,
        p.unknown_bitmask,
        p.scrambled,
    )

    parts = [p.preamble, header, p.puzzle.encode("ascii"), p.state.encode("ascii")]
    parts.extend(_zstring(text) for text in (p.title, p.author, p.copyright))
    parts.extend(_zstring(clue) for clue in p.clues)
    parts.append(_zstring(p.notes))
    return b"".join(parts)


def new_puzzle_file(
    width: int,
    height: int,
    puzzle: str,
    clues: Sequence[str],
    *,
    title: str = "",
    author: str = "",
    copyright: str = "",
    notes: str = "",
    state: str | None = None,
    preamble: bytes = b"",
    version: str = DEFAULT_VERSION,
    scrambled: int = 0,
) -> PuzzleFile:
    """Build a PuzzleFile with every checksum filled in."""
    if state is None:
        state = "".join(BLOCK if c == BLOCK else EMPTY for c in puzzle)

    draft = PuzzleFile(
        preamble=preamble,
        checksum=0,
        magic=MAGIC,
        cib_checksum=cib_checksum(width, height, len(clues), 1, scrambled),
        masked_low_checksum_1=0,
        masked_low_checksum_2=0,
        masked_high_checksum_1=0,
        masked_high_checksum_2=0,
        version=version,
        reserved_1=0,
        scrambled_checksum=0,
        reserved_2=bytes(12),
        width=width,
        height=height,
        num_clues=len(clues),
        unknown_bitmask=1,
        scrambled=scrambled,
        puzzle=puzzle,
        state=state,
        title=title,
        author=author,
        copyright=copyright,
        clues=tuple(clues),
        notes=notes,
    )
    low_1, low_2, high_1, high_2 = masked_checksums(draft)
    return replace(
        draft,
        checksum=global_checksum(draft),
        masked_low_checksum_1=low_1,
        masked_low_checksum_2=low_2,
        masked_high_checksum_1=high_1,
        masked_high_checksum_2=high_2,
    )
