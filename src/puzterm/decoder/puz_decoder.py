"""Decoder for Across Lite .puz files."""
import structlog

from puzterm.decoder.byte_cursor import ByteCursor
from puzterm.errors import InvalidCharacterGridError, MalformedHeaderError
from puzterm.models.puzzle_file import MAGIC, PuzzleFile

log = structlog.get_logger(__name__)

MAGIC_BYTES = MAGIC.encode("ascii")
CHECKSUM_SIZE = 2
VERSION_SIZE = 4
RESERVED_2_SIZE = 12


def find_header(cursor: ByteCursor) -> int:
    """Offset of the checksum that sits right before the first ACROSS&DOWN."""
    magic_at = cursor.find(MAGIC_BYTES, CHECKSUM_SIZE)
    if magic_at < 0:
        raise MalformedHeaderError(f"No {MAGIC} marker found")
    return magic_at - CHECKSUM_SIZE


def read_grid(cursor: ByteCursor, size: int, what: str) -> str:
    start = cursor.position
    raw = cursor.read(size, what)
    try:
        return raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise InvalidCharacterGridError(
            f"{what} grid is not 7-bit text", start + e.start
        ) from e


def decode(data: bytes) -> PuzzleFile:
    """Decode a .puz byte buffer into a PuzzleFile.

    Raises TruncatedError, MalformedHeaderError or InvalidCharacterGridError.
    Checksums are read but not checked here, see checksums.verify_checksums.
    """
    cursor = ByteCursor(data)

    header_at = find_header(cursor)
    preamble = cursor.read(header_at, "preamble")
    checksum = cursor.u16("checksum")

    magic_at = cursor.position
    magic = cursor.cstring("magic")
    if magic != MAGIC:
        raise MalformedHeaderError(f"Expected {MAGIC!r}, found {magic!r}", magic_at)

    cib_checksum = cursor.u16("cib_checksum")
    masked_low_checksum_1 = cursor.u16("masked_low_checksum_1")
    masked_low_checksum_2 = cursor.u16("masked_low_checksum_2")
    masked_high_checksum_1 = cursor.u16("masked_high_checksum_1")
    masked_high_checksum_2 = cursor.u16("masked_high_checksum_2")
    version = cursor.read(VERSION_SIZE, "version").decode("iso-8859-1")
    reserved_1 = cursor.u16("reserved_1")
    scrambled_checksum = cursor.u16("scrambled_checksum")
    reserved_2 = cursor.read(RESERVED_2_SIZE, "reserved_2")

    dimensions_at = cursor.position
    width = cursor.u8("width")
    height = cursor.u8("height")
    if width == 0 or height == 0:
        raise MalformedHeaderError(f"Invalid grid size {width}x{height}", dimensions_at)

    num_clues = cursor.u16("num_clues")
    unknown_bitmask = cursor.u16("unknown_bitmask")
    scrambled = cursor.u16("scrambled")

    puzzle = read_grid(cursor, width * height, "puzzle")
    state = read_grid(cursor, width * height, "state")

    title = cursor.cstring("title")
    author = cursor.cstring("author")
    copyright = cursor.cstring("copyright")
    clues = tuple(cursor.cstring(f"clue {i + 1}") for i in range(num_clues))
    notes = cursor.cstring("notes")

    log.debug(
        "puzzle decoded",
        width=width,
        height=height,
        num_clues=num_clues,
        preamble_len=len(preamble),
        trailing_bytes=cursor.remaining,
    )

    return PuzzleFile(
        preamble=preamble,
        checksum=checksum,
        magic=magic,
        cib_checksum=cib_checksum,
        masked_low_checksum_1=masked_low_checksum_1,
        masked_low_checksum_2=masked_low_checksum_2,
        masked_high_checksum_1=masked_high_checksum_1,
        masked_high_checksum_2=masked_high_checksum_2,
        version=version,
        reserved_1=reserved_1,
        scrambled_checksum=scrambled_checksum,
        reserved_2=reserved_2,
        width=width,
        height=height,
        num_clues=num_clues,
        unknown_bitmask=unknown_bitmask,
        scrambled=scrambled,
        puzzle=puzzle,
        state=state,
        title=title,
        author=author,
        copyright=copyright,
        clues=clues,
        notes=notes,
    )
