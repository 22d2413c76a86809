"""Forward-only reader over a puzzle file buffer."""
import struct

from puzterm.errors import TruncatedError

TEXT_ENCODING = "iso-8859-1"


class ByteCursor:
    """Typed little-endian reads over a bytes buffer with a moving position.

    Every read either returns the full amount requested or raises
    TruncatedError; nothing is padded or cut short.
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self._data = bytes(data)
        self._pos = offset

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def find(self, marker: bytes, start: int = 0) -> int:
        """Absolute offset of the first `marker` at or after `start`, or -1."""
        return self._data.find(marker, start)

    def seek(self, offset: int) -> None:
        if offset < 0 or offset > len(self._data):
            raise ValueError(f"Seek to {offset} is outside [0, {len(self._data)}]")
        self._pos = offset

    def read(self, size: int, what: str = "bytes") -> bytes:
        if self._pos + size > len(self._data):
            raise TruncatedError(
                f"Need {size} bytes for {what}, only {self.remaining} left", self._pos
            )
        chunk = self._data[self._pos:self._pos + size]
        self._pos += size
        return chunk

    def u8(self, what: str = "u8") -> int:
        return self.read(1, what)[0]

    def u16(self, what: str = "u16") -> int:
        return struct.unpack("<H", self.read(2, what))[0]

    def cstring(self, what: str = "string") -> str:
        """Read a NUL-terminated Latin-1 string and step past the terminator."""
        start = self._pos
        end = self._data.find(b"\x00", start)
        if end < 0:
            raise TruncatedError(f"Unterminated {what}", start)
        self._pos = end + 1
        return self._data[start:end].decode(TEXT_ENCODING, errors="replace")
