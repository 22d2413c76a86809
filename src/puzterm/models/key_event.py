from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class Key(Enum):
    CHAR = auto()
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    ENTER = auto()
    ESCAPE = auto()
    BACKSPACE = auto()
    DELETE = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    CTRL_C = auto()


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """One decoded key press. `char` is only set for Key.CHAR."""

    key: Key
    char: Optional[str] = None

    def __post_init__(self) -> None:
        if self.key is Key.CHAR and (self.char is None or len(self.char) != 1):
            raise ValueError(f"Key.CHAR needs a single character, got {self.char!r}")

    @classmethod
    def of_char(cls, char: str) -> "KeyEvent":
        return cls(Key.CHAR, char)

    def is_char(self, *chars: str) -> bool:
        return self.key is Key.CHAR and self.char in chars
