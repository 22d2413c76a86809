from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GameStatus:
    cells: int = 0
    guesses: int = 0
    errors: int = 0
