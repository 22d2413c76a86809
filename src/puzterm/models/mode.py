from enum import Enum


class Mode(Enum):
    SELECT = "select"
    EDIT_ACROSS = "edit_across"
    EDIT_DOWN = "edit_down"
    PAUSE = "pause"
    GAME_OVER = "game_over"

    @property
    def is_edit(self) -> bool:
        return self in (Mode.EDIT_ACROSS, Mode.EDIT_DOWN)
