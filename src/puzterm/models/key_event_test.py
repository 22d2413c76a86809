import pytest

from puzterm.models.key_event import Key, KeyEvent
from puzterm.models.mode import Mode


def test_of_char():
    event = KeyEvent.of_char("x")
    assert event.key is Key.CHAR
    assert event.is_char("x", "y")
    assert not event.is_char("y")
    assert not KeyEvent(Key.ENTER).is_char("x")


def test_of_char_needs_one_character():
    with pytest.raises(ValueError):
        KeyEvent.of_char("xy")


def test_edit_modes():
    assert Mode.EDIT_ACROSS.is_edit
    assert Mode.EDIT_DOWN.is_edit
    assert not Mode.SELECT.is_edit
    assert not Mode.PAUSE.is_edit


@pytest.mark.parametrize("char", [None, "", "ab"])
def test_char_event_needs_one_character(char):
    with pytest.raises(ValueError):
        KeyEvent(Key.CHAR, char)
