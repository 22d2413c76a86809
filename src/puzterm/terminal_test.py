import signal
import threading
import time
from contextlib import nullcontext

import pytest
from blessed.keyboard import Keystroke

from puzterm.event_queue import EventQueue
from puzterm.models.key_event import Key, KeyEvent
from puzterm.terminal import read_keys, terminal_session, to_key_event


class FakeTerminal:
    """Hands out scripted keystrokes, then idles."""

    def __init__(self, keys):
        self.keys = list(keys)

    def inkey(self, timeout=None):
        if self.keys:
            return self.keys.pop(0)
        time.sleep(timeout or 0)
        return Keystroke("")

    def cbreak(self):
        return nullcontext()

    def hidden_cursor(self):
        return nullcontext()


class TestToKeyEvent:
    """Test suite for to_key_event"""

    @pytest.mark.parametrize(
        "keystroke, key",
        [
            (Keystroke("\x1b[D", code=260, name="KEY_LEFT"), Key.LEFT),
            (Keystroke("\x1b[C", code=261, name="KEY_RIGHT"), Key.RIGHT),
            (Keystroke("\x1b[A", code=259, name="KEY_UP"), Key.UP),
            (Keystroke("\x1b[B", code=258, name="KEY_DOWN"), Key.DOWN),
            (Keystroke("\x1b[5~", code=339, name="KEY_PGUP"), Key.PAGE_UP),
            (Keystroke("\x1b[6~", code=338, name="KEY_PGDOWN"), Key.PAGE_DOWN),
            (Keystroke("\x1b[3~", code=330, name="KEY_DELETE"), Key.DELETE),
            (Keystroke("\r", code=343, name="KEY_ENTER"), Key.ENTER),
        ],
    )
    def test_named_sequences(self, keystroke, key):
        """Test blessed key names map to keys"""
        assert to_key_event(keystroke) == KeyEvent(key)

    @pytest.mark.parametrize(
        "text, key",
        [("\x03", Key.CTRL_C), ("\n", Key.ENTER), ("\x1b", Key.ESCAPE), ("\x7f", Key.BACKSPACE), ("\x08", Key.BACKSPACE)],
    )
    def test_control_characters(self, text, key):
        """Test raw control characters map to keys"""
        assert to_key_event(text) == KeyEvent(key)

    @pytest.mark.parametrize("text", ["a", "Z", "7", " ", "é"])
    def test_printable(self, text):
        """Test printable characters become character events"""
        assert to_key_event(Keystroke(text)) == KeyEvent(Key.CHAR, text)

    @pytest.mark.parametrize(
        "keystroke",
        [Keystroke("\t"), Keystroke("\x1bOP", code=265, name="KEY_F1"), Keystroke("")],
    )
    def test_ignored(self, keystroke):
        """Test keys without a use are dropped"""
        assert to_key_event(keystroke) is None


def test_read_keys_publishes_until_stopped():
    events = EventQueue()
    stop = threading.Event()
    term = FakeTerminal([Keystroke("x"), Keystroke("\t"), Keystroke("\x03")])

    reader = threading.Thread(target=read_keys, args=(term, events, stop, 0.001))
    reader.start()
    received = []
    deadline = time.monotonic() + 5
    while len(received) < 2 and time.monotonic() < deadline:
        received += events.drain(timeout=0.1)
    stop.set()
    reader.join(timeout=5)

    assert received == [KeyEvent.of_char("x"), KeyEvent(Key.CTRL_C)]
    assert not reader.is_alive()


def test_terminal_session_owns_sigint():
    events = EventQueue()
    previous = signal.getsignal(signal.SIGINT)

    with terminal_session(events, term=FakeTerminal([Keystroke("x")]), poll_timeout=0.001):
        assert events.drain(timeout=5) == [KeyEvent.of_char("x")]
        handler = signal.getsignal(signal.SIGINT)
        assert handler is not previous
        handler(signal.SIGINT, None)

    assert signal.getsignal(signal.SIGINT) is previous
    assert events.closed
    assert events.drain(timeout=0) == [KeyEvent(Key.CTRL_C)]
    assert events.drain(timeout=0) is None


class BrokenTerminal(FakeTerminal):
    """Terminal whose input fails on the first read."""

    def inkey(self, timeout=None):
        raise OSError("input/output error")


def test_read_keys_closes_queue_when_stopped():
    events = EventQueue()
    stop = threading.Event()
    stop.set()
    read_keys(FakeTerminal([]), events, stop, 0.001)
    assert events.drain(timeout=0) is None


def test_terminal_failure_ends_input_and_reraises():
    events = EventQueue()
    previous = signal.getsignal(signal.SIGINT)

    with pytest.raises(OSError, match="input/output error"):
        with terminal_session(events, term=BrokenTerminal([]), poll_timeout=0.001):
            assert events.drain(timeout=5) is None

    assert signal.getsignal(signal.SIGINT) is previous
