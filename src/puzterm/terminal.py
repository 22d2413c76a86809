"""Keyboard input and terminal ownership."""
import signal
import threading
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from typing import Iterator, Optional

import structlog
from blessed import Terminal

from puzterm.event_queue import EventQueue
from puzterm.models.key_event import Key, KeyEvent

log = structlog.get_logger(__name__)

SEQUENCE_KEYS = {
    "KEY_LEFT": Key.LEFT,
    "KEY_RIGHT": Key.RIGHT,
    "KEY_UP": Key.UP,
    "KEY_DOWN": Key.DOWN,
    "KEY_ENTER": Key.ENTER,
    "KEY_ESCAPE": Key.ESCAPE,
    "KEY_BACKSPACE": Key.BACKSPACE,
    "KEY_DELETE": Key.DELETE,
    "KEY_PGUP": Key.PAGE_UP,
    "KEY_PGDOWN": Key.PAGE_DOWN,
}

CONTROL_CHARS = {
    "\x03": Key.CTRL_C,
    "\r": Key.ENTER,
    "\n": Key.ENTER,
    "\x1b": Key.ESCAPE,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
}


def to_key_event(keystroke: str) -> Optional[KeyEvent]:
    """Translate a blessed Keystroke (or plain str) into a KeyEvent.

    Returns None for keys the player has no use for (function keys, Tab...).
    """
    name = getattr(keystroke, "name", None)
    if name in SEQUENCE_KEYS:
        return KeyEvent(SEQUENCE_KEYS[name])

    text = str(keystroke)
    if text in CONTROL_CHARS:
        return KeyEvent(CONTROL_CHARS[text])
    if len(text) == 1 and text.isprintable():
        return KeyEvent.of_char(text)
    return None


def read_keys(
    term: Terminal,
    events: EventQueue[KeyEvent],
    stop: threading.Event,
    poll_timeout: float = 0.05,
) -> None:
    """Publish decoded key presses until `stop` is set.

    The queue is closed when reading stops for any reason, so the consumer
    ends its loop even if the terminal fails.
    """
    try:
        while not stop.is_set():
            keystroke = term.inkey(timeout=poll_timeout)
            if not keystroke:
                continue
            event = to_key_event(keystroke)
            if event is None:
                log.debug("ignored key", key=repr(str(keystroke)), name=keystroke.name)
                continue
            events.publish(event)
    finally:
        events.close()


@contextmanager
def terminal_session(
    events: EventQueue[KeyEvent],
    term: Optional[Terminal] = None,
    poll_timeout: float = 0.05,
) -> Iterator[Terminal]:
    """Own the terminal for the body of the with-block.

    Input is switched to cbreak, the cursor hidden, and a reader thread
    feeds `events`. SIGINT becomes a Ctrl+C key event instead of an
    exception. Everything is restored however the block exits.
    """
    term = term or Terminal()
    stop = threading.Event()

    def on_sigint(signum, frame):
        events.publish(KeyEvent(Key.CTRL_C))

    previous_sigint = signal.signal(signal.SIGINT, on_sigint)
    try:
        with term.cbreak(), term.hidden_cursor(), ThreadPoolExecutor(max_workers=1) as executor:
            future = executor.submit(read_keys, term, events, stop, poll_timeout)
            try:
                yield term
            finally:
                stop.set()
                events.close()
                future.result()
    finally:
        signal.signal(signal.SIGINT, previous_sigint)
