from collections import deque
from typing import Deque, Generic, List, Optional, TypeVar
import threading


T = TypeVar("T")


class EventQueue(Generic[T]):
    """Thread-safe FIFO. Producers publish, one consumer drains everything pending."""

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._items: Deque[T] = deque()
        self._closed = False

    @property
    def closed(self) -> bool:
        with self._condition:
            return self._closed

    def publish(self, item: T) -> None:
        """Append an item. Items published after close() are dropped."""
        with self._condition:
            if self._closed:
                return
            self._items.append(item)
            self._condition.notify()  # Wake the waiting consumer.

    def close(self) -> None:
        """Close the queue. Pending items can still be drained."""
        with self._condition:
            self._closed = True
            self._condition.notify_all()

    def drain(self, timeout: Optional[float] = None) -> Optional[List[T]]:
        """Return every pending item, waiting up to `timeout` for the first one.

        Returns an empty list when the wait times out, and None once the queue
        is closed and empty.
        """
        with self._condition:
            self._condition.wait_for(lambda: self._items or self._closed, timeout)
            if self._closed and not self._items:
                return None
            items = list(self._items)
            self._items.clear()
            return items
