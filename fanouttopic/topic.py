"""A buffering publish-subscribe topic with dynamic fanout.

Messages sent to a :class:`Topic` are delivered to every subscribed
:class:`Receiver`. Messages that a receiver has not yet taken are queued in
memory, and each receiver chooses how its queue is bounded. Receivers can be
added and removed at any time, and the most recent message can be queried
with :func:`recent`.

All operations are safe to use from multiple threads.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Iterator
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_MISSING: Any = object()


class TopicClosedError(Exception):
    """Raised when a closed topic or receiver is used."""


class Receiver(Generic[T]):
    """A subscription to a :class:`Topic`.

    The queue bound is chosen at subscription time:

    * ``limit == 0``: unbounded, every message is kept;
    * ``limit > 0``: only the newest ``limit`` messages are kept;
    * ``limit < 0``: only the oldest ``-limit`` messages are kept.

    A message that arrives while a thread is already blocked in
    :meth:`receive` and nothing is queued is handed straight to that thread
    and does not count against the limit.
    """

    def __init__(self, topic: Topic[T], limit: int, lock: threading.Lock) -> None:
        self._topic: Topic[T] | None = topic
        self._limit = limit
        self._cond = threading.Condition(lock)
        self._queue: deque[T] = deque()
        self._handoff: deque[T] = deque()
        self._waiting = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        """True once the receiver has been unsubscribed or its topic closed."""
        with self._cond:
            return self._closed

    def _add(self, value: T) -> None:
        # Caller holds the topic lock.
        if not self._queue and len(self._handoff) < self._waiting:
            self._handoff.append(value)
            self._cond.notify()
            return

        if self._limit == 0:
            self._queue.append(value)
        elif self._limit > 0:
            if len(self._queue) >= self._limit:
                self._queue.popleft()
            self._queue.append(value)
        elif len(self._queue) < -self._limit:
            self._queue.append(value)
        else:
            # The queue already holds the oldest values; drop the new one.
            return
        self._cond.notify()

    def _detach(self) -> None:
        # Caller holds the topic lock.
        self._closed = True
        self._topic = None
        self._queue.clear()
        self._cond.notify_all()

    def receive(self, timeout: float | None = None) -> T:
        """Return the next message, waiting for one if necessary.

        Raises :class:`TopicClosedError` once the receiver is closed and no
        delivered message remains, and :class:`TimeoutError` if ``timeout``
        seconds pass without a message.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while True:
                if self._handoff:
                    return self._handoff.popleft()
                if self._queue:
                    return self._queue.popleft()
                if self._closed:
                    raise TopicClosedError("receiver is closed")
                remaining = None
                if deadline is not None:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        raise TimeoutError("no message received before timeout")
                self._waiting += 1
                try:
                    self._cond.wait(remaining)
                finally:
                    self._waiting -= 1

    def unsubscribe(self) -> None:
        """Remove the receiver from its topic, discarding queued messages.

        Calling it more than once, or after the topic is closed, does nothing.
        """
        with self._cond:
            topic = self._topic
            if topic is None or self._closed:
                return
            topic._remove(self)
            self._detach()

    def __iter__(self) -> Iterator[T]:
        """Yield messages until the receiver is closed."""
        while True:
            try:
                yield self.receive()
            except TopicClosedError:
                return

    def __enter__(self) -> Receiver[T]:
        return self

    def __exit__(self, *args: object) -> None:
        self.unsubscribe()


class Topic(Generic[T]):
    """A publish-subscribe channel that copies every message to all receivers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._receivers: list[Receiver[T]] = []
        self._closed = False
        self._recent: Any = _MISSING

    @property
    def closed(self) -> bool:
        """True once :meth:`close` has been called."""
        with self._lock:
            return self._closed

    def close(self) -> None:
        """Close the topic and every receiver. Further calls do nothing."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            for receiver in self._receivers:
                receiver._detach()
            self._receivers.clear()

    def send(self, value: T) -> None:
        """Publish ``value`` to all receivers. Does nothing if the topic is closed."""
        with self._lock:
            if self._closed:
                return
            for receiver in self._receivers:
                receiver._add(value)
            self._recent = value

    def subscribe(self, limit: int = 0, include_recent: bool = False) -> Receiver[T]:
        """Add and return a new receiver.

        ``limit`` bounds the receiver's queue as described on
        :class:`Receiver`. With ``include_recent`` the receiver starts with
        the most recent message sent before it subscribed, if any.
        Raises :class:`TopicClosedError` if the topic is closed.
        """
        with self._lock:
            if self._closed:
                raise TopicClosedError("topic is closed")
            receiver: Receiver[T] = Receiver(self, limit, self._lock)
            self._receivers.append(receiver)
            if include_recent and self._recent is not _MISSING:
                receiver._add(self._recent)
            return receiver

    def _remove(self, receiver: Receiver[T]) -> None:
        # Caller holds the topic lock.
        if receiver in self._receivers:
            self._receivers.remove(receiver)

    def _latest(self) -> tuple[T | None, bool]:
        with self._lock:
            if self._recent is _MISSING:
                return None, False
            return self._recent, True

    def __enter__(self) -> Topic[T]:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def recent(topic: Topic[T]) -> tuple[T | None, bool]:
    """Return ``(message, True)`` for the latest message sent, else ``(None, False)``."""
    return topic._latest()