"""Replay-latest subject for publishing store snapshots.

Subscribers are plain callables. A new subscriber is called immediately with
the retained value, then once per publish, synchronously and in subscription
order.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by Subject.subscribe."""

    def __init__(self, subject: Subject, callback: Callable) -> None:
        self._subject = subject
        self._callback = callback
        self.closed = False

    def unsubscribe(self) -> None:
        if not self.closed:
            self._subject._remove(self._callback)
            self.closed = True


class Subject(Generic[T]):
    """A registry of callbacks plus the last published value."""

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subscribers: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        """The most recently published value."""
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        """Register a callback and replay the current value to it."""
        self._subscribers.append(callback)
        self._deliver(callback, self._value)
        return Subscription(self, callback)

    def publish(self, value: T) -> None:
        """Retain a new value and deliver it to every current subscriber."""
        self._value = value
        for callback in list(self._subscribers):
            self._deliver(callback, value)

    def _deliver(self, callback: Callable[[T], None], value: T) -> None:
        try:
            callback(value)
        except Exception:
            logger.exception("Subscriber %r failed while handling a snapshot", callback)

    def _remove(self, callback: Callable[[T], None]) -> None:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass
