"""Minimal publish/subscribe value holder used for presenter state."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")

Listener = Callable[[T], None]


class MutableObservable(Generic[T]):
    """Holds one value and notifies listeners whenever a new value is set.

    Reads are lock-protected so a reader on another thread always gets a whole
    value. ``subscribe`` returns a callable that removes the listener again.
    Hand out ``as_readonly()`` to consumers that must not write.
    """

    def __init__(self, initial: T, lock: Optional[threading.RLock] = None) -> None:
        self._value = initial
        self._lock = lock or threading.RLock()
        self._listeners: List[Listener] = []
        self._readonly: Optional[Observable[T]] = None

    @property
    def value(self) -> T:
        with self._lock:
            return self._value

    def as_readonly(self) -> "Observable[T]":
        if self._readonly is None:
            self._readonly = Observable(self)
        return self._readonly

    def subscribe(self, listener: Listener, emit_current: bool = False) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)
            current = self._value
        if emit_current:
            self._call(listener, current)

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

    def clear(self) -> None:
        with self._lock:
            self._listeners.clear()

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def set(self, value: T) -> None:
        self._store(value)
        self.notify()

    def _store(self, value: T) -> None:
        # Caller is expected to hold the shared lock when batching several observables.
        with self._lock:
            self._value = value

    def notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
            current = self._value
        for listener in listeners:
            self._call(listener, current)

    @staticmethod
    def _call(listener: Listener, value: T) -> None:
        try:
            listener(value)
        except Exception:
            logging.exception("Observer %r raised while handling an update", listener)


class Observable(Generic[T]):
    """Read-only view over a ``MutableObservable``."""

    def __init__(self, source: MutableObservable[T]) -> None:
        self._source = source

    @property
    def value(self) -> T:
        return self._source.value

    @property
    def listener_count(self) -> int:
        return self._source.listener_count

    def subscribe(self, listener: Listener, emit_current: bool = False) -> Callable[[], None]:
        return self._source.subscribe(listener, emit_current=emit_current)

    def unsubscribe(self, listener: Listener) -> None:
        self._source.unsubscribe(listener)
