"""A small in-process publish/subscribe session keyed by topic names."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Union


@dataclass(frozen=True)
class Sample:
    """A message delivered to a subscriber."""

    key: str
    payload: str


Callback = Callable[[Sample], None]


class Subscriber:
    """A callback registered on one key."""

    def __init__(self, session: Session, key: str, callback: Callback) -> None:
        self._session = session
        self.key = key
        self.callback = callback

    def undeclare(self) -> None:
        """Stop delivering samples to this subscriber."""
        self._session._remove(self)


class Publisher:
    """Publishes payloads to a fixed key."""

    def __init__(self, session: Session, key: str) -> None:
        self._session = session
        self.key = key

    def put(self, payload: Union[str, bytes]) -> None:
        self._session.put(self.key, payload)


class Session:
    """Routes payloads to the subscribers of the same key, in the caller's thread."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._subscribers: dict[str, list[Subscriber]] = {}
        self._closed = False

    def __enter__(self) -> Session:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("session is closed")

    def put(self, key: str, payload: Union[str, bytes]) -> None:
        """Deliver a payload to every subscriber of ``key``."""
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        elif not isinstance(payload, str):
            raise TypeError(f"payload must be str or bytes, not {type(payload).__name__}")
        with self._lock:
            self._check_open()
            targets = list(self._subscribers.get(key, ()))
        sample = Sample(key, payload)
        for subscriber in targets:
            subscriber.callback(sample)

    def declare_subscriber(self, key: str, callback: Callback) -> Subscriber:
        with self._lock:
            self._check_open()
            subscriber = Subscriber(self, key, callback)
            self._subscribers.setdefault(key, []).append(subscriber)
            return subscriber

    def declare_publisher(self, key: str) -> Publisher:
        with self._lock:
            self._check_open()
            return Publisher(self, key)

    def close(self) -> None:
        """Drop all subscribers and refuse further use."""
        with self._lock:
            self._subscribers.clear()
            self._closed = True

    def _remove(self, subscriber: Subscriber) -> None:
        with self._lock:
            subscribers = self._subscribers.get(subscriber.key, [])
            if subscriber in subscribers:
                subscribers.remove(subscriber)