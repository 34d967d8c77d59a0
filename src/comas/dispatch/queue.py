"""Dispatch – SubmissionQueue: FIFO buffer flushed by ``Dispatcher.submit``."""
from __future__ import annotations

import dataclasses
import threading
from collections import deque
from typing import Generic, TypeVar

K = TypeVar("K")
P = TypeVar("P")


@dataclasses.dataclass(frozen=True)
class QueueEntry(Generic[K, P]):
    """A command waiting for the next submit."""

    identifier: K
    parameter: P


class SubmissionQueue(Generic[K, P]):
    """Ordered buffer of :class:`QueueEntry` items.

    :meth:`drain_and_reset` swaps the whole buffer for an empty one under the
    same lock :meth:`enqueue` takes, so a concurrent enqueue lands either in
    the drained batch or in the fresh buffer, exactly once.
    """

    def __init__(self) -> None:
        self._entries: deque[QueueEntry[K, P]] = deque()
        self._lock = threading.Lock()

    def enqueue(self, identifier: K, parameter: P) -> QueueEntry[K, P]:
        entry = QueueEntry(identifier, parameter)
        with self._lock:
            self._entries.append(entry)
        return entry

    def drain_and_reset(self) -> list[QueueEntry[K, P]]:
        """Detach and return every queued entry in enqueue order."""
        with self._lock:
            drained, self._entries = self._entries, deque()
        return list(drained)

    def snapshot(self) -> list[QueueEntry[K, P]]:
        with self._lock:
            return list(self._entries)

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.pending


__all__ = ["QueueEntry", "SubmissionQueue"]
