"""Kernel – Signal: an ordered, thread-safe observer list.

Command instances raise their *finish* and *wait* lifecycle signals through
a :class:`Signal`; the dispatcher exposes ``on_finished_command`` and
``on_waiting_command`` the same way.

Usage::

    finished = Signal[Command, Any]("finished")
    finished.connect(lambda command, arg: print(command.TAG, arg))
    finished.emit(command, "done")
"""
from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

S = TypeVar("S")
A = TypeVar("A")

Receiver = Callable[[S, A], None]


class Signal(Generic[S, A]):
    """Observer list of ``(sender, arg)`` receivers.

    Receivers run synchronously on the emitting thread, in connection order.
    Exceptions raised by a receiver propagate to the emitter and stop the
    remaining receivers.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._receivers: list[Receiver[S, A]] = []
        self._lock = threading.Lock()

    def connect(self, receiver: Receiver[S, A]) -> Receiver[S, A]:
        """Append *receiver*; usable as a decorator."""
        with self._lock:
            self._receivers.append(receiver)
        return receiver

    def disconnect(self, receiver: Receiver[S, A]) -> bool:
        """Remove the first occurrence of *receiver*; ``False`` if absent."""
        with self._lock:
            try:
                self._receivers.remove(receiver)
            except ValueError:
                return False
            return True

    def is_connected(self, receiver: Receiver[S, A]) -> bool:
        with self._lock:
            return receiver in self._receivers

    def emit(self, sender: S, arg: A) -> None:
        # Snapshot so receivers may disconnect themselves while running.
        with self._lock:
            receivers = list(self._receivers)
        for receiver in receivers:
            receiver(sender, arg)

    __call__ = emit

    def __iadd__(self, receiver: Receiver[S, A]) -> "Signal[S, A]":
        self.connect(receiver)
        return self

    def __isub__(self, receiver: Receiver[S, A]) -> "Signal[S, A]":
        self.disconnect(receiver)
        return self

    def __len__(self) -> int:
        with self._lock:
            return len(self._receivers)

    def __repr__(self) -> str:
        return f"Signal(name={self.name!r}, receivers={len(self)})"


__all__ = ["Receiver", "Signal"]
