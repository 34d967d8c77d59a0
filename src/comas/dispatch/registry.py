"""Dispatch – CommandRegistry and ComposedHandler.

The registry maps each identifier to exactly one :class:`ComposedHandler`.
Registering the same identifier again appends to that handler (multicast),
it never replaces it.

The registry has no locking of its own: populate it during start-up from a
single thread, then treat it as read-mostly.
"""
from __future__ import annotations

from typing import Callable, Generic, Iterator, TypeVar

from comas.kernel.errors import CommandNotFoundError

K = TypeVar("K")
P = TypeVar("P")
R = TypeVar("R")

Handler = Callable[[P], R]


class ComposedHandler(Generic[P, R]):
    """Ordered multicast sequence of handlers sharing one identifier.

    Calling it runs every handler in registration order with the same
    parameter and returns the result of the last one.
    """

    __slots__ = ("_handlers",)

    def __init__(self, *handlers: Handler[P, R]) -> None:
        self._handlers: list[Handler[P, R]] = list(handlers)

    def append(self, handler: Handler[P, R]) -> None:
        self._handlers.append(handler)

    @property
    def handlers(self) -> tuple[Handler[P, R], ...]:
        return tuple(self._handlers)

    def __call__(self, parameter: P) -> R:
        # Iterate over a snapshot; a handler may register more handlers.
        handlers = tuple(self._handlers)
        if not handlers:
            raise ValueError("ComposedHandler has no handlers")
        result: R
        for handler in handlers:
            result = handler(parameter)
        return result

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"ComposedHandler(handlers={len(self._handlers)})"


class CommandRegistry(Generic[K, P, R]):
    """Identifier → :class:`ComposedHandler` mapping."""

    def __init__(self) -> None:
        self._entries: dict[K, ComposedHandler[P, R]] = {}

    def register(self, identifier: K, handler: Handler[P, R]) -> None:
        """Append *handler* to the composed handler for *identifier*."""
        composed = self._entries.get(identifier)
        if composed is None:
            self._entries[identifier] = ComposedHandler(handler)
        else:
            composed.append(handler)

    def lookup(self, identifier: K) -> ComposedHandler[P, R]:
        """Return the composed handler, raising :class:`CommandNotFoundError`."""
        try:
            return self._entries[identifier]
        except KeyError:
            raise CommandNotFoundError(identifier) from None

    def invoke(self, identifier: K, parameter: P) -> R:
        return self.lookup(identifier)(parameter)

    def contains(self, identifier: K) -> bool:
        return identifier in self._entries

    __contains__ = contains

    def identifiers(self) -> list[K]:
        return list(self._entries)

    def __iter__(self) -> Iterator[K]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["CommandRegistry", "ComposedHandler", "Handler"]
