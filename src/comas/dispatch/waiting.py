"""Dispatch – WaitingTable: per-identifier override handlers.

While an identifier has an override, the dispatcher routes to it instead of
the registry. Commands install overrides by raising *wait* and clear them by
raising *finish*; both race with dispatches from other threads, so every
operation here takes the table lock.
"""
from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

from comas.kernel.errors import ConsistencyFaultError, InvalidSignalError

K = TypeVar("K")
P = TypeVar("P")
R = TypeVar("R")


class WaitingTable(Generic[K, P, R]):
    """Thread-safe identifier → override handler mapping (one per identifier)."""

    def __init__(self) -> None:
        self._overrides: dict[K, Callable[[P], R]] = {}
        self._lock = threading.Lock()

    def install(self, identifier: K | None, handler: Callable[[P], R] | None) -> bool:
        """Insert or replace the override for *identifier*.

        Returns ``False`` when both arguments are ``None`` (a no-op wait
        signal). Raises :class:`InvalidSignalError` when only one is ``None``.
        """
        if identifier is None and handler is None:
            return False
        if identifier is None or handler is None:
            raise InvalidSignalError(
                "Wait signal needs both an identifier and a handler",
                identifier=identifier,
                detail={"has_handler": handler is not None},
            )
        with self._lock:
            self._overrides[identifier] = handler
        return True

    def remove(self, identifier: K) -> bool:
        """Drop the override for *identifier*; ``False`` if there was none."""
        with self._lock:
            return self._overrides.pop(identifier, None) is not None

    def try_get(self, identifier: K) -> Callable[[P], R] | None:
        """Atomic lookup-and-fetch; ``None`` when no override is active."""
        with self._lock:
            return self._overrides.get(identifier)

    def contains(self, identifier: K) -> bool:
        with self._lock:
            return identifier in self._overrides

    __contains__ = contains

    def fetch(self, identifier: K) -> Callable[[P], R]:
        """Fetch an override previously seen via :meth:`contains`.

        Raises :class:`ConsistencyFaultError` when a concurrent finish removed
        it in between. Prefer :meth:`try_get`, which cannot race.
        """
        with self._lock:
            try:
                return self._overrides[identifier]
            except KeyError:
                raise ConsistencyFaultError(identifier) from None

    def identifiers(self) -> list[K]:
        with self._lock:
            return list(self._overrides)

    def clear(self) -> None:
        with self._lock:
            self._overrides.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._overrides)


__all__ = ["WaitingTable"]
