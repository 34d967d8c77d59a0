"""Commands – Command base class.

A command is a stateful object identified by its ``TAG``. The dispatcher
hands it a parameter through :meth:`Command.initialize`; from then on the
command may claim its own identifier with :meth:`Command.wait` (every later
dispatch for ``TAG`` goes to the supplied handler) and release it with
:meth:`Command.finish`.

Usage::

    @command("Greet")
    class Greet(Command[str, str]):
        def initialize(self, name: str) -> str:
            self.wait(lambda other: f"Busy: {other}")
            return f"Hello, {name}"
"""
from __future__ import annotations

import abc
from typing import Any, Callable, ClassVar, Generic, TypeVar

from comas.kernel.signals import Signal

P = TypeVar("P")
R = TypeVar("R")


class Command(abc.ABC, Generic[P, R]):
    """Base for dispatchable, self-signalling commands.

    Subclasses set ``TAG`` (or get it from the ``@command`` decorator) and
    must call ``super().__init__()`` when they define their own constructor.
    """

    TAG: ClassVar[Any] = None

    def __init__(self) -> None:
        self.finish_event: Signal[Command[P, R], P] = Signal("finish")
        self.wait_event: Signal[Command[P, R] | None, Callable[[P], R] | None] = Signal("wait")

    @abc.abstractmethod
    def initialize(self, parameter: P) -> R: ...

    def finish(self, parameter: P) -> None:
        """Raise *finish*: release ``TAG`` and notify listeners."""
        self.finish_event.emit(self, parameter)

    def wait(self, handler: Callable[[P], R]) -> None:
        """Raise *wait*: route every dispatch of ``TAG`` to *handler*."""
        self.wait_event.emit(self, handler)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(TAG={self.TAG!r})"


__all__ = ["Command"]
