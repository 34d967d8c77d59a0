"""Commands – @command decorator and CommandRegistrar.

``@command(tag, group=...)`` records a command class in a module-level
registry, grouped so that one process can host several dispatchers that each
pick their own commands. :class:`CommandRegistrar` turns an explicit list of
``(tag, factory)`` pairs, plus any decorated groups, into dispatcher
registrations.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence

from comas.commands.command import Command
from comas.config.settings import DispatcherSettings
from comas.dispatch.dispatcher import Dispatcher

DEFAULT_GROUP = "default"

# ---------------------------------------------------------------------------
# Global registry populated at import time by the decorator
# ---------------------------------------------------------------------------

_COMMAND_REGISTRY: dict[str, list[tuple[Any, type[Command[Any, Any]]]]] = {}


def command(tag: Any, *, group: str = DEFAULT_GROUP):
    """Class decorator that sets ``TAG`` and records the class under *group*.

    Usage::

        @command("Greet", group="chat")
        class Greet(Command[str, str]):
            def initialize(self, name: str) -> str:
                return f"Hello, {name}"
    """

    def decorator(command_class: type[Command[Any, Any]]) -> type[Command[Any, Any]]:
        command_class.TAG = tag
        _COMMAND_REGISTRY.setdefault(group, []).append((tag, command_class))
        return command_class

    return decorator


def registered_commands(*groups: str) -> list[tuple[Any, type[Command[Any, Any]]]]:
    """Return ``(tag, class)`` pairs for *groups* (all groups when empty)."""
    selected = groups or tuple(_COMMAND_REGISTRY)
    pairs: list[tuple[Any, type[Command[Any, Any]]]] = []
    for group in selected:
        pairs.extend(_COMMAND_REGISTRY.get(group, ()))
    return pairs


def clear_command_registry() -> None:
    """Clear the global registry.  Use in tests to avoid inter-test leakage.

    .. warning::
        This mutates module-level state.  Only call in tests.
    """
    _COMMAND_REGISTRY.clear()


# ---------------------------------------------------------------------------
# Registrar
# ---------------------------------------------------------------------------


class CommandRegistrar:
    """Registers commands into a dispatcher before any dispatch happens.

    Parameters
    ----------
    commands:
        Explicit ``(tag, factory)`` pairs; each dispatch builds a new command.
    groups:
        Decorated groups to include. Only the listed groups are registered;
        ``None`` or an empty sequence skips the decorator registry.
    handlers:
        ``(tag, function)`` pairs registered as plain handlers. No command
        instance exists for these, so they cannot raise finish or wait.
    start_args:
        Constructor arguments passed to every factory.
    """

    def __init__(
        self,
        commands: Iterable[tuple[Any, Callable[..., Command[Any, Any]]]] = (),
        *,
        groups: Sequence[str] | None = None,
        handlers: Iterable[tuple[Any, Callable[[Any], Any]]] = (),
        start_args: Sequence[Any] = (),
    ) -> None:
        self._commands = list(commands)
        self._groups = tuple(groups or ())
        self._handlers = list(handlers)
        self._start_args = tuple(start_args)

    def command_pairs(self) -> list[tuple[Any, Callable[..., Command[Any, Any]]]]:
        pairs = list(self._commands)
        if self._groups:
            pairs.extend(registered_commands(*self._groups))
        return pairs

    def register_all(self, dispatcher: Dispatcher[Any, Any, Any]) -> int:
        """Register everything into *dispatcher*; return the registration count."""
        count = 0
        for tag, factory in self.command_pairs():
            dispatcher.register_command(tag, factory, *self._start_args)
            count += 1
        for tag, handler in self._handlers:
            dispatcher.register(tag, handler)
            count += 1
        return count


def make_dispatcher(
    *groups: str,
    settings: DispatcherSettings | None = None,
    extra: Iterable[tuple[Any, Callable[..., Command[Any, Any]]]] = (),
) -> Dispatcher[Any, Any, Any]:
    """Build a :class:`~comas.dispatch.Dispatcher` from decorated *groups*
    (all groups when none are given) plus *extra* ``(tag, factory)`` pairs."""
    registrar = CommandRegistrar(extra, groups=groups or tuple(_COMMAND_REGISTRY))
    return Dispatcher(settings, registrar=registrar)


__all__ = [
    "DEFAULT_GROUP",
    "CommandRegistrar",
    "clear_command_registry",
    "command",
    "make_dispatcher",
    "registered_commands",
]
