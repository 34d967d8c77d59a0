"""Unit tests for @command, CommandRegistrar and make_dispatcher."""

from __future__ import annotations

import pytest

from comas.commands import (
    DEFAULT_GROUP,
    Command,
    CommandRegistrar,
    clear_command_registry,
    command,
    make_dispatcher,
    registered_commands,
)
from comas.commands.registrar import _COMMAND_REGISTRY
from comas.config import DispatcherSettings
from comas.dispatch import Dispatcher


@pytest.fixture(autouse=True)
def _clean_registry():
    """Reset the global registry before (and after) every test."""
    clear_command_registry()
    yield
    clear_command_registry()


class Echo(Command[str, str]):
    TAG = "Echo"

    def __init__(self, prefix: str = "") -> None:
        super().__init__()
        self.prefix = prefix

    def initialize(self, parameter: str) -> str:
        return f"{self.prefix}{parameter}"


class TestCommandDecorator:
    def test_sets_tag_and_records_class(self) -> None:
        @command("Ping")
        class Ping(Command[str, str]):
            def initialize(self, parameter: str) -> str:
                return "pong"

        assert Ping.TAG == "Ping"
        assert _COMMAND_REGISTRY[DEFAULT_GROUP] == [("Ping", Ping)]

    def test_returns_class_unchanged(self) -> None:
        @command("Ping")
        class Ping(Command[str, str]):
            def initialize(self, parameter: str) -> str:
                return "pong"

        assert Ping.__name__ == "Ping"

    def test_groups(self) -> None:
        @command("A", group="chat")
        class A(Command[str, str]):
            def initialize(self, parameter: str) -> str:
                return "a"

        @command("B", group="admin")
        class B(Command[str, str]):
            def initialize(self, parameter: str) -> str:
                return "b"

        assert registered_commands("chat") == [("A", A)]
        assert registered_commands("admin", "chat") == [("B", B), ("A", A)]
        assert registered_commands() == [("A", A), ("B", B)]
        assert registered_commands("unknown") == []

    def test_clear_command_registry(self) -> None:
        @command("Ping")
        class Ping(Command[str, str]):
            def initialize(self, parameter: str) -> str:
                return "pong"

        clear_command_registry()
        assert registered_commands() == []


class TestCommandRegistrar:
    def test_registers_explicit_pairs(self) -> None:
        registrar = CommandRegistrar([("Echo", Echo)])
        dispatcher: Dispatcher[str, str, str] = Dispatcher(registrar=registrar)

        assert dispatcher.command_exists("Echo")
        assert dispatcher.dispatch("Echo", "hi") == "hi"

    def test_start_args_reach_constructor(self) -> None:
        registrar = CommandRegistrar([("Echo", Echo)], start_args=["> "])
        dispatcher: Dispatcher[str, str, str] = Dispatcher(registrar=registrar)
        assert dispatcher.dispatch("Echo", "hi") == "> hi"

    def test_registers_plain_handlers(self) -> None:
        registrar = CommandRegistrar(handlers=[("Upper", str.upper)])
        dispatcher: Dispatcher[str, str, str] = Dispatcher(registrar=registrar)
        assert dispatcher.dispatch("Upper", "hi") == "HI"

    def test_groups_are_opt_in(self) -> None:
        @command("Ping", group="chat")
        class Ping(Command[str, str]):
            def initialize(self, parameter: str) -> str:
                return "pong"

        without = Dispatcher(registrar=CommandRegistrar())
        with_group = Dispatcher(registrar=CommandRegistrar(groups=["chat"]))

        assert not without.command_exists("Ping")
        assert with_group.dispatch("Ping", "x") == "pong"

    def test_empty_groups_register_no_decorated_commands(self) -> None:
        @command("Ping", group="chat")
        class Ping(Command[str, str]):
            def initialize(self, parameter: str) -> str:
                return "pong"

        registrar = CommandRegistrar([("Echo", Echo)], groups=[])
        dispatcher = Dispatcher(registrar=registrar)

        assert registrar.command_pairs() == [("Echo", Echo)]
        assert not dispatcher.command_exists("Ping")

    def test_register_all_returns_count(self) -> None:
        registrar = CommandRegistrar([("Echo", Echo)], handlers=[("Upper", str.upper)])
        dispatcher: Dispatcher[str, str, str] = Dispatcher()
        assert registrar.register_all(dispatcher) == 2

    def test_same_tag_twice_is_multicast(self) -> None:
        calls: list[str] = []

        def record(p: str) -> str:
            calls.append(p)
            return "handler"

        registrar = CommandRegistrar([("Echo", Echo)], handlers=[("Echo", record)])
        dispatcher: Dispatcher[str, str, str] = Dispatcher(registrar=registrar)

        assert dispatcher.dispatch("Echo", "x") == "handler"
        assert calls == ["x"]


class TestInitializeHook:
    def test_subclass_can_extend_initialize(self) -> None:
        class ChatDispatcher(Dispatcher[str, str, str]):
            def initialize(self) -> None:
                super().initialize()
                self.register("Help", lambda _: "usage")

        dispatcher = ChatDispatcher(registrar=CommandRegistrar([("Echo", Echo)]))

        assert dispatcher.dispatch("Help", "") == "usage"
        assert dispatcher.dispatch("Echo", "e") == "e"


class TestMakeDispatcher:
    def test_builds_from_all_groups_by_default(self) -> None:
        @command("A", group="one")
        class A(Command[str, str]):
            def initialize(self, parameter: str) -> str:
                return "a"

        @command("B", group="two")
        class B(Command[str, str]):
            def initialize(self, parameter: str) -> str:
                return "b"

        dispatcher = make_dispatcher()
        assert dispatcher.dispatch("A", "") == "a"
        assert dispatcher.dispatch("B", "") == "b"

    def test_selected_groups_and_extra(self) -> None:
        @command("A", group="one")
        class A(Command[str, str]):
            def initialize(self, parameter: str) -> str:
                return "a"

        @command("B", group="two")
        class B(Command[str, str]):
            def initialize(self, parameter: str) -> str:
                return "b"

        dispatcher = make_dispatcher("one", extra=[("Echo", Echo)])

        assert dispatcher.command_exists("A")
        assert not dispatcher.command_exists("B")
        assert dispatcher.dispatch("Echo", "x") == "x"

    def test_settings_are_applied(self) -> None:
        settings = DispatcherSettings(max_workers=2)
        assert make_dispatcher(settings=settings).settings is settings

    def test_decorated_command_can_wait_and_finish(self) -> None:
        @command("Greet")
        class Greet(Command[str, str]):
            def initialize(self, name: str) -> str:
                self.wait(self.busy)
                return f"Hello, {name}"

            def busy(self, name: str) -> str:
                self.finish(name)
                return f"Busy: {name}"

        dispatcher = make_dispatcher()

        assert dispatcher.dispatch("Greet", "World") == "Hello, World"
        assert dispatcher.dispatch("Greet", "again") == "Busy: again"
        assert dispatcher.dispatch("Greet", "World") == "Hello, World"
