"""Dispatch – Dispatcher: routes commands to overrides or registered handlers.

Each identifier is either *normal* (dispatches go to the registry) or
*overridden* (a running command raised *wait*; dispatches go to its handler
until some command with that tag raises *finish*).

Usage::

    dispatcher = Dispatcher[str, str, str]()
    dispatcher.register("Greet", lambda name: f"Hello, {name}")
    dispatcher.dispatch("Greet", "World")          # "Hello, World"

    dispatcher.dispatch_on_submit("Greet", "A")
    dispatcher.dispatch_on_submit("Greet", "B")
    dispatcher.submit()                            # "Hello, B"
"""
from __future__ import annotations

import asyncio
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from comas.config.settings import DispatcherSettings, SubmitPolicy
from comas.dispatch.queue import QueueEntry, SubmissionQueue
from comas.dispatch.registry import CommandRegistry, Handler
from comas.dispatch.waiting import WaitingTable
from comas.kernel.errors import SubmitError
from comas.kernel.signals import Signal
from comas.observability.logging import get_logger

if TYPE_CHECKING:
    from comas.commands.command import Command
    from comas.commands.registrar import CommandRegistrar

K = TypeVar("K")
P = TypeVar("P")
R = TypeVar("R")

_log = get_logger(__name__)


class Dispatcher(Generic[K, P, R]):
    """Identifier-keyed command dispatcher.

    Parameters
    ----------
    settings:
        Worker pool size and submit policy; defaults to :class:`DispatcherSettings`.
    registrar:
        Run once by :meth:`initialize` to register commands before first use.
    default:
        Result of :meth:`submit` when the queue is empty.
    """

    def __init__(
        self,
        settings: DispatcherSettings | None = None,
        *,
        registrar: CommandRegistrar | None = None,
        default: R | None = None,
    ) -> None:
        self._settings = settings or DispatcherSettings()
        self._registrar = registrar
        self._default = default
        self._registry: CommandRegistry[K, P, R] = CommandRegistry()
        self._queue: SubmissionQueue[K, P] = SubmissionQueue()
        self._waiting: WaitingTable[K, P, R] = WaitingTable()
        self._executor: ThreadPoolExecutor | None = None
        self._executor_lock = threading.Lock()
        self.on_finished_command: Signal[Command[P, R], P] = Signal("finished_command")
        self.on_waiting_command: Signal[Command[P, R], Callable[[P], R]] = Signal("waiting_command")
        self.initialize()

    def initialize(self) -> None:
        """Register commands; subclasses extend this to add their own."""
        count = 0 if self._registrar is None else self._registrar.register_all(self)
        _log.debug("dispatcher_initialized", registered=count, settings=self._settings.as_env())

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, identifier: K, handler: Handler[P, R]) -> None:
        """Append *handler* for *identifier* (multicast)."""
        self._registry.register(identifier, handler)
        _log.debug("command_registered", identifier=identifier)

    def register_command(
        self,
        identifier: K,
        factory: Callable[..., Command[P, R]],
        *start_args: Any,
    ) -> None:
        """Register a handler that builds a fresh command per dispatch.

        *start_args* are passed to *factory* on every construction. A built
        command whose ``TAG`` is ``None`` is given *identifier* as its tag, so
        its wait and finish signals act on the identifier it was dispatched
        under. A command with its own ``TAG`` keeps it and claims that
        identifier instead.
        """

        def _adapter(parameter: P) -> R:
            built = factory(*start_args)
            if built.TAG is None:
                built.TAG = identifier  # type: ignore[misc]
            elif built.TAG != identifier:
                _log.debug("command_tag_differs", identifier=identifier, tag=built.TAG)
            return self.initialize_command(built, parameter)

        self.register(identifier, _adapter)

    def command_exists(self, identifier: K) -> bool:
        return self._registry.contains(identifier)

    def is_waiting(self, identifier: K) -> bool:
        return self._waiting.contains(identifier)

    @property
    def registry(self) -> CommandRegistry[K, P, R]:
        return self._registry

    @property
    def waiting(self) -> WaitingTable[K, P, R]:
        return self._waiting

    @property
    def settings(self) -> DispatcherSettings:
        return self._settings

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, identifier: K, parameter: P) -> R:
        """Route *parameter* to the override for *identifier*, else the registry.

        Raises :class:`~comas.kernel.errors.CommandNotFoundError` when neither
        exists.
        """
        override = self._waiting.try_get(identifier)
        if override is not None:
            _log.debug("dispatch_override", identifier=identifier)
            return override(parameter)
        _log.debug("dispatch", identifier=identifier)
        return self._registry.invoke(identifier, parameter)

    def dispatch_async(self, identifier: K, parameter: P) -> Future[R]:
        """Run :meth:`dispatch` on the worker pool.

        No cancellation or timeout: a hung handler holds its worker slot.
        """
        return self._get_executor().submit(self.dispatch, identifier, parameter)

    async def adispatch(self, identifier: K, parameter: P) -> R:
        """Await :meth:`dispatch_async` from asyncio code."""
        return await asyncio.wrap_future(self.dispatch_async(identifier, parameter))

    def dispatch_on_submit(self, identifier: K, parameter: P) -> None:
        """Queue a command until the next :meth:`submit`."""
        self._queue.enqueue(identifier, parameter)
        _log.debug("command_queued", identifier=identifier)

    def submit(self) -> R | None:
        """Dispatch every queued command in order on the calling thread.

        Returns the last result, or the configured default for an empty queue.
        Under ``fail_fast`` the first failure is re-raised unchanged and the
        rest of the batch is dropped. Under ``best_effort`` every entry runs
        and failures are raised together as :class:`SubmitError`.
        """
        entries = self._queue.drain_and_reset()
        if not entries:
            return self._default
        _log.info("submit", count=len(entries), policy=self._settings.submit_policy)
        if self._settings.policy is SubmitPolicy.BEST_EFFORT:
            return self._submit_best_effort(entries)
        return self._submit_fail_fast(entries)

    def _submit_fail_fast(self, entries: list[QueueEntry[K, P]]) -> R | None:
        result = self._default
        for index, entry in enumerate(entries):
            try:
                result = self.dispatch(entry.identifier, entry.parameter)
            except Exception:
                _log.warning(
                    "submit_aborted",
                    identifier=entry.identifier,
                    dropped=len(entries) - index - 1,
                )
                raise
        return result

    def _submit_best_effort(self, entries: list[QueueEntry[K, P]]) -> R | None:
        result = self._default
        failures: list[tuple[K, BaseException]] = []
        for entry in entries:
            try:
                result = self.dispatch(entry.identifier, entry.parameter)
            except Exception as exc:
                _log.warning("submit_entry_failed", identifier=entry.identifier, error=repr(exc))
                failures.append((entry.identifier, exc))
        if failures:
            raise SubmitError(failures, last_result=result)
        return result

    @property
    def pending(self) -> int:
        return self._queue.pending

    def queued(self) -> list[QueueEntry[K, P]]:
        return self._queue.snapshot()

    # ------------------------------------------------------------------
    # Command lifecycle
    # ------------------------------------------------------------------

    def initialize_command(self, command: Command[P, R], parameter: P) -> R:
        """Subscribe to *command*'s finish/wait signals, then initialize it."""
        if not command.finish_event.is_connected(self._on_command_finished):
            command.finish_event.connect(self._on_command_finished)
        if not command.wait_event.is_connected(self._on_command_waiting):
            command.wait_event.connect(self._on_command_waiting)
        return command.initialize(parameter)

    def initialize_command_type(
        self,
        factory: Callable[..., Command[P, R]],
        parameter: P,
        *start_args: Any,
    ) -> R:
        """Construct a command via *factory(*start_args)* and initialize it.

        Construction errors propagate unchanged.
        """
        return self.initialize_command(factory(*start_args), parameter)

    def _on_command_finished(self, command: Command[P, R], parameter: P) -> None:
        removed = self._waiting.remove(command.TAG)
        _log.debug("command_finished", identifier=command.TAG, released=removed)
        self.on_finished_command.emit(command, parameter)

    def _on_command_waiting(
        self,
        command: Command[P, R] | None,
        handler: Callable[[P], R] | None,
    ) -> None:
        identifier = None if command is None else command.TAG
        if not self._waiting.install(identifier, handler):
            return
        _log.debug("command_waiting", identifier=identifier)
        self.on_waiting_command.emit(command, handler)  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Worker pool
    # ------------------------------------------------------------------

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._settings.max_workers,
                    thread_name_prefix=self._settings.thread_name_prefix,
                )
            return self._executor

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker pool; a later :meth:`dispatch_async` starts a new one."""
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)

    def __enter__(self) -> "Dispatcher[K, P, R]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


__all__ = ["Dispatcher"]
