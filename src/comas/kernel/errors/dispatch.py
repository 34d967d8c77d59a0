"""Dispatch errors: routing failures raised by the dispatch engine."""

from __future__ import annotations

from typing import Any, Sequence

from comas.kernel.errors.base import BaseError


class DispatchError(BaseError):
    """Root of every failure raised while routing a command."""

    default_code = "dispatch_error"


class CommandNotFoundError(DispatchError, KeyError):
    """No handler is registered for the identifier and no override is active."""

    default_code = "command_not_found"

    def __init__(self, identifier: Any, **kwargs: Any) -> None:
        super().__init__(
            f"No command registered for {identifier!r}",
            identifier=identifier,
            **kwargs,
        )


class ConsistencyFaultError(DispatchError):
    """An override was reported present but had vanished when fetched.

    Distinct from :class:`CommandNotFoundError` so callers can tell
    "never registered" apart from "raced with a concurrent finish".
    """

    default_code = "consistency_fault"

    def __init__(self, identifier: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Override for {identifier!r} disappeared between lookup and fetch",
            identifier=identifier,
            **kwargs,
        )


class InvalidSignalError(DispatchError):
    """A wait signal carried a sender without a handler, or the reverse."""

    default_code = "invalid_signal"


class SubmitError(DispatchError):
    """One or more queued commands failed during a best-effort submit.

    ``failures`` holds ``(identifier, exception)`` pairs in dispatch order.
    """

    default_code = "submit_failed"

    def __init__(
        self,
        failures: Sequence[tuple[Any, BaseException]],
        *,
        last_result: Any = None,
        **kwargs: Any,
    ) -> None:
        failures = list(failures)
        super().__init__(
            f"{len(failures)} queued command(s) failed during submit",
            detail={"failed": [repr(ident) for ident, _ in failures]},
            cause=failures[0][1] if failures else None,
            **kwargs,
        )
        self.failures = failures
        self.last_result = last_result


__all__ = [
    "CommandNotFoundError",
    "ConsistencyFaultError",
    "DispatchError",
    "InvalidSignalError",
    "SubmitError",
]
