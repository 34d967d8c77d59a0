"""Root error class for the comas error hierarchy."""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    Every error may name the command *identifier* it concerns, so a failure
    can be traced back to the routing key without parsing the message.

    Args:
        message: Human-readable description.
        identifier: Command identifier the failure relates to, if any.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Extra context; rendered with ``repr`` for non-JSON values.
        cause: Exception that triggered this one; chained to ``__cause__``.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        identifier: Any = None,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.identifier = identifier
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=repr)

    def __repr__(self) -> str:
        if self.identifier is None:
            return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"
        return f"{type(self).__name__}(code={self.code!r}, identifier={self.identifier!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain dict for structured log fields.

        ``identifier`` and ``cause`` are only present when set.
        """
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.identifier is not None:
            payload["identifier"] = self.identifier
        payload["detail"] = self.detail
        if self.cause is not None:
            payload["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return payload


__all__ = ["BaseError"]
