"""Config settings – DispatcherSettings."""
from __future__ import annotations

import dataclasses
import enum
from typing import ClassVar

from comas.config.settings.base import Settings
from comas.config.validation import InvalidSettingValueError


class SubmitPolicy(str, enum.Enum):
    """How ``Dispatcher.submit`` reacts to a failing queued command."""

    FAIL_FAST = "fail_fast"
    BEST_EFFORT = "best_effort"


@dataclasses.dataclass
class DispatcherSettings(Settings):
    """Tunables for :class:`~comas.dispatch.Dispatcher`.

    Environment variables: ``COMAS_MAX_WORKERS``, ``COMAS_THREAD_NAME_PREFIX``,
    ``COMAS_SUBMIT_POLICY``.
    """

    _prefix: ClassVar[str] = "COMAS"

    max_workers: int = 4
    thread_name_prefix: str = "comas-dispatch"
    submit_policy: str = SubmitPolicy.FAIL_FAST.value

    def _validate(self) -> None:
        if self.max_workers < 1:
            raise InvalidSettingValueError("max_workers", self.max_workers, "must be >= 1")
        try:
            SubmitPolicy(self.submit_policy)
        except ValueError:
            allowed = ", ".join(p.value for p in SubmitPolicy)
            raise InvalidSettingValueError(
                "submit_policy", self.submit_policy, f"expected one of: {allowed}"
            ) from None

    @property
    def policy(self) -> SubmitPolicy:
        return SubmitPolicy(self.submit_policy)


__all__ = ["DispatcherSettings", "SubmitPolicy"]
