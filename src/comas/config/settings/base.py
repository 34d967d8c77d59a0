"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar


@dataclasses.dataclass
class Settings:
    """Base class for environment-driven settings.

    Each field ``name`` is read from ``<_prefix>_<NAME>``; :meth:`env_key`
    is the single place that spelling is decided.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def as_env(self) -> dict[str, Any]:
        """Current values keyed by their environment variable names."""
        return {self.env_key(f.name): getattr(self, f.name) for f in dataclasses.fields(self)}


__all__ = ["Settings"]
