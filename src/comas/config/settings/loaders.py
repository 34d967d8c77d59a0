"""Config settings – SettingsLoader port and EnvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
import typing
from typing import Any, Mapping, TypeVar

from comas.config.settings.base import Settings
from comas.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

T = TypeVar("T", bound=Settings)


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from environment variables named ``<PREFIX>_<FIELD>``.

    *environ* defaults to :data:`os.environ`; tests pass a plain dict.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        hints = typing.get_type_hints(settings_class)
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = settings_class.env_key(field.name)
            raw = environ.get(env_key)

            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(env_key)
                continue

            kwargs[field.name] = self._coerce(env_key, raw, hints.get(field.name, str))

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}", cause=exc) from exc

    def _coerce(self, key: str, value: str, type_hint: Any) -> Any:
        if type_hint is bool:
            return value.lower() in ("1", "true", "yes", "on")
        try:
            if type_hint is int:
                return int(value)
            if type_hint is float:
                return float(value)
        except ValueError as exc:
            raise InvalidSettingValueError(key, value, f"expected {type_hint.__name__}") from exc
        return value


__all__ = ["EnvSettingsLoader", "SettingsLoader"]
