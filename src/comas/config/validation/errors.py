"""Config validation errors raised while building dispatcher settings."""
from __future__ import annotations

from typing import Any

from comas.kernel.errors import BaseError


class ConfigError(BaseError):
    """Settings could not be loaded or constructed."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A field without a default has no environment variable."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"Required setting '{setting_name}' is not set",
            detail={"setting": setting_name},
            **kwargs,
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting is present but cannot drive the dispatcher (bad type or range)."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str, **kwargs: Any) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "value": repr(value), "reason": reason},
            **kwargs,
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
