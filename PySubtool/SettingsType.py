from __future__ import annotations
from collections.abc import Mapping
from typing import TypeAlias

from PySubtool.Helpers.Time import GetDuration

BasicType: TypeAlias = str | int | float | bool | list[str] | None
SettingType: TypeAlias = BasicType | dict[str, 'SettingType']

class SettingsError(Exception):
    """Raised when a setting cannot be coerced to the expected type."""
    pass

class SettingsType(dict[str, SettingType]):
    """
    Settings dictionary with restricted range of types allowed and type-safe getters
    """
    def __init__(self, settings : Mapping[str,SettingType]|None = None):
        if not isinstance(settings, SettingsType):
            settings = dict(settings or {})
        super().__init__(settings)

    def get_bool(self, key: str, default: bool|None = False) -> bool:
        """Get a boolean setting with type safety"""
        value = self.get(key, default)
        if value is None:
            return False

        if isinstance(value, bool):
            return value
        elif isinstance(value, str):
            lower_val = value.lower()
            if lower_val == 'true':
                return True
            elif lower_val == 'false':
                return False

        raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to bool")

    def get_duration(self, key: str, default: int|None = None) -> int|None:
        """
        Get a duration setting in milliseconds.
        Accepts a number of milliseconds or a timestamp such as "00:01:30.500" or "01:30,500"
        """
        value = self.get(key, default)
        if value is None:
            return None

        if isinstance(value, (int, float, str)) and not isinstance(value, bool):
            try:
                return GetDuration(value)
            except ValueError:
                pass

        raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to a duration")

    def update(self, other=(), /, **kwds) -> None:
        """Update settings, filtering out None values"""
        # Match dict.update signature: update([other,] **kwds)
        if hasattr(other, 'items'):
            if isinstance(other, SettingsType):
                other = dict(other)
            # Filter None values for our settings
            if isinstance(other, dict):
                other = {k: v for k, v in other.items() if v is not None}
        super().update(other, **kwds)
