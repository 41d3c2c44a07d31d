"""
Type-safe settings retrieval and coercion functions.

These helpers read values from a settings dictionary and coerce them to the
expected type, raising SettingsError when a value cannot be converted.
"""

from typing import Mapping, overload

from PyPotx.SettingsType import SettingType, SettingsType

class SettingsError(Exception):
    """Raised when a setting cannot be coerced to the expected type."""
    pass

@overload
def GetIntSetting(settings: SettingsType|Mapping[str, SettingType], key: str) -> int|None: ...

@overload
def GetIntSetting(settings: SettingsType|Mapping[str, SettingType], key: str, default: int|None) -> int|None: ...

def GetIntSetting(settings: SettingsType|Mapping[str, SettingType], key: str, default: int|None = 0) -> int|None:
    """
    Safely retrieve an integer setting from a settings dictionary.

    Raises:
        SettingsError: If the setting cannot be converted to int
    """
    value = settings.get(key, default)
    if value is None:
        return None

    if isinstance(value, bool):
        raise SettingsError(f"Cannot convert setting '{key}' of type bool to int")
    elif isinstance(value, int):
        return value
    elif isinstance(value, float):
        return int(value)
    elif isinstance(value, str):
        if not value.strip():
            return default
        try:
            return int(value.strip())
        except ValueError:
            pass

    raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to int")

@overload
def GetStrSetting(settings: SettingsType|Mapping[str, SettingType], key: str) -> str|None: ...

@overload
def GetStrSetting(settings: SettingsType|Mapping[str, SettingType], key: str, default: str|None) -> str|None: ...

def GetStrSetting(settings: SettingsType|Mapping[str, SettingType], key: str, default: str|None = None) -> str|None:
    """
    Safely retrieve a string setting from a settings dictionary.
    Numbers are converted to strings and lists are joined with commas.
    """
    value = settings.get(key, default)
    if value is None:
        return None
    elif isinstance(value, str):
        return value
    elif isinstance(value, (int, float, bool)):
        return str(value)
    elif isinstance(value, list):
        return ','.join(str(v) for v in value)

    return str(value)

