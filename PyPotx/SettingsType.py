from __future__ import annotations
from collections.abc import Mapping
from typing import TypeAlias

BasicType: TypeAlias = str | int | float | bool | list[str] | None
SettingType: TypeAlias = BasicType | dict[str, 'SettingType'] | dict[str, 'SettingsType']

class SettingsType(dict[str, SettingType]):
    """
    Settings dictionary with restricted range of types allowed and type-safe getters
    """
    def __init__(self, settings : Mapping[str,SettingType]|None = None):
        if not isinstance(settings, SettingsType):
            settings = dict(settings or {})
        super().__init__(settings)

    def get_int(self, key: str, default: int|None = None) -> int|None:
        """Get an integer setting with type safety"""
        from .Helpers.Settings import GetIntSetting
        return GetIntSetting(self, key, default)

    def get_str(self, key: str, default: str|None = None) -> str|None:
        """Get a string setting with type safety"""
        from .Helpers.Settings import GetStrSetting
        return GetStrSetting(self, key, default)
