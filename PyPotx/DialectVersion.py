from __future__ import annotations
from enum import IntEnum
import logging

from PyPotx.Helpers.Localization import _

class DialectVersion(IntEnum):
    """
    Source convention (Drupal API) version that controls how markers are recognised
    """
    Drupal5 = 5
    Drupal6 = 6
    Drupal7 = 7
    Drupal8 = 8

    @classmethod
    def Current(cls) -> DialectVersion:
        return cls.Drupal8

    @property
    def has_installer_strings(self) -> bool:
        """ st() and $t() mark installer strings before Drupal 8 """
        return self <= DialectVersion.Drupal7

    @property
    def uses_yaml(self) -> bool:
        return self >= DialectVersion.Drupal8

    @classmethod
    def FromOption(cls, value : str|int|None) -> DialectVersion:
        """
        Look up a dialect from a command line or settings value.
        Unknown values fall back to the current dialect.
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.Current()

        dialect = _dialect_table.get(str(value).strip().lower())
        if dialect is None:
            logging.warning(_("Unsupported API version '{value}', using {current}").format(value=value, current=int(cls.Current())))
            return cls.Current()

        return dialect

_dialect_table : dict[str, DialectVersion] = {
    '5': DialectVersion.Drupal5,
    '6': DialectVersion.Drupal6,
    '7': DialectVersion.Drupal7,
    '8': DialectVersion.Drupal8,
}
