from __future__ import annotations
from enum import Enum

from PyPotx.Helpers.Localization import _
from PyPotx.PotxError import ConfigError

class BuildMode(Enum):
    """
    Policy for grouping extracted strings into output catalogs
    """
    Single = 'single'
    Multiple = 'multiple'
    Core = 'core'

    @classmethod
    def FromName(cls, name : str|None) -> BuildMode:
        """
        Look up a build mode by name. No name selects Single, an unknown name is a configuration error.
        """
        if name is None or not str(name).strip():
            return cls.Single

        mode = _mode_table.get(str(name).strip().lower())
        if mode is None:
            raise ConfigError(_("Unknown build mode '{mode}'. Expected one of: {modes}").format(mode=name, modes=', '.join(_mode_table.keys())), setting='mode')

        return mode

_mode_table : dict[str, BuildMode] = {
    'single': BuildMode.Single,
    'multiple': BuildMode.Multiple,
    'core': BuildMode.Core,
}
