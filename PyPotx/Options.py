from __future__ import annotations
from collections.abc import Mapping
from copy import deepcopy
import os

import dotenv

from PyPotx.BuildMode import BuildMode
from PyPotx.DialectVersion import DialectVersion
from PyPotx.Helpers.Localization import _, normalise_locale_code
from PyPotx.Helpers.Settings import SettingsError
from PyPotx.PotxError import ConfigError
from PyPotx.SettingsType import SettingType, SettingsType
from PyPotx.SourceLocator import SourceSelection
from PyPotx.version import __version__

# Load environment variables from .env file
dotenv.load_dotenv()

def env_int(key : str, default : int|None = None) -> int|None:
    value = os.getenv(key, default)
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return int(value)

def env_str(key : str, default : str|None = None) -> str|None:
    value = os.getenv(key, default)
    return str(value) if value is not None else None

default_settings = {
    'version': __version__,
    'mode': env_str('POTX_MODE', 'single'),
    'modules': env_str('POTX_MODULES', None),
    'files': env_str('POTX_FILES', None),
    'folder': env_str('POTX_FOLDER', None),
    'api': env_str('POTX_API', None),
    'language': env_str('POTX_LANGUAGE', None),
    'output_dir': env_str('POTX_OUTPUT_DIR', os.curdir),
    'project_name': env_str('POTX_PROJECT_NAME', 'PROJECT'),
    'max_threads': env_int('POTX_MAX_THREADS', 1),
}

class Options(SettingsType):
    def __init__(self, settings : SettingsType|Mapping[str, SettingType]|None = None, **kwargs : SettingType):
        """ Initialise the Options object with default options and any provided options. """
        super().__init__()

        self.update(deepcopy(default_settings))

        settings = SettingsType(settings)

        if settings:
            # Remove None values from options and merge with defaults
            filtered_settings = {k: deepcopy(v) for k, v in settings.items() if v is not None}
            self.update(filtered_settings)

        self.update({k: v for k, v in kwargs.items() if v is not None})

    @property
    def build_mode(self) -> BuildMode:
        """ Raises ConfigError if the mode is not recognised """
        return BuildMode.FromName(self.get_str('mode'))

    @property
    def dialect(self) -> DialectVersion:
        """ Unsupported API versions fall back to the current one """
        return DialectVersion.FromOption(self.get_str('api'))

    @property
    def language(self) -> str|None:
        """ Raises ConfigError if the language is not recognised """
        language = self.get_str('language')
        if not language or not language.strip():
            return None

        try:
            return normalise_locale_code(language)
        except ValueError:
            raise ConfigError(_("Unknown language '{language}'").format(language=language), setting='language')

    @property
    def selection(self) -> SourceSelection:
        return SourceSelection(
            modules=self.get_str('modules'),
            files=self.get_str('files'),
            folder=self.get_str('folder')
        )

    @property
    def scan_root(self) -> str:
        """ The folder module names are looked up in """
        return self.get_str('folder') or os.curdir

    @property
    def output_dir(self) -> str:
        return self.get_str('output_dir') or os.curdir

    @property
    def project_name(self) -> str:
        return self.get_str('project_name') or 'PROJECT'

    @property
    def max_threads(self) -> int:
        try:
            return max(1, self.get_int('max_threads') or 1)
        except SettingsError as e:
            raise ConfigError(str(e), setting='max_threads')

    def Validate(self) -> tuple[BuildMode, DialectVersion, str|None]:
        """
        Resolve the settings that control a run. Raises ConfigError if any are invalid.
        """
        return self.build_mode, self.dialect, self.language
