from PyPotx.Helpers.Localization import _

class PotxError(Exception):
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message)
        self.error = error
        self.message = message

    def __str__(self) -> str:
        if self.message:
            return self.message
        elif self.error:
            return str(self.error)
        return super().__str__()

class ConfigError(PotxError):
    """ Invalid configuration, detected before any file is processed """
    def __init__(self, message : str, setting : str|None = None):
        super().__init__(message)
        self.setting = setting

class LocatorError(PotxError):
    """ A module or folder could not be resolved to a path """
    def __init__(self, message : str, name : str|None = None, error : Exception|None = None):
        super().__init__(message, error)
        self.name = name

class UnknownModuleError(LocatorError):
    def __init__(self, module : str):
        super().__init__(_("Unable to find module '{module}'").format(module=module), name=module)

class ExtractionError(PotxError):
    """ A source file could not be read or scanned """
    def __init__(self, message : str, path : str|None = None, error : Exception|None = None):
        super().__init__(message, error)
        self.path = path

class CatalogWriteError(PotxError):
    """ An output catalog could not be written """
    def __init__(self, message : str, path : str|None = None, error : Exception|None = None):
        super().__init__(message, error)
        self.path = path
