import logging
import os

from PyPotx.PotxError import UnknownModuleError

class ModulePathResolver:
    """
    Finds the folder a module is installed in by searching for its info file under a root folder
    """
    info_suffixes = ('.info.yml', '.info')

    def __init__(self, root : str|None = None):
        self.root : str = root or os.curdir
        self._cache : dict[str, str] = {}

    def GetPath(self, module : str) -> str:
        """
        Return the folder containing <module>.info.yml or <module>.info

        Raises UnknownModuleError if the module cannot be found.
        """
        if module in self._cache:
            return self._cache[module]

        if os.path.isdir(self.root):
            filenames = { f"{module}{suffix}" for suffix in self.info_suffixes }
            for dirpath, dirnames, files in os.walk(self.root):
                dirnames[:] = sorted(name for name in dirnames if not name.startswith('.'))
                if filenames.intersection(files):
                    path = os.path.normpath(dirpath)
                    logging.debug(f"Module {module} found at {path}")
                    self._cache[module] = path
                    return path

        raise UnknownModuleError(module)
