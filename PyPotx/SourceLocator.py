from dataclasses import dataclass
import logging
import os
from typing import Callable

from PyPotx.Helpers.Localization import _
from PyPotx.Helpers.Parse import ParseList
from PyPotx.ModulePathResolver import ModulePathResolver
from PyPotx.PotxError import LocatorError

@dataclass(frozen=True)
class SourceFile:
    path : str

    def __str__(self) -> str:
        return self.path

@dataclass
class SourceSelection:
    """
    Which files to process. When several are given, modules take precedence over files, then folder.
    With none, the current directory is scanned.
    """
    modules : list[str]|str|None = None
    files : list[str]|str|None = None
    folder : str|None = None

    @property
    def module_names(self) -> list[str]:
        return ParseList(self.modules)

    @property
    def file_names(self) -> list[str]:
        return ParseList(self.files)

class SourceLocator:
    """
    Resolves a source selection to the list of files to extract strings from
    """
    def __init__(self, module_resolver : ModulePathResolver|None = None, report_error : Callable[[LocatorError], object]|None = None):
        self.module_resolver = module_resolver if module_resolver is not None else ModulePathResolver()
        self.report_error = report_error

    def Resolve(self, selection : SourceSelection) -> list[SourceFile]:
        module_names = selection.module_names
        if module_names:
            return self.ResolveModules(module_names)

        file_names = selection.file_names
        if file_names:
            return [ SourceFile(path) for path in file_names ]

        if selection.folder:
            return self.ResolveFolder(selection.folder)

        return self.ResolveFolder(os.curdir)

    def ResolveModules(self, modules : list[str]) -> list[SourceFile]:
        """
        Gather all files of each module. Modules that cannot be found are reported and skipped.
        """
        files : list[SourceFile] = []
        for module in modules:
            try:
                module_path = self.module_resolver.GetPath(module)
                files.extend(self.ResolveFolder(module_path))

            except LocatorError as e:
                self._report(e)

        return files

    def ResolveFolder(self, folder : str) -> list[SourceFile]:
        if not os.path.isdir(folder):
            self._report(LocatorError(_("Folder not found: {folder}").format(folder=folder), name=folder))
            return []

        return [ SourceFile(path) for path in ExploreFolder(folder) ]

    def _report(self, error : LocatorError):
        if self.report_error is None:
            raise error

        logging.warning(str(error))
        self.report_error(error)

def ExploreFolder(folder : str) -> list[str]:
    """
    Recursively list every file under a folder in a stable order, skipping hidden directories
    """
    paths : list[str] = []
    for dirpath, dirnames, filenames in os.walk(folder):
        dirnames[:] = sorted(name for name in dirnames if not name.startswith('.'))
        for filename in sorted(filenames):
            paths.append(os.path.normpath(os.path.join(dirpath, filename)))
    return paths
