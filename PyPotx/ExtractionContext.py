from dataclasses import dataclass
import logging

from PyPotx.SourceLocator import SourceFile
from PyPotx.StringCatalog import StringCatalog
from PyPotx.VersionRegistry import VersionRegistry

@dataclass(frozen=True)
class Diagnostic:
    """ A non-fatal problem reported at any stage of a run """
    message : str
    source : str|None = None

    def __str__(self) -> str:
        return self.message

class ExtractionContext:
    """
    State for a single extraction run: discovered files, extracted strings,
    file versions and diagnostics. Created when a run starts and discarded when it ends.
    """
    def __init__(self):
        self.files : list[SourceFile] = []
        self.catalog = StringCatalog()
        self.versions = VersionRegistry()
        self.diagnostics : list[Diagnostic] = []

    def AddDiagnostic(self, message : str, source : str|None = None) -> Diagnostic:
        """
        Record a problem to be reported at the end of the run
        """
        logging.debug(f"Diagnostic: {message}")
        diagnostic = Diagnostic(message=message, source=source)
        self.diagnostics.append(diagnostic)
        return diagnostic

    def AddError(self, error : Exception, source : str|None = None) -> Diagnostic:
        return self.AddDiagnostic(str(error), source)
