from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from PyPotx.DialectVersion import DialectVersion
from PyPotx.ExtractedString import StringCandidate
from PyPotx.Helpers.Localization import _
from PyPotx.PotxError import ExtractionError

@dataclass
class ExtractionResult:
    """
    Everything an extractor found in one file
    """
    strings : list[StringCandidate] = field(default_factory=list)
    version : str|None = None
    warnings : list[str] = field(default_factory=list)

class StringExtractor(ABC):
    """
    Abstract interface for scanning a single source file for translatable strings.
    Implementations must not keep state between files so that files can be scanned concurrently.
    """

    @abstractmethod
    def Extract(self, path : str, dialect : DialectVersion) -> ExtractionResult:
        """
        Scan a file and return the strings it contains.

        Args:
            path: Path of the file to scan
            dialect: Source conventions to apply

        Returns:
            ExtractionResult: strings, detected version and any warnings

        Raises:
            ExtractionError: If the file cannot be read or scanned
        """
        pass

    def ReadSource(self, path : str) -> str:
        """
        Read a source file as UTF-8 text.
        """
        try:
            with open(path, 'r', encoding='utf-8-sig') as source_file:
                return source_file.read()

        except UnicodeDecodeError as e:
            raise ExtractionError(_("Unable to decode {path} as UTF-8: {error}").format(path=path, error=str(e)), path, e)
        except OSError as e:
            raise ExtractionError(_("Unable to read {path}: {error}").format(path=path, error=e.strerror or str(e)), path, e)
