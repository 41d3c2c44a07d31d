from dataclasses import dataclass, field
import sys
from typing import TextIO

from PyPotx.ExtractionContext import Diagnostic
from PyPotx.Helpers.Localization import _

@dataclass
class ReportOutcome:
    success : bool
    diagnostics : list[Diagnostic] = field(default_factory=list)
    files_count : int = 0
    strings_count : int = 0

    @property
    def errors(self) -> list[str]:
        return [ diagnostic.message for diagnostic in self.diagnostics ]

    def __bool__(self) -> bool:
        return self.success

class Reporter:
    """
    Prints the statistics for a run and decides whether it succeeded
    """
    def __init__(self, output : TextIO|None = None):
        self.output : TextIO = output if output is not None else sys.stdout

    def Finalize(self, files_count : int, strings_count : int, diagnostics : list[Diagnostic]) -> ReportOutcome:
        """
        Render the statistics table, then list any diagnostics.
        The run fails if there is at least one diagnostic.
        """
        self._newline()
        self._title(_("Statistics"))
        self._table([ _("Files"), _("Strings"), _("Warnings") ], [ [ files_count, strings_count, len(diagnostics) ] ])

        if diagnostics:
            self._title(_("Errors"))
            for diagnostic in diagnostics:
                self._text(f" [ERROR] {diagnostic.message}")
            return ReportOutcome(success=False, diagnostics=list(diagnostics), files_count=files_count, strings_count=strings_count)

        self._newline()
        self._text(_("Done"))
        return ReportOutcome(success=True, files_count=files_count, strings_count=strings_count)

    def _newline(self):
        self.output.write("\n")

    def _text(self, text : str):
        self.output.write(f"{text}\n")

    def _title(self, title : str):
        self._text(title)
        self._text("".ljust(len(title), "="))
        self._newline()

    def _table(self, header : list[str], rows : list[list]):
        columns = [ header ] + [ [ str(value) for value in row ] for row in rows ]
        widths = [ max(len(row[index]) for row in columns) for index in range(len(header)) ]
        border = " ".join("".ljust(width, "-") for width in widths)

        self._text(border)
        self._text(" ".join(value.ljust(width) for value, width in zip(header, widths)).rstrip())
        self._text(border)
        for row in columns[1:]:
            self._text(" ".join(value.ljust(width) for value, width in zip(row, widths)).rstrip())
        self._text(border)
        self._newline()
