from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

PLURAL_SEPARATOR = '\0'

class StringPartition(Enum):
    """ Strings needed during normal operation vs. only during installation """
    Runtime = 'runtime'
    Installer = 'installer'

class Occurrence(NamedTuple):
    path : str
    line : int

    def __str__(self) -> str:
        return f"{self.path}:{self.line}"

@dataclass
class StringCandidate:
    """
    A translatable string found by an extractor in a single file
    """
    text : str
    line : int
    context : str|None = None
    partition : StringPartition = StringPartition.Runtime

    @classmethod
    def Plural(cls, singular : str, plural : str, line : int, context : str|None = None, partition : StringPartition = StringPartition.Runtime) -> StringCandidate:
        return cls(text=f"{singular}{PLURAL_SEPARATOR}{plural}", line=line, context=context, partition=partition)

@dataclass
class ExtractedString:
    """
    A unique translatable string with every place it occurs in the source
    """
    text : str
    context : str|None
    partition : StringPartition
    occurrences : list[Occurrence] = field(default_factory=list)

    @property
    def key(self) -> tuple[str, str|None, StringPartition]:
        return (self.text, self.context, self.partition)

    @property
    def is_plural(self) -> bool:
        return PLURAL_SEPARATOR in self.text

    @property
    def singular(self) -> str:
        return self.text.split(PLURAL_SEPARATOR, 1)[0]

    @property
    def plural(self) -> str|None:
        parts = self.text.split(PLURAL_SEPARATOR, 1)
        return parts[1] if len(parts) > 1 else None

    @property
    def paths(self) -> list[str]:
        """ Distinct files the string occurs in, in order of first occurrence """
        return list(dict.fromkeys(occurrence.path for occurrence in self.occurrences))

    def __str__(self) -> str:
        text = self.singular if not self.is_plural else f"{self.singular} / {self.plural}"
        return f"{text} ({len(self.occurrences)} occurrences)"
