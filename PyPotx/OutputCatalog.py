from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging

from PyPotx.ExtractedString import ExtractedString, StringPartition
from PyPotx.Helpers.Localization import _

@dataclass
class OutputCatalog:
    """
    One translation template (or language catalog) ready to be written
    """
    partition : StringPartition
    key : str
    language : str|None = None
    project : str = 'PROJECT'
    version : str = 'VERSION'
    creation_date : datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    header : dict[str, str] = field(default_factory=dict)
    header_comment : str = ''
    strings : list[ExtractedString] = field(default_factory=list)
    name : str|None = None

    @property
    def stem(self) -> str:
        """ File name without extension, derived from the key unless a name was assigned """
        if self.name:
            return self.name
        return self.key.replace('/', '-').replace('\\', '-')

    @property
    def filename(self) -> str:
        """
        <key>.pot for a template, <key>.<language>.po for a language catalog
        """
        if self.language:
            return f"{self.stem}.{self.language}.po"
        return f"{self.stem}.pot"

    @property
    def is_empty(self) -> bool:
        return not self.strings

    def __len__(self) -> int:
        return len(self.strings)

    def __str__(self) -> str:
        return f"{self.filename} ({len(self.strings)} strings)"

def AssignUniqueFilenames(catalogs : list[OutputCatalog]) -> list[OutputCatalog]:
    """
    Make sure no two catalogs are written to the same file.
    Earlier catalogs keep their names, later ones that collide are numbered.
    File names are compared case-insensitively.
    """
    used : set[str] = set()
    for catalog in catalogs:
        stem = catalog.stem
        number = 1
        while catalog.filename.lower() in used:
            number += 1
            catalog.name = f"{stem}-{number}"

        if number > 1:
            logging.warning(_("Catalog '{key}' would overwrite another catalog, writing it to {filename}").format(key=catalog.key, filename=catalog.filename))

        used.add(catalog.filename.lower())

    return catalogs
