from abc import ABC, abstractmethod
import logging
import os

from babel.messages.catalog import Catalog
from babel.messages.pofile import write_po

from PyPotx.ExtractedString import ExtractedString
from PyPotx.Helpers.Localization import _
from PyPotx.OutputCatalog import OutputCatalog
from PyPotx.PotxError import CatalogWriteError

class CatalogWriter(ABC):
    """
    Abstract interface for storing output catalogs.
    """

    @abstractmethod
    def Write(self, catalog : OutputCatalog) -> str:
        """
        Store a catalog.

        Returns:
            str: Where the catalog was written

        Raises:
            CatalogWriteError: If the catalog cannot be stored
        """
        pass

class MemoryCatalogWriter(CatalogWriter):
    """
    Keeps written catalogs in memory, keyed by file name
    """
    def __init__(self):
        self.catalogs : dict[str, OutputCatalog] = {}

    def Write(self, catalog : OutputCatalog) -> str:
        self.catalogs[catalog.filename] = catalog
        return catalog.filename

    def __getitem__(self, filename : str) -> OutputCatalog:
        return self.catalogs[filename]

    def __len__(self) -> int:
        return len(self.catalogs)

class HeaderCatalog(Catalog):
    """
    A Babel catalog that writes the header entry of an output catalog unchanged
    instead of generating its own
    """
    def __init__(self, header : dict[str, str], **kwargs):
        self.output_header = dict(header)
        super().__init__(**kwargs)

    def _get_output_headers(self) -> list[tuple[str, str]]:
        headers = list(self.output_header.items())
        if headers:
            # Babel joins the header lines, so the last one needs its own line break
            name, value = headers[-1]
            headers[-1] = (name, f"{value}\n")
        return headers

    mime_headers = property(_get_output_headers, Catalog._set_mime_headers)

class PoFileWriter(CatalogWriter):
    """
    Writes catalogs as gettext .pot/.po files using Babel
    """
    def __init__(self, output_dir : str|None = None, width : int = 76):
        self.output_dir : str = output_dir or os.curdir
        self.width = width

    def Write(self, catalog : OutputCatalog) -> str:
        path = os.path.join(self.output_dir, catalog.filename)

        try:
            po_catalog = self.CreatePoCatalog(catalog)

            os.makedirs(self.output_dir, exist_ok=True)
            with open(path, 'wb') as po_file:
                write_po(po_file, po_catalog, width=self.width, sort_output=False)

        except OSError as e:
            raise CatalogWriteError(_("Unable to write {path}: {error}").format(path=path, error=e.strerror or str(e)), path, e)

        logging.info(_("Wrote {path} with {count} strings").format(path=path, count=len(catalog)))
        return path

    def CreatePoCatalog(self, catalog : OutputCatalog) -> Catalog:
        """
        Convert an output catalog to a Babel catalog
        """
        header = catalog.header
        po_catalog = HeaderCatalog(
            header,
            locale=catalog.language,
            header_comment=catalog.header_comment,
            project=catalog.project,
            version=catalog.version,
            creation_date=catalog.creation_date,
            revision_date=catalog.creation_date if catalog.language else None,
            last_translator=header.get('Last-Translator'),
            language_team=header.get('Language-Team'),
            charset='utf-8',
            fuzzy=True
        )

        for extracted in catalog.strings:
            po_catalog.add(
                _message_id(extracted),
                string=None,
                locations=[ (occurrence.path, occurrence.line) for occurrence in extracted.occurrences ],
                context=extracted.context
            )

        return po_catalog

def _message_id(extracted : ExtractedString) -> str|tuple[str, str]:
    if extracted.is_plural:
        return (extracted.singular, extracted.plural or '')
    return extracted.text
