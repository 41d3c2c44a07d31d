from datetime import datetime, timezone
import logging
import os

from babel import UnknownLocaleError
from babel.messages.catalog import Catalog

from PyPotx.BuildMode import BuildMode
from PyPotx.DialectVersion import DialectVersion
from PyPotx.ExtractedString import ExtractedString, Occurrence, StringPartition
from PyPotx.Helpers.Localization import get_locale_display_name
from PyPotx.OutputCatalog import OutputCatalog
from PyPotx.StringCatalog import StringCatalog
from PyPotx.VersionRegistry import VersionRegistry

component_folders = ('modules', 'themes', 'profiles')
info_suffixes = ('.info', '.info.yml')

template_plural_forms = 'nplurals=INTEGER; plural=EXPRESSION;'

class CatalogBuilder:
    """
    Groups the strings of a run into output catalogs according to a build mode
    """
    def __init__(self, catalog : StringCatalog, versions : VersionRegistry|None = None, dialect : DialectVersion|None = None, base_path : str|None = None, project_name : str|None = None):
        self.catalog = catalog
        self.versions = versions if versions is not None else VersionRegistry()
        self.dialect = dialect or DialectVersion.Current()
        self.base_path = base_path
        self.project_name = project_name or 'PROJECT'

    def Build(self, partition : StringPartition, mode : BuildMode, force_name : str = 'general', language : str|None = None) -> list[OutputCatalog]:
        """
        Build the output catalogs for one partition.

        Single mode always produces exactly one catalog named after force_name.
        Multiple and Core modes produce one catalog per group, and a string that
        occurs in several groups is included in each of them.
        """
        strings = self.catalog.All(partition)

        groups : dict[str, list[ExtractedString]] = {}
        if mode == BuildMode.Single:
            groups[force_name] = strings
        else:
            if mode == BuildMode.Core:
                groups[force_name] = []

            for extracted in strings:
                for group in self.GetGroups(extracted, mode, force_name):
                    groups.setdefault(group, []).append(extracted)

        catalogs = [ self._create_catalog(partition, mode, key, groups[key], language) for key in sorted(groups) ]

        logging.debug(f"Built {len(catalogs)} {partition.value} catalogs from {len(strings)} strings in {mode.value} mode")
        return catalogs

    def GetGroups(self, extracted : ExtractedString, mode : BuildMode, force_name : str = 'general') -> list[str]:
        """
        The distinct groups a string's occurrences belong to, in order of first occurrence
        """
        if mode == BuildMode.Single:
            return [ force_name ]

        groups = [ self.GetGroup(occurrence, mode, force_name) for occurrence in extracted.occurrences ]
        return list(dict.fromkeys(groups))

    def GetGroup(self, occurrence : Occurrence, mode : BuildMode, force_name : str = 'general') -> str:
        """
        The group a single occurrence belongs to
        """
        path = os.path.normpath(occurrence.path)

        if mode == BuildMode.Core:
            if path.lower().endswith(info_suffixes):
                return force_name

            parts = path.split(os.sep)
            for index, part in enumerate(parts[:-2]):
                if part in component_folders:
                    return parts[index + 1]

            return force_name

        folder = os.path.dirname(path)
        if self.base_path and folder:
            relative = os.path.relpath(folder, self.base_path)
            if not relative.startswith(os.pardir):
                folder = relative

        if not folder or folder == os.curdir:
            return force_name

        return folder.replace(os.sep, '/')

    def _create_catalog(self, partition : StringPartition, mode : BuildMode, key : str, strings : list[ExtractedString], language : str|None) -> OutputCatalog:
        creation_date = datetime.now(timezone.utc)

        if mode == BuildMode.Core:
            project, version, title = 'Drupal core', f"{int(self.dialect)}.x", 'Drupal core'
        else:
            project, version, title = self.project_name, 'VERSION', self.project_name

        header = {
            'Project-Id-Version': f"{project} {version}",
            'POT-Creation-Date': creation_date.strftime('%Y-%m-%d %H:%M%z'),
            'PO-Revision-Date': creation_date.strftime('%Y-%m-%d %H:%M%z') if language else 'YEAR-MO-DA HO:MI+ZONE',
            'Last-Translator': 'NAME <EMAIL@ADDRESS>',
            'Language-Team': f"{get_locale_display_name(language)} <EMAIL@ADDRESS>" if language else 'LANGUAGE <EMAIL@ADDRESS>',
            'MIME-Version': '1.0',
            'Content-Type': 'text/plain; charset=utf-8',
            'Content-Transfer-Encoding': '8bit',
            'Plural-Forms': GetPluralForms(language),
        }
        if language:
            header['Language'] = language

        return OutputCatalog(
            partition=partition,
            key=key,
            language=language,
            project=project,
            version=version,
            creation_date=creation_date,
            header=header,
            header_comment=self._create_header_comment(title, key, strings, language),
            strings=list(strings)
        )

    def _create_header_comment(self, title : str, key : str, strings : list[ExtractedString], language : str|None) -> str:
        language_name = get_locale_display_name(language) if language else 'LANGUAGE'
        lines = [
            '# $Id$',
            '#',
            f"# {language_name} translation of {title} ({key})",
            '# Copyright YEAR NAME <EMAIL@ADDRESS>',
        ]

        paths = list(dict.fromkeys(path for extracted in strings for path in extracted.paths))
        versions = [ f"#  {path}: {self.versions.Get(path)}" for path in paths if path in self.versions ]
        if versions:
            lines.append('# Generated from files:')
            lines.extend(versions)

        lines.append('#')
        return '\n'.join(lines)

def GetPluralForms(language : str|None) -> str:
    """
    Return the Plural-Forms header value for a language, using Babel's CLDR rules.
    Templates without a language get the standard placeholder.
    """
    if not language:
        return template_plural_forms

    try:
        catalog = Catalog(locale=language)
        return f"nplurals={catalog.num_plurals}; plural={catalog.plural_expr};"

    except (UnknownLocaleError, ValueError):
        logging.warning(f"Could not get plural forms for {language}, using the English rule")
        return 'nplurals=2; plural=(n != 1);'
