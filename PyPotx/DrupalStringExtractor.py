import logging
import os

import regex

from PyPotx.DialectVersion import DialectVersion
from PyPotx.ExtractedString import StringCandidate, StringPartition
from PyPotx.Helpers.Localization import _
from PyPotx.Helpers.Tokens import NAME, OP, FindOption, IterateCalls, LiteralValue, SplitArguments, Token, Tokenize
from PyPotx.StringExtractor import ExtractionResult, StringExtractor

php_extensions = ('.php', '.module', '.inc', '.install', '.theme', '.profile', '.engine', '.test')

_version_pattern = regex.compile(r"\$Id(?::[ \t]*(?P<version>[^$\n]*?))?[ \t]*\$")
_info_line_pattern = regex.compile(r"^[ \t]*(?P<key>[\w-]+)[ \t]*=[ \t]*(?P<value>.*?)[ \t]*$", regex.MULTILINE)
_yaml_line_pattern = regex.compile(r"^(?P<indent>[ \t]*)(?P<key>[\w-]+):[ \t]*(?P<value>.*?)[ \t]*$", regex.MULTILINE)
_twig_filter_pattern = regex.compile(r"\{\{-?\s*(?P<literal>'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\")\s*\|\s*(?:t|trans)\b")
_twig_trans_pattern = regex.compile(r"\{%-?\s*trans\b(?P<options>[^%]*)-?%\}(?P<body>.*?)\{%-?\s*endtrans\s*-?%\}", regex.DOTALL)
_twig_plural_pattern = regex.compile(r"\{%-?\s*plural\b[^%]*-?%\}")
_twig_context_pattern = regex.compile(r"['\"]context['\"]\s*:\s*(?P<quote>['\"])(?P<context>.*?)(?P=quote)")
_twig_variable_pattern = regex.compile(r"\{\{-?\s*(?P<name>[\w.]+)\s*(?:\|\s*(?P<filter>\w+))?\s*-?\}\}")

# Keys that hold translatable text in Drupal 8 YAML files, by file suffix
yaml_translatable_keys : dict[str, tuple[str, ...]] = {
    '.info.yml': ('name', 'description', 'package'),
    '.routing.yml': ('_title',),
    '.links.menu.yml': ('title', 'description'),
    '.links.task.yml': ('title',),
    '.links.action.yml': ('title',),
    '.links.contextual.yml': ('title',),
    '.permissions.yml': ('title', 'description'),
}

info_translatable_keys = ('name', 'description', 'package')

class DrupalStringExtractor(StringExtractor):
    """
    Finds strings passed to Drupal's translation functions in PHP, JavaScript,
    Twig, YAML and .info files.
    """
    def Extract(self, path : str, dialect : DialectVersion) -> ExtractionResult:
        name = os.path.basename(path).lower()

        if name.endswith(php_extensions):
            handler = self._extract_php
        elif name.endswith('.js'):
            handler = self._extract_javascript
        elif name.endswith('.twig') and dialect.uses_yaml:
            handler = self._extract_twig
        elif name.endswith('.yml') and dialect.uses_yaml:
            handler = self._extract_yaml
        elif name.endswith('.info') and not dialect.uses_yaml:
            handler = self._extract_info
        else:
            logging.debug(f"Skipping {path}: not a recognised source file")
            return ExtractionResult()

        source = self.ReadSource(path)
        result = ExtractionResult(version=self._find_version(source))
        handler(path, source, dialect, result)
        return result

    def _find_version(self, source : str) -> str|None:
        match = _version_pattern.search(source)
        if match and match.group('version'):
            return match.group('version').strip()
        return None

    def _extract_php(self, path : str, source : str, dialect : DialectVersion, result : ExtractionResult):
        tokens = Tokenize(source, php=True)

        for index in IterateCalls(tokens):
            token = tokens[index]
            previous = tokens[index - 1] if index > 0 else None
            before_previous = tokens[index - 2] if index > 1 else None

            if previous and previous.Is(NAME, 'function'):
                continue

            marker : str|None = None
            plural = False
            partition = StringPartition.Runtime

            if previous and previous.Is(NAME, 'new'):
                class_name = token.value.rsplit('\\', 1)[-1]
                if dialect.uses_yaml and class_name in ('TranslatableMarkup', 'TranslationWrapper'):
                    marker = class_name
                elif dialect.uses_yaml and class_name == 'PluralTranslatableMarkup':
                    marker, plural = class_name, True

            elif previous and previous.Is(OP, '->'):
                if token.value == 't' and before_previous and before_previous.Is(NAME, '$this') and dialect.uses_yaml:
                    marker = 't'
                elif token.value == 'formatPlural' and dialect.uses_yaml:
                    marker, plural = 'formatPlural', True

            elif previous and previous.kind == OP and previous.value in ('::', '?->'):
                continue

            elif token.value == 't':
                marker = 't'
            elif token.value == 'format_plural' and not dialect.uses_yaml:
                marker, plural = 'format_plural', True
            elif token.value in ('st', '$t') and dialect.has_installer_strings:
                marker, partition = token.value, StringPartition.Installer

            if marker:
                self._extract_call(path, tokens, index, marker, plural, partition, '.', result)

    def _extract_javascript(self, path : str, source : str, dialect : DialectVersion, result : ExtractionResult):
        tokens = Tokenize(source, php=False)

        for index in IterateCalls(tokens):
            if index < 2 or not tokens[index - 1].Is(OP, '.') or not tokens[index - 2].Is(NAME, 'Drupal'):
                continue

            name = tokens[index].value
            if name == 't':
                self._extract_call(path, tokens, index, 'Drupal.t', False, StringPartition.Runtime, '+', result)
            elif name == 'formatPlural':
                self._extract_call(path, tokens, index, 'Drupal.formatPlural', True, StringPartition.Runtime, '+', result)

    def _extract_call(self, path : str, tokens : list[Token], index : int, marker : str, plural : bool, partition : StringPartition, concatenation : str, result : ExtractionResult):
        """
        Extract the string arguments of a single marker call
        """
        line = tokens[index].line
        arguments, _end = SplitArguments(tokens, index + 1)

        if plural:
            singular = LiteralValue(arguments[1], concatenation) if len(arguments) > 1 else None
            plural_text = LiteralValue(arguments[2], concatenation) if len(arguments) > 2 else None
            if singular is None or plural_text is None:
                result.warnings.append(_("{path}:{line}: The singular and plural parameters to {marker}() should be literal strings.").format(path=path, line=line, marker=marker))
                return
            if not singular or not plural_text:
                result.warnings.append(_("{path}:{line}: Do not use empty strings in {marker}().").format(path=path, line=line, marker=marker))
                return

            context = FindOption(arguments[4], 'context') if len(arguments) > 4 else None
            result.strings.append(StringCandidate.Plural(singular, plural_text, line, context, partition))
            return

        text = LiteralValue(arguments[0], concatenation) if arguments else None
        if text is None:
            result.warnings.append(_("{path}:{line}: The first parameter to {marker}() should be a literal string.").format(path=path, line=line, marker=marker))
            return
        if not text:
            result.warnings.append(_("{path}:{line}: Do not use empty strings in {marker}().").format(path=path, line=line, marker=marker))
            return

        context = FindOption(arguments[2], 'context') if len(arguments) > 2 else None
        result.strings.append(StringCandidate(text=text, line=line, context=context, partition=partition))

    def _extract_twig(self, path : str, source : str, dialect : DialectVersion, result : ExtractionResult):
        lines = LineCounter(source)
        for match in _twig_filter_pattern.finditer(source):
            literal = match.group('literal')
            text = _unescape_twig(literal[1:-1])
            if text:
                result.strings.append(StringCandidate(text=text, line=lines.LineAt(match.start())))

        lines = LineCounter(source)
        for match in _twig_trans_pattern.finditer(source):
            line = lines.LineAt(match.start())
            context_match = _twig_context_pattern.search(match.group('options'))
            context = context_match.group('context') if context_match else None

            parts = _twig_plural_pattern.split(match.group('body'), maxsplit=1)
            texts = [ _normalise_twig_text(part) for part in parts ]
            if not all(texts):
                result.warnings.append(_("{path}:{line}: Do not use empty strings in {marker}().").format(path=path, line=line, marker='trans'))
                continue

            if len(texts) == 2:
                result.strings.append(StringCandidate.Plural(texts[0], texts[1], line, context))
            else:
                result.strings.append(StringCandidate(text=texts[0], line=line, context=context))

    def _extract_yaml(self, path : str, source : str, dialect : DialectVersion, result : ExtractionResult):
        name = os.path.basename(path).lower()
        suffix = next((suffix for suffix in yaml_translatable_keys if name.endswith(suffix)), None)
        if suffix is None:
            return

        keys = yaml_translatable_keys[suffix]
        top_level_only = suffix == '.info.yml'

        lines = LineCounter(source)
        for match in _yaml_line_pattern.finditer(source):
            if top_level_only and match.group('indent'):
                continue

            key = match.group('key')
            value = _unquote_yaml(match.group('value'))
            if key == 'version' and top_level_only and value:
                result.version = value
            elif key in keys and value:
                result.strings.append(StringCandidate(text=value, line=lines.LineAt(match.start())))

    def _extract_info(self, path : str, source : str, dialect : DialectVersion, result : ExtractionResult):
        core_version : str|None = None

        lines = LineCounter(source)
        for match in _info_line_pattern.finditer(source):
            key = match.group('key')
            value = _unquote_info(match.group('value'))
            if key == 'version' and value:
                result.version = value
            elif key == 'core' and value:
                core_version = value
            elif key in info_translatable_keys and value:
                result.strings.append(StringCandidate(text=value, line=lines.LineAt(match.start())))

        if not result.version and core_version:
            result.version = core_version

class LineCounter:
    """
    Line numbers for a sequence of increasing positions in a source string,
    counting only the text between one position and the next
    """
    def __init__(self, source : str):
        self.source = source
        self.position = 0
        self.line = 1

    def LineAt(self, position : int) -> int:
        if position < self.position:
            self.position, self.line = 0, 1

        self.line += self.source.count('\n', self.position, position)
        self.position = position
        return self.line

def _unescape_twig(text : str) -> str:
    return regex.sub(r"\\(.)", r"\1", text)

def _normalise_twig_text(body : str) -> str:
    """
    Collapse whitespace and turn {{ variables }} into placeholders, the way Drupal's trans tag does
    """
    def placeholder(match) -> str:
        variable = match.group('name')
        prefix = { 'placeholder': '%', 'passthrough': '!' }.get(match.group('filter') or '', '@')
        return f"{prefix}{variable}"

    text = _twig_variable_pattern.sub(placeholder, body)
    return regex.sub(r"\s+", ' ', text).strip()

def _unquote_yaml(value : str) -> str:
    if value.startswith(('|', '>', '&', '*', '[', '{', '#')):
        return ''
    if len(value) >= 2 and value[0] == "'" and value[-1] == "'":
        return value[1:-1].replace("''", "'")
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1].replace('\\"', '"').replace('\\\\', '\\')
    return regex.sub(r"\s+#.*$", '', value)

def _unquote_info(value : str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value
