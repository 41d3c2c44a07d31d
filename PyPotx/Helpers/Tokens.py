"""
A minimal lexer for PHP and JavaScript source.

It is only precise enough to find translation markers: comments and
whitespace are dropped, string literals are decoded, and everything else is
reported as names or single punctuation tokens with their line numbers.
"""
from dataclasses import dataclass
from typing import Iterator

import regex

from PyPotx.Helpers.Parse import ParsePhpString

STRING = 'string'
NAME = 'name'
NUMBER = 'number'
OP = 'op'

_common_tokens = r"""
 (?P<ws>\s+)
|(?P<comment>//[^\n]*|/\*.*?(?:\*/|\Z){hash_comment})
|(?P<string>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|`(?:[^`\\]|\\.)*`)
|(?P<name>\$?[^\W\d][\w\\]*|\\[^\W\d][\w\\]*)
|(?P<number>\d[\w.]*)
|(?P<op>\?->|->|=>|::|[^\s\w])
"""

_php_pattern = regex.compile(_common_tokens.replace('{hash_comment}', r'|\#[^\n]*'), regex.VERBOSE | regex.DOTALL)
_js_pattern = regex.compile(_common_tokens.replace('{hash_comment}', ''), regex.VERBOSE | regex.DOTALL)

@dataclass(frozen=True)
class Token:
    kind : str
    value : str
    line : int

    def Is(self, kind : str, value : str|None = None) -> bool:
        return self.kind == kind and (value is None or self.value == value)

def Tokenize(source : str, php : bool = True) -> list[Token]:
    """
    Split source code into tokens, ignoring whitespace and comments
    """
    pattern = _php_pattern if php else _js_pattern
    tokens : list[Token] = []
    line = 1
    position = 0

    for match in pattern.finditer(source):
        line += source.count('\n', position, match.start())
        position = match.start()

        kind = match.lastgroup
        text = match.group()
        if kind == STRING:
            tokens.append(Token(STRING, ParsePhpString(text), line))
        elif kind in (NAME, NUMBER, OP):
            tokens.append(Token(kind, text, line))

    return tokens

def SplitArguments(tokens : list[Token], open_index : int) -> tuple[list[list[Token]], int]:
    """
    Split the arguments of a call whose opening parenthesis is at open_index.

    Returns the top level arguments and the index of the closing parenthesis
    (or the end of the token list if the call is not terminated).
    """
    arguments : list[list[Token]] = []
    current : list[Token] = []
    depth = 0

    index = open_index + 1
    while index < len(tokens):
        token = tokens[index]
        if token.kind == OP and token.value in '([{':
            depth += 1
        elif token.kind == OP and token.value in ')]}':
            if depth == 0:
                if current or arguments:
                    arguments.append(current)
                return arguments, index
            depth -= 1
        elif token.kind == OP and token.value == ',' and depth == 0:
            arguments.append(current)
            current = []
            index += 1
            continue

        current.append(token)
        index += 1

    if current or arguments:
        arguments.append(current)
    return arguments, index

def LiteralValue(argument : list[Token], concatenation : str) -> str|None:
    """
    The value of an argument made only of string literals joined by the concatenation operator,
    or None if it contains anything else.
    """
    if not argument or len(argument) % 2 == 0:
        return None

    parts : list[str] = []
    for index, token in enumerate(argument):
        if index % 2 == 0:
            if token.kind != STRING:
                return None
            parts.append(token.value)
        elif not token.Is(OP, concatenation):
            return None

    return ''.join(parts)

def FindOption(argument : list[Token], key : str) -> str|None:
    """
    Find a literal value for a key in an array or object literal, e.g. 'context' => 'value' or {context: 'value'}
    """
    for index in range(len(argument) - 2):
        token = argument[index]
        if token.value != key or token.kind not in (STRING, NAME):
            continue

        separator, value = argument[index + 1], argument[index + 2]
        if separator.kind == OP and separator.value in ('=>', ':') and value.kind == STRING:
            return value.value

    return None

def IterateCalls(tokens : list[Token]) -> Iterator[int]:
    """
    Indices of every name token immediately followed by an opening parenthesis
    """
    for index in range(len(tokens) - 1):
        if tokens[index].kind == NAME and tokens[index + 1].Is(OP, '('):
            yield index
