from typing import Any
import regex

def ParseList(value : str|list|None|Any) -> list[str]:
    """
    Parse a comma (or newline) delimited list of names from a string or list of strings
    """
    if value is None:
        return []

    if isinstance(value, str):
        value = [ value ]

    if isinstance(value, (list, tuple)):
        return [ item.strip() for entry in value for item in regex.split(r"[\n,]", str(entry)) if item.strip() ]

    return []

def ParsePhpString(literal : str) -> str:
    """
    Decode a quoted PHP or JavaScript string literal, including the quotes.
    Single quoted strings only unescape quotes and backslashes.
    """
    if len(literal) < 2:
        return literal

    quote, body = literal[0], literal[1:-1]

    if quote == "'":
        return regex.sub(r"\\([\\'])", r"\1", body)

    escapes = { 'n': '\n', 't': '\t', 'r': '\r', '"': '"', '\\': '\\', '$': '$', "'": "'" }
    return regex.sub(r"\\(.)", lambda m: escapes.get(m.group(1), m.group(0)), body)
