# -*- encoding: utf-8 -*-
# @File   : line.py
# @Time   : 2026/10/12 21:10:26
# @Author : Chloride

"""Classify one logical INI line.

The loader joins backslash-continued lines before calling `parse_line()`,
so a line here may contain newlines. Rules, first match wins:

1. blank after stripping -> `EMPTY`;
2. starts with `#` or `;` -> `COMMENT`;
3. `[...]` -> `SECTION`, name stripped and lowercased;
4. `key = "quoted"` / `key = 'quoted'` -> `VALUE`, kept verbatim
   except for `\\\\` and an escaped quote;
5. `key = value ; comment` -> `VALUE`, stripped, comment dropped;
6. `key =`, `key = ;...`, `key = #...` -> `VALUE` with an empty value;
7. anything else -> `ERROR`.

Keys and section names are lowercased (ASCII only), values never are.
"""

from re import compile as regex
from string import ascii_lowercase, ascii_uppercase
from typing import NamedTuple

from .consts import COMMENT_MARKS, QUOTE_MARKS, WHITESPACES, LineStatus

__all__ = ['ParsedLine', 'parse_line', 'strlwc', 'strstrip']

_ASCII_LOWER = str.maketrans(ascii_uppercase, ascii_lowercase)
_UNQUOTED = regex(r'[^;#]*')


class ParsedLine(NamedTuple):
    status: LineStatus
    section: str = ''
    key: str = ''
    value: str = ''


def strlwc(s: str) -> str:
    """Lowercase ASCII letters only, like `tolower()` in the C locale."""
    return s.translate(_ASCII_LOWER)


def strstrip(s: str) -> str:
    return s.strip(WHITESPACES)


def _unquote(text: str, quote: str) -> str | None:
    # `text` starts right after the opening quote.
    # None if the closing quote is missing.
    buf: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == '\\' and i + 1 < len(text):
            nxt = text[i + 1]
            if nxt not in ('\\', quote):
                buf.append(ch)
            buf.append(nxt)
            i += 2
            continue
        if ch == quote:
            return ''.join(buf)
        buf.append(ch)
        i += 1
    return None


def parse_line(input_line: str) -> ParsedLine:
    line = strstrip(input_line)

    if not line:
        return ParsedLine(LineStatus.EMPTY)

    if line[0] in COMMENT_MARKS:
        return ParsedLine(LineStatus.COMMENT)

    if line[0] == '[' and line[-1] == ']':
        section = strlwc(strstrip(line[1:-1]))
        if not section:
            return ParsedLine(LineStatus.ERROR)
        return ParsedLine(LineStatus.SECTION, section=section)

    key, sep, rest = line.partition('=')
    key = strstrip(key)
    if not sep or not key:
        return ParsedLine(LineStatus.ERROR)
    key = strlwc(key)
    rest = rest.lstrip(WHITESPACES)

    if rest and rest[0] in QUOTE_MARKS:
        # an unterminated quote is taken as a plain value below.
        value = _unquote(rest[1:], rest[0])
        if value is not None:
            return ParsedLine(LineStatus.VALUE, key=key, value=value)

    if not rest or rest[0] in COMMENT_MARKS:
        return ParsedLine(LineStatus.VALUE, key=key)

    value = strstrip(_UNQUOTED.match(rest).group())
    return ParsedLine(LineStatus.VALUE, key=key, value=value)
