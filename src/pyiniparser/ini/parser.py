# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/13 01:04:45
# @Author : Chloride

"""Load INI text into an `IniClass`, and save it back.

Loading is all-or-nothing: every syntax error is reported (with its line
number) and parsing goes on, but a source with any bad line yields no
document at all. A physical line longer than `ASCII_LINE_SIZE` aborts
the load at once.

Lines ending with a backslash are joined with the following one
before being classified, e.g.

    key = first part, \\
          second part
"""

import logging
from io import StringIO, TextIOBase
from locale import getpreferredencoding
from os import PathLike, fspath
from typing import Callable

import chardet

from ..abstract import FileHandler
from ..dictionary import IniDictionary
from .consts import ASCII_LINE_SIZE, SECTION_SEP, WHITESPACES, LineStatus
from .line import parse_line
from .model import IniClass

__all__ = [
    'IniParser', 'load', 'load_file', 'ErrorCallback',
    'IniParseError', 'IniSyntaxError', 'IniLineTooLongError'
]

ErrorCallback = Callable[[str], object]


class IniParseError(Exception):
    """To record errors when reading INI sources."""
    pass


class IniSyntaxError(IniParseError):
    def __init__(self, name: str, errors: list[tuple[int, str]]) -> None:
        self.name = name
        # (line number, offending logical line)
        self.errors = errors
        super().__init__(f'{len(errors)} syntax error(s) in {name}')


class IniLineTooLongError(IniParseError):
    def __init__(self, name: str, lineno: int) -> None:
        self.name = name
        self.lineno = lineno
        super().__init__(f'input line too long in {name} ({lineno})')


class IniParser(FileHandler[IniClass]):
    def __init__(
        self, filename: str, encoding: str | None = None, *,
        max_line_length: int = ASCII_LINE_SIZE,
        error_callback: ErrorCallback | None = None
    ) -> None:
        super().__init__(filename, encoding)
        self._maxlen = max_line_length
        # None falls back to the logging module.
        self._report = error_callback or logging.error

    def readstream(self, buf: TextIOBase, name: str | None = None) -> IniClass:
        """读取解码好的字符串流。

        May raise `IniSyntaxError` (at the end of the stream) or
        `IniLineTooLongError` (at once). Both are reported to the error
        callback first. `name` only shows up in messages.
        """
        name = name or self._fn
        ret = IniDictionary()
        section = ''
        errors: list[tuple[int, str]] = []
        lineno = 0
        pending = ''

        while raw := buf.readline(self._maxlen + 1):
            lineno += 1
            # readline() stops short of '\n' only at the limit or at EOF.
            if not raw.endswith('\n') and len(raw) > self._maxlen:
                self._report(
                    f'iniparser: input line too long in {name} ({lineno})')
                raise IniLineTooLongError(name, lineno)

            line = raw.rstrip(WHITESPACES)
            if line.endswith('\\'):
                pending += line[:-1]
                continue
            line, pending = pending + line, ''
            section = self.__feed(ret, section, line, lineno, name, errors)

        # a dangling continuation on the last line still counts.
        if pending:
            self.__feed(ret, section, pending, lineno, name, errors)

        if errors:
            raise IniSyntaxError(name, errors)
        return IniClass(ret)

    def __feed(
        self, ret: IniDictionary, section: str, line: str, lineno: int,
        name: str, errors: list[tuple[int, str]]
    ) -> str:
        """Classify one logical line and store it. Gives the new section."""
        parsed = parse_line(line)
        stored = True
        if parsed.status == LineStatus.SECTION:
            section = parsed.section
            stored = ret.set(section, None)
        elif parsed.status == LineStatus.VALUE:
            stored = ret.set(
                f'{section}{SECTION_SEP}{parsed.key}', parsed.value)
        elif parsed.status == LineStatus.ERROR:
            self._report(f'iniparser: syntax error in {name} ({lineno}):')
            self._report(f'-> {line}')
            errors.append((lineno, line))

        if not stored:
            self._report('iniparser: memory allocation failure')
            raise MemoryError(f'cannot store line {lineno} of {name}')
        return section

    def _decode_file(self, filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        try:
            return StringIO(
                raw.decode(self._codec or getpreferredencoding(False)),
                newline=None)
        except UnicodeDecodeError:
            pass

        codec = chardet.detect(raw)
        if (codec is None or codec['encoding'] is None
                or codec['confidence'] < 0.8):
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            buf = raw.decode('gbk')
        return StringIO(buf, newline=None)

    def read(self) -> IniClass | None:
        """读取`IniParser`实例指定的文件。

        If the file is not readable, or not valid INI, the problem is
        reported to the error callback and `None` is returned.
        Call `readstream()` directly to handle the exceptions yourself.
        """
        try:
            buf = self._decode_file(self._fn)
        except OSError:
            self._report(f'iniparser: cannot open {self._fn}')
            return None
        except UnicodeDecodeError:
            self._report(f'iniparser: cannot decode {self._fn}')
            return None

        try:
            return self.readstream(buf)
        except IniParseError:
            return None

    def writestream(self, instance: IniClass, out: TextIOBase) -> None:
        """保存到*一个* INI 流。"""
        instance.dump_ini(out)

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def load_file(
    stream: TextIOBase, name: str = '<stream>', *,
    error_callback: ErrorCallback | None = None
) -> IniClass | None:
    """Load from an already opened text stream. `None` on failure."""
    parser = IniParser(name, error_callback=error_callback)
    try:
        return parser.readstream(stream)
    except IniParseError:
        return None


def load(
    source: str | PathLike | TextIOBase, *,
    encoding: str | None = None,
    error_callback: ErrorCallback | None = None
) -> IniClass | None:
    """Load a path or a text stream. `None` on failure."""
    if isinstance(source, (str, PathLike)):
        return IniParser(
            fspath(source), encoding, error_callback=error_callback).read()
    return load_file(
        source, getattr(source, 'name', '<stream>'),
        error_callback=error_callback)
