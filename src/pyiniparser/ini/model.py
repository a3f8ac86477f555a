# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/13 00:57:10
# @Author : Chloride

"""
INI document on top of a flat `IniDictionary`.

A section is stored as a key without `:` (value `None`),
and `key` inside `[section]` is stored as `section:key`.
Keys found before any section header are stored as `:key`.
"""

from collections.abc import Iterator, Mapping, MutableMapping
from re import IGNORECASE
from re import compile as regex
from typing import Callable, TextIO, TypeVar
from warnings import warn

from ..dictionary import IniDictionary
from .consts import ASCII_LINE_SIZE, SECTION_SEP
from .line import strlwc

__all__ = ['IniClass', 'IniSectionProxy']

N = TypeVar("N")

# tells "not found" apart from a key holding None.
_INVALID_KEY = object()

_INT64_MIN, _INT64_MAX = -(1 << 63), (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1

_INT_LITERAL = regex(
    r'[ \t\n\v\f\r]*([+-]?)'
    r'(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)')
_FLOAT_LITERAL = regex(
    r'[ \t\n\v\f\r]*([+-]?(?:'
    r'0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?'
    r'|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?'
    r'|inf(?:inity)?|nan))', IGNORECASE)


def _strtol(text: str) -> int:
    """Leading integer of `text` in C notation, 0 if there is none.

    Decimal, octal (`042`) and hexadecimal (`0x42`) are supported.
    The result is not range checked.
    """
    m = _INT_LITERAL.match(text)
    if m is None:
        return 0
    sign, digits = m.groups()
    if digits[:2] in ('0x', '0X'):
        num = int(digits[2:], 16)
    elif digits[0] == '0':
        num = int(digits, 8)
    else:
        num = int(digits)
    return -num if sign == '-' else num


def _atof(text: str) -> float:
    m = _FLOAT_LITERAL.match(text)
    if m is None:
        return 0.0
    literal = m.group(1)
    if 'x' in literal or 'X' in literal:
        return float.fromhex(literal)
    return float(literal)


def _escape(value: str) -> str:
    return value.replace('\\', '\\\\').replace('"', '\\"')


class IniSectionProxy(MutableMapping[str, str | None]):
    """View of one section's key-value pairs.

    Short key names are used here (`cheese` rather than `pizza:cheese`),
    while reads and writes go straight to the backing dictionary,
    so the proxy never goes stale.
    """

    def __init__(self, section_name: str, dictionary: IniDictionary) -> None:
        self._name = section_name
        self._dict = dictionary
        self._prefix = section_name + SECTION_SEP

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> str | None:
        try:
            return self._dict[self._prefix + strlwc(key)]
        except KeyError:
            raise KeyError(key) from None

    def __setitem__(self, key: str, value: str | None) -> None:
        self._dict[self._prefix + strlwc(key)] = value

    def __delitem__(self, key: str) -> None:
        try:
            del self._dict[self._prefix + strlwc(key)]
        except KeyError:
            raise KeyError(key) from None

    def __contains__(self, key: object) -> bool:
        return (isinstance(key, str)
                and self._prefix + strlwc(key) in self._dict)

    def __iter__(self) -> Iterator[str]:
        cut = len(self._prefix)
        return iter([k[cut:] for k in self._dict
                     if k.startswith(self._prefix)])

    def __len__(self) -> int:
        return sum(1 for k in self._dict if k.startswith(self._prefix))

    def __str__(self) -> str:
        return f"[{self._name}]"

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self))

    def to_dict(self) -> dict[str, str | None]:
        """Copy of the section's pairs, keyed by short names."""
        return dict(self.items())


class IniClass(MutableMapping[str, IniSectionProxy]):
    """INI 文件表示。Iterating gives section names in slot order.

    ```ini
    key = val           ; self.header['key'], stored as ":key"
    [Pizza]             ; stored as "pizza" -> None
    Cheese = "Non"      ; self['pizza']['cheese'], stored as "pizza:cheese"
    ```

    The `get_*` methods take the full `section:key` string, lowercased
    before lookup, and return the given default when it is missing.
    """

    def __init__(self, dictionary: IniDictionary | None = None) -> None:
        self.__dict = IniDictionary() if dictionary is None else dictionary

    @property
    def dictionary(self) -> IniDictionary:
        """The flat dictionary actually holding every entry."""
        return self.__dict

    @property
    def header(self) -> IniSectionProxy:
        """不属于任何小节的游离键值对。"""
        return IniSectionProxy('', self.__dict)

    # mapping protocol, keyed by section name.

    def __getitem__(self, section: str) -> IniSectionProxy:
        if section not in self:
            raise KeyError(section)
        return IniSectionProxy(strlwc(section), self.__dict)

    def __setitem__(
        self, section: str, pairs: Mapping[str, str | None]
    ) -> None:
        if SECTION_SEP in section:
            warn(f'Section name "{section}" contains "{SECTION_SEP}", '
                 'it will not be listed as a section.')
        # copy first, `pairs` may be a proxy of this very section.
        data = dict(pairs.items())
        if section in self:
            del self[section]
        name = strlwc(section)
        self.__dict.set(name, None)
        for key, val in data.items():
            self.__dict.set(f'{name}{SECTION_SEP}{strlwc(key)}', val)

    def __delitem__(self, section: str) -> None:
        if section not in self:
            raise KeyError(section)
        name = strlwc(section)
        for key in self.get_keys_in_section(name):
            self.__dict.unset(key)
        self.__dict.unset(name)

    def __contains__(self, section: object) -> bool:
        return (isinstance(section, str)
                and SECTION_SEP not in section
                and self.find_entry(section))

    def __iter__(self) -> Iterator[str]:
        return iter([k for k in self.__dict if SECTION_SEP not in k])

    def __len__(self) -> int:
        return self.get_num_sections()

    def __repr__(self) -> str:
        return '<IniClass { .nsec = %d, .n = %d }>' % (
            len(self), self.__dict.count)

    # sections & keys.

    def get_num_sections(self) -> int:
        return sum(1 for k in self.__dict if SECTION_SEP not in k)

    def get_section_name(self, n: int) -> str | None:
        """Name of the n-th section (0 based), `None` if out of range."""
        if n < 0:
            return None
        for i, name in enumerate(self):
            if i == n:
                return name
        return None

    def get_num_keys_in_section(self, section: str | None) -> int:
        return len(self.get_keys_in_section(section))

    def get_keys_in_section(self, section: str | None) -> list[str]:
        """Full `section:key` names found in `section`, in slot order.

        Empty if the section itself is not declared.
        """
        if section is None or not self.find_entry(section):
            return []
        prefix = strlwc(section) + SECTION_SEP
        return [k for k in self.__dict if k.startswith(prefix)]

    def find_entry(self, entry: str | None) -> bool:
        """Whether `entry` exists, even when it holds `None`.

        Since sections hold `None`, this is the only way
        to query for the presence of a section.
        """
        return self.get_string(entry, _INVALID_KEY) is not _INVALID_KEY

    # getters.

    def get_string(self, key: str | None, default=None):
        if key is None:
            return default
        return self.__dict.get(strlwc(key), default)

    def __get_number(
        self, key: str | None, notfound: N, convert: Callable[[str], N]
    ) -> N:
        # a section (value None) gives no number either.
        val = self.get_string(key, _INVALID_KEY)
        if val is _INVALID_KEY or val is None:
            return notfound
        return convert(val)

    def get_int(self, key: str | None, notfound: int) -> int:
        """`section:key` as an int, with C `strtol()` rules.

        "42" -> 42, "042" -> 34 (octal), "0x42" -> 66 (hexadecimal).
        Text without a leading number gives 0, not `notfound`.
        Like a C `(int)` cast, the result wraps around on 32 bits.
        """
        def to_int(text: str) -> int:
            num = max(_INT64_MIN, min(_INT64_MAX, _strtol(text)))
            return (num + (1 << 31)) % (1 << 32) - (1 << 31)
        return self.__get_number(key, notfound, to_int)

    def get_long(self, key: str | None, notfound: int) -> int:
        """Same as `get_int()`, saturating at the 64-bit signed range."""
        return self.__get_number(
            key, notfound,
            lambda s: max(_INT64_MIN, min(_INT64_MAX, _strtol(s))))

    def get_int64(self, key: str | None, notfound: int) -> int:
        return self.get_long(key, notfound)

    def get_uint64(self, key: str | None, notfound: int) -> int:
        """Unsigned 64-bit, `strtoumax()` style: "-1" gives 2**64 - 1."""
        def to_uint(text: str) -> int:
            num = _strtol(text)
            if abs(num) > _UINT64_MAX:
                return _UINT64_MAX
            return num % (1 << 64)
        return self.__get_number(key, notfound, to_uint)

    def get_double(self, key: str | None, notfound: float) -> float:
        """`section:key` as a float, `atof()` style: "foo" gives 0.0."""
        return self.__get_number(key, notfound, _atof)

    def get_boolean(self, key: str | None, notfound: int) -> int:
        """1 for values starting with y/t/1 (or "on"),
        0 for n/f/0 (or "off"), case-insensitive.

        Anything else gives back `notfound`,
        which does not have to be 0 or 1.
        """
        val = self.get_string(key, _INVALID_KEY)
        if val is _INVALID_KEY or not val:
            return notfound
        if val[0] in 'yYtT1':
            return 1
        if val[0] in 'nNfF0':
            return 0
        low = strlwc(val[:3])
        if low[:2] == 'on':
            return 1
        if low == 'off':
            return 0
        return notfound

    def get_string_array(self, key: str | None) -> list[str]:
        """Comma separated items of `section:key`, each one stripped."""
        val = self.get_string(key, None)
        if not val:
            return []
        return [i.strip() for i in val.split(',')]

    def get_int_array(self, key: str | None) -> list[int]:
        return [_strtol(i) for i in self.get_string_array(key)]

    def get_double_array(self, key: str | None) -> list[float]:
        return [_atof(i) for i in self.get_string_array(key)]

    # setters.

    def set(self, entry: str | None, value: str | None) -> bool:
        """Create or modify `entry`, lowercased. `value` may be `None`.

        A bare `entry` (without `:`) declares a section.
        """
        if entry is None:
            return False
        return self.__dict.set(strlwc(entry), value)

    def unset(self, entry: str | None) -> None:
        if entry is None:
            return
        self.__dict.unset(strlwc(entry))

    # output.

    def dump(self, out: TextIO) -> None:
        """Debug listing, one `[key]=[value]` per entry."""
        if out is None:
            return
        for key, val in self.__dict.entries():
            if val is None:
                out.write(f'[{key}]=UNDEF\n')
            else:
                out.write(f'[{key}]=[{val}]\n')

    def dump_ini(self, out: TextIO) -> None:
        """Save as loadable INI text.

        Values are always double-quoted, so `;`, `#` and surrounding
        spaces survive reloading. Over-long lines are folded with
        backslashes. Keys of undeclared sections are lost.
        """
        if out is None:
            return
        header = self.header.to_dict()
        for key, val in header.items():
            out.write(self.__pair2str(key, val))
        if header:
            out.write('\n')
        for name in self:
            self.dumpsection_ini(name, out)

    def dumpsection_ini(self, section: str, out: TextIO) -> None:
        if out is None or section not in self:
            return
        name = strlwc(section)
        out.write(f'[{name}]\n')
        for key, val in self[name].items():
            out.write(self.__pair2str(key, val))
        out.write('\n')

    @staticmethod
    def __pair2str(key: str, value: str | None) -> str:
        """`key = "value"`, folded with trailing backslashes
        when longer than `ASCII_LINE_SIZE`.

        An escape pair (`\\\\`, `\\"`) is never split.
        """
        tokens = [*('%-30s = "' % key), *map(_escape, value or ''), '"']
        if sum(map(len, tokens)) <= ASCII_LINE_SIZE:
            return ''.join(tokens) + '\n'

        lines, cur = [], ''
        for tok in tokens:
            # keep room for the trailing backslash.
            if len(cur) + len(tok) >= ASCII_LINE_SIZE:
                lines.append(cur + '\\\n')
                cur = ''
            cur += tok
        return ''.join(lines) + cur + '\n'
