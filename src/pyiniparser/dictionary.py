# -*- encoding: utf-8 -*-
# @File   : dictionary.py
# @Time   : 2026/10/12 20:41:07
# @Author : Chloride

"""A dictionary of string keys to optional string values.

Storage is three parallel slot lists (keys, values, hashes), the way the
classic `iniparser` dictionary does it. Lookups scan every slot comparing the
stored hash first and the key itself in last resort, so collisions are safe.

Deleting a key empties its slot right away. Other slots are never moved,
so any scan has to skip holes, and a later insert may reuse the hole.
"""

from collections.abc import Iterator, MutableMapping
from typing import TextIO

__all__ = ['IniDictionary', 'dictionary_hash', 'DICT_MIN_SIZE']

# minimal allocated number of slots.
DICT_MIN_SIZE = 128

_U32 = 0xFFFFFFFF


def dictionary_hash(key: str | None) -> int:
    """Jenkins' one-at-a-time hash over the UTF-8 bytes of `key`.

    `None` and empty string both hash to 0.
    """
    if not key:
        return 0
    hash_ = 0
    for byte in key.encode('utf-8', 'surrogatepass'):
        hash_ = (hash_ + byte) & _U32
        hash_ = (hash_ + (hash_ << 10)) & _U32
        hash_ ^= hash_ >> 6
    hash_ = (hash_ + (hash_ << 3)) & _U32
    hash_ ^= hash_ >> 11
    hash_ = (hash_ + (hash_ << 15)) & _U32
    return hash_


class IniDictionary(MutableMapping[str, str | None]):
    """Flat `str: str | None` slot store.

    Besides the mapping protocol, it keeps the C-flavoured API
    (`get`/`set`/`unset`/`dump`) that the INI layer is built on:

    - `set()` returns `False` instead of raising for a `None` key;
    - `unset()` is a no-op for a missing key, while `del d[key]` raises;
    - a key may be present with a `None` value, which is how sections are
      recorded. Use `in` (or `get()` with a sentinel) to tell the two apart.

    Iteration follows slot order, which is *not* insertion order once
    slots have been freed and reused.
    """

    def __init__(self, size: int = 0) -> None:
        if size < DICT_MIN_SIZE:
            size = DICT_MIN_SIZE
        self.__size = size
        self.__n = 0
        self.__keys: list[str | None] = [None] * size
        self.__vals: list[str | None] = [None] * size
        self.__hash: list[int] = [0] * size

    @property
    def size(self) -> int:
        """Current slot capacity."""
        return self.__size

    @property
    def count(self) -> int:
        """Number of occupied slots."""
        return self.__n

    def __find(self, key: str | None) -> int:
        if key is None or self.__n == 0:
            return -1
        hash_ = dictionary_hash(key)
        for i in range(self.__size):
            if self.__keys[i] is None:
                continue
            if hash_ == self.__hash[i] and key == self.__keys[i]:
                return i
        return -1

    def __grow(self) -> None:
        # build the new lists first so nothing is touched on failure.
        pad = self.__size
        keys = self.__keys + [None] * pad
        vals = self.__vals + [None] * pad
        hashes = self.__hash + [0] * pad
        self.__keys, self.__vals, self.__hash = keys, vals, hashes
        self.__size *= 2

    def get(self, key, default=None):
        """Value stored under `key` (possibly `None`), else `default`."""
        i = self.__find(key)
        return default if i < 0 else self.__vals[i]

    def getchar(self, key: str, default: str | None = None) -> str | None:
        """First character of the value stored under `key`."""
        i = self.__find(key)
        if i < 0 or not self.__vals[i]:
            return default
        return self.__vals[i][0]

    def set(self, key: str | None, value: str | None) -> bool:
        """Add `key`, or overwrite its value in place.

        Returns `False` when `key` is `None` or the slots cannot grow,
        in which case the dictionary is left unchanged.
        """
        if key is None:
            return False

        i = self.__find(key)
        if i >= 0:
            self.__vals[i] = value
            return True

        if self.__n == self.__size:
            try:
                self.__grow()
            except MemoryError:
                return False

        # first empty slot, starting at n and wrapping at size.
        # n < size here, so this always terminates.
        i = self.__n
        while self.__keys[i] is not None:
            i += 1
            if i == self.__size:
                i = 0
        self.__keys[i] = key
        self.__vals[i] = value
        self.__hash[i] = dictionary_hash(key)
        self.__n += 1
        return True

    def setint(self, key: str, value: int) -> bool:
        return self.set(key, '%d' % value)

    def setdouble(self, key: str, value: float) -> bool:
        return self.set(key, '%g' % value)

    def unset(self, key: str | None) -> None:
        """Free the slot holding `key`. Nothing is done if not found."""
        i = self.__find(key)
        if i < 0:
            return
        self.__keys[i] = None
        self.__vals[i] = None
        self.__hash[i] = 0
        self.__n -= 1

    def entries(self) -> Iterator[tuple[str, str | None]]:
        """`(key, value)` of every occupied slot, in slot order."""
        for i in range(self.__size):
            key = self.__keys[i]
            if key is not None:
                yield key, self.__vals[i]

    def dump(self, out: TextIO) -> None:
        """Write every entry as `key\\t[value]`, one per line.

        Keys are right aligned on 20 columns, and a `None` value is
        shown as `[UNDEF]`.
        """
        if out is None:
            return
        if self.__n < 1:
            out.write('empty dictionary\n')
            return
        for key, val in self.entries():
            out.write('%20s\t[%s]\n' % (key, 'UNDEF' if val is None else val))

    def __getitem__(self, key: str) -> str | None:
        i = self.__find(key)
        if i < 0:
            raise KeyError(key)
        return self.__vals[i]

    def __setitem__(self, key: str, value: str | None) -> None:
        if not isinstance(key, str):
            raise TypeError(f'dictionary keys must be str, not {key!r}')
        if not self.set(key, value):
            raise MemoryError(f'cannot grow dictionary for {key!r}')

    def __delitem__(self, key: str) -> None:
        if self.__find(key) < 0:
            raise KeyError(key)
        self.unset(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.__find(key) >= 0

    def __len__(self) -> int:
        return self.__n

    def __iter__(self) -> Iterator[str]:
        # snapshot, so callers may unset while iterating.
        return iter([k for k in self.__keys if k is not None])

    def __repr__(self) -> str:
        return '<IniDictionary { .n = %d, .size = %d }>' % (
            self.__n, self.__size)
