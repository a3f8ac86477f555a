# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/10/12 20:22:30
# @Author : Chloride

from abc import ABCMeta, abstractmethod
from io import TextIOBase
from typing import Generic, TypeVar

T = TypeVar("T")


class FileHandler(Generic[T], metaclass=ABCMeta):
    """A text file bound to a document type `T`.

    Subclasses only deal with decoded streams, opening the file
    (and picking its encoding) is left to `read()` / `write()`.
    """

    def __init__(self, filename: str, encoding: str | None = None) -> None:
        self._fn = filename
        self._codec = encoding

    @property
    def filename(self) -> str:
        return self._fn

    @abstractmethod
    def readstream(self, buf: TextIOBase, name: str | None = None) -> T:
        raise NotImplementedError

    @abstractmethod
    def writestream(self, instance: T, out: TextIOBase) -> None:
        raise NotImplementedError

    @abstractmethod
    def read(self) -> T | None:
        raise NotImplementedError

    def write(self, instance: T) -> None:
        """May raise `OSError`."""
        with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
            self.writestream(instance, fp)

    def __str__(self) -> str:
        return self._fn
