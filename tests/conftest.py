"""Shared test fixtures for pyiniparser."""

import pytest

from pyiniparser import IniClass, IniDictionary


@pytest.fixture
def ini_file(tmp_path):
    """Write INI text to a temp file.

    Returns a helper function. Call it with the text (and optionally a
    file name and an encoding); it returns the path.
    """
    def _write(content: str, name: str = "test.ini", encoding: str = "utf-8"):
        path = tmp_path / name
        path.write_text(content, encoding=encoding)
        return path
    return _write


@pytest.fixture
def generate_dictionary():
    """Factory for a dictionary with `sections` sections named secN,
    each holding `entries` keys secN:keyM -> "value-N/M".
    """
    def _generate(sections: int, entries: int) -> IniDictionary:
        dic = IniDictionary(sections + sections * entries)
        for i in range(sections):
            sec_name = f"sec{i}"
            dic.set(sec_name, "")
            for j in range(entries):
                dic.set(f"{sec_name}:key{j}", f"value-{i}/{j}")
        return dic
    return _generate


@pytest.fixture
def errors():
    """Error callback collecting every reported message."""
    messages = []

    def _callback(msg: str):
        messages.append(msg)

    _callback.messages = messages
    return _callback


@pytest.fixture
def empty_ini():
    return IniClass()
