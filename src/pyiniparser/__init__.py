# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/12 20:01:52
# @Author : Chloride

import logging

from .dictionary import IniDictionary, dictionary_hash
from .ini import (
    IniClass, IniSectionProxy, IniParser,
    IniParseError, IniSyntaxError, IniLineTooLongError,
    LineStatus, parse_line, load, load_file
)

__all__ = [
    'IniDictionary', 'dictionary_hash',
    'IniClass', 'IniSectionProxy', 'IniParser',
    'IniParseError', 'IniSyntaxError', 'IniLineTooLongError',
    'LineStatus', 'parse_line', 'load', 'load_file'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
