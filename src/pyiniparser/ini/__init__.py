# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/13 01:16:53
# @Author : Chloride

from .consts import ASCII_LINE_SIZE, LineStatus
from .line import ParsedLine, parse_line
from .model import IniClass, IniSectionProxy
from .parser import (
    IniParser,
    IniParseError,
    IniSyntaxError,
    IniLineTooLongError,
    load,
    load_file
)
