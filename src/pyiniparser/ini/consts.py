# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/12 21:03:52
# @Author : Chloride

from enum import Enum

# maximum size of a physical input line.
ASCII_LINE_SIZE = 1024

# joins a section name and a key into the stored key.
SECTION_SEP = ':'

# C locale isspace().
WHITESPACES = ' \t\n\v\f\r'

COMMENT_MARKS = '#;'
QUOTE_MARKS = '"\''


class LineStatus(int, Enum):
    ERROR = 1
    EMPTY = 2
    COMMENT = 3
    SECTION = 4
    VALUE = 5
