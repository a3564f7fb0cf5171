# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Arithmetic on Unicode Braille cells.

Cells live in the block starting at U+2800; dot N of a cell is bit N-1 of the offset from that base.
"""
import typing

BLANK_PATTERN: typing.Final[int] = 0x2800
BLANK_CELL: typing.Final[str] = chr(BLANK_PATTERN)
MAX_DOTS: typing.Final[int] = 8

WHITESPACE: typing.Final[frozenset[str]] = frozenset("\t\n\f\r ")

# Home row for six-dot Braille, plus the pinkies for dots 7 and 8.
DEFAULT_DOT_MAPPING: typing.Final[dict[str, int]] = {
    "f": 1,
    "d": 2,
    "s": 3,
    "j": 4,
    "k": 5,
    "l": 6,
    "a": 7,
    ";": 8,
}


def dot_bit(dot: int) -> int:
    if not 1 <= dot <= MAX_DOTS:
        raise ValueError(f"Dot {dot} is outside 1..{MAX_DOTS}")
    return 1 << (dot - 1)


def is_braille(char: str) -> bool:
    return len(char) == 1 and BLANK_PATTERN <= ord(char) < BLANK_PATTERN + (1 << MAX_DOTS)


def cell_for_dots(*dots: int) -> str:
    pattern = BLANK_PATTERN
    for dot in dots:
        pattern |= dot_bit(dot)
    return chr(pattern)


def dots_for_cell(cell: str) -> tuple[int, ...]:
    if not is_braille(cell):
        raise ValueError(f"{cell!r} is not a Braille cell")
    offset = ord(cell) - BLANK_PATTERN
    return tuple(dot for dot in range(1, MAX_DOTS + 1) if offset & dot_bit(dot))
