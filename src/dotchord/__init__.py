# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Chord input stages
# stage 0: raw bytes from a terminal or pipe
# stage 1: decode into characters, stamped with arrival time
# stage 2: while chord input is on, group characters arriving within dot_delay of each other into one Braille cell
#          a character with no dot ends the chord and turns chord input off

from .braille import BLANK_CELL, DEFAULT_DOT_MAPPING, cell_for_dots, dots_for_cell
from .chords import ChannelEventSource, ChordAccumulator, EventSource
from .commontypes import CharacterEvent, ChordResult, DotChordError, ModeSignal, SettingsError
from .mode import ChordMode
from .settings import Settings

__all__ = [
    "BLANK_CELL",
    "DEFAULT_DOT_MAPPING",
    "CharacterEvent",
    "ChannelEventSource",
    "ChordAccumulator",
    "ChordMode",
    "ChordResult",
    "DotChordError",
    "EventSource",
    "ModeSignal",
    "Settings",
    "SettingsError",
    "cell_for_dots",
    "dots_for_cell",
]
