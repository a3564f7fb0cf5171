# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import dataclasses
import datetime
import json
import pathlib

import cattrs

from .braille import DEFAULT_DOT_MAPPING, MAX_DOTS, WHITESPACE
from .commontypes import SettingsError
from .durations import format_duration, parse_duration

DOT_DELAY = "50ms"
# Ctrl-B
TOGGLE_KEY = "\x02"

DEFAULT_SETTINGS = {
    "dot_mapping": DEFAULT_DOT_MAPPING,
    "dot_delay": DOT_DELAY,
}

# detailed_validation=False so SettingsError reaches the caller unwrapped
settings_converter = cattrs.Converter(detailed_validation=False)
settings_converter.register_unstructure_hook(datetime.timedelta, format_duration)


# JSON values must already have the declared type; nothing is coerced.
def structure_strict(typ: type):
    def structure(v, _):
        # exact match, so true is not accepted as dot 1
        if type(v) is not typ:
            raise SettingsError(f"Expected {typ.__name__}, got {v!r}")
        return v

    return structure


for _typ in (bool, int, str):
    settings_converter.register_structure_hook(_typ, structure_strict(_typ))
settings_converter.register_structure_hook(datetime.timedelta, lambda d, _: parse_duration(structure_strict(str)(d, str)))


@dataclasses.dataclass(kw_only=True)
class Settings:
    dot_mapping: dict[str, int]
    dot_delay: datetime.timedelta
    blank_for_space: bool = True
    toggle_key: str = TOGGLE_KEY

    def __post_init__(self):
        for key, dot in self.dot_mapping.items():
            if len(key) != 1:
                raise SettingsError(f"Dot keys must be single characters, not {key!r}")
            if key in WHITESPACE:
                raise SettingsError(f"Whitespace {key!r} cannot be a dot key")
            if type(dot) is not int:
                raise SettingsError(f"Key {key!r} is bound to {dot!r}, which is not a dot number")
            if not 1 <= dot <= MAX_DOTS:
                raise SettingsError(f"Key {key!r} is bound to dot {dot}, outside 1..{MAX_DOTS}")
        if self.dot_delay <= datetime.timedelta():
            raise SettingsError(f"dot_delay must be positive, not {format_duration(self.dot_delay)}")
        if len(self.toggle_key) != 1:
            raise SettingsError(f"The toggle key must be a single character, not {self.toggle_key!r}")
        if self.toggle_key in self.dot_mapping or self.toggle_key in WHITESPACE:
            raise SettingsError(f"The toggle key {self.toggle_key!r} is already in use")

    def dump(self):
        return settings_converter.unstructure(self)

    @classmethod
    def load(cls, src: pathlib.Path):
        with src.open() as infile:
            raw = json.load(infile)
        if not isinstance(raw, dict):
            raise SettingsError(f"{src} should hold a JSON object, not {type(raw).__name__}")
        # keys missing from the file fall back to the defaults
        return settings_converter.structure(DEFAULT_SETTINGS | raw, cls)

    @classmethod
    def default(cls):
        return settings_converter.structure(DEFAULT_SETTINGS, cls)
