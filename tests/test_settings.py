import datetime
import json
import pathlib

import pytest

from dotchord.braille import DEFAULT_DOT_MAPPING
from dotchord.commontypes import SettingsError
from dotchord.settings import Settings

DOT_DELAY = datetime.timedelta(milliseconds=50)


def test_default_settings():
    settings = Settings.default()
    assert settings.dot_mapping == {"f": 1, "d": 2, "s": 3, "j": 4, "k": 5, "l": 6, "a": 7, ";": 8}
    assert settings.dot_mapping is not DEFAULT_DOT_MAPPING
    assert settings.dot_delay == DOT_DELAY
    assert settings.blank_for_space
    assert settings.toggle_key == "\x02"


def test_load_settings(tmp_path: pathlib.Path):
    path = tmp_path / "dotchord.json"
    path.write_text(json.dumps({"dot_mapping": {"u": 1, "i": 2}, "dot_delay": "80ms", "blank_for_space": False}))
    settings = Settings.load(path)
    assert settings.dot_mapping == {"u": 1, "i": 2}
    assert settings.dot_delay == datetime.timedelta(milliseconds=80)
    assert not settings.blank_for_space
    assert settings.toggle_key == "\x02"


def test_load_partial_settings(tmp_path: pathlib.Path):
    path = tmp_path / "dotchord.json"
    path.write_text(json.dumps({"dot_delay": "0.1s"}))
    settings = Settings.load(path)
    assert settings.dot_mapping == DEFAULT_DOT_MAPPING
    assert settings.dot_delay == datetime.timedelta(milliseconds=100)


def test_dump_settings():
    assert Settings.default().dump() == {
        "dot_mapping": DEFAULT_DOT_MAPPING,
        "dot_delay": "50ms",
        "blank_for_space": True,
        "toggle_key": "\x02",
    }


def test_shared_dot_is_allowed():
    settings = Settings(dot_mapping={"f": 1, "F": 1}, dot_delay=DOT_DELAY)
    assert settings.dot_mapping["F"] == 1


@pytest.mark.parametrize(
    "kwargs",
    (
        {"dot_mapping": {"ff": 1}},
        {"dot_mapping": {"": 1}},
        {"dot_mapping": {"f": 0}},
        {"dot_mapping": {"f": 9}},
        {"dot_mapping": {"f": True}},
        {"dot_mapping": {" ": 1}},
        {"dot_mapping": {"\t": 4}},
        {"dot_delay": datetime.timedelta()},
        {"dot_delay": datetime.timedelta(milliseconds=-5)},
        {"toggle_key": "f"},
        {"toggle_key": " "},
        {"toggle_key": ""},
    ),
)
def test_invalid_settings(kwargs):
    values = {"dot_mapping": dict(DEFAULT_DOT_MAPPING), "dot_delay": DOT_DELAY} | kwargs
    with pytest.raises(SettingsError):
        Settings(**values)


@pytest.mark.parametrize(
    "raw",
    (
        {"blank_for_space": "false"},
        {"blank_for_space": 0},
        {"dot_mapping": {"f": 1.9}},
        {"dot_mapping": {"f": "1"}},
        {"dot_mapping": {"f": True}},
        {"dot_delay": 50},
        {"toggle_key": 2},
    ),
)
def test_load_rejects_wrong_types(tmp_path: pathlib.Path, raw):
    path = tmp_path / "dotchord.json"
    path.write_text(json.dumps(raw))
    with pytest.raises(SettingsError):
        Settings.load(path)


@pytest.mark.parametrize("raw", ([1, 2], "50ms", 3, None))
def test_load_requires_object(tmp_path: pathlib.Path, raw):
    path = tmp_path / "dotchord.json"
    path.write_text(json.dumps(raw))
    with pytest.raises(SettingsError, match="JSON object"):
        Settings.load(path)


def test_load_rejects_whitespace_dot_key(tmp_path: pathlib.Path):
    path = tmp_path / "dotchord.json"
    path.write_text(json.dumps({"dot_mapping": {" ": 1, "f": 2}}))
    with pytest.raises(SettingsError, match="Whitespace"):
        Settings.load(path)
