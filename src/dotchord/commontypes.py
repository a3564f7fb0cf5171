import datetime
import enum

import msgspec


class ModeSignal(enum.Enum):
    STAY_ACTIVE = enum.auto()
    DEACTIVATE = enum.auto()


class CharacterEvent(msgspec.Struct, frozen=True):
    character: str
    timestamp: datetime.timedelta


class ChordResult(msgspec.Struct, frozen=True):
    emitted: str
    signal: ModeSignal = ModeSignal.STAY_ACTIVE

    @property
    def deactivates(self) -> bool:
        return self.signal is ModeSignal.DEACTIVATE


class DotChordError(Exception):
    pass


class SettingsError(DotChordError):
    pass
