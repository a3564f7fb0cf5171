# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import datetime
import logging
import types
import typing

import trio

from .braille import BLANK_CELL, BLANK_PATTERN, WHITESPACE, dot_bit, dots_for_cell
from .commontypes import CharacterEvent, ChordResult, ModeSignal

if typing.TYPE_CHECKING:
    import collections.abc

    from .settings import Settings

logger = logging.getLogger(__name__)


class EventSource(typing.Protocol):
    async def wait_for_event(self, timeout: datetime.timedelta) -> typing.Optional[str]:
        """Return the next character if one arrives within timeout, otherwise None. Must not block past timeout."""
        ...


class ChannelEventSource:
    """Reads CharacterEvents from a trio receive channel.

    An event whose timestamp is at least `timeout` after the previously delivered event counts as arriving too late,
    even if the channel had it ready in time; it is held back and becomes the next result of next_event().
    """

    held: typing.Optional[CharacterEvent]
    last_timestamp: typing.Optional[datetime.timedelta]

    def __init__(self, channel: trio.abc.ReceiveChannel[CharacterEvent]):
        self.channel = channel
        self.held = None
        self.last_timestamp = None

    def _deliver(self, event: CharacterEvent):
        self.last_timestamp = event.timestamp
        return event

    async def next_event(self) -> typing.Optional[CharacterEvent]:
        if self.held is not None:
            event, self.held = self.held, None
            return self._deliver(event)
        try:
            event = await self.channel.receive()
        except trio.EndOfChannel:
            return None
        return self._deliver(event)

    async def wait_for_event(self, timeout: datetime.timedelta) -> typing.Optional[str]:
        if self.held is not None:
            return None
        event = None
        with trio.move_on_after(timeout.total_seconds()):
            try:
                event = await self.channel.receive()
            except trio.EndOfChannel:
                return None
        if event is None:
            return None
        if self.last_timestamp is not None and event.timestamp - self.last_timestamp >= timeout:
            self.held = event
            return None
        return self._deliver(event).character


class ChordAccumulator:
    def __init__(
        self,
        dot_mapping: collections.abc.Mapping[str, int],
        dot_delay: datetime.timedelta,
        blank_for_space: bool = True,
    ):
        # snapshot, so the mapping cannot change underneath a chord
        self.dot_mapping = types.MappingProxyType(dict(dot_mapping))
        self.dot_delay = dot_delay
        self.blank_for_space = blank_for_space

    @classmethod
    def from_settings(cls, settings: Settings):
        return cls(settings.dot_mapping, settings.dot_delay, blank_for_space=settings.blank_for_space)

    def _whitespace(self, char: str) -> ChordResult:
        if char == " " and self.blank_for_space:
            return ChordResult(emitted=BLANK_CELL)
        return ChordResult(emitted=char)

    async def accumulate(self, first_char: str, events: EventSource) -> ChordResult:
        """Collect one chord, starting from first_char and pulling further keystrokes from events.

        Keystrokes within dot_delay of each other belong to the same chord. The chord ends successfully when
        dot_delay passes with no keystroke; the mode stays active. It ends early on a character with no dot, which is
        emitted after whatever pattern was built so far, and the mode should be deactivated.
        Whitespace as the first character is passed through (or turned into a blank cell) without starting a chord.
        """
        if first_char in WHITESPACE:
            return self._whitespace(first_char)

        pattern = BLANK_PATTERN
        pending = first_char
        while True:
            dot = self.dot_mapping.get(pending)
            if dot is None:
                if pattern == BLANK_PATTERN:
                    logger.debug("Unmapped %r with no chord in progress", pending)
                    return ChordResult(emitted=pending, signal=ModeSignal.DEACTIVATE)
                logger.debug("Chord abandoned by unmapped %r at dots %s", pending, dots_for_cell(chr(pattern)))
                return ChordResult(emitted=chr(pattern) + pending, signal=ModeSignal.DEACTIVATE)
            pattern = pattern | BLANK_PATTERN | dot_bit(dot)
            next_char = await events.wait_for_event(self.dot_delay)
            if next_char is None:
                logger.debug("Chord complete: dots %s", dots_for_cell(chr(pattern)))
                return ChordResult(emitted=chr(pattern))
            pending = next_char
