# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import abc
import codecs
import datetime
from contextlib import aclosing, asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterable, cast

import trio

from .chords import ChannelEventSource, ChordAccumulator
from .commontypes import CharacterEvent

if TYPE_CHECKING:
    from .mode import ChordMode
    from .settings import Settings


class Section(abc.ABC):
    @abc.abstractmethod
    async def pump(self, source: trio.MemoryReceiveChannel[Any], sink: trio.MemorySendChannel[Any]): ...


# stage 1: split raw input into timestamped characters
class DecodeCharacters(Section):
    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    async def pump(self, source: trio.MemoryReceiveChannel[bytes], sink: trio.MemorySendChannel[CharacterEvent]):
        # multi-byte characters may be split across chunks
        decoder = codecs.getincrementaldecoder(self.encoding)(errors="replace")
        async with aclosing(source), aclosing(sink):
            async for chunk in source:
                timestamp = datetime.timedelta(seconds=trio.current_time())
                for character in decoder.decode(chunk):
                    await sink.send(CharacterEvent(character=character, timestamp=timestamp))
            for character in decoder.decode(b"", final=True):
                await sink.send(CharacterEvent(character=character, timestamp=datetime.timedelta(seconds=trio.current_time())))


# stage 2: turn chords into Braille cells while the mode is active
class ChordTranslation(Section):
    def __init__(self, settings: Settings, mode: ChordMode):
        self.settings = settings
        self.mode = mode

    async def pump(self, source: trio.MemoryReceiveChannel[CharacterEvent], sink: trio.MemorySendChannel[str]):
        events = ChannelEventSource(source)
        async with aclosing(source), aclosing(sink):
            while (event := await events.next_event()) is not None:
                if event.character == self.settings.toggle_key:
                    self.mode.toggle()
                    continue
                if not self.mode.active.value:
                    await sink.send(event.character)
                    continue
                # settings may have changed since the last chord
                accumulator = ChordAccumulator.from_settings(self.settings)
                result = await accumulator.accumulate(event.character, events)
                self.mode.apply(result.signal)
                if result.emitted:
                    await sink.send(result.emitted)


@asynccontextmanager
async def pump_all(first_source: AsyncIterable[Any], *sections: Section):
    async with trio.open_nursery() as nursery:
        section_input = first_source
        for section in sections:
            section_send_channel, section_receive_channel = trio.open_memory_channel(0)
            nursery.start_soon(section.pump, section_input, section_send_channel)
            section_input = section_receive_channel
        yield section_input
        nursery.cancel_scope.cancel()


@asynccontextmanager
async def make_chordstream(
    byte_source: AsyncIterable[bytes],
    settings: Settings,
    mode: ChordMode,
):
    sections = [
        DecodeCharacters(),
        ChordTranslation(settings, mode),
    ]

    async with pump_all(byte_source, *sections) as chordstream:
        yield cast(trio.MemoryReceiveChannel[str], chordstream)
