# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import argparse
import contextlib
import json
import logging
import os
import pathlib
import sys
import termios
import tty
from typing import AsyncIterator, Optional

import cattrs.errors
import trio

from .chordstreams import make_chordstream
from .commontypes import DotChordError
from .mode import ChordMode
from .settings import Settings

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def cbreak(fd: int):
    if not os.isatty(fd):
        yield
        return
    old_settings = termios.tcgetattr(fd)
    tty.setcbreak(fd)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


async def read_chunks(fd: int) -> AsyncIterator[bytes]:
    # FdStream makes the descriptor non-blocking; put stdin back the way we found it.
    was_blocking = os.get_blocking(fd)
    try:
        async with trio.lowlevel.FdStream(os.dup(fd)) as stream:
            while chunk := await stream.receive_some():
                yield chunk
    finally:
        os.set_blocking(fd, was_blocking)


async def run(settings: Settings, infd: int, out=None):
    if out is None:
        out = sys.stdout
    mode = ChordMode()
    with cbreak(infd):
        async with contextlib.aclosing(read_chunks(infd)) as chunks, make_chordstream(chunks, settings, mode) as chordstream:
            async for text in chordstream:
                out.write(text)
                out.flush()
    logger.debug("End of input")


parser = argparse.ArgumentParser(prog="dotchord", description="Type Braille cells as home-row chords.")
parser.add_argument("--settings", type=pathlib.Path, help="JSON settings file")
parser.add_argument("--show-settings", action="store_true", help="print the effective settings and exit")
parser.add_argument("-v", "--verbose", action="store_true")


def main(argv: Optional[list[str]] = None):
    parsed = parser.parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.DEBUG if parsed.verbose else logging.WARNING, stream=sys.stderr)
    try:
        settings = Settings.default() if parsed.settings is None else Settings.load(parsed.settings)
    except (OSError, ValueError, DotChordError, cattrs.errors.BaseValidationError) as exc:
        logger.error("Unable to load settings: %s", exc)
        return 1
    if parsed.show_settings:
        json.dump(settings.dump(), sys.stdout, indent=2)
        print()
        return 0
    try:
        trio.run(run, settings, sys.stdin.fileno())
    except KeyboardInterrupt:
        return 130
    return 0
