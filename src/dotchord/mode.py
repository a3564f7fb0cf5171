# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import logging

from trio_util import AsyncBool

from .commontypes import ModeSignal

logger = logging.getLogger(__name__)


class ChordMode:
    """Whether chord input is on. Owned by the host; the accumulator only asks for it to be turned off."""

    active: AsyncBool

    def __init__(self, active: bool = True):
        self.active = AsyncBool(active)

    def activate(self):
        if not self.active.value:
            logger.debug("Chord input on")
        self.active.value = True

    def deactivate(self):
        # turning off an inactive mode is harmless
        if self.active.value:
            logger.debug("Chord input off")
        self.active.value = False

    def toggle(self):
        if self.active.value:
            self.deactivate()
        else:
            self.activate()

    def apply(self, signal: ModeSignal):
        match signal:
            case ModeSignal.STAY_ACTIVE:
                pass
            case ModeSignal.DEACTIVATE:
                self.deactivate()
