"""Turns a selected slot into an actuator command plus a cooldown record."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable, Optional

from src.automation.cooldowns import CooldownTracker
from src.automation.slot_selector import select_slot
from src.models import SlotGrid, SlotType

if TYPE_CHECKING:
    from src.automation.key_sender import Actuator

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """The only writer of successful slot usage into the cooldown tracker."""

    def __init__(
        self,
        actuator: "Actuator",
        tracker: CooldownTracker,
        get_grid: Callable[[], SlotGrid],
        clock: Callable[[], float] = time.monotonic,
    ):
        self._actuator = actuator
        self._tracker = tracker
        self._get_grid = get_grid
        self._clock = clock

    def trigger(
        self,
        slot_type: SlotType,
        stat_value: Optional[int] = None,
        send: bool = True,
    ) -> Optional[tuple[int, int]]:
        """Find a usable slot of slot_type; if send, fire it and start its cooldown.

        Returns the matched position whether or not it was sent.
        """
        position = select_slot(self._get_grid(), self._tracker, slot_type, stat_value)
        if position is None:
            return None
        if send:
            bar_index, slot_index = position
            self._actuator.trigger_slot(bar_index, slot_index)
            self._tracker.record(bar_index, slot_index, self._clock())
            logger.debug(
                "Slot usage: %s at (%d, %d), value=%s",
                slot_type,
                bar_index,
                slot_index,
                stat_value,
            )
        return position
