"""Per-slot cooldown tracking for the 9 x 10 slot grid.

Each entry holds the monotonic time a slot was last triggered, or None once a
sweep has confirmed its cooldown expired. Entries are only ever set by
``record`` and cleared by ``sweep`` or ``reset_all``.
"""

from __future__ import annotations

import logging
from typing import Optional

from src.models import BAR_COUNT, SLOTS_PER_BAR, SlotGrid

logger = logging.getLogger(__name__)


def _empty_matrix() -> list[list[Optional[float]]]:
    return [[None] * SLOTS_PER_BAR for _ in range(BAR_COUNT)]


class CooldownTracker:
    """Last-used timestamps mirroring the slot grid shape."""

    def __init__(self) -> None:
        self._last_used = _empty_matrix()

    def sweep(self, grid: SlotGrid, now: float) -> int:
        """Clear every entry whose slot cooldown has elapsed at `now`.

        Returns the number of entries cleared.
        """
        cleared = 0
        for bar_index, row in enumerate(self._last_used):
            for slot_index, used_at in enumerate(row):
                if used_at is None:
                    continue
                elapsed_ms = (now - used_at) * 1000.0
                if elapsed_ms >= grid.cooldown_ms(bar_index, slot_index):
                    row[slot_index] = None
                    cleared += 1
        return cleared

    def record(self, bar_index: int, slot_index: int, now: float) -> None:
        self._check_position(bar_index, slot_index)
        self._last_used[bar_index][slot_index] = now

    def reset_all(self) -> None:
        """Forget every cooldown.

        Used when a dead target is rezzed: a new encounter starts with every
        slot free, even ones still cooling down from the previous one.
        """
        if self.active_count():
            logger.debug("Clearing %d active cooldowns", self.active_count())
        self._last_used = _empty_matrix()

    def is_free(self, bar_index: int, slot_index: int) -> bool:
        return self.last_used(bar_index, slot_index) is None

    def last_used(self, bar_index: int, slot_index: int) -> Optional[float]:
        self._check_position(bar_index, slot_index)
        return self._last_used[bar_index][slot_index]

    def active_count(self) -> int:
        return sum(1 for row in self._last_used for used_at in row if used_at is not None)

    @staticmethod
    def _check_position(bar_index: int, slot_index: int) -> None:
        if not (0 <= bar_index < BAR_COUNT and 0 <= slot_index < SLOTS_PER_BAR):
            raise IndexError(f"slot position ({bar_index}, {slot_index}) out of range")
