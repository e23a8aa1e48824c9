"""Pick which slot to trigger for a given slot type and stat value."""

from __future__ import annotations

from typing import Optional

from src.automation.cooldowns import CooldownTracker
from src.models import Slot, SlotGrid, SlotType


def slot_is_eligible(
    slot: Slot, slot_type: SlotType, stat_value: Optional[int]
) -> bool:
    """Type matches, slot enabled and its threshold is at or above the stat value."""
    if slot.slot_type != slot_type or not slot.enabled:
        return False
    value = stat_value if stat_value is not None else 0
    return slot.effective_threshold() >= value


def select_slot(
    grid: SlotGrid,
    tracker: CooldownTracker,
    slot_type: SlotType,
    stat_value: Optional[int] = None,
) -> Optional[tuple[int, int]]:
    """Return (bar_index, slot_index) of the best cooldown-free eligible slot.

    The whole grid is scanned; the lowest effective threshold wins and ties go
    to the first position in bar-major order.
    """
    best: Optional[tuple[int, int]] = None
    best_threshold = 0
    for bar_index, slot_index, slot in grid.positions():
        if not slot_is_eligible(slot, slot_type, stat_value):
            continue
        if not tracker.is_free(bar_index, slot_index):
            continue
        threshold = slot.effective_threshold()
        if best is None or threshold < best_threshold:
            best = (bar_index, slot_index)
            best_threshold = threshold
    return best
