from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

BAR_COUNT = 9
SLOTS_PER_BAR = 10

DEFAULT_COOLDOWN_MS = 100
DEFAULT_THRESHOLD = 100


class SlotType(Enum):
    UNUSED = "Unused"
    CHAT_MESSAGE = "ChatMessage"
    FOOD = "Food"
    PILL = "Pill"
    HEAL_SKILL = "HealSkill"
    MP_RESTORER = "MpRestorer"
    FP_RESTORER = "FpRestorer"
    PICKUP_PET = "PickupPet"
    PICKUP_MOTION = "PickupMotion"
    ATTACK_SKILL = "AttackSkill"
    BUFF_SKILL = "BuffSkill"
    REZ_SKILL = "RezSkill"
    FLYING = "Flying"

    @classmethod
    def parse(cls, raw: object) -> SlotType:
        """Config value (variant name, case-insensitive) -> SlotType; unknown -> UNUSED."""
        text = str(raw or "").strip().lower().replace("_", "").replace(" ", "")
        for member in cls:
            if member.value.lower() == text:
                return member
        return cls.UNUSED

    @property
    def label(self) -> str:
        return _SLOT_TYPE_LABELS.get(self, "??none??")

    def __str__(self) -> str:
        return self.label


_SLOT_TYPE_LABELS = {
    SlotType.FOOD: "food",
    SlotType.PILL: "pill",
    SlotType.HEAL_SKILL: "heal skill",
    SlotType.MP_RESTORER: "mp restorer",
    SlotType.FP_RESTORER: "fp restorer",
    SlotType.PICKUP_PET: "pickup pet",
    SlotType.ATTACK_SKILL: "attack skill",
    SlotType.BUFF_SKILL: "buff skill",
    SlotType.REZ_SKILL: "rez skill",
    SlotType.FLYING: "fly",
}


def _coerce_optional_uint(raw: object) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if value >= 0 else None


@dataclass(frozen=True)
class Slot:
    """One action bound to a bar position."""
    slot_type: SlotType = SlotType.UNUSED
    # Raw configured values; may be malformed, see effective_* accessors.
    cooldown: Optional[object] = None
    threshold: Optional[int] = None
    enabled: bool = True

    def effective_cooldown_ms(self) -> int:
        """Configured cooldown, or 100 ms when unset, non-positive, fractional or unparsable."""
        raw = self.cooldown
        if raw is None or isinstance(raw, bool):
            return DEFAULT_COOLDOWN_MS
        try:
            value = float(raw)
        except (TypeError, ValueError):
            return DEFAULT_COOLDOWN_MS
        if value != value or value <= 0 or value == float("inf"):
            return DEFAULT_COOLDOWN_MS
        if value != int(value):
            return DEFAULT_COOLDOWN_MS
        return int(value)

    def effective_threshold(self) -> int:
        return self.threshold if self.threshold is not None else DEFAULT_THRESHOLD

    @classmethod
    def from_dict(cls, data: dict) -> Slot:
        if not isinstance(data, dict):
            return cls()
        return cls(
            slot_type=SlotType.parse(data.get("slot_type")),
            cooldown=data.get("slot_cooldown"),
            threshold=_coerce_optional_uint(data.get("slot_threshold")),
            enabled=bool(data.get("slot_enabled", True)),
        )

    def to_dict(self) -> dict:
        return {
            "slot_type": self.slot_type.value,
            "slot_cooldown": self.cooldown,
            "slot_threshold": self.threshold,
            "slot_enabled": self.enabled,
        }


@dataclass(frozen=True)
class SlotBar:
    """Exactly ten slots; short input is padded with default slots."""
    slots: tuple[Slot, ...] = field(
        default_factory=lambda: tuple(Slot() for _ in range(SLOTS_PER_BAR))
    )

    def __post_init__(self) -> None:
        slots = tuple(self.slots)[:SLOTS_PER_BAR]
        if len(slots) < SLOTS_PER_BAR:
            slots = slots + tuple(Slot() for _ in range(SLOTS_PER_BAR - len(slots)))
        object.__setattr__(self, "slots", slots)

    def __getitem__(self, index: int) -> Slot:
        return self.slots[index]

    def __len__(self) -> int:
        return len(self.slots)

    @classmethod
    def from_dict(cls, data: dict) -> SlotBar:
        raw = data.get("slots") if isinstance(data, dict) else None
        if not isinstance(raw, list):
            return cls()
        return cls(tuple(Slot.from_dict(s) for s in raw))

    def to_dict(self) -> dict:
        return {"slots": [s.to_dict() for s in self.slots]}


@dataclass(frozen=True)
class SlotGrid:
    """The 9 x 10 catalog the scheduler searches."""
    bars: tuple[SlotBar, ...] = field(
        default_factory=lambda: tuple(SlotBar() for _ in range(BAR_COUNT))
    )

    def __post_init__(self) -> None:
        bars = tuple(self.bars)[:BAR_COUNT]
        if len(bars) < BAR_COUNT:
            bars = bars + tuple(SlotBar() for _ in range(BAR_COUNT - len(bars)))
        object.__setattr__(self, "bars", bars)

    def __getitem__(self, bar_index: int) -> SlotBar:
        return self.bars[bar_index]

    def slot(self, bar_index: int, slot_index: int) -> Slot:
        return self.bars[bar_index][slot_index]

    def cooldown_ms(self, bar_index: int, slot_index: int) -> int:
        return self.slot(bar_index, slot_index).effective_cooldown_ms()

    def positions(self) -> Iterator[tuple[int, int, Slot]]:
        """Yield (bar_index, slot_index, slot) in bar-major order."""
        for bar_index, bar in enumerate(self.bars):
            for slot_index, slot in enumerate(bar.slots):
                yield bar_index, slot_index, slot

    def first_slot_of(self, slot_type: SlotType) -> Optional[tuple[int, int]]:
        """First position holding slot_type, ignoring enablement and cooldowns."""
        for bar_index, slot_index, slot in self.positions():
            if slot.slot_type == slot_type:
                return bar_index, slot_index
        return None

    def with_slot(self, bar_index: int, slot_index: int, slot: Slot) -> SlotGrid:
        """Copy of this grid with one slot replaced."""
        bar = self.bars[bar_index]
        new_bar = SlotBar(bar.slots[:slot_index] + (slot,) + bar.slots[slot_index + 1:])
        return SlotGrid(self.bars[:bar_index] + (new_bar,) + self.bars[bar_index + 1:])

    @classmethod
    def from_list(cls, data: object) -> SlotGrid:
        if not isinstance(data, list):
            return cls()
        return cls(tuple(SlotBar.from_dict(b) for b in data))

    def to_list(self) -> list[dict]:
        return [b.to_dict() for b in self.bars]
