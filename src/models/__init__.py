from src.models.config import BotConfig, KeyLayout, load_config, save_config
from src.models.slot import (
    BAR_COUNT,
    DEFAULT_COOLDOWN_MS,
    DEFAULT_THRESHOLD,
    SLOTS_PER_BAR,
    Slot,
    SlotBar,
    SlotGrid,
    SlotType,
)
from src.models.snapshot import SensorSnapshot, TargetMarker

__all__ = [
    "BAR_COUNT",
    "DEFAULT_COOLDOWN_MS",
    "DEFAULT_THRESHOLD",
    "SLOTS_PER_BAR",
    "BotConfig",
    "KeyLayout",
    "SensorSnapshot",
    "Slot",
    "SlotBar",
    "SlotGrid",
    "SlotType",
    "TargetMarker",
    "load_config",
    "save_config",
]
