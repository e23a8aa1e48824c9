"""Bot configuration: slot grid, timings and key layout, with JSON persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from src.automation.binds import normalize_bind, normalize_key_token
from src.models.slot import BAR_COUNT, SLOTS_PER_BAR, SlotGrid

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_BETWEEN_BUFFS_MS = 2000
DEFAULT_OBSTACLE_AVOIDANCE_COOLDOWN_MS = 0


def _default_bar_keys() -> list[str]:
    return [f"f{i + 1}" for i in range(BAR_COUNT)]


def _default_slot_keys() -> list[str]:
    return [str(i) for i in range(SLOTS_PER_BAR)]


def _non_negative_int(raw: object, default: int) -> int:
    if isinstance(raw, bool):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= 0 else default


def _key_list(raw: object, defaults: list[str]) -> list[str]:
    """Normalize a per-bar/per-slot key list, falling back per entry."""
    if not isinstance(raw, list):
        return list(defaults)
    keys = []
    for i, default in enumerate(defaults):
        key = normalize_bind(raw[i]) if i < len(raw) else ""
        keys.append(key or default)
    return keys


@dataclass
class KeyLayout:
    """Keys the actuator sends for slot triggers and movement."""
    bar_keys: list[str] = field(default_factory=_default_bar_keys)
    slot_keys: list[str] = field(default_factory=_default_slot_keys)
    forward: str = "w"
    backward: str = "s"
    jump: str = "space"
    turn_left: str = "a"
    turn_right: str = "d"
    interact: str = "z"

    @classmethod
    def from_dict(cls, data: dict) -> KeyLayout:
        if not isinstance(data, dict):
            return cls()
        defaults = cls()

        def key(name: str) -> str:
            return normalize_key_token(data.get(name, "")) or getattr(defaults, name)

        return cls(
            bar_keys=_key_list(data.get("bar_keys"), defaults.bar_keys),
            slot_keys=_key_list(data.get("slot_keys"), defaults.slot_keys),
            forward=key("forward"),
            backward=key("backward"),
            jump=key("jump"),
            turn_left=key("turn_left"),
            turn_right=key("turn_right"),
            interact=key("interact"),
        )

    def to_dict(self) -> dict:
        return {
            "bar_keys": list(self.bar_keys),
            "slot_keys": list(self.slot_keys),
            "forward": self.forward,
            "backward": self.backward,
            "jump": self.jump,
            "turn_left": self.turn_left,
            "turn_right": self.turn_right,
            "interact": self.interact,
        }


@dataclass
class BotConfig:
    """Runtime configuration read by the support behavior each tick."""
    slot_grid: SlotGrid = field(default_factory=SlotGrid)
    interval_between_buffs_ms: int = DEFAULT_INTERVAL_BETWEEN_BUFFS_MS
    # Grace period before circling once the target is seen far away
    obstacle_avoidance_cooldown_ms: int = DEFAULT_OBSTACLE_AVOIDANCE_COOLDOWN_MS
    keys: KeyLayout = field(default_factory=KeyLayout)
    # If non-empty, only send input when the foreground window title contains this
    target_window_title: str = ""
    # Extra idle time between worker iterations; 0 = loop as fast as pacing allows
    tick_interval_ms: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> BotConfig:
        if not isinstance(data, dict):
            return cls()
        support = data.get("support_config", {})
        if not isinstance(support, dict):
            support = {}
        return cls(
            slot_grid=SlotGrid.from_list(support.get("slot_bars")),
            interval_between_buffs_ms=_non_negative_int(
                data.get("interval_between_buffs"), DEFAULT_INTERVAL_BETWEEN_BUFFS_MS
            ),
            obstacle_avoidance_cooldown_ms=_non_negative_int(
                data.get("obstacle_avoidance_cooldown"),
                DEFAULT_OBSTACLE_AVOIDANCE_COOLDOWN_MS,
            ),
            keys=KeyLayout.from_dict(data.get("keys", {})),
            target_window_title=str(data.get("target_window_title", "") or ""),
            tick_interval_ms=_non_negative_int(data.get("tick_interval_ms"), 0),
        )

    def to_dict(self) -> dict:
        """Serialize to dict for JSON config file (round-trip with from_dict)."""
        return {
            "support_config": {"slot_bars": self.slot_grid.to_list()},
            "interval_between_buffs": self.interval_between_buffs_ms,
            "obstacle_avoidance_cooldown": self.obstacle_avoidance_cooldown_ms,
            "keys": self.keys.to_dict(),
            "target_window_title": self.target_window_title,
            "tick_interval_ms": self.tick_interval_ms,
        }


def load_config(path: Union[str, Path]) -> BotConfig:
    """Load config from JSON, falling back to defaults."""
    path = Path(path)
    if not path.exists():
        logger.warning("Config not found at %s, using defaults", path)
        return BotConfig()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not read config %s (%s), using defaults", path, e)
        return BotConfig()
    logger.info("Loaded config from %s", path)
    return BotConfig.from_dict(data)


def save_config(config: BotConfig, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
    logger.info("Saved config to %s", path)
