"""Actuator and sensor interfaces, plus the keyboard-backed actuator."""

from __future__ import annotations

import logging
import sys
import time
from typing import TYPE_CHECKING, Callable, Optional, Protocol

if TYPE_CHECKING:
    from src.models import BotConfig, SensorSnapshot, TargetMarker

logger = logging.getLogger(__name__)


class Actuator(Protocol):
    """Fire-and-forget input commands."""

    def trigger_slot(self, bar_index: int, slot_index: int) -> None: ...

    def press(self, key: str) -> None: ...

    def hold(self, key: str) -> None: ...

    def release(self, key: str) -> None: ...

    def hold_for(self, key: str, duration_ms: int) -> None: ...


class Sensor(Protocol):
    """Most recent capture, already turned into numbers."""

    def read_snapshot(self) -> "SensorSnapshot": ...

    def marker_distance(self, marker: "TargetMarker") -> float: ...


class ScreenSensor:
    """Base for capture-backed sensors: distance is measured from the capture center."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

    @property
    def screen_center(self) -> tuple[float, float]:
        return (self.width / 2.0, self.height / 2.0)

    def read_snapshot(self) -> "SensorSnapshot":
        raise NotImplementedError

    def marker_distance(self, marker: "TargetMarker") -> float:
        return marker.distance_to(self.screen_center)


def _is_target_window_active_win(target_title: str) -> bool:
    """Windows: True if foreground window title contains target_title (case-insensitive), or if target_title is empty."""
    if not (target_title or "").strip():
        return True
    try:
        import ctypes

        user32 = ctypes.windll.user32
        hwnd = user32.GetForegroundWindow()
        if not hwnd:
            return False
        length = user32.GetWindowTextLengthW(hwnd) + 1
        buf = ctypes.create_unicode_buffer(length)
        user32.GetWindowTextW(hwnd, buf, length)
        foreground = buf.value or ""
        return target_title.strip().lower() in foreground.lower()
    except Exception as e:
        logger.debug("Foreground window check failed: %s", e)
        return False


def is_target_window_active(target_window_title: str) -> bool:
    """True if we may send keys (target window focused or no target set)."""
    if sys.platform != "win32":
        return True
    return _is_target_window_active_win(target_window_title or "")


class KeyboardActuator:
    """Sends slot triggers and movement keys through the `keyboard` library.

    A slot trigger presses the bar key then the slot key from the config's key
    layout. Input is dropped while the configured target window is not focused.
    """

    def __init__(
        self,
        config: "BotConfig",
        sleep: Callable[[float], None] = time.sleep,
        window_check: Optional[Callable[[str], bool]] = None,
    ):
        self._config = config
        self._sleep = sleep
        self._window_check = window_check or is_target_window_active
        self._held: set[str] = set()

    def update_config(self, config: "BotConfig") -> None:
        self._config = config

    @property
    def held_keys(self) -> frozenset[str]:
        return frozenset(self._held)

    def is_target_window_active(self) -> bool:
        return self._window_check(getattr(self._config, "target_window_title", "") or "")

    def _call(self, action: str, key: str) -> bool:
        if not key:
            return False
        if not self.is_target_window_active():
            logger.debug("%s(%r) dropped: target window not focused", action, key)
            return False
        try:
            import keyboard

            getattr(keyboard, action)(key)
        except Exception as e:
            logger.warning("keyboard.%s(%r) failed: %s", action, key, e)
            return False
        return True

    def trigger_slot(self, bar_index: int, slot_index: int) -> None:
        keys = self._config.keys
        if not (0 <= bar_index < len(keys.bar_keys) and 0 <= slot_index < len(keys.slot_keys)):
            logger.warning("No key bound for slot (%d, %d)", bar_index, slot_index)
            return
        if self._call("send", keys.bar_keys[bar_index]):
            self._call("send", keys.slot_keys[slot_index])
            logger.debug(
                "Sent slot (%d, %d): %s then %s",
                bar_index,
                slot_index,
                keys.bar_keys[bar_index],
                keys.slot_keys[slot_index],
            )

    def press(self, key: str) -> None:
        self._call("send", key)

    def hold(self, key: str) -> None:
        if self._call("press", key):
            self._held.add(key)

    def release(self, key: str) -> None:
        # Release even when unfocused so no key stays stuck down.
        try:
            import keyboard

            keyboard.release(key)
        except Exception as e:
            logger.warning("keyboard.release(%r) failed: %s", key, e)
        self._held.discard(key)

    def hold_for(self, key: str, duration_ms: int) -> None:
        self.hold(key)
        self._sleep(max(0, duration_ms) / 1000.0)
        self.release(key)

    def release_all(self) -> None:
        for key in sorted(self._held):
            self.release(key)
