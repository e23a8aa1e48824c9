"""Per-tick sensor data consumed by the behavior."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass(frozen=True)
class TargetMarker:
    """Screen-relative bounds of the detected target marker."""
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    def distance_to(self, point: tuple[float, float]) -> float:
        """Euclidean distance from the marker center to point, in pixels."""
        cx, cy = self.center
        return float(np.hypot(cx - point[0], cy - point[1]))


@dataclass(frozen=True)
class SensorSnapshot:
    hp: int = 0
    mp: int = 0
    fp: int = 0
    target_hp: int = 0
    target_marker: Optional[TargetMarker] = None
    # Capture time reported by the sensor, passed through to iteration reports
    timestamp: float = 0.0
