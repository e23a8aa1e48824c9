"""Obstacle avoidance when the target is out of reach or out of sight."""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from src.automation.movement import circle_pattern, play, total_duration_ms

if TYPE_CHECKING:
    from src.automation.key_sender import Actuator
    from src.models import BotConfig, KeyLayout

logger = logging.getLogger(__name__)


class TurnDirection(Enum):
    LEFT = "left"
    RIGHT = "right"

    def flipped(self) -> TurnDirection:
        return TurnDirection.LEFT if self is TurnDirection.RIGHT else TurnDirection.RIGHT

    def key(self, keys: "KeyLayout") -> str:
        return keys.turn_left if self is TurnDirection.LEFT else keys.turn_right


class ObstacleOutcome(Enum):
    PROBED = "probed"
    WAITING = "waiting"
    CIRCLED = "circled"


INITIAL_DIRECTION = TurnDirection.RIGHT


class ObstacleAvoidanceEngine:
    """Tracks how long the target has been far and steers around obstacles.

    Only the caller starts the far timer (``mark_far_if_needed``); when no
    timer is running, ``evaluate`` sends a single interact press instead.
    """

    def __init__(
        self,
        actuator: "Actuator",
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._actuator = actuator
        self._sleep = sleep
        self.far_since: Optional[float] = None
        self.direction: TurnDirection = INITIAL_DIRECTION

    def mark_far_if_needed(self, now: float) -> None:
        if self.far_since is None:
            self.far_since = now

    def clear(self) -> None:
        self.far_since = None

    def reset(self) -> None:
        self.far_since = None
        self.direction = INITIAL_DIRECTION

    def evaluate(self, config: "BotConfig", now: float) -> ObstacleOutcome:
        if self.far_since is None:
            logger.debug("Target not tracked; probing with %s", config.keys.interact)
            self._actuator.press(config.keys.interact)
            return ObstacleOutcome.PROBED
        far_ms = (now - self.far_since) * 1000.0
        if far_ms < config.obstacle_avoidance_cooldown_ms:
            return ObstacleOutcome.WAITING
        self._circle(config.keys)
        return ObstacleOutcome.CIRCLED

    def _circle(self, keys: "KeyLayout") -> None:
        steps = circle_pattern(keys, self.direction.key(keys))
        logger.debug(
            "Circling around obstacle, turning %s (%d ms)",
            self.direction.value,
            total_duration_ms(steps),
        )
        play(self._actuator, steps, self._sleep)
        self.direction = self.direction.flipped()
