"""Support behavior — keeps a followed target alive and buffed.

One call to ``run_iteration`` is one tick:

1. sweep expired cooldowns
2. target dead with marker visible: rez, forget all cooldowns, stop here
3. restorations (self HP pill/food, target heal, MP, FP)
4. 100 ms pacing delay
5. while the target lives: avoid obstacles when it is far or unseen,
   otherwise buff it on the configured interval

All waits block the calling thread.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional

from src.automation.cooldowns import CooldownTracker
from src.automation.dispatcher import ActionDispatcher
from src.behavior.obstacle import ObstacleAvoidanceEngine, ObstacleOutcome
from src.models import BotConfig, SensorSnapshot, SlotType

if TYPE_CHECKING:
    from src.automation.key_sender import Actuator, Sensor

logger = logging.getLogger(__name__)

PACING_DELAY_MS = 100
# Marker distance (sensor pixels) beyond which the target counts as far
FAR_DISTANCE = 200


@dataclass
class IterationReport:
    """What one tick did."""
    snapshot: SensorSnapshot
    rezzed: bool = False
    dispatched: list[tuple[SlotType, tuple[int, int]]] = field(default_factory=list)
    buffed: bool = False
    obstacle: Optional[ObstacleOutcome] = None
    marker_distance: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "hp": self.snapshot.hp,
            "mp": self.snapshot.mp,
            "fp": self.snapshot.fp,
            "target_hp": self.snapshot.target_hp,
            "timestamp": self.snapshot.timestamp,
            "rezzed": self.rezzed,
            "dispatched": [
                {"slot_type": t.value, "bar_index": p[0], "slot_index": p[1]}
                for t, p in self.dispatched
            ],
            "buffed": self.buffed,
            "obstacle": self.obstacle.value if self.obstacle else None,
            "marker_distance": self.marker_distance,
        }


class SupportBehavior:
    def __init__(
        self,
        config: BotConfig,
        actuator: "Actuator",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._config = config
        self._clock = clock
        self._sleep = sleep
        self.cooldowns = CooldownTracker()
        self.dispatcher = ActionDispatcher(
            actuator, self.cooldowns, lambda: self._config.slot_grid, clock
        )
        self.obstacle = ObstacleAvoidanceEngine(actuator, sleep)
        self.last_buff_at = clock()

    @property
    def config(self) -> BotConfig:
        return self._config

    def start(self, config: Optional[BotConfig] = None) -> None:
        if config is not None:
            self._config = config
        self.last_buff_at = self._clock()
        grid = self._config.slot_grid
        for slot_type in (SlotType.REZ_SKILL, SlotType.HEAL_SKILL):
            if grid.first_slot_of(slot_type) is None:
                logger.warning("No %s slot configured", slot_type.label)
        logger.info("Support behavior started")

    def update(self, config: BotConfig) -> None:
        self._config = config

    def stop(self) -> None:
        self.cooldowns.reset_all()
        self.obstacle.reset()
        logger.info("Support behavior stopped")

    def run_iteration(self, sensor: "Sensor") -> IterationReport:
        config = self._config
        snapshot = sensor.read_snapshot()
        report = IterationReport(snapshot=snapshot)
        marker = snapshot.target_marker

        self.cooldowns.sweep(config.slot_grid, self._clock())

        if snapshot.target_hp == 0 and marker is not None:
            self._dispatch(report, SlotType.REZ_SKILL, None)
            self.cooldowns.reset_all()
            report.rezzed = True
            logger.debug("Target down; rez attempted and cooldowns cleared")
            return report

        self._check_restorations(report, snapshot)
        self._pace()

        if snapshot.target_hp > 0:
            if marker is not None:
                distance = sensor.marker_distance(marker)
                report.marker_distance = distance
                if distance > FAR_DISTANCE:
                    self.obstacle.mark_far_if_needed(self._clock())
                    report.obstacle = self.obstacle.evaluate(config, self._clock())
                else:
                    self.obstacle.clear()
                    report.buffed = self._check_buffs(report, config)
            else:
                report.obstacle = self.obstacle.evaluate(config, self._clock())
        return report

    def _dispatch(
        self, report: IterationReport, slot_type: SlotType, stat_value: Optional[int]
    ) -> Optional[tuple[int, int]]:
        position = self.dispatcher.trigger(slot_type, stat_value, send=True)
        if position is not None:
            report.dispatched.append((slot_type, position))
        return position

    def _check_restorations(self, report: IterationReport, snapshot: SensorSnapshot) -> None:
        if snapshot.hp > 0:
            # Food only when no pill is usable
            if self._dispatch(report, SlotType.PILL, snapshot.hp) is None:
                self._dispatch(report, SlotType.FOOD, snapshot.hp)

        if snapshot.target_hp > 0:
            self._dispatch(report, SlotType.HEAL_SKILL, snapshot.target_hp)

        if snapshot.mp > 0:
            self._dispatch(report, SlotType.MP_RESTORER, snapshot.mp)

        if snapshot.fp > 0:
            self._dispatch(report, SlotType.FP_RESTORER, snapshot.fp)

    def _check_buffs(self, report: IterationReport, config: BotConfig) -> bool:
        now = self._clock()
        if (now - self.last_buff_at) * 1000.0 < config.interval_between_buffs_ms:
            return False
        self.last_buff_at = now
        self._dispatch(report, SlotType.BUFF_SKILL, None)
        self._pace()
        return True

    def _pace(self) -> None:
        self._sleep(PACING_DELAY_MS / 1000.0)
