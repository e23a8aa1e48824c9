"""Worker thread that runs the support behavior tick after tick."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Optional

from PyQt6.QtCore import QThread, pyqtSignal

from src.behavior.support import SupportBehavior
from src.models import BotConfig

if TYPE_CHECKING:
    from src.automation.key_sender import KeyboardActuator, Sensor

logger = logging.getLogger(__name__)


class BehaviorWorker(QThread):
    """Owns one SupportBehavior and drives it from its own thread.

    ``stop`` only takes effect between ticks; a movement macro in progress
    always finishes first.
    """

    iteration_done = pyqtSignal(object)  # dict from IterationReport.to_dict()
    running_changed = pyqtSignal(bool)

    def __init__(
        self,
        behavior: SupportBehavior,
        sensor: "Sensor",
        max_iterations: Optional[int] = None,
        actuator: Optional["KeyboardActuator"] = None,
    ):
        super().__init__()
        self._behavior = behavior
        # Actuator that reads keys and window title from the config, if any
        self._actuator = actuator
        self._sensor = sensor
        self._running = False
        self._max_iterations = max_iterations
        self._pending_config: Optional[BotConfig] = None
        self._config_lock = threading.Lock()
        self.error_count = 0

    @property
    def behavior(self) -> SupportBehavior:
        return self._behavior

    def update_config(self, config: BotConfig) -> None:
        """Queue a config change; applied before the next tick."""
        with self._config_lock:
            self._pending_config = config

    def _apply_pending_config(self) -> None:
        with self._config_lock:
            config, self._pending_config = self._pending_config, None
        if config is not None:
            self._behavior.update(config)
            if self._actuator is not None:
                self._actuator.update_config(config)
            logger.info("Behavior config updated")

    def run(self) -> None:
        self._running = True
        self._behavior.start()
        self.running_changed.emit(True)
        iterations = 0
        try:
            while self._running:
                self._apply_pending_config()
                try:
                    report = self._behavior.run_iteration(self._sensor)
                    self.iteration_done.emit(report.to_dict())
                except Exception as e:
                    self.error_count += 1
                    logger.error(f"Behavior iteration error: {e}", exc_info=True)

                iterations += 1
                if self._max_iterations is not None and iterations >= self._max_iterations:
                    break
                tick_ms = self._behavior.config.tick_interval_ms
                if tick_ms > 0:
                    self.msleep(tick_ms)
        finally:
            self._running = False
            self._behavior.stop()
            self.running_changed.emit(False)

    def stop(self) -> None:
        self._running = False
        self.wait()

    @property
    def running(self) -> bool:
        return self._running
