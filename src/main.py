"""Support bot — headless entry point.

Wires together: sensor → support behavior → keyboard actuator, on a worker
thread driven by a Qt event loop. The sensor is provided by the caller.
"""

from __future__ import annotations

import logging
import signal
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from PyQt6.QtCore import QCoreApplication, QTimer

from src.automation.key_sender import KeyboardActuator
from src.behavior.support import SupportBehavior
from src.behavior.worker import BehaviorWorker
from src.models import BotConfig, load_config

if TYPE_CHECKING:
    from src.automation.key_sender import Sensor

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent.parent / "config" / "default_config.json"


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_worker(config: BotConfig, sensor: "Sensor") -> BehaviorWorker:
    """Create the actuator, behavior and worker for one bot session."""
    actuator = KeyboardActuator(config)
    behavior = SupportBehavior(config, actuator)
    return BehaviorWorker(behavior, sensor, actuator=actuator)


def run(sensor: "Sensor", config_path: Optional[Union[str, Path]] = None) -> int:
    """Run the support behavior until Ctrl+C; returns the Qt exit code."""
    configure_logging()
    config = load_config(config_path or CONFIG_PATH)

    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    worker = build_worker(config, sensor)
    worker.finished.connect(app.quit)

    def on_interrupt(*_args) -> None:
        logger.info("Interrupted; stopping after current tick")
        worker.stop()

    signal.signal(signal.SIGINT, on_interrupt)
    # Let the Python signal handler run while Qt owns the main loop
    keepalive = QTimer()
    keepalive.timeout.connect(lambda: None)
    keepalive.start(250)

    worker.start()
    logger.info("Support bot running (Ctrl+C to stop)")
    exit_code = app.exec()
    keepalive.stop()
    if worker.isRunning():
        worker.stop()
    return exit_code
