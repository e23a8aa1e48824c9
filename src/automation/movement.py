"""Timed key sequences played to completion on the calling thread."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Sequence, Union

if TYPE_CHECKING:
    from src.automation.key_sender import Actuator
    from src.models import KeyLayout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HoldKeys:
    keys: tuple[str, ...]


@dataclass(frozen=True)
class ReleaseKeys:
    keys: tuple[str, ...]


@dataclass(frozen=True)
class HoldKeyFor:
    key: str
    duration_ms: int


@dataclass(frozen=True)
class PressKey:
    key: str


@dataclass(frozen=True)
class Wait:
    duration_ms: int


Step = Union[HoldKeys, ReleaseKeys, HoldKeyFor, PressKey, Wait]


def play(
    actuator: "Actuator",
    steps: Sequence[Step],
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Run every step in order; nothing can interrupt the sequence."""
    for step in steps:
        if isinstance(step, HoldKeys):
            for key in step.keys:
                actuator.hold(key)
        elif isinstance(step, ReleaseKeys):
            for key in step.keys:
                actuator.release(key)
        elif isinstance(step, HoldKeyFor):
            actuator.hold_for(step.key, step.duration_ms)
        elif isinstance(step, PressKey):
            actuator.press(step.key)
        elif isinstance(step, Wait):
            sleep(step.duration_ms / 1000.0)
        else:
            raise TypeError(f"unknown movement step: {step!r}")


def circle_pattern(keys: "KeyLayout", turn_key: str) -> list[Step]:
    """Jump forward while turning, back off, then poke the target.

    Longer turn holds make tighter circles.
    """
    return [
        HoldKeys((keys.forward, keys.jump, turn_key)),
        Wait(200),
        ReleaseKeys((turn_key,)),
        Wait(500),
        ReleaseKeys((keys.jump, keys.forward)),
        HoldKeyFor(keys.backward, 50),
        PressKey(keys.interact),
        Wait(300),
    ]


def total_duration_ms(steps: Sequence[Step]) -> int:
    return sum(
        s.duration_ms for s in steps if isinstance(s, (Wait, HoldKeyFor))
    )
