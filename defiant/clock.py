"""
Real-time scheduling for events that must not depend on simulation ticks.

Everything in the simulation counts in ticks except the player respawn delay,
which runs on wall-clock time so it keeps advancing while ticks are not being
produced (title screen, minimized window). The scheduler is polled by whoever
owns the frame loop; clocks are injectable so tests and the headless
environment can fast-forward deterministically.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List

LOGGER = logging.getLogger(__name__)


class ManualClock:
    """Clock that only moves when told to"""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        if seconds < 0:
            raise ValueError("cannot move a clock backwards")
        self.now += seconds


@dataclass
class ScheduledTask:
    """A callback due at an absolute time of the owning scheduler's clock"""
    due: float
    callback: Callable[[], None]
    name: str = ""
    cancelled: bool = False
    fired: bool = False

    def cancel(self):
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)


@dataclass
class Scheduler:
    """One-shot delayed callbacks on a real-time clock"""
    clock: Callable[[], float] = time.monotonic
    _tasks: List[ScheduledTask] = field(default_factory=list)

    def schedule(self, delay: float, callback: Callable[[], None], name: str = "") -> ScheduledTask:
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        task = ScheduledTask(due=self.clock() + delay, callback=callback, name=name)
        self._tasks.append(task)
        LOGGER.debug("scheduled %s in %.2fs", name or "task", delay)
        return task

    def run_due(self) -> int:
        """Fire every pending task whose due time has passed, oldest first.

        Returns the number of callbacks fired.
        """
        now = self.clock()
        due = sorted((t for t in self._tasks if t.pending and t.due <= now), key=lambda t: t.due)
        self._tasks = [t for t in self._tasks if t.pending and t.due > now]
        for task in due:
            task.fired = True
            task.callback()
        return len(due)

    def __len__(self) -> int:
        return sum(1 for t in self._tasks if t.pending)
