from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .models import Process, RuntimeState, ScheduledSlice
from .policies import SelectionPolicy
from .timeline import TimelineBuilder
from .tracker import RuntimeTracker

logger = logging.getLogger(__name__)


@dataclass
class SimulationOutcome:
    states: List[RuntimeState]
    timeline: List[ScheduledSlice]
    elapsed: int


def simulate(processes: Sequence[Process], policy: SelectionPolicy) -> SimulationOutcome:
    """
    Drive ``policy`` one tick at a time until every process has completed.

    Each tick the policy picks a process (or None to idle), every other
    eligible process waits one unit, and the chosen one loses one unit of
    remaining time. ``processes`` must already be sorted by arrival time.
    """
    tracker = RuntimeTracker(processes)
    builder = TimelineBuilder()

    active: Optional[int] = None
    now = 0

    while not tracker.all_done():
        selected = policy.select(tracker, active, now)
        pid = None if selected is None else tracker.pid(selected)

        if selected != active or policy.starts_slice():
            logger.debug("t=%d: dispatch %s", now, "idle" if pid is None else pid)
        builder.advance(pid, now, new_slice=policy.starts_slice())

        tracker.charge_wait(selected, now)
        if selected is not None and tracker.run(selected, now):
            logger.debug("t=%d: process %s completed", now + 1, pid)

        active = selected
        now += 1

    return SimulationOutcome(states=tracker.states, timeline=builder.close(now), elapsed=now)
