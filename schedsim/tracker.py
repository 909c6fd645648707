from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

from .models import Process, RuntimeState


class RuntimeTracker:
    """
    Remaining burst and accumulated wait for every process of one run.

    Indices follow catalog order. The catalog is only read; all mutable
    state lives in ``states`` and is discarded with the tracker.
    """

    def __init__(self, processes: Sequence[Process]) -> None:
        self.processes = tuple(processes)
        self.states: List[RuntimeState] = [
            RuntimeState(pid=p.pid, remaining_time=p.burst_time) for p in self.processes
        ]
        self.total_time = sum(p.burst_time for p in self.processes)

    def __len__(self) -> int:
        return len(self.states)

    def pid(self, index: int) -> int:
        return self.processes[index].pid

    def priority(self, index: int) -> int:
        return self.processes[index].priority

    def remaining(self, index: int) -> int:
        return self.states[index].remaining_time

    def is_done(self, index: int) -> bool:
        return self.states[index].finished

    def has_arrived(self, index: int, now: int) -> bool:
        return self.processes[index].arrival_time <= now

    def is_eligible(self, index: int, now: int) -> bool:
        return self.has_arrived(index, now) and not self.is_done(index)

    def eligible(self, now: int) -> Iterator[int]:
        return (i for i in range(len(self.states)) if self.is_eligible(i, now))

    def arriving(self, now: int) -> Iterator[int]:
        """Unfinished processes whose arrival time is exactly ``now``."""
        return (
            i
            for i, p in enumerate(self.processes)
            if p.arrival_time == now and not self.is_done(i)
        )

    def all_done(self) -> bool:
        return all(s.finished for s in self.states)

    def charge_wait(self, running: Optional[int], now: int) -> None:
        for i in self.eligible(now):
            if i != running:
                self.states[i].waiting_time += 1

    def run(self, index: int, now: int) -> bool:
        """
        Give the tick starting at ``now`` to ``index``.

        Returns True when this tick completes the process.
        """
        state = self.states[index]
        if state.finished:
            raise RuntimeError(f"Process {state.pid} selected after completion")

        if state.start_time is None:
            state.start_time = now
        state.remaining_time -= 1

        if state.finished:
            state.completion_time = now + 1
            return True
        return False
