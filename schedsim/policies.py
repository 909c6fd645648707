from __future__ import annotations

from collections import deque
from typing import Deque, Optional, Set

from .tracker import RuntimeTracker

DEFAULT_QUANTUM = 4


class SelectionPolicy:
    """
    Chooses which process runs during the tick starting at ``now``.

    ``select`` receives the index that ran during the previous tick (or
    None after an idle tick / at the start of a run) and returns the index
    to run next, or None when nothing is eligible.

    The default flow is the one shared by the preemptive job policies: if
    there is no live active process, scan for the best eligible one, then
    let processes arriving exactly now preempt it.
    """

    def select(self, tracker: RuntimeTracker, active: Optional[int], now: int) -> Optional[int]:
        if active is None or tracker.is_done(active):
            active = self.pick_next(tracker, now)
            if active is None:
                return None
        return self.preempt(tracker, active, now)

    def starts_slice(self) -> bool:
        """True when the last ``select`` began a fresh dispatch of the same process."""
        return False

    def pick_next(self, tracker: RuntimeTracker, now: int) -> Optional[int]:
        raise NotImplementedError

    def preempt(self, tracker: RuntimeTracker, active: int, now: int) -> int:
        return active


class ShortestRemainingPolicy(SelectionPolicy):
    """
    Preemptive shortest-job-first (shortest remaining time).

    Ties go to the lowest catalog index.
    """

    def pick_next(self, tracker: RuntimeTracker, now: int) -> Optional[int]:
        best: Optional[int] = None
        for i in tracker.eligible(now):
            if best is None or tracker.remaining(i) < tracker.remaining(best):
                best = i
        return best

    def preempt(self, tracker: RuntimeTracker, active: int, now: int) -> int:
        chosen = active
        for i in tracker.arriving(now):
            if tracker.remaining(i) < tracker.remaining(chosen):
                chosen = i
        return chosen


class PriorityPolicy(SelectionPolicy):
    """
    Preemptive priority scheduling; lower value means more urgent.

    An arriving process with equal priority preempts only if its remaining
    time is strictly smaller. The scan made after a completion compares
    priority alone and breaks ties by catalog index.
    """

    def pick_next(self, tracker: RuntimeTracker, now: int) -> Optional[int]:
        best: Optional[int] = None
        for i in tracker.eligible(now):
            if best is None or tracker.priority(i) < tracker.priority(best):
                best = i
        return best

    def preempt(self, tracker: RuntimeTracker, active: int, now: int) -> int:
        chosen = active
        for i in tracker.arriving(now):
            if self._outranks(tracker, i, chosen):
                chosen = i
        return chosen

    @staticmethod
    def _outranks(tracker: RuntimeTracker, challenger: int, holder: int) -> bool:
        if tracker.priority(challenger) != tracker.priority(holder):
            return tracker.priority(challenger) < tracker.priority(holder)
        return tracker.remaining(challenger) < tracker.remaining(holder)


class RoundRobinPolicy(SelectionPolicy):
    """
    Round Robin with an explicit FIFO ready queue.

    Processes join the queue at their arrival tick in catalog order. A
    process whose quantum expires goes to the tail, behind anything that
    arrived on the same tick. Each policy instance carries queue state, so
    use a fresh one per run.
    """

    def __init__(self, quantum: int = DEFAULT_QUANTUM) -> None:
        if quantum is None or quantum <= 0:
            raise ValueError("Round Robin requires a positive quantum")
        self.quantum = quantum
        self._slice_left = 0
        self._fresh = False
        self._ready: Deque[int] = deque()
        self._admitted: Set[int] = set()

    def select(self, tracker: RuntimeTracker, active: Optional[int], now: int) -> Optional[int]:
        self._fresh = False
        self._admit(tracker, now)

        if active is not None and (tracker.is_done(active) or self._slice_left == 0):
            self._release(tracker, active)
            active = None

        if active is None:
            active = self._take(tracker, now)
            if active is None:
                return None
            self._fresh = True
            self._slice_left = self.quantum

        self._slice_left -= 1
        return active

    def starts_slice(self) -> bool:
        return self._fresh

    def _admit(self, tracker: RuntimeTracker, now: int) -> None:
        for i in range(len(tracker)):
            if i not in self._admitted and tracker.has_arrived(i, now):
                self._admitted.add(i)
                self._ready.append(i)

    def _release(self, tracker: RuntimeTracker, index: int) -> None:
        if not tracker.is_done(index):
            self._ready.append(index)

    def _take(self, tracker: RuntimeTracker, now: int) -> Optional[int]:
        if not self._ready:
            return None
        return self._ready.popleft()


class CyclicRoundRobinPolicy(RoundRobinPolicy):
    """
    Round Robin that walks a cursor through catalog order instead of
    keeping a ready queue.

    After each switch the cursor moves past the outgoing process and a
    wrapping scan takes the first eligible index. This only matches true
    Round Robin when every process arrives at time 0 and the catalog is in
    arrival order; a late arrival with a low index is served as soon as the
    cursor reaches it rather than after the processes already waiting.
    """

    def __init__(self, quantum: int = DEFAULT_QUANTUM) -> None:
        super().__init__(quantum)
        self._cursor = 0

    def _admit(self, tracker: RuntimeTracker, now: int) -> None:
        pass

    def _release(self, tracker: RuntimeTracker, index: int) -> None:
        self._cursor = index + 1

    def _take(self, tracker: RuntimeTracker, now: int) -> Optional[int]:
        n = len(tracker)
        for offset in range(n):
            i = (self._cursor + offset) % n
            if tracker.is_eligible(i, now):
                return i
        return None
