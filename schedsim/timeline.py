from __future__ import annotations

from typing import List, Optional

from .models import ScheduledSlice


class TimelineBuilder:
    """
    Folds the per-tick choice of running process into contiguous slices.

    ``None`` stands for an idle tick; idle stretches leave a gap in the
    timeline instead of producing a slice.
    """

    def __init__(self) -> None:
        self.slices: List[ScheduledSlice] = []
        self._pid: Optional[int] = None
        self._start = 0

    def advance(self, pid: Optional[int], now: int, new_slice: bool = False) -> None:
        if pid == self._pid and not new_slice:
            return
        self._flush(now)
        self._pid = pid
        self._start = now

    def close(self, now: int) -> List[ScheduledSlice]:
        self._flush(now)
        self._pid = None
        self._start = now
        return list(self.slices)

    def _flush(self, now: int) -> None:
        if self._pid is not None and now > self._start:
            self.slices.append(ScheduledSlice(pid=self._pid, start_time=self._start, end_time=now))
