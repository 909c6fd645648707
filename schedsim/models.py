from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    """
    One entry of the process catalog. Shared read-only by every run.
    """

    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0

    def __post_init__(self) -> None:
        if self.arrival_time < 0:
            raise ValueError(f"Process {self.pid}: arrival time must be >= 0, got {self.arrival_time}")
        if self.burst_time <= 0:
            raise ValueError(f"Process {self.pid}: burst time must be > 0, got {self.burst_time}")


@dataclass
class RuntimeState:
    """
    Per-run bookkeeping for a single process.
    """

    pid: int
    remaining_time: int
    waiting_time: int = 0
    start_time: Optional[int] = None
    completion_time: Optional[int] = None

    @property
    def finished(self) -> bool:
        return self.remaining_time == 0


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.

    The interval is half-open: ``[start_time, end_time)``.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def length(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ProcessMetrics:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int


@dataclass
class SystemMetrics:
    avg_waiting: float
    avg_turnaround: float
    throughput: float
    makespan: int
    cpu_busy_time: int
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
