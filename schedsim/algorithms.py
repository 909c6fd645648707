from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .metrics import compute_system_metrics, process_row, rows_from_states
from .models import Process, ProcessMetrics, ScheduleResult, ScheduledSlice
from .policies import (
    DEFAULT_QUANTUM,
    CyclicRoundRobinPolicy,
    PriorityPolicy,
    RoundRobinPolicy,
    SelectionPolicy,
    ShortestRemainingPolicy,
)
from .simulator import simulate

logger = logging.getLogger(__name__)


def prepare_catalog(processes: Iterable[Process]) -> List[Process]:
    """
    Return a copy of ``processes`` stably sorted by arrival time.
    """
    given = list(processes)
    catalog = sorted(given, key=lambda p: p.arrival_time)
    if catalog != given:
        logger.debug("Workload not in arrival order; scheduling a sorted copy")
    return catalog


def _simulated(algorithm: str, processes: Iterable[Process], policy: SelectionPolicy, quantum: Optional[int]) -> ScheduleResult:
    catalog = prepare_catalog(processes)
    outcome = simulate(catalog, policy)
    logger.debug("%s finished after %d ticks with %d slices", algorithm, outcome.elapsed, len(outcome.timeline))

    result = ScheduleResult(
        algorithm=algorithm,
        quantum=quantum,
        processes=rows_from_states(catalog, outcome.states),
        timeline=outcome.timeline,
    )
    compute_system_metrics(result)
    return result


def schedule_fcfs(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Closed form: catalog order is execution order and each process starts
    as soon as both it and the processor are available.
    """
    catalog = prepare_catalog(processes)

    clock = 0
    timeline: List[ScheduledSlice] = []
    metrics: List[ProcessMetrics] = []

    for p in catalog:
        start_time = max(clock, p.arrival_time)
        waiting_time = start_time - p.arrival_time
        clock = start_time + p.burst_time

        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=clock))
        metrics.append(process_row(p, waiting_time, start_time))

    result = ScheduleResult(algorithm="First-come, first-serve", quantum=None, processes=metrics, timeline=timeline)
    compute_system_metrics(result)
    return result


def schedule_sjf(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (preemptive, shortest remaining time).

    A newly arrived process with strictly less remaining time than the
    running one takes the processor on its arrival tick.
    """
    return _simulated("Shortest-job-first", processes, ShortestRemainingPolicy(), None)


def schedule_priority(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Preemptive priority scheduling with a shortest-job tie-break on arrival.

    Lower numeric priority value means higher priority.
    """
    return _simulated("Priority", processes, PriorityPolicy(), None)


def schedule_rr(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin with a FIFO ready queue and a fixed time quantum.
    """
    q = DEFAULT_QUANTUM if quantum is None else quantum
    return _simulated("Round-robin", processes, RoundRobinPolicy(q), q)


def schedule_rr_cyclic(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin driven by an index cursor over catalog order.

    Only equivalent to :func:`schedule_rr` when all processes arrive at
    time 0; kept for output compatibility with index-order schedulers.
    """
    q = DEFAULT_QUANTUM if quantum is None else quantum
    return _simulated("Round-robin (cyclic index)", processes, CyclicRoundRobinPolicy(q), q)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "priority": schedule_priority,
    "rr": schedule_rr,
    "rr-cyclic": schedule_rr_cyclic,
}

STANDARD_REPORT = ("fcfs", "sjf", "priority", "rr")

QUANTUM_ALGORITHMS = {"rr", "rr-cyclic"}


def run_algorithm(name: str, processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum only affects the
    round-robin variants.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(processes, quantum=quantum)
