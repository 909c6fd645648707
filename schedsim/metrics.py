from __future__ import annotations

from typing import List, Optional, Sequence

from .models import Process, ProcessMetrics, RuntimeState, ScheduleResult, SystemMetrics


def process_row(process: Process, waiting_time: int, start_time: Optional[int] = None) -> ProcessMetrics:
    """
    Build the result row for one process from its accumulated wait.
    """
    turnaround_time = process.burst_time + waiting_time
    completion_time = process.arrival_time + waiting_time + process.burst_time
    if start_time is None:
        start_time = process.arrival_time + waiting_time

    return ProcessMetrics(
        pid=process.pid,
        arrival_time=process.arrival_time,
        burst_time=process.burst_time,
        priority=process.priority,
        start_time=start_time,
        completion_time=completion_time,
        waiting_time=waiting_time,
        turnaround_time=turnaround_time,
        response_time=start_time - process.arrival_time,
    )


def rows_from_states(processes: Sequence[Process], states: Sequence[RuntimeState]) -> List[ProcessMetrics]:
    return [process_row(p, s.waiting_time, s.start_time) for p, s in zip(processes, states)]


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute averages, throughput and CPU utilization given populated
    per-process metrics and timeline slices.

    Throughput divides the process count by the completion time of the last
    row in catalog order, which is the final completion whenever the
    catalog is arrival-sorted and its last process finishes last.
    """
    if not result.processes:
        system = SystemMetrics(
            avg_waiting=0.0,
            avg_turnaround=0.0,
            throughput=0.0,
            makespan=0,
            cpu_busy_time=0,
            cpu_utilization=0.0,
        )
        result.system = system
        return system

    summary = summarize_process_metrics(result.processes)
    n = len(result.processes)

    final_completion = result.processes[-1].completion_time
    makespan = max(p.completion_time for p in result.processes)
    cpu_busy_time = sum(slice_.length for slice_ in result.timeline)

    throughput = n / final_completion if final_completion > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        avg_waiting=summary["avg_waiting"],
        avg_turnaround=summary["avg_turnaround"],
        throughput=throughput,
        makespan=makespan,
        cpu_busy_time=cpu_busy_time,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: List[ProcessMetrics]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(p.response_time for p in processes) / n,
    }
