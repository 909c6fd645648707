"""
Scheduling simulator package.

Simulates how a single processor interleaves a known set of processes under
FCFS, preemptive SJF, preemptive priority and Round Robin scheduling, and
reports per-process and aggregate timing metrics.
"""

from .algorithms import ALGORITHMS, run_algorithm
from .models import Process, ScheduleResult

__all__ = ["ALGORITHMS", "Process", "ScheduleResult", "cli", "run_algorithm"]
