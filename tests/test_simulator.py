import pytest

from schedsim.models import Process
from schedsim.policies import (
    CyclicRoundRobinPolicy,
    PriorityPolicy,
    RoundRobinPolicy,
    ShortestRemainingPolicy,
)
from schedsim.simulator import simulate
from schedsim.timeline import TimelineBuilder
from schedsim.tracker import RuntimeTracker


def _procs():
    return [
        Process(1, arrival_time=0, burst_time=5, priority=2),
        Process(2, arrival_time=1, burst_time=3, priority=1),
        Process(3, arrival_time=2, burst_time=8, priority=3),
    ]


def test_tracker_initial_state():
    tracker = RuntimeTracker(_procs())
    assert tracker.total_time == 16
    assert [s.remaining_time for s in tracker.states] == [5, 3, 8]
    assert [s.waiting_time for s in tracker.states] == [0, 0, 0]
    assert list(tracker.eligible(0)) == [0]
    assert list(tracker.eligible(2)) == [0, 1, 2]
    assert list(tracker.arriving(1)) == [1]


def test_tracker_run_records_start_and_completion():
    tracker = RuntimeTracker([Process(1, 0, 2)])
    assert tracker.run(0, 3) is False
    assert tracker.run(0, 4) is True
    state = tracker.states[0]
    assert state.start_time == 3
    assert state.completion_time == 5
    assert state.finished
    assert tracker.all_done()


def test_tracker_refuses_finished_process():
    tracker = RuntimeTracker([Process(1, 0, 1)])
    tracker.run(0, 0)
    with pytest.raises(RuntimeError):
        tracker.run(0, 1)


def test_tracker_charge_wait_skips_running_and_unarrived():
    tracker = RuntimeTracker(_procs())
    tracker.charge_wait(0, 1)
    assert [s.waiting_time for s in tracker.states] == [0, 1, 0]


def test_timeline_builder_merges_and_gaps():
    builder = TimelineBuilder()
    for now, pid in enumerate([1, 1, 2, None, None, 1]):
        builder.advance(pid, now)
    slices = builder.close(6)
    assert [(s.pid, s.start_time, s.end_time) for s in slices] == [(1, 0, 2), (2, 2, 3), (1, 5, 6)]


def test_timeline_builder_new_slice_splits_same_pid():
    builder = TimelineBuilder()
    builder.advance(1, 0)
    builder.advance(1, 1)
    builder.advance(1, 2, new_slice=True)
    slices = builder.close(3)
    assert [(s.start_time, s.end_time) for s in slices] == [(0, 2), (2, 3)]


def test_shortest_remaining_pick_next_tie_takes_lowest_index():
    tracker = RuntimeTracker([Process(1, 0, 4), Process(2, 0, 4), Process(3, 0, 2)])
    tracker.run(2, 0)
    tracker.run(2, 1)
    assert ShortestRemainingPolicy().pick_next(tracker, 2) == 0


def test_shortest_remaining_nothing_eligible():
    tracker = RuntimeTracker([Process(1, 3, 4)])
    assert ShortestRemainingPolicy().select(tracker, None, 0) is None


def test_priority_arrival_equal_priority_needs_shorter_job():
    tracker = RuntimeTracker([Process(1, 0, 5, priority=1), Process(2, 1, 5, priority=1)])
    tracker.run(0, 0)
    policy = PriorityPolicy()
    assert policy.select(tracker, 0, 1) == 0

    tracker = RuntimeTracker([Process(1, 0, 5, priority=1), Process(2, 1, 3, priority=1)])
    tracker.run(0, 0)
    assert policy.select(tracker, 0, 1) == 1


def test_round_robin_requeues_after_quantum():
    tracker = RuntimeTracker([Process(1, 0, 3), Process(2, 0, 3)])
    policy = RoundRobinPolicy(quantum=2)

    picks = []
    active = None
    for now in range(6):
        active = policy.select(tracker, active, now)
        picks.append(tracker.pid(active))
        tracker.run(active, now)
    assert picks == [1, 1, 2, 2, 1, 2]


def test_cyclic_round_robin_wraps_to_first_unfinished():
    tracker = RuntimeTracker([Process(1, 0, 1), Process(2, 0, 3), Process(3, 0, 1)])
    policy = CyclicRoundRobinPolicy(quantum=1)

    picks = []
    active = None
    for now in range(5):
        active = policy.select(tracker, active, now)
        picks.append(tracker.pid(active))
        tracker.run(active, now)
    assert picks == [1, 2, 3, 2, 2]


def test_simulate_reports_elapsed_including_idle():
    outcome = simulate([Process(1, 0, 2), Process(2, 5, 1)], ShortestRemainingPolicy())
    assert outcome.elapsed == 6
    assert [s.completion_time for s in outcome.states] == [2, 6]
    assert [s.waiting_time for s in outcome.states] == [0, 0]
