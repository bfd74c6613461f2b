import pytest

from oslabs.events import Event, EventQueue, State
from oslabs.process import Process
from oslabs.randomizer import Randomizer
from oslabs.schedulers import (
    FCFSScheduler,
    LCFSScheduler,
    PriorityScheduler,
    RoundRobinScheduler,
    SRTFScheduler,
)
from oslabs.simulator import Simulator


def _simulate(scheduler, processes, values, verbose=False):
    events = EventQueue()
    for process in processes:
        events.add(Event(process, process.arrival_time, State.CREATED, State.READY))
    simulator = Simulator(scheduler, events, Randomizer(values), verbose)
    report = simulator.run()
    return simulator, report


def _mixed_processes():
    return [
        Process(0, 0, 20, 5, 4, 1),
        Process(1, 2, 15, 3, 6, 4),
        Process(2, 4, 8, 10, 2, 2),
        Process(3, 4, 12, 7, 3, 3),
    ]


SCHEDULER_FACTORIES = [
    FCFSScheduler,
    lambda: RoundRobinScheduler(3),
    LCFSScheduler,
    SRTFScheduler,
    lambda: PriorityScheduler(4),
    lambda: PriorityScheduler(2, True),
]


@pytest.mark.parametrize("factory", SCHEDULER_FACTORIES)
def test_every_process_finishes_with_consistent_accounting(factory):
    scheduler = factory()
    processes = _mixed_processes()
    _simulate(scheduler, processes, [7, 3, 12, 5, 1, 9, 4, 2])
    assert [p.pid for p in scheduler.finished] == [0, 1, 2, 3]
    for p in processes:
        assert p.remaining == 0
        assert p.cpu_wait >= 0
        assert p.io_time >= 0
        assert p.finish_time - p.arrival_time == p.total_cpu_time + p.io_time + p.cpu_wait


@pytest.mark.parametrize("factory", SCHEDULER_FACTORIES)
def test_summary_matches_finished_processes(factory):
    scheduler = factory()
    processes = _mixed_processes()
    _, report = _simulate(scheduler, processes, [7, 3, 12, 5, 1, 9, 4, 2])
    summary = scheduler.summary()
    assert summary.finish_time == max(p.finish_time for p in processes)
    assert 0 < summary.cpu_utilization <= 100
    lines = report.splitlines()
    assert lines[0] == scheduler.name
    assert len(lines) == len(processes) + 2
    assert lines[-1] == str(summary)


def test_runs_are_deterministic():
    _, first = _simulate(RoundRobinScheduler(4), _mixed_processes(), [5, 8, 2, 11])
    _, second = _simulate(RoundRobinScheduler(4), _mixed_processes(), [5, 8, 2, 11])
    assert first == second


def test_single_process_never_waits():
    process = Process(0, 3, 10, 4, 5, 1)
    scheduler = FCFSScheduler()
    _simulate(scheduler, [process], [6, 2, 9])
    assert process.cpu_wait == 0
    assert process.finish_time == process.arrival_time + process.total_cpu_time + process.io_time


def test_round_robin_quantum_preempts_long_bursts():
    rr = RoundRobinScheduler(2)
    rr_sim, _ = _simulate(rr, [Process(0, 0, 10, 100, 5, 1)], [99], verbose=True)
    fcfs_sim, _ = _simulate(FCFSScheduler(), [Process(0, 0, 10, 100, 5, 1)], [99], verbose=True)
    assert any("RUNNING -> READY" in line for line in rr_sim.trace)
    assert not any("RUNNING -> READY" in line for line in fcfs_sim.trace)


def test_verbose_trace_starts_with_creation():
    simulator, _ = _simulate(
        FCFSScheduler(), [Process(0, 0, 10, 100, 5, 1)], [99], verbose=True
    )
    assert simulator.trace[0] == "0 0 0: CREATED -> READY"
    assert any(line.startswith("Process Information - ID: 0") for line in simulator.trace)


def test_quiet_run_collects_no_trace():
    simulator, _ = _simulate(FCFSScheduler(), _mixed_processes(), [7, 3, 12])
    assert simulator.trace == []


def _priority_pair():
    low = Process(0, 0, 50, 100, 5, 1)
    high = Process(1, 5, 10, 100, 5, 4)
    return low, high


def test_preemptive_priority_lets_high_priority_finish_first():
    low, high = _priority_pair()
    simulator, _ = _simulate(PriorityScheduler(100, True), [low, high], [99], verbose=True)
    assert high.finish_time < low.finish_time
    assert "5 0 5: RUNNING -> READY" in simulator.trace
    assert low.finish_time - low.arrival_time == low.total_cpu_time + low.io_time + low.cpu_wait


def test_non_preemptive_priority_keeps_running_process():
    low, high = _priority_pair()
    simulator, _ = _simulate(PriorityScheduler(100), [low, high], [99], verbose=True)
    assert low.finish_time < high.finish_time
    assert not any("RUNNING -> READY" in line for line in simulator.trace)