"""Scheduling policies and the statistics they keep on finished processes."""

from __future__ import annotations

import abc
import math
from collections import deque
from dataclasses import dataclass

from oslabs.process import Process

UNLIMITED_QUANTUM = 10000
DEFAULT_MAX_PRIORITY = 4


def _ratio(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    if numerator == 0:
        return math.nan
    return math.copysign(math.inf, numerator)


@dataclass(frozen=True)
class Summary:
    """Overall statistics of a finished simulation."""

    finish_time: int
    cpu_utilization: float
    io_utilization: float
    average_turnaround: float
    average_wait: float
    throughput: float

    def __str__(self) -> str:
        return (
            f"SUM: {self.finish_time} {self.cpu_utilization:.2f} "
            f"{self.io_utilization:.2f} {self.average_turnaround:.2f} "
            f"{self.average_wait:.2f} {self.throughput:.3f}"
        )


class Scheduler(abc.ABC):
    """Base of all policies: ready queue, running process and statistics."""

    def __init__(self, name, quantum=UNLIMITED_QUANTUM, preemptive=False):
        self.name = name
        self.quantum = quantum
        self.preemptive = preemptive
        self.current: Process | None = None
        self.finished: list[Process] = []
        self._queue: deque[Process] = deque()
        self._io_total = 0
        self._io_active = 0
        self._io_start = 0

    @abc.abstractmethod
    def add_process(self, process):
        """Put a ready process into the ready queue."""

    @abc.abstractmethod
    def get_next_process(self):
        """Take the next process to run from the ready queue, or None."""

    def add_arriving(self, process):
        """Reset the dynamic priority of a process and queue it."""
        process.dynamic_priority = process.static_priority - 1
        self.add_process(process)

    def finish(self, process, time):
        """Record that ``process`` finished at ``time``; keeps pid order."""
        process.finish_time = time
        position = next(
            (i for i, done in enumerate(self.finished) if done.pid > process.pid),
            len(self.finished),
        )
        self.finished.insert(position, process)

    def start_io(self, time):
        """Note that one more process started I/O at ``time``."""
        self._io_active += 1
        if self._io_active == 1:
            self._io_start = time

    def end_io(self, time):
        """Note that a process finished I/O at ``time``."""
        self._io_active -= 1
        if self._io_active == 0:
            self._io_total += time - self._io_start

    @property
    def io_busy_time(self):
        """Total time during which at least one process was doing I/O."""
        return self._io_total

    def summary(self):
        """Compute the overall statistics of the finished processes."""
        finish_time = max((p.finish_time for p in self.finished), default=0)
        finish_time = max(finish_time, 0)
        count = len(self.finished)
        return Summary(
            finish_time=finish_time,
            cpu_utilization=_ratio(
                sum(p.total_cpu_time for p in self.finished) * 100.0, finish_time
            ),
            io_utilization=_ratio(self._io_total * 100.0, finish_time),
            average_turnaround=_ratio(
                float(sum(p.finish_time - p.arrival_time for p in self.finished)),
                count,
            ),
            average_wait=_ratio(float(sum(p.cpu_wait for p in self.finished)), count),
            throughput=_ratio(100.0 * count, finish_time),
        )

    def report(self):
        """The policy name, one line per finished process and the summary."""
        lines = [self.name]
        lines.extend(
            f"{p.pid:04d}: {p.arrival_time} {p.total_cpu_time} {p.cpu_burst} "
            f"{p.io_burst} {p.static_priority} | {p.finish_time} "
            f"{p.finish_time - p.arrival_time} {p.io_time} {p.cpu_wait}"
            for p in self.finished
        )
        lines.append(str(self.summary()))
        return "\n".join(lines)

    def queue_lines(self):
        """Descriptions of the processes in the ready queue, front first."""
        return [p.describe() for p in self._queue]

    def _pop_front(self) -> Process | None:
        return self._queue.popleft() if self._queue else None


class FCFSScheduler(Scheduler):
    """First come, first served."""

    def __init__(self):
        super().__init__("FCFS")

    def add_process(self, process):
        self._queue.append(process)

    def get_next_process(self):
        return self._pop_front()


class RoundRobinScheduler(Scheduler):
    """First come, first served with a time quantum."""

    def __init__(self, quantum):
        super().__init__(f"RR {quantum}", quantum)

    def add_process(self, process):
        self._queue.append(process)

    def get_next_process(self):
        return self._pop_front()


class LCFSScheduler(Scheduler):
    """Last come, first served."""

    def __init__(self):
        super().__init__("LCFS")

    def add_process(self, process):
        self._queue.appendleft(process)

    def get_next_process(self):
        return self._pop_front()


class SRTFScheduler(Scheduler):
    """Shortest remaining time first; ties keep arrival order."""

    def __init__(self):
        super().__init__("SRTF")

    def add_process(self, process):
        position = next(
            (
                i
                for i, queued in enumerate(self._queue)
                if queued.remaining > process.remaining
            ),
            len(self._queue),
        )
        self._queue.insert(position, process)

    def get_next_process(self):
        return self._pop_front()


class PriorityScheduler(Scheduler):
    """Multi-level priority queues with active and expired sets.

    A process whose dynamic priority has dropped below zero has its
    priority reset and goes to the expired set; when the active set runs
    dry the two sets swap.
    """

    def __init__(self, quantum, preemptive=False, max_priority=DEFAULT_MAX_PRIORITY):
        name = f"PREPRIO {quantum}" if preemptive else f"PRIO {quantum}"
        super().__init__(name, quantum, preemptive)
        self.max_priority = max_priority
        self._active: list[deque[Process]] = [deque() for _ in range(max_priority)]
        self._expired: list[deque[Process]] = [deque() for _ in range(max_priority)]

    def _level(self, process: Process) -> int:
        return self.max_priority - process.dynamic_priority - 1

    def add_process(self, process):
        if process.dynamic_priority < 0:
            process.dynamic_priority = process.static_priority - 1
            self._expired[self._level(process)].append(process)
        else:
            self._active[self._level(process)].append(process)

    def _take_active(self) -> Process | None:
        for level in self._active:
            if level:
                return level.popleft()
        return None

    def get_next_process(self):
        process = self._take_active()
        if process is None:
            self._active, self._expired = self._expired, self._active
            process = self._take_active()
        return process