"""Simulated process with its static description and run-time accounting."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class Process:
    """A process taking part in the scheduling simulation.

    The first six fields describe the process; the rest track its state
    while the simulation runs.
    """

    pid: int
    arrival_time: int
    total_cpu_time: int
    cpu_burst: int
    io_burst: int
    static_priority: int
    dynamic_priority: int = field(init=False)
    remaining: int = field(init=False)
    current_cpu_burst: int = field(init=False, default=0)
    current_io_burst: int = field(init=False, default=0)
    cpu_wait: int = field(init=False, default=0)
    io_time: int = field(init=False, default=0)
    finish_time: int = field(init=False, default=0)
    state_time: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self.dynamic_priority = self.static_priority - 1
        self.remaining = self.total_cpu_time

    def describe(self):
        """One-line summary of the process's current progress."""
        return (
            f"Process Information - ID: {self.pid}, "
            f"Remaining Time: {self.remaining}, "
            f"CPU Burst: {self.current_cpu_burst}, "
            f"InputOutputTime Burst: {self.current_io_burst}"
        )