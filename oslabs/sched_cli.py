"""Command line for the process-scheduling simulation."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

from oslabs.events import Event, EventQueue, State
from oslabs.process import Process
from oslabs.randomizer import load_randomizer
from oslabs.schedulers import (
    DEFAULT_MAX_PRIORITY,
    FCFSScheduler,
    LCFSScheduler,
    PriorityScheduler,
    RoundRobinScheduler,
    SRTFScheduler,
)
from oslabs.simulator import Simulator

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

USAGE = "\n".join(
    [
        "Usage: sched [-v] [-t] [-e] [-p] [-s <schedspec>] <inputfile> <randfile>",
        "Options:",
        "  -v                  : Enable verbose mode",
        "  -t                  : Enable verbose trace mode",
        "  -e                  : Enable verbose event queue mode",
        "  -p                  : Enable verbose preempt mode",
        "  -s <schedspec>      : Specify scheduler",
    ]
)


@dataclass
class _Arguments:
    files: list[str] = field(default_factory=list)
    spec: str = ""
    verbose: bool = False
    trace: bool = False
    event_queue: bool = False
    preemption: bool = False


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"invalid number: {text!r}")
    return int(match.group(1))


def parse_arguments(argv):
    """Split the command line into options, the scheduler spec and file names."""
    options = _Arguments()
    flags = {"v": "verbose", "t": "trace", "e": "event_queue", "p": "preemption"}
    for arg in argv:
        if len(arg) < 2 or arg[0] != "-":
            options.files.append(arg)
        elif arg[1] == "s":
            options.spec = arg[2:]
        elif arg[1] in flags:
            setattr(options, flags[arg[1]], True)
        else:
            options.files.append(arg)
    return options


def make_scheduler(spec):
    """Build the scheduler named by ``spec``; returns it with the priority count.

    ``F``, ``L`` and ``S`` select FCFS, LCFS and SRTF; ``R<q>``, ``P<q>[:<m>]``
    and ``E<q>[:<m>]`` select round robin, priority and preemptive priority.
    """
    if not spec:
        raise ValueError("no scheduler specified")
    kind = spec[0]
    if kind == "F":
        return FCFSScheduler(), DEFAULT_MAX_PRIORITY
    if kind == "L":
        return LCFSScheduler(), DEFAULT_MAX_PRIORITY
    if kind == "S":
        return SRTFScheduler(), DEFAULT_MAX_PRIORITY
    if kind in ("R", "P", "E"):
        head, sep, tail = spec[1:].partition(":")
        quantum = _leading_int(head)
        max_priority = _leading_int(tail) if sep else DEFAULT_MAX_PRIORITY
        if kind == "R":
            return RoundRobinScheduler(quantum), max_priority
        return PriorityScheduler(quantum, kind == "E", max_priority), max_priority
    raise ValueError(f"unknown scheduler: {spec!r}")


def load_processes(path, randomizer, max_priority):
    """Read processes, one per line: arrival, total CPU, CPU burst, I/O burst.

    Each process gets a static priority drawn from ``randomizer``.
    """
    processes = []
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    for line in text.splitlines():
        tokens = line.split()
        if not tokens:
            continue
        if len(tokens) < 4:
            raise ValueError(f"expected four numbers per process: {line!r}")
        arrival, total, cpu_burst, io_burst = (_leading_int(t) for t in tokens[:4])
        processes.append(
            Process(
                pid=len(processes),
                arrival_time=arrival,
                total_cpu_time=total,
                cpu_burst=cpu_burst,
                io_burst=io_burst,
                static_priority=randomizer.draw(max_priority),
            )
        )
    return processes


def main(argv=None):
    """Run the simulation described on the command line and print its report."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        print(USAGE)
        return 1
    options = parse_arguments(args)
    if len(options.files) < 2:
        print(USAGE)
        return 1
    input_path, random_path = options.files[0], options.files[1]
    try:
        randomizer = load_randomizer(random_path)
    except OSError:
        print(f"Unable to open file: {random_path}")
        return 1
    try:
        scheduler, max_priority = make_scheduler(options.spec)
    except ValueError as error:
        print(error)
        return 1
    try:
        processes = load_processes(input_path, randomizer, max_priority)
    except OSError:
        print(f"Unable to open file: {input_path}")
        return 1
    except ValueError as error:
        print(error)
        return 1

    events = EventQueue()
    for process in processes:
        events.add(Event(process, process.arrival_time, State.CREATED, State.READY))
    simulator = Simulator(scheduler, events, randomizer, options.verbose)
    try:
        report = simulator.run()
    except ValueError as error:
        print(error)
        return 1
    for line in simulator.trace:
        print(line)
    print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())