"""Discrete-event simulation of processes moving between CPU, ready queue and I/O."""

from __future__ import annotations

from oslabs.events import Event, EventQueue, State
from oslabs.process import Process
from oslabs.randomizer import Randomizer
from oslabs.schedulers import Scheduler


class Simulator:
    """Runs the events of ``events`` to completion under ``scheduler``.

    With ``verbose`` set, one line per handled event (and the ready queue
    whenever the scheduler is consulted) is collected in ``trace``.
    """

    def __init__(self, scheduler, events, randomizer, verbose=False):
        self.scheduler: Scheduler = scheduler
        self.events: EventQueue = events
        self.randomizer: Randomizer = randomizer
        self.verbose = verbose
        self.trace: list[str] = []
        self._call_scheduler = False

    def _log(self, line: str) -> None:
        if self.verbose:
            self.trace.append(line)

    def run(self):
        """Process every event and return the scheduler's report."""
        while (event := self.events.pop()) is not None:
            self._handle(event)
        return self.scheduler.report()

    def _handle(self, event: Event) -> None:
        process = event.process
        now = event.time
        elapsed = now - process.state_time
        process.state_time = now
        head = f"{now} {process.pid} {elapsed}: {event.old_state} -> {event.new_state}"

        if event.new_state is State.READY:
            self._log(head)
            self._on_ready(process, event.old_state, now, elapsed)
            self._call_scheduler = True
        elif event.new_state is State.RUNNING:
            self._on_running(process, now, elapsed, head)
        elif event.new_state is State.BLOCKED:
            self._on_blocked(process, now, head)
            self._call_scheduler = True
        else:
            self._log(head)

        self._maybe_schedule(now)

    def _on_ready(self, process: Process, old_state: State, now: int, elapsed: int) -> None:
        if old_state in (State.BLOCKED, State.CREATED):
            if old_state is State.BLOCKED:
                process.io_time += elapsed
                self.scheduler.end_io(now)
            self.scheduler.add_arriving(process)
            live = self.scheduler.current
            if self._should_preempt(live, process, now):
                self._preempt(live, now)
        elif old_state is State.RUNNING:
            process.dynamic_priority -= 1
            self.scheduler.current = None
            self.scheduler.add_process(process)

    def _should_preempt(self, live: Process | None, arriving: Process, now: int) -> bool:
        if not (self.scheduler.preemptive and live is not None):
            return False
        pending = self.events.find(live.pid)
        return (
            pending is not None
            and pending.time > now
            and arriving.dynamic_priority > live.dynamic_priority
        )

    def _preempt(self, live: Process, now: int) -> None:
        pending = self.events.find(live.pid)
        unused = pending.time - now
        live.remaining += unused
        live.current_cpu_burst += unused
        self.events.remove(live.pid)
        self.events.add(Event(live, now, State.RUNNING, State.READY))

    def _on_running(self, process: Process, now: int, elapsed: int, head: str) -> None:
        live = self.scheduler.current
        if live is None:
            raise RuntimeError(f"process {process.pid} runs without being scheduled")
        burst = (
            live.current_cpu_burst
            if live.current_cpu_burst > 0
            else self.randomizer.draw(process.cpu_burst)
        )
        burst = min(burst, live.remaining)
        process.cpu_wait += elapsed
        self._log(
            f"{head} CPUBurst={burst} Left={process.remaining} "
            f"prio={process.dynamic_priority}"
        )

        quantum = self.scheduler.quantum
        if burst > quantum:
            process.remaining -= quantum
            process.current_cpu_burst = burst - quantum
            self.events.add(Event(process, now + quantum, State.RUNNING, State.READY))
        else:
            process.remaining -= burst
            process.current_cpu_burst = 0
            self.events.add(Event(process, now + burst, State.RUNNING, State.BLOCKED))

    def _on_blocked(self, process: Process, now: int, head: str) -> None:
        io_burst = self.randomizer.draw(process.io_burst) if process.remaining > 0 else 0
        self._log(f"{head} ib={io_burst} Left={process.remaining}")
        if process.remaining > 0:
            self.events.add(Event(process, now + io_burst, State.BLOCKED, State.READY))
            self.scheduler.start_io(now)
        else:
            self.scheduler.finish(process, now)
        self.scheduler.current = None

    def _maybe_schedule(self, now: int) -> None:
        if not self._call_scheduler:
            return
        if self.events.next_time() == now:
            return
        self._call_scheduler = False
        if self.scheduler.current is not None:
            return
        if self.verbose:
            self.trace.extend(self.scheduler.queue_lines())
        chosen = self.scheduler.get_next_process()
        self.scheduler.current = chosen
        if chosen is not None:
            self.events.add(Event(chosen, now, State.READY, State.RUNNING))