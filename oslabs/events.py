"""Process states, state-transition events and the time-ordered event queue."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from oslabs.process import Process


class State(enum.Enum):
    """States a simulated process moves between."""

    BLOCKED = 0
    CREATED = 1
    READY = 2
    RUNNING = 3

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class Event:
    """A transition of ``process`` from ``old_state`` to ``new_state`` at ``time``."""

    process: Process
    time: int
    old_state: State
    new_state: State

    def describe(self):
        """One-line description of the event."""
        return (
            f"Event, time: {self.time} X: {self.process.pid} "
            f"old: {self.old_state.name} new: {self.new_state.name}"
        )


class EventQueue:
    """Events ordered by time; events with equal times keep insertion order."""

    def __init__(self) -> None:
        self._events: list[Event] = []

    def add(self, event):
        """Insert the event after every event that is not later than it."""
        position = next(
            (i for i, queued in enumerate(self._events) if queued.time > event.time),
            len(self._events),
        )
        self._events.insert(position, event)

    def pop(self):
        """Remove and return the earliest event, or None if there is none."""
        return self._events.pop(0) if self._events else None

    def find(self, pid):
        """Return the first queued event of process ``pid``, or None."""
        return next((e for e in self._events if e.process.pid == pid), None)

    def remove(self, pid):
        """Drop every queued event of process ``pid``."""
        self._events = [e for e in self._events if e.process.pid != pid]

    def next_time(self):
        """Time of the earliest event, or -1 if the queue is empty."""
        return self._events[0].time if self._events else -1

    def __len__(self):
        return len(self._events)

    def __iter__(self):
        return iter(list(self._events))