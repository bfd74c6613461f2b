"""Deterministic source of pseudo-random numbers read from a file."""

from __future__ import annotations

import re
from pathlib import Path

_LEADING_INT = re.compile(r"[+-]?\d+")


def _c_remainder(value: int, divisor: int) -> int:
    remainder = abs(value) % divisor
    return -remainder if value < 0 else remainder


class Randomizer:
    """Hands out a fixed list of values in order, wrapping at the end."""

    def __init__(self, values):
        self.values = list(values)
        self._position = 0

    def next_value(self):
        """Return the next raw value, starting over after the last one."""
        if not self.values:
            raise ValueError("no random values available")
        if self._position == len(self.values):
            self._position = 0
        value = self.values[self._position]
        self._position += 1
        return value

    def draw(self, limit):
        """Return a value in 1..limit derived from the next raw value."""
        if limit <= 0:
            raise ValueError("Invalid argument: num must be greater than zero")
        return _c_remainder(self.next_value(), limit) + 1


def load_randomizer(path):
    """Read a random-number file: a count line, then whitespace-separated ints.

    The first line is skipped; reading stops at the first token that does
    not start with an integer.
    """
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    _, _, body = text.partition("\n")
    values = []
    for token in body.split():
        match = _LEADING_INT.match(token)
        if match is None:
            break
        values.append(int(match.group()))
        if match.end() != len(token):
            break
    return Randomizer(values)