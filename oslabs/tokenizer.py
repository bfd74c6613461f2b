"""Whitespace tokenizer and token readers for linker object modules."""

from __future__ import annotations

import enum
import re
from collections import deque

_WORD = re.compile(r"[^ \t\n]+")
_LINE = re.compile(r"[^\n]*\n|[^\n]+")

MAX_SYMBOL_LENGTH = 16
_INT_MAX = 2**31 - 1
ADDRESSING_MODES = frozenset("MARIE")


class ParseErrorCode(enum.IntEnum):
    """Kinds of syntax errors in an object-module file."""

    NUM_EXPECTED = 0
    SYM_EXPECTED = 1
    MARIE_EXPECTED = 2
    SYM_TOO_LONG = 3
    TOO_MANY_DEF_IN_MODULE = 4
    TOO_MANY_USE_IN_MODULE = 5
    TOO_MANY_INSTR = 6


class ParseError(Exception):
    """A syntax error at a given line and 1-based offset."""

    def __init__(self, code, line, offset):
        self.code = ParseErrorCode(code)
        self.line = line
        self.offset = offset
        super().__init__(
            f"Parse Error line {line} offset {offset}: {self.code.name}"
        )


def _is_ascii_alpha(char: str) -> bool:
    return char.isascii() and char.isalpha()


def _is_ascii_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


class Tokenizer:
    """Splits text into tokens separated by spaces, tabs and newlines.

    ``line_number`` is the number of lines read so far and ``offset`` the
    1-based column of the last token returned.  Once the input runs out,
    ``offset`` is the length of the last line read, newline included.
    ``at_end`` becomes true as soon as reading a line reaches the end of
    the input, even if that line still has tokens to hand out.
    """

    def __init__(self, text):
        self._lines = (m.group() for m in _LINE.finditer(text))
        self._pending: deque[tuple[str, int]] = deque()
        self._last_length = 0
        self.line_number = 0
        self.offset = 0
        self.at_end = False

    def _error(self, code: ParseErrorCode) -> ParseError:
        return ParseError(code, self.line_number, self.offset)

    def next_token(self):
        """Return the next token, or None when the input is exhausted."""
        while not self._pending and not self.at_end:
            line = next(self._lines, None)
            if line is None:
                self.at_end = True
                break
            self.line_number += 1
            self._last_length = len(line)
            if not line.endswith("\n"):
                self.at_end = True
            self._pending.extend(
                (m.group(), m.start() + 1) for m in _WORD.finditer(line)
            )
        if self._pending:
            word, self.offset = self._pending.popleft()
            return word
        self.offset = self._last_length
        return None

    def read_int(self):
        """Read a non-negative decimal number; None at end of input."""
        word = self.next_token()
        if word is None:
            return None
        if not (word.isascii() and word.isdigit()):
            raise self._error(ParseErrorCode.NUM_EXPECTED)
        value = int(word)
        if value > _INT_MAX:
            raise self._error(ParseErrorCode.NUM_EXPECTED)
        return value

    def read_symbol(self):
        """Read a symbol: a letter followed by up to 15 letters or digits."""
        word = self.next_token()
        if word is None:
            raise self._error(ParseErrorCode.SYM_EXPECTED)
        if len(word) > MAX_SYMBOL_LENGTH:
            raise self._error(ParseErrorCode.SYM_TOO_LONG)
        if not _is_ascii_alpha(word[0]) or not all(
            _is_ascii_alnum(c) for c in word[1:]
        ):
            raise self._error(ParseErrorCode.SYM_EXPECTED)
        return word

    def read_addressing(self):
        """Read one of the addressing modes M, A, R, I or E."""
        word = self.next_token()
        if word is None or word not in ADDRESSING_MODES:
            raise self._error(ParseErrorCode.MARIE_EXPECTED)
        return word