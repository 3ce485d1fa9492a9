"""Number lexing for SVG numeric lists.

SVG lets numbers run together when the next one is self-delimiting:
``1.5-2.3e-1,4`` is three numbers, ``0.5.5`` is two. Transform arguments,
``points`` lists and path data all go through here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from svgscene.errors import PathSyntaxError

# Letters that end a number list: path commands plus the closing paren of a
# transform function.
STOP_CHARS = frozenset("MmZzLlHhVvCcSsQqTtAa)")
SEPARATORS = frozenset(" \t\n\r\f,")

_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass
class NumberParse:
    numbers: list[float] = field(default_factory=list)
    # Index of the first character not consumed (a stop char or end of string)
    next_index: int = 0


def parse_numbers(s: str, start: int = 0) -> NumberParse:
    """Read the longest run of numbers from ``s[start:]``.

    Stops, without consuming, at a command letter or ``)``. Raises ValueError
    for a fragment that is neither a number, a separator nor a stop char.
    """
    numbers: list[float] = []
    n = len(s)
    i = start
    while i < n:
        c = s[i]
        if c in SEPARATORS:
            i += 1
            continue
        if c in STOP_CHARS:
            break
        m = _NUMBER_RE.match(s, i)
        if m is None:
            raise ValueError(f"could not parse number at {i} in {s!r}")
        numbers.append(float(m.group()))
        i = m.end()
    return NumberParse(numbers, i)


def parse_number_list(s: str) -> list[float]:
    """All numbers in ``s``; anything left unconsumed is an error."""
    parsed = parse_numbers(s)
    if s[parsed.next_index:].strip():
        raise ValueError(f"unexpected trailing data in {s!r}")
    return parsed.numbers


class PathScanner:
    """Cursor over a path ``d`` string."""

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos
        self.n = len(text)

    def at_end(self) -> bool:
        return self.pos >= self.n

    def peek(self) -> str:
        return self.text[self.pos]

    def advance(self) -> None:
        self.pos += 1

    def skip_whitespace(self) -> None:
        while self.pos < self.n and self.text[self.pos] in SEPARATORS:
            self.pos += 1

    def next_float(self) -> float:
        self.skip_whitespace()
        m = _NUMBER_RE.match(self.text, self.pos)
        if m is None:
            raise PathSyntaxError(f"expected number at {self.pos}")
        self.pos = m.end()
        self.skip_whitespace()
        return float(m.group())

    def next_flag(self) -> int:
        """Arc flags are a single character and may be packed: ``a1 1 0 0010 10``."""
        self.skip_whitespace()
        if self.pos >= self.n or self.text[self.pos] not in "01":
            raise PathSyntaxError(f"expected flag at {self.pos}")
        flag = int(self.text[self.pos])
        self.pos += 1
        self.skip_whitespace()
        return flag
