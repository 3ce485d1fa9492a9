"""Path data interpreter.

Uppercase commands are absolute, lowercase relative:

    M/m (x y)+                 move to (extra pairs are implicit line-tos)
    Z/z                        close path back to the sub-path start
    L/l (x y)+                 line to
    H/h x+, V/v y+             horizontal / vertical line to
    C/c (x1 y1 x2 y2 x y)+     cubic Bezier
    S/s (x2 y2 x y)+           smooth cubic, first control point reflected
    Q/q (x1 y1 x y)+           quadratic Bezier
    T/t (x y)+                 smooth quadratic: NOT IMPLEMENTED, arguments
                               are consumed and nothing is drawn
    A/a (rx ry rot large sweep x y)+  elliptical arc

Numbers may be separated by whitespace, commas, or nothing at all when the
next number is self-delimiting (starts with a sign or a second decimal point).
A command whose arguments are incomplete ends the path; everything before it
is kept.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from svgscene.errors import PathSyntaxError
from svgscene.svg.arc import resolve_arc
from svgscene.svg.numbers import PathScanner
from svgscene.svg.segments import Close, CubicTo, LineTo, MoveTo, PathData, QuadTo, Segment

logger = logging.getLogger(__name__)

_NUMBER_START = frozenset("0123456789+-.")
_REPEATABLE = frozenset("lhvcsqta")


@dataclass
class PathState:
    """Lexical state while interpreting one ``d`` attribute."""

    x: float = 0.0
    y: float = 0.0
    start_x: float = 0.0
    start_y: float = 0.0
    # Second control point of the previous cubic, for S reflection
    ctrl_x: float = 0.0
    ctrl_y: float = 0.0
    prev_cmd: str = ""
    segments: list[Segment] = field(default_factory=list)

    def reflected_control(self) -> tuple[float, float]:
        if self.prev_cmd in ("C", "c", "S", "s"):
            return 2 * self.x - self.ctrl_x, 2 * self.y - self.ctrl_y
        return self.x, self.y


def parse_path(d: str) -> PathData:
    """Interpret a path ``d`` string into segments."""
    ph = PathScanner(d)
    ph.skip_whitespace()
    state = PathState()
    warned_t = False

    while not ph.at_end():
        cmd = ph.peek()
        if cmd in _NUMBER_START:
            # Implicit repetition of the previous command
            if state.prev_cmd in ("M", "m"):
                cmd = "L" if state.prev_cmd == "M" else "l"
            elif state.prev_cmd and state.prev_cmd.lower() in _REPEATABLE:
                cmd = state.prev_cmd
            else:
                logger.debug("Path data starts with a number, ignoring: %r", d[:40])
                break
        else:
            ph.advance()

        try:
            _apply(cmd, ph, state)
        except PathSyntaxError as e:
            logger.debug("Truncating path at %d: %s", ph.pos, e)
            break

        if cmd in ("T", "t") and not warned_t:
            logger.debug("Smooth quadratic (T/t) is not supported; skipped")
            warned_t = True
        state.prev_cmd = cmd
        ph.skip_whitespace()

    return PathData(tuple(state.segments), (state.x, state.y))


def _apply(cmd: str, ph: PathScanner, state: PathState) -> None:
    """Read one argument group for ``cmd`` and update ``state``.

    All arguments are read before anything is emitted, so an incomplete group
    leaves the state untouched.
    """
    relative = cmd.islower()
    ox, oy = (state.x, state.y) if relative else (0.0, 0.0)
    op = cmd.upper()

    if op == "Z":
        state.segments.append(Close())
        state.x, state.y = state.start_x, state.start_y
        state.ctrl_x, state.ctrl_y = state.start_x, state.start_y
    elif op == "M":
        x, y = ph.next_float() + ox, ph.next_float() + oy
        state.segments.append(MoveTo(x, y))
        state.x, state.y = x, y
        state.start_x, state.start_y = x, y
    elif op == "L":
        x, y = ph.next_float() + ox, ph.next_float() + oy
        state.segments.append(LineTo(x, y))
        state.x, state.y = x, y
    elif op == "H":
        x = ph.next_float() + ox
        state.segments.append(LineTo(x, state.y))
        state.x = x
    elif op == "V":
        y = ph.next_float() + oy
        state.segments.append(LineTo(state.x, y))
        state.y = y
    elif op == "C":
        x1, y1 = ph.next_float() + ox, ph.next_float() + oy
        x2, y2 = ph.next_float() + ox, ph.next_float() + oy
        x, y = ph.next_float() + ox, ph.next_float() + oy
        state.segments.append(CubicTo(x1, y1, x2, y2, x, y))
        state.ctrl_x, state.ctrl_y = x2, y2
        state.x, state.y = x, y
    elif op == "S":
        x2, y2 = ph.next_float() + ox, ph.next_float() + oy
        x, y = ph.next_float() + ox, ph.next_float() + oy
        x1, y1 = state.reflected_control()
        state.segments.append(CubicTo(x1, y1, x2, y2, x, y))
        state.ctrl_x, state.ctrl_y = x2, y2
        state.x, state.y = x, y
    elif op == "Q":
        x1, y1 = ph.next_float() + ox, ph.next_float() + oy
        x, y = ph.next_float() + ox, ph.next_float() + oy
        state.segments.append(QuadTo(x1, y1, x, y))
        state.ctrl_x, state.ctrl_y = x1, y1
        state.x, state.y = x, y
    elif op == "T":
        # Unimplemented: consume the pair so repetition keeps advancing, draw nothing
        ph.next_float()
        ph.next_float()
    elif op == "A":
        rx = ph.next_float()
        ry = ph.next_float()
        theta = ph.next_float()
        large_arc = ph.next_flag()
        sweep = ph.next_flag()
        x, y = ph.next_float() + ox, ph.next_float() + oy
        state.segments.extend(resolve_arc(state.x, state.y, x, y, rx, ry, theta, large_arc, sweep))
        state.x, state.y = x, y
    else:
        logger.debug("Unknown path command %r", cmd)
