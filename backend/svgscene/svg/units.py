"""Length units.

Only a small literal table is understood. A document may use plain numbers
freely, but once it uses one suffixed unit every other suffixed length must
use the same one.
"""

from __future__ import annotations

import enum
import logging

from svgscene.errors import UnitMismatchError

logger = logging.getLogger(__name__)


class Unit(enum.Enum):
    PERCENT = ("%", 1.0)
    PT = ("pt", 1.0)
    PX = ("px", 1.0)
    MM = ("mm", 100.0)

    def __init__(self, abbreviation: str, scale_factor: float) -> None:
        self.abbreviation = abbreviation
        self.scale_factor = scale_factor

    @classmethod
    def matches(cls, value: str) -> Unit | None:
        for unit in cls:
            if value.endswith(unit.abbreviation):
                return unit
        return None


class UnitTracker:
    """Remembers the first suffixed unit seen in one document."""

    def __init__(self, density: float = 1.0) -> None:
        self.density = density
        self.assumed: str | None = None

    def check(self, abbreviation: str) -> None:
        if self.assumed is None:
            self.assumed = abbreviation
        if self.assumed != abbreviation:
            raise UnitMismatchError(self.assumed, abbreviation)

    def to_float(self, value: str) -> float:
        """Convert a length string; raises ValueError on a bad number."""
        value = value.strip()
        unit = Unit.matches(value)
        if unit is not None:
            value = value[: -len(unit.abbreviation)]
        result = float(value)
        if unit is None:
            return result
        if unit is Unit.PT:
            result = result * self.density + 0.5
        elif unit is Unit.PERCENT:
            result = result / 100
        self.check(unit.abbreviation)
        return result * unit.scale_factor


def parse_length(value: str | None, default: float | None, tracker: UnitTracker) -> float | None:
    """Length attribute with fallback; unit conflicts still raise."""
    if value is None:
        return default
    try:
        return tracker.to_float(value)
    except ValueError:
        logger.warning("Bad length %r, using %s", value, default)
        return default
