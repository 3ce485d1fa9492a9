"""Exception hierarchy for the SVG interpreter.

Attribute-local problems never raise; they are logged and replaced with a
fallback. Only structural failures and configuration conflicts surface here.
"""

from __future__ import annotations


class SvgError(Exception):
    """Base class for all svgscene errors."""


class SvgParseError(SvgError):
    """The document could not be read or is not well-formed XML."""


class SvgConfigurationError(SvgError):
    """The document is internally inconsistent in a way we refuse to guess about."""


class UnitMismatchError(SvgConfigurationError):
    def __init__(self, assumed: str, found: str) -> None:
        super().__init__(f"Mixing units; SVG contains both {assumed} and {found}")
        self.assumed = assumed
        self.found = found


class PathSyntaxError(ValueError):
    """Raised by the path scanner when an argument group is incomplete."""
