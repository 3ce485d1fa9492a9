"""Attribute access by local name."""

from __future__ import annotations

from collections.abc import Iterator, Mapping


def local_name(qualified: str) -> str:
    """``{http://www.w3.org/1999/xlink}href`` and ``xlink:href`` both become ``href``."""
    if qualified.startswith("{"):
        qualified = qualified.rsplit("}", 1)[-1]
    return qualified.rsplit(":", 1)[-1]


class Attributes(Mapping[str, str]):
    """Read-only attribute map keyed by local name.

    Namespaces are dropped; a lookup that misses falls back to a
    case-insensitive match.
    """

    def __init__(self, raw: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = {}
        self._folded: dict[str, str] = {}
        for key, value in (raw or {}).items():
            name = local_name(key)
            # A plain attribute wins over a namespaced one with the same local name
            if name in self._values and ("{" in key or ":" in key):
                continue
            self._values[name] = value
            self._folded[name.lower()] = value

    def __getitem__(self, name: str) -> str:
        try:
            return self._values[name]
        except KeyError:
            return self._folded[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and (name in self._values or name.lower() in self._folded)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Attributes({self._values!r})"
