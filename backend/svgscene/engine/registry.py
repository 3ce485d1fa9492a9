"""Element registry: every SVG element is handled by a function registered via decorator.

Usage:
    @element("circle", "ellipse", description="Ovals")
    def oval(session: ParseSession, node: ElementNode) -> None:
        ...

A plain function handles the element and its children are walked afterwards.
A generator function wraps its children: code before the ``yield`` runs on
open, code after it (put it in a ``finally``) runs on close, and the yielded
bool says whether the children are walked at all.

Adding a new element = creating one function with the decorator. Nothing else changes.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from svgscene.engine.context import ElementNode, ParseSession

logger = logging.getLogger(__name__)

HANDLER_PACKAGE = "svgscene.engine.elements"


@dataclass
class ElementSpec:
    names: tuple[str, ...]
    fn: Callable[..., object]
    description: str = ""
    # True when fn is a generator that brackets the children
    scoped: bool = False

    @contextmanager
    def enter(self, session: ParseSession, node: ElementNode) -> Iterator[bool]:
        if not self.scoped:
            self.fn(session, node)
            yield True
            return
        with contextmanager(self.fn)(session, node) as descend:
            yield bool(descend)


class ElementRegistry:
    """Registry of element handlers keyed by local element name."""

    def __init__(self) -> None:
        self._specs: dict[str, ElementSpec] = {}

    def register(self, spec: ElementSpec) -> None:
        for name in spec.names:
            if name in self._specs:
                raise ValueError(f"Duplicate element handler: {name}")
        for name in spec.names:
            self._specs[name] = spec
        logger.debug("Registered element handler %s", ", ".join(spec.names))

    def get(self, name: str) -> ElementSpec:
        return self._specs[name]

    def find(self, name: str) -> ElementSpec | None:
        return self._specs.get(name)

    def names(self) -> list[str]:
        return sorted(self._specs)

    @property
    def count(self) -> int:
        return len(self._specs)


# Module-level singleton
_registry = ElementRegistry()


def get_registry() -> ElementRegistry:
    return _registry


def element(*names: str, description: str = ""):
    """Decorator to register an element handler."""

    def decorator(fn: Callable[..., object]):
        spec = ElementSpec(
            names=names,
            fn=fn,
            description=description,
            scoped=inspect.isgeneratorfunction(fn),
        )
        _registry.register(spec)
        return fn

    return decorator


def load_element_handlers() -> ElementRegistry:
    """Import every handler module so @element decorators fire."""
    package = importlib.import_module(HANDLER_PACKAGE)
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{HANDLER_PACKAGE}.{module_name}")
    return _registry
