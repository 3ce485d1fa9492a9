"""Hooks for observing or rewriting ops while a document is walked."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from svgscene.svg.scene import DrawOp
    from svgscene.utils.geometry import Rect


class ElementListener:
    """Base listener; every hook is a no-op.

    ``on_element`` may return a replacement op, or None to drop the op.
    Group ops cannot be dropped, the return value is ignored for them.
    """

    def on_svg_start(self, bounds: Rect) -> None:
        pass

    def on_element(self, element_id: str | None, op: DrawOp) -> DrawOp | None:
        return op

    def on_element_drawn(self, element_id: str | None, op: DrawOp) -> None:
        pass

    def on_svg_end(self, bounds: Rect) -> None:
        pass
