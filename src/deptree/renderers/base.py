"""Drawing-surface protocol for laid-out dependency trees."""

from __future__ import annotations

from typing import Protocol

from deptree.layout.types import LayoutResult


class Renderer(Protocol):
    """Turns positioned boxes and routed connections into an output document.

    Layout has already decided coordinates, canvas size and which connections
    survive, so a surface only draws. It should skip boxes for which
    ``fits_canvas`` is false.
    """

    def render(self, result: LayoutResult) -> str:
        """Draw ``result`` (root box first in ``result.nodes``) and return the document text."""
        ...
