"""Drawing surfaces for laid-out dependency trees."""

from deptree.renderers.base import Renderer
from deptree.renderers.svg import SvgRenderer

__all__ = ["Renderer", "SvgRenderer"]
