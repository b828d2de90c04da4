"""Layout IR: positioned nodes and routed connections handed to a drawing surface."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from deptree.config import SizeMode, SizeProfile
from deptree.hierarchy import HierarchyNode


@dataclass
class LayoutNode:
    """A node in the deduplicated layout tree.

    Exactly one canonical (``is_reference=False``) node exists per namespace in a
    render. Every later occurrence is a reference node: it has no children, is
    never positioned or drawn, and names its canonical node by namespace in
    ``reference_to`` (looked up through the registry).
    """

    namespace: str
    level: int
    width: int
    height: int
    x: int = 0
    y: int = 0
    children: list[LayoutNode] = field(default_factory=list)
    is_reference: bool = False
    reference_to: str | None = None
    label: str = ""
    is_root: bool = False

    @property
    def center_x(self) -> int:
        return self.x + self.width // 2

    @property
    def center_y(self) -> int:
        return self.y + self.height // 2


Registry = dict[str, LayoutNode]


@dataclass
class Point:
    """A 2D point in pixel coordinates."""

    x: int
    y: int


class Direction(Enum):
    """Which sides of the two boxes a connection joins."""

    DOWN = "down"  # source bottom → target top
    UP = "up"  # source top → target bottom
    RIGHT = "right"  # source right → target left
    LEFT = "left"  # source left → target right

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.RIGHT, Direction.LEFT)


@dataclass
class RoutedConnection:
    """A straight connection between two canonical nodes.

    ``start``/``end`` are the raw border points. ``offset`` is the vertical
    stagger applied to the source end when several horizontal connections leave
    the same node; use ``from_point`` to get the drawn start.
    """

    from_id: str
    to_id: str
    start: Point
    end: Point
    direction: Direction
    offset: float = 0.0

    @property
    def from_point(self) -> tuple[float, float]:
        return (self.start.x, self.start.y + self.offset)

    @property
    def to_point(self) -> tuple[int, int]:
        return (self.end.x, self.end.y)


@dataclass
class LayoutResult:
    """Everything a drawing surface needs for one dependency tree."""

    root: LayoutNode
    registry: Registry
    nodes: list[LayoutNode]
    connections: list[RoutedConnection]
    width: int
    height: int
    size_mode: SizeMode
    profile: SizeProfile
    hierarchy: HierarchyNode

    @property
    def root_namespace(self) -> str:
        return self.root.namespace
