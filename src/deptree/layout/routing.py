"""Connection routing: straight connections between canonical node boxes.

For each source → target pair the sides are picked from the vector between the
two box centres, checked in this order:

  1. target below (Δy > 0)             → source bottom-centre → target top-centre
  2. target above and |Δy| > |Δx|      → source top-centre    → target bottom-centre
  3. target to the right (Δx > 0)      → source right-centre  → target left-centre
  4. otherwise                         → source left-centre   → target right-centre

Downward always wins, even when the target is far to one side: downward is the
dominant flow of the tree.

Horizontal connections (3 and 4) that leave the same source more than once are
staggered vertically by evenly spaced offsets centred on zero, so the arrows do
not draw over each other.
"""

from __future__ import annotations

from deptree.config import STAGGER_OFFSET
from deptree.layout.positioning import fits_canvas
from deptree.layout.types import Direction, LayoutNode, Point, Registry, RoutedConnection


def connection_points(source: LayoutNode, target: LayoutNode) -> tuple[Point, Point, Direction]:
    """Pick the border points joining ``source`` to ``target``."""
    dx = target.center_x - source.center_x
    dy = target.center_y - source.center_y

    if dy > 0:
        return (
            Point(x=source.center_x, y=source.y + source.height),
            Point(x=target.center_x, y=target.y),
            Direction.DOWN,
        )
    if dy < 0 and abs(dy) > abs(dx):
        return (
            Point(x=source.center_x, y=source.y),
            Point(x=target.center_x, y=target.y + target.height),
            Direction.UP,
        )
    if dx > 0:
        return (
            Point(x=source.x + source.width, y=source.center_y),
            Point(x=target.x, y=target.center_y),
            Direction.RIGHT,
        )
    return (
        Point(x=source.x, y=source.center_y),
        Point(x=target.x + target.width, y=target.center_y),
        Direction.LEFT,
    )


def stagger_offsets(count: int, spacing: int = STAGGER_OFFSET) -> list[float]:
    """Evenly spaced offsets centred on zero. A single connection gets none."""
    if count <= 1:
        return [0.0] * count
    start = -((count - 1) * spacing) / 2
    return [start + i * spacing for i in range(count)]


def route(
    source: LayoutNode,
    targets: list[LayoutNode],
    canvas_width: int,
    canvas_height: int,
    stagger_spacing: int = STAGGER_OFFSET,
) -> list[RoutedConnection]:
    """Route connections from ``source`` to each canonical target.

    Targets whose box is not fully inside the canvas are dropped. Vertical
    connections come first, then horizontal ones in the order supplied.
    """
    vertical: list[RoutedConnection] = []
    horizontal: list[RoutedConnection] = []

    for target in targets:
        if not fits_canvas(target, canvas_width, canvas_height):
            continue
        start, end, direction = connection_points(source, target)
        conn = RoutedConnection(
            from_id=source.namespace,
            to_id=target.namespace,
            start=start,
            end=end,
            direction=direction,
        )
        if direction.is_horizontal:
            horizontal.append(conn)
        else:
            vertical.append(conn)

    for conn, offset in zip(horizontal, stagger_offsets(len(horizontal), stagger_spacing)):
        conn.offset = offset

    return vertical + horizontal


def resolve_target(node: LayoutNode, registry: Registry) -> LayoutNode | None:
    """The canonical node a child stands for (itself unless it is a reference)."""
    if node.is_reference:
        return registry.get(node.reference_to or node.namespace)
    return node


def route_tree(
    root: LayoutNode,
    registry: Registry,
    canvas_width: int,
    canvas_height: int,
    stagger_spacing: int = STAGGER_OFFSET,
) -> list[RoutedConnection]:
    """Route every parent → child edge of the layout tree.

    Reference children are redirected to their canonical node, so all arrows
    for a namespace end at its one drawn box. Recursion only follows canonical
    children, so each canonical node's edges are routed once.
    """
    connections: list[RoutedConnection] = []

    def walk(node: LayoutNode) -> None:
        targets = [t for t in (resolve_target(child, registry) for child in node.children) if t is not None]
        connections.extend(route(node, targets, canvas_width, canvas_height, stagger_spacing))
        for child in node.children:
            if not child.is_reference:
                walk(child)

    walk(root)
    return connections
