"""Level positioner: pixel coordinates for canonical nodes.

Each level is one horizontal band. Nodes in a band are packed left to right in
the order the depth-first walk first reached them. Reference nodes are skipped
entirely; connections to them borrow the canonical node's position.
"""

from __future__ import annotations

from deptree.config import SizeMode, SizeProfile, TreeConfig
from deptree.errors import UnrenderableSizeError
from deptree.layout.types import LayoutNode


def select_size_mode(node_count: int, config: TreeConfig) -> SizeMode:
    """Compact above the complex-tree threshold, normal otherwise."""
    if node_count > config.complex_tree_threshold:
        return SizeMode.COMPACT
    return SizeMode.NORMAL


def collect_nodes_by_level(root: LayoutNode) -> dict[int, list[LayoutNode]]:
    """Group canonical nodes by level, in pre-order. References are not descended."""
    by_level: dict[int, list[LayoutNode]] = {}

    def walk(node: LayoutNode) -> None:
        if node.is_reference:
            return
        by_level.setdefault(node.level, []).append(node)
        for child in node.children:
            walk(child)

    walk(root)
    return by_level


def position(root: LayoutNode, profile: SizeProfile, config: TreeConfig) -> tuple[int, int]:
    """Assign ``x``/``y`` to every canonical node and return the canvas size.

    y = padding + level * (node_height + level_gap)
    x = padding + index_in_level * (node_width + horizontal_gap)

    The extent (furthest box edge plus padding) is floored at the minimum and
    ceilinged at the maximum canvas size. Nodes beyond the maximum keep their
    coordinates; the router drops connections to them.
    """
    by_level = collect_nodes_by_level(root)
    pad = profile.canvas_padding

    max_x = 0
    max_y = 0
    for level in sorted(by_level):
        y = pad + level * (profile.node_height + profile.level_gap)
        x = pad
        for node in by_level[level]:
            node.x = x
            node.y = y
            max_x = max(max_x, node.x + node.width)
            max_y = max(max_y, node.y + node.height)
            x += profile.node_width + profile.horizontal_gap

    width = min(max(max_x + pad, config.min_canvas_width), config.max_canvas_width)
    height = min(max(max_y + pad, config.min_canvas_height), config.max_canvas_height)
    return width, height


def check_canvas_size(width: int, height: int, config: TreeConfig, namespace: str | None = None) -> None:
    """Raise ``UnrenderableSizeError`` if the canvas cannot be allocated."""
    if width <= 0 or height <= 0 or width > config.max_canvas_width or height > config.max_canvas_height:
        raise UnrenderableSizeError(width, height, namespace)


def nodes_outside_canvas(root: LayoutNode, width: int, height: int) -> list[LayoutNode]:
    """Canonical nodes whose box does not fit inside the canvas."""
    return [
        node
        for nodes in collect_nodes_by_level(root).values()
        for node in nodes
        if not fits_canvas(node, width, height)
    ]


def fits_canvas(node: LayoutNode, width: int, height: int) -> bool:
    return node.x >= 0 and node.y >= 0 and node.x + node.width <= width and node.y + node.height <= height
