"""Layout pipeline: flat dependency records to a positioned, routed tree.

Phases:
  1. Graph index          (deptree.graph)
  2. Hierarchization      (deptree.hierarchy: path-local cycle cutting, depth cap)
  3. Size-mode selection  (node count vs. complex-tree threshold)
  4. Deduplication        (layout.dedup: canonical nodes + references, node cap)
  5. Positioning          (layout.positioning: level bands, canvas extent)
  6. Connection routing   (layout.routing: side selection, horizontal stagger)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from deptree.config import SizeMode, TreeConfig
from deptree.graph import DependencyRecord, GraphIndex
from deptree.hierarchy import HierarchyNode, count_nodes, hierarchize
from deptree.layout.dedup import build_layout_nodes, build_layout_tree
from deptree.layout.positioning import (
    check_canvas_size,
    collect_nodes_by_level,
    nodes_outside_canvas,
    position,
    select_size_mode,
)
from deptree.layout.routing import connection_points, route, route_tree, stagger_offsets
from deptree.layout.types import (
    Direction,
    LayoutNode,
    LayoutResult,
    Point,
    Registry,
    RoutedConnection,
)

logger = logging.getLogger(__name__)

__all__ = [
    "Direction",
    "LayoutNode",
    "LayoutResult",
    "Point",
    "Registry",
    "RoutedConnection",
    "build_layout_nodes",
    "build_layout_tree",
    "check_canvas_size",
    "collect_nodes_by_level",
    "connection_points",
    "display_label",
    "full_layout",
    "position",
    "route",
    "route_tree",
    "select_size_mode",
    "stagger_offsets",
]


def display_label(namespace: str, abbreviate: bool) -> str:
    """Label drawn in a node box.

    Deeply qualified namespaces (more than two dot-separated segments) are cut
    to their last two segments when ``abbreviate`` is set.
    """
    if not abbreviate:
        return namespace
    parts = namespace.split(".")
    if len(parts) <= 2:
        return namespace
    return ".".join(parts[-2:])


def full_layout(
    root_namespace: str,
    records: Iterable[DependencyRecord | Mapping[str, Any]],
    config: TreeConfig | None = None,
) -> LayoutResult:
    """Run the full pipeline for one root namespace.

    Raises:
        UnrenderableSizeError: the canvas extent cannot be allocated.
    """
    config = config or TreeConfig()

    graph = GraphIndex.from_records(records)
    hierarchy: HierarchyNode = hierarchize(root_namespace, graph, config.max_depth, config.max_nodes_per_diagram)

    total = count_nodes(hierarchy)
    mode = select_size_mode(total, config)
    if mode is SizeMode.COMPACT:
        logger.info(f"Dependency tree for {root_namespace} has {total} nodes, using compact layout")
    profile = config.profile_for(mode)

    root, registry = build_layout_tree(hierarchy, profile, config.max_nodes_per_diagram)

    width, height = position(root, profile, config)
    check_canvas_size(width, height, config, root_namespace)

    clipped = nodes_outside_canvas(root, width, height)
    if clipped:
        logger.warning(f"Dependency tree for {root_namespace}: {len(clipped)} node(s) fall outside the canvas")

    connections = route_tree(root, registry, width, height, config.stagger_offset)

    abbreviate = config.abbreviate_labels and mode is SizeMode.COMPACT
    by_level = collect_nodes_by_level(root)
    nodes: list[LayoutNode] = []
    for level in sorted(by_level):
        for node in by_level[level]:
            node.label = display_label(node.namespace, abbreviate)
            nodes.append(node)

    return LayoutResult(
        root=root,
        registry=registry,
        nodes=nodes,
        connections=connections,
        width=width,
        height=height,
        size_mode=mode,
        profile=profile,
        hierarchy=hierarchy,
    )
