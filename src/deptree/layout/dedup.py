"""Deduplicating layout builder.

Walks the (possibly branch-duplicated) hierarchy once. The first occurrence of
a namespace becomes its canonical ``LayoutNode`` and is registered *before* its
children are built; every later occurrence, including one re-entered through a
cycle, becomes a childless reference node. Total canonical nodes are bounded by
the number of distinct namespaces and by ``max_nodes``.
"""

from __future__ import annotations

import logging

from deptree.config import MAX_NODES_PER_DIAGRAM, SizeProfile
from deptree.hierarchy import HierarchyNode
from deptree.layout.types import LayoutNode, Registry

logger = logging.getLogger(__name__)

# Level given to nodes whose record carried no discovery level.
DEFAULT_LEVEL: int = 1


class _NodeBudget:
    """Tracks the canonical-node cap for one render and warns once when hit."""

    def __init__(self, max_nodes: int) -> None:
        self.max_nodes = max_nodes
        self.warned = False

    def exhausted(self, registry: Registry, namespace: str) -> bool:
        if len(registry) < self.max_nodes:
            return False
        if not self.warned:
            logger.warning(
                f"Dependency tree node limit {self.max_nodes} reached at {namespace}, dropping further nodes"
            )
            self.warned = True
        return True


def build_layout_nodes(
    hierarchy_children: list[HierarchyNode],
    profile: SizeProfile,
    registry: Registry,
    max_nodes: int = MAX_NODES_PER_DIAGRAM,
) -> list[LayoutNode]:
    """Convert hierarchy children into layout nodes, registering canonical ones.

    Args:
        hierarchy_children: Children of one hierarchy node, in order.
        profile:            Supplies node width and height.
        registry:           namespace → canonical LayoutNode, shared across the
                            whole render and mutated in place.
        max_nodes:          Cap on canonical nodes in ``registry``. Unseen
                            namespaces past the cap are dropped.
    """
    return _build(hierarchy_children, profile, registry, _NodeBudget(max_nodes))


def _build(
    hierarchy_children: list[HierarchyNode],
    profile: SizeProfile,
    registry: Registry,
    budget: _NodeBudget,
) -> list[LayoutNode]:
    nodes: list[LayoutNode] = []
    for hn in hierarchy_children:
        level = hn.original_level if hn.original_level is not None else DEFAULT_LEVEL

        if hn.namespace in registry:
            nodes.append(
                LayoutNode(
                    namespace=hn.namespace,
                    level=level,
                    width=profile.node_width,
                    height=profile.node_height,
                    is_reference=True,
                    reference_to=hn.namespace,
                )
            )
            continue

        if budget.exhausted(registry, hn.namespace):
            continue

        node = LayoutNode(
            namespace=hn.namespace,
            level=level,
            width=profile.node_width,
            height=profile.node_height,
        )
        # Register before descending so a re-entry degrades to a reference.
        registry[hn.namespace] = node
        if hn.children:
            node.children = _build(hn.children, profile, registry, budget)
        nodes.append(node)
    return nodes


def build_layout_tree(
    hierarchy: HierarchyNode,
    profile: SizeProfile,
    max_nodes: int = MAX_NODES_PER_DIAGRAM,
) -> tuple[LayoutNode, Registry]:
    """Build the full layout tree for a hierarchy root, with a fresh registry.

    The root is registered first at level 0 and counts towards ``max_nodes``.
    """
    root = LayoutNode(
        namespace=hierarchy.namespace,
        level=0,
        width=profile.node_width,
        height=profile.node_height,
        is_root=True,
    )
    registry: Registry = {hierarchy.namespace: root}
    if hierarchy.children:
        root.children = build_layout_nodes(hierarchy.children, profile, registry, max_nodes)
    return root, registry
