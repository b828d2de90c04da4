"""Hierarchy builder: expand the dependency graph into a tree.

Depth-first expansion from the root's direct references. Cycle detection is
scoped to the current root-to-node path: each recursive call gets its own
frozenset of the namespaces above it, so two sibling branches never see each
other's visits. A namespace reachable via two different paths (a diamond) is
therefore expanded twice, as two independent subtrees. Collapsing those back
into one box is the job of ``deptree.layout.dedup``.

Duplicated branches grow exponentially on densely shared graphs, so the total
number of emitted nodes is capped as well: once ``max_nodes`` nodes exist, the
rest of the walk emits nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from deptree.config import MAX_DEPTH, MAX_NODES_PER_DIAGRAM
from deptree.graph import GraphIndex

logger = logging.getLogger(__name__)


@dataclass
class HierarchyNode:
    """A node of the expanded tree.

    ``children`` is ``None`` for a leaf, never an empty list.
    """

    namespace: str
    original_level: int | None = None
    children: list[HierarchyNode] | None = None

    def to_dict(self) -> dict[str, Any]:
        """The ``{namespace, originalLevel?, dependencies?}`` shape used by the JSON report."""
        out: dict[str, Any] = {"namespace": self.namespace}
        if self.original_level is not None:
            out["originalLevel"] = self.original_level
        if self.children is not None:
            out["dependencies"] = [child.to_dict() for child in self.children]
        return out


class _Expansion:
    """Per-call walk state: limits plus the running node count."""

    def __init__(self, graph: GraphIndex, max_depth: int, max_nodes: int) -> None:
        self.graph = graph
        self.max_depth = max_depth
        self.max_nodes = max_nodes
        self.emitted = 0
        self.truncated = False

    def take(self, namespace: str) -> bool:
        """Claim one node from the budget; warn once when it runs out."""
        if self.emitted < self.max_nodes:
            self.emitted += 1
            return True
        if not self.truncated:
            logger.warning(
                f"Dependency tree node limit {self.max_nodes} reached at {namespace}, not expanding further"
            )
            self.truncated = True
        return False


def hierarchize(
    root_namespace: str,
    graph: GraphIndex,
    max_depth: int = MAX_DEPTH,
    max_nodes: int = MAX_NODES_PER_DIAGRAM,
) -> HierarchyNode:
    """Build the tree rooted at ``root_namespace``.

    The root itself is never re-added below itself. Without a level-0 record for
    the root, the result is a bare root node with no children.

    Args:
        root_namespace: Namespace the diagram is drawn for.
        graph:          Index over the flat dependency records.
        max_depth:      Depth (root children are depth 1) at which nodes are
                        emitted as leaves without further expansion.
        max_nodes:      Cap on nodes below the root. The walk is pre-order, so
                        a truncated tree is a prefix of the full one.
    """
    root_record = graph.root_record(root_namespace)
    if root_record is None:
        return HierarchyNode(namespace=root_namespace, original_level=0)

    walk = _Expansion(graph, max_depth, max_nodes)
    children = _expand_children(root_namespace, walk, frozenset({root_namespace}), 1)
    return HierarchyNode(namespace=root_namespace, original_level=root_record.level, children=children or None)


def _expand_children(namespace: str, walk: _Expansion, path: frozenset[str], depth: int) -> list[HierarchyNode]:
    nodes: list[HierarchyNode] = []
    for ref in walk.graph.successors(namespace):
        node = _visit(ref, walk, path, depth)
        if node is not None:
            nodes.append(node)
        elif walk.truncated:
            break
    return nodes


def _visit(namespace: str, walk: _Expansion, path: frozenset[str], depth: int) -> HierarchyNode | None:
    # Cycle along this path.
    if namespace in path:
        return None

    # Dangling reference: no record was supplied for it.
    if not walk.graph.is_known(namespace):
        return None

    if not walk.take(namespace):
        return None

    level = walk.graph.level(namespace)

    if depth >= walk.max_depth:
        logger.warning(f"Dependency tree depth limit {walk.max_depth} reached at {namespace}, not expanding further")
        return HierarchyNode(namespace=namespace, original_level=level)

    children = _expand_children(namespace, walk, path | {namespace}, depth + 1)
    return HierarchyNode(namespace=namespace, original_level=level, children=children or None)


def count_nodes(node: HierarchyNode) -> int:
    """Number of nodes below ``node`` (duplicated branches counted each time)."""
    if not node.children:
        return 0
    return sum(1 + count_nodes(child) for child in node.children)
