"""Graph index: the flat dependency list as a directed adjacency structure.

Each ``DependencyRecord`` becomes a node keyed by namespace, carrying its
discovery ``level`` and the record itself as node attributes. Each entry in
``references`` becomes an edge ``namespace → reference``.

A reference to a namespace with no record still creates a node (networkx adds
edge endpoints implicitly) but that node has no attributes. Such nodes are
"uninitialized" and the hierarchy builder treats them as dead ends.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import networkx as nx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyRecord:
    """One namespace observed by the analysis, with the namespaces it references."""

    namespace: str
    level: int
    references: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DependencyRecord:
        """Build a record from the document-store projection shape."""
        return cls(
            namespace=data["namespace"],
            level=int(data["level"]),
            references=tuple(data.get("references") or ()),
        )


class GraphIndex:
    """Read-only directed graph over namespaces, built once per hierarchization."""

    def __init__(self, digraph: nx.DiGraph) -> None:
        self.digraph = digraph

    @classmethod
    def from_records(cls, records: Iterable[DependencyRecord | Mapping[str, Any]]) -> GraphIndex:
        """Index a sequence of records (or their dict form). Order is not significant.

        If the same namespace appears twice, the first record wins.
        """
        g: nx.DiGraph = nx.DiGraph()
        for raw in records:
            record = raw if isinstance(raw, DependencyRecord) else DependencyRecord.from_dict(raw)
            if "record" in g.nodes.get(record.namespace, {}):
                logger.debug(f"Duplicate dependency record for {record.namespace}, keeping the first")
                continue
            g.add_node(record.namespace, level=record.level, record=record)
            for ref in record.references:
                g.add_edge(record.namespace, ref)
        return cls(g)

    def __contains__(self, namespace: object) -> bool:
        return isinstance(namespace, str) and self.is_known(namespace)

    def __len__(self) -> int:
        return sum(1 for _, attrs in self.digraph.nodes(data=True) if "record" in attrs)

    def is_known(self, namespace: str) -> bool:
        """True if a record exists for ``namespace``."""
        return namespace in self.digraph and "record" in self.digraph.nodes[namespace]

    def record(self, namespace: str) -> DependencyRecord | None:
        if namespace not in self.digraph:
            return None
        return self.digraph.nodes[namespace].get("record")

    def level(self, namespace: str) -> int | None:
        if namespace not in self.digraph:
            return None
        return self.digraph.nodes[namespace].get("level")

    def successors(self, namespace: str) -> list[str]:
        """Referenced namespaces, in the record's reference order.

        networkx keeps adjacency in insertion order, so this follows
        ``record.references`` with duplicates removed.
        """
        if namespace not in self.digraph:
            return []
        return list(self.digraph.successors(namespace))

    def root_record(self, root_namespace: str) -> DependencyRecord | None:
        """The root's record, only if it was discovered at level 0."""
        record = self.record(root_namespace)
        if record is None or record.level != 0:
            return None
        return record
