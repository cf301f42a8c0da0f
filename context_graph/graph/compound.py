"""
context_graph/graph/compound.py - Compound directed graph model.

A CompoundGraph is a NetworkX DiGraph (node ids, node attributes, directed
cross-edges, graph-level attributes) with a parent/child forest layered on
top of the same node set. The forest lives in two side maps, parent-of and
children-of, and every mutation below updates both of them together.

Queries on ids that are not in the graph return an empty list (or None for
parent()) rather than raising. Dangling ids are routine in this engine: seeds
and references often point at nodes that a previous stage cut away.
"""

import logging
from typing import Any, Hashable, Optional

import networkx as nx

logger = logging.getLogger(__name__)


class HierarchyCycleError(ValueError):
    """A parent link would make a node its own ancestor."""


class CycleError(nx.NetworkXUnfeasible):
    """The cross-edges contain a directed cycle, so no topological order exists."""


class CompoundGraph:
    """
    Directed graph with at most one parent per node.

    Attributes:
        graph: Graph-level attribute dict (same object as the backing
               DiGraph's .graph).

    Notes:
        - At most one cross-edge per ordered (source, target) pair.
        - Children are kept in insertion order.
        - add_edge() and set_parent() create missing endpoints, matching
          NetworkX add_edge() semantics.
    """

    def __init__(self, **graph_attrs: Any) -> None:
        self._g = nx.DiGraph(**graph_attrs)
        self._parent: dict[Hashable, Hashable] = {}
        # dict used as an insertion-ordered set of children
        self._children: dict[Hashable, dict[Hashable, None]] = {}

    # ── Basic container protocol ──────────────────────────────────────────────

    @property
    def graph(self) -> dict:
        return self._g.graph

    def __contains__(self, n: Hashable) -> bool:
        return n in self._g

    def __len__(self) -> int:
        return len(self._g)

    def __repr__(self) -> str:
        return (
            f"CompoundGraph(nodes={self._g.number_of_nodes()}, "
            f"edges={self._g.number_of_edges()}, roots={len(self.roots())})"
        )

    # ── Nodes ─────────────────────────────────────────────────────────────────

    def nodes(self) -> list:
        return list(self._g.nodes)

    def has_node(self, n: Hashable) -> bool:
        return self._g.has_node(n)

    def node(self, n: Hashable) -> dict:
        """Attribute dict of node n (live view; raises KeyError if absent)."""
        return self._g.nodes[n]

    def add_node(self, n: Hashable, **attrs: Any) -> None:
        """Add n, or update its attributes if it already exists."""
        self._g.add_node(n, **attrs)

    def remove_node(self, n: Hashable) -> None:
        """
        Remove n together with its incident cross-edges.

        Children of n become parentless. Removing an absent node is a no-op.
        """
        if n not in self._g:
            return
        for child in self._children.pop(n, {}):
            del self._parent[child]
        self._detach(n)
        self._g.remove_node(n)

    def number_of_nodes(self) -> int:
        return self._g.number_of_nodes()

    # ── Cross-edges ───────────────────────────────────────────────────────────

    def edges(self) -> list[tuple]:
        return list(self._g.edges)

    def has_edge(self, u: Hashable, v: Hashable) -> bool:
        return self._g.has_edge(u, v)

    def edge(self, u: Hashable, v: Hashable) -> dict:
        """Attribute dict of edge (u, v) (live view; raises KeyError if absent)."""
        return self._g.edges[u, v]

    def add_edge(self, u: Hashable, v: Hashable, **attrs: Any) -> None:
        self._g.add_edge(u, v, **attrs)

    def remove_edge(self, u: Hashable, v: Hashable) -> None:
        if self._g.has_edge(u, v):
            self._g.remove_edge(u, v)

    def number_of_edges(self) -> int:
        return self._g.number_of_edges()

    def predecessors(self, n: Hashable) -> list:
        if n not in self._g:
            return []
        return list(self._g.predecessors(n))

    def successors(self, n: Hashable) -> list:
        if n not in self._g:
            return []
        return list(self._g.successors(n))

    def node_edges(self, n: Hashable) -> list[tuple]:
        """All cross-edges incident to n, incoming first."""
        if n not in self._g:
            return []
        return list(self._g.in_edges(n)) + list(self._g.out_edges(n))

    def topological_sort(self) -> list:
        """
        Return the nodes in an order consistent with every cross-edge.

        Raises:
            CycleError: if the cross-edges contain a directed cycle
                        (self-loops included).
        """
        try:
            return list(nx.topological_sort(self._g))
        except nx.NetworkXUnfeasible as exc:
            raise CycleError(
                f"Cross-edges contain a cycle; no topological order over "
                f"{self._g.number_of_nodes()} nodes."
            ) from exc

    # ── Hierarchy ─────────────────────────────────────────────────────────────

    def parent(self, n: Hashable) -> Optional[Hashable]:
        return self._parent.get(n)

    def children(self, n: Hashable) -> list:
        return list(self._children.get(n, ()))

    def roots(self) -> list:
        """Parentless nodes, in node order."""
        return [n for n in self._g if n not in self._parent]

    def set_parent(self, n: Hashable, p: Optional[Hashable] = None) -> None:
        """
        Make p the parent of n (p=None detaches n).

        Raises:
            HierarchyCycleError: if p is n or one of n's descendants.
        """
        if n not in self._g:
            self._g.add_node(n)
        if p is None:
            self._detach(n)
            return
        if p not in self._g:
            self._g.add_node(p)

        cur: Optional[Hashable] = p
        while cur is not None:
            if cur == n:
                raise HierarchyCycleError(
                    f"Cannot set parent of {n!r} to {p!r}: {n!r} would become its own ancestor."
                )
            cur = self._parent.get(cur)

        self._detach(n)
        self._parent[n] = p
        self._children.setdefault(p, {})[n] = None

    def _detach(self, n: Hashable) -> None:
        old = self._parent.pop(n, None)
        if old is None:
            return
        siblings = self._children[old]
        del siblings[n]
        if not siblings:
            del self._children[old]

    # ── Whole-graph helpers ───────────────────────────────────────────────────

    def copy(self) -> "CompoundGraph":
        """Independent copy; attribute dicts are shallow-copied."""
        other = CompoundGraph()
        other._g = self._g.copy()
        other._parent = dict(self._parent)
        other._children = {p: dict(kids) for p, kids in self._children.items()}
        return other

    def to_dict(self) -> dict:
        """Plain-data form (JSON-serialisable when ids and attributes are)."""
        return {
            "graph": dict(self.graph),
            "nodes": [
                {**attrs, "id": n, "parent": self._parent.get(n)}
                for n, attrs in self._g.nodes(data=True)
            ],
            "edges": [
                {**attrs, "source": u, "target": v}
                for u, v, attrs in self._g.edges(data=True)
            ],
        }
