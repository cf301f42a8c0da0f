"""
context_graph/ops/collapse.py - Hierarchy collapse with edge rewiring.

Folds every node into its nearest anchor ancestor, so that a whole branch of
the hierarchy is drawn as one box. Cross-edges are rewired onto the
surviving representatives; edges that end up inside a single box vanish.

Nested anchors: the upward walk stops at the first anchor it meets, so a
node always joins its *nearest* anchor ancestor, and an anchor nested inside
another anchor stays a box of its own (drawn inside the outer one when
parents are kept).
"""

import logging
from typing import Hashable, Iterable

from context_graph.config import ROOT_ID
from context_graph.graph.compound import CompoundGraph

logger = logging.getLogger(__name__)


class UnionFind:
    """
    Disjoint-set forest with path compression.

    union(a, b) always hangs a's root under b's root, so the caller picks the
    surviving representative by argument order. Unknown elements are added
    as singletons on first find().
    """

    def __init__(self, elements: Iterable[Hashable] = ()) -> None:
        self.parent: dict = {e: e for e in elements}

    def find(self, x: Hashable) -> Hashable:
        if x not in self.parent:
            self.parent[x] = x
            return x
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[x] != root:
            nxt = self.parent[x]
            self.parent[x] = root
            x = nxt
        return root

    def union(self, a: Hashable, b: Hashable) -> None:
        ra = self.find(a)
        rb = self.find(b)
        if ra != rb:
            self.parent[ra] = rb


def collapse(
    graph: CompoundGraph,
    anchor_ids: Iterable[Hashable],
    include_parents: bool = True,
    root_id: Hashable = ROOT_ID,
) -> CompoundGraph:
    """
    Merge every non-anchor node into its nearest anchor ancestor.

    Algorithm (O(V · h + E), h = hierarchy height):
        1. For every non-anchor node, walk strictly upward through parents
           until the first anchor and union(node, anchor). Nodes with no
           anchor ancestor represent themselves.
        2. Remap each cross-edge (v, w) → (find(v), find(w)). Drop it if both
           ends share a representative; keep the first attribute dict when
           several edges remap onto the same pair.
        3. Keep every representative that ends a surviving edge, plus every
           anchor (even when it is left isolated).
        4. If include_parents, re-parent each kept node under
           find(original parent) when that representative was kept.
        5. Remove the root sentinel, leaving its children parentless.

    Args:
        graph:           Source CompoundGraph (never mutated).
        anchor_ids:      Collapse boundaries. Ids absent from graph are ignored.
        include_parents: Keep remapped parent links in the result.
        root_id:         Sentinel id that is always stripped from the result.

    Returns:
        collapsed: New CompoundGraph.
    """
    anchors = set(anchor_ids)
    nodes = graph.nodes()

    uf = UnionFind(nodes)
    for n in nodes:
        if n in anchors:
            continue
        cur = graph.parent(n)
        while cur is not None:
            if cur in anchors:
                uf.union(n, cur)
                break
            cur = graph.parent(cur)

    kept_edges: dict[tuple, dict] = {}
    for v, w in graph.edges():
        pair = (uf.find(v), uf.find(w))
        if pair[0] == pair[1] or pair in kept_edges:
            continue
        kept_edges[pair] = graph.edge(v, w)

    keep = {n for pair in kept_edges for n in pair} | anchors

    collapsed = CompoundGraph()
    collapsed.graph.update(graph.graph)
    for n in nodes:
        if n in keep:
            collapsed.add_node(n, **graph.node(n))
    for (v, w), attrs in kept_edges.items():
        collapsed.add_edge(v, w, **attrs)

    if include_parents:
        for n in collapsed.nodes():
            p = graph.parent(n)
            if p is None:
                continue
            rep = uf.find(p)
            if collapsed.has_node(rep):
                collapsed.set_parent(n, rep)

    collapsed.remove_node(root_id)

    logger.debug(
        "Hierarchy collapse: %d nodes → %d (%d anchors), %d edges → %d.",
        len(nodes),
        collapsed.number_of_nodes(),
        len(anchors),
        graph.number_of_edges(),
        collapsed.number_of_edges(),
    )
    return collapsed
