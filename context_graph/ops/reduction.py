"""
context_graph/ops/reduction.py - Transitive reduction of the cross-edges.

An edge u → v is redundant when u already reaches v through another of its
direct successors. Dropping such edges keeps reachability intact while
removing the long "shortcut" arrows that clutter a rendered view.

Reachable sets are built once, in reverse topological order, each from the
already-finished sets of the node's successors. This is the same
dynamic-programming idea as networkx.transitive_reduction(), applied to a
CompoundGraph so that parent links and attributes ride along untouched.
"""

import logging

from context_graph.graph.compound import CompoundGraph

logger = logging.getLogger(__name__)


def reduce(graph: CompoundGraph) -> CompoundGraph:
    """
    Return a copy of graph without transitively implied cross-edges.

    Algorithm:
        1. Topologically sort the nodes (fails on a cycle).
        2. Walk the order backwards; reach[u] = succ(u) ∪ reach[w] for every
           direct successor w.
        3. Keep edge (u, v) unless some direct successor w ≠ v of u has
           v in reach[w].

    Args:
        graph: CompoundGraph whose cross-edges form a DAG (never mutated).

    Returns:
        reduced: New CompoundGraph with the same nodes, node attributes,
                 parent links and graph attributes, and the surviving edges
                 with their original attributes.

    Raises:
        CycleError: if the cross-edges contain a cycle. There is no partial
                    result; callers must not treat this as "skip reduction".

    Notes:
        - Idempotent: reduce(reduce(G)) has the same edges as reduce(G).
        - Reachable sets cost O(V²) memory in the worst case, which is fine at
          context-view scale.
    """
    order = graph.topological_sort()

    succ: dict = {u: graph.successors(u) for u in order}
    reach: dict = {}
    for u in reversed(order):
        r: set = set()
        for w in succ[u]:
            r.add(w)
            r |= reach[w]
        reach[u] = r

    reduced = CompoundGraph()
    reduced.graph.update(graph.graph)
    for n in graph.nodes():
        reduced.add_node(n, **graph.node(n))
    for n in graph.nodes():
        p = graph.parent(n)
        if p is not None:
            reduced.set_parent(n, p)

    dropped = 0
    for u, v in graph.edges():
        if any(w != v and v in reach[w] for w in succ[u]):
            dropped += 1
            continue
        reduced.add_edge(u, v, **graph.edge(u, v))

    logger.debug(
        "Transitive reduction: %d of %d edges dropped.",
        dropped,
        graph.number_of_edges(),
    )
    return reduced
