"""
context_graph/graph/hierarchy.py - Walks over the parent/child forest.

All walks are iterative (explicit stack) so deep hierarchies never hit the
interpreter recursion limit.
"""

import logging
from typing import Hashable

from context_graph.graph.compound import CompoundGraph

logger = logging.getLogger(__name__)


def depth(graph: CompoundGraph, n: Hashable) -> int:
    """Number of parent links between n and its parentless ancestor (0 for a root)."""
    count = 0
    cur = graph.parent(n)
    while cur is not None:
        count += 1
        cur = graph.parent(cur)
    return count


def subgraph_nodes(graph: CompoundGraph, n: Hashable) -> list:
    """Every descendant of n in pre-order (n itself excluded)."""
    out: list = []
    stack = list(reversed(graph.children(n)))
    while stack:
        cur = stack.pop()
        out.append(cur)
        stack.extend(reversed(graph.children(cur)))
    return out


def subgraph_tree(graph: CompoundGraph, n: Hashable) -> list[dict]:
    """
    Nested form of the hierarchy below n.

    Returns:
        [{"id": child, "children": [...]}, ...] in child insertion order.
    """
    tree: list[dict] = []
    stack = [(n, tree)]
    while stack:
        cur, bucket = stack.pop()
        for child in graph.children(cur):
            entry = {"id": child, "children": []}
            bucket.append(entry)
            stack.append((child, entry["children"]))
    return tree


def collapse_subgraph(graph: CompoundGraph, n: Hashable) -> CompoundGraph:
    """
    Replace the whole subtree under n with n itself.

    Mutates graph in-place and also returns it for method chaining.

    Every cross-edge leaving the subtree is re-sourced at n, every edge
    entering it is re-targeted at n. Edges internal to the subtree, and
    edges between n and its own descendants, disappear. When several edges
    rewire to the same pair, the first one's attributes are kept; an edge n
    already had to that neighbour is left untouched.
    """
    members = subgraph_nodes(graph, n)
    member_set = set(members)

    rewired: dict[tuple, dict] = {}
    for m in members:
        for u, v in graph.node_edges(m):
            if v not in member_set:
                pair = (n, v)
            elif u not in member_set:
                pair = (u, n)
            else:
                continue
            if pair[0] != pair[1] and pair not in rewired:
                rewired[pair] = dict(graph.edge(u, v))

    for m in members:
        graph.remove_node(m)
    for (u, v), attrs in rewired.items():
        if not graph.has_edge(u, v):
            graph.add_edge(u, v, **attrs)

    logger.debug(
        "Collapsed %d descendants into %r (%d edges rewired).",
        len(members),
        n,
        len(rewired),
    )
    return graph
