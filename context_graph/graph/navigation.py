"""
context_graph/graph/navigation.py - Sibling ordering and reading-order navigation.

Siblings are ordered by their 'reference' attribute ("1.2", "1.10", "A.3")
with natural ordering, so "1.2" sorts before "1.10".
"""

import re
from typing import Hashable

from context_graph.config import ROOT_ID
from context_graph.graph.compound import CompoundGraph

_DIGITS = re.compile(r"(\d+)")


def _natural_key(reference: str) -> tuple:
    # Digit runs compare numerically, text runs case-insensitively.
    parts = _DIGITS.split(str(reference))
    return tuple(
        (0, int(part), "") if _DIGITS.fullmatch(part) else (1, 0, part.casefold())
        for part in parts
        if part
    )


def sort_by_reference(graph: CompoundGraph, node_ids: list) -> list:
    """Return node_ids ordered by their 'reference' attribute (stable)."""
    return sorted(
        node_ids,
        key=lambda n: _natural_key(graph.node(n).get("reference", "")),
    )


def _siblings(graph: CompoundGraph, n: Hashable, root_id: str) -> list:
    parent = graph.parent(n)
    return sort_by_reference(graph, graph.children(parent if parent is not None else root_id))


def _step(graph: CompoundGraph, n: Hashable, offset: int, root_id: str) -> Hashable:
    cur = n
    while cur != root_id:
        siblings = _siblings(graph, cur, root_id)
        index = siblings.index(cur) + offset if cur in siblings else -1
        if 0 <= index < len(siblings):
            return siblings[index]
        # Ran off the end of this level; continue from the parent.
        parent = graph.parent(cur)
        cur = parent if parent is not None else root_id
    return root_id


def next_node_id(graph: CompoundGraph, n: Hashable, root_id: str = ROOT_ID) -> Hashable:
    """
    The node after n in reading order.

    The last child of a group is followed by the group's own next sibling.
    Returns root_id when n is the last node of the book (or is root_id).
    """
    return _step(graph, n, 1, root_id)


def prev_node_id(graph: CompoundGraph, n: Hashable, root_id: str = ROOT_ID) -> Hashable:
    """
    The node before n in reading order.

    The first child of a group is preceded by the group's own previous
    sibling. Returns root_id when n is the first node of the book.
    """
    return _step(graph, n, -1, root_id)
