"""
context_graph/ops/prune.py - Splicing out single-child wrapper roots.

After collapse a view often has a top-level box whose only content is one
other box (a chapter holding a single section). Such wrappers add nesting
without information, so they are removed and their child is promoted.
"""

import logging
from typing import Hashable, Iterable

from context_graph.graph.compound import CompoundGraph

logger = logging.getLogger(__name__)


def prune_single_child_roots(
    graph: CompoundGraph,
    protected_ids: Iterable[Hashable] = (),
    repeat: bool = False,
) -> int:
    """
    Remove parentless, unprotected nodes that have exactly one child.

    Mutates graph in-place.

    Each pass collects its candidates up front, then splices them: the child
    becomes parentless and the wrapper is removed along with its cross-edges.
    A child promoted during a pass is not re-examined in that pass, so a
    chain of k wrappers loses one level per pass.

    Args:
        graph:         CompoundGraph to prune (mutated).
        protected_ids: Ids never removed (the context nodes, in the pipeline).
        repeat:        If True, run passes until one removes nothing, which
                       flattens wrapper chains completely.

    Returns:
        Number of nodes removed.
    """
    protected = set(protected_ids)
    removed = 0
    while True:
        candidates = [
            n for n in graph.roots()
            if n not in protected and len(graph.children(n)) == 1
        ]
        for n in candidates:
            (child,) = graph.children(n)
            graph.set_parent(child, None)
            graph.remove_node(n)
        removed += len(candidates)
        if not repeat or not candidates:
            break

    if removed:
        logger.debug("Pruned %d single-child root(s).", removed)
    return removed
