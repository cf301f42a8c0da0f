"""
context_graph/ops/anchors.py - Choosing the collapse boundaries of a view.

Two sweeps decide which nodes stay as boxes:

    Context sweep - from each context node, descend context_collapse_level
                    levels. Everything found stays expanded down to that
                    level; deeper nodes fold into it.
    Outside sweep - from the top of the hierarchy, descend to exactly
                    min_depth + outside_collapse_level, where min_depth is the
                    depth of the shallowest context node. Unrelated branches
                    fold at that level.

Context wins: outside anchors that sit inside a context subtree are dropped.

When context nodes sit at different depths, the shallowest one sets the
outside level for all of them; a deep context node does not pull the rest of
the view down to its own depth.
"""

import logging
from typing import Hashable, Iterable

from context_graph.graph.compound import CompoundGraph
from context_graph.graph.hierarchy import depth
from context_graph.ops.traversal import traverse

logger = logging.getLogger(__name__)


def select_anchors(
    graph: CompoundGraph,
    context_ids: Iterable[Hashable],
    context_collapse_level: int,
    outside_collapse_level: int,
) -> set:
    """
    Compute the anchor set for collapse().

    Args:
        graph:                  The induced context subgraph.
        context_ids:            Focus node ids. Ids absent from graph are
                                ignored when measuring min_depth.
        context_collapse_level: Levels of descent below the context nodes.
        outside_collapse_level: Extra levels, past min_depth, for the
                                outside sweep.

    Returns:
        anchors: context anchors ∪ (outside anchors − context subtrees).
                 min_depth is 0 when no context node is in graph.
    """
    context_ids = list(dict.fromkeys(context_ids))
    present = [n for n in context_ids if graph.has_node(n)]
    min_depth = min((depth(graph, n) for n in present), default=0)

    context_anchors = traverse(graph, context_ids, ["children"], context_collapse_level)

    outside_anchors = traverse(
        graph,
        graph.roots(),
        ["children"],
        min_depth + outside_collapse_level,
        exact=True,
    )
    context_subtrees = traverse(graph, context_ids, ["children"])
    outside_anchors -= context_subtrees

    logger.debug(
        "Anchor selection: min_depth=%d, %d context anchors, %d outside anchors.",
        min_depth,
        len(context_anchors),
        len(outside_anchors),
    )
    return context_anchors | outside_anchors
