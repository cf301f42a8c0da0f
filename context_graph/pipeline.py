"""
context_graph/pipeline.py - Single-call context view orchestrator.

Provides build_context_graph(), which runs the six context-view stages in a
fixed order, and build_context_view(), which runs the same stages and also
returns every intermediate node set for inspection.

Usage:
    from context_graph.pipeline import build_context_graph
    view = build_context_graph(G, ["thm-2.3"])
"""

import logging
from dataclasses import dataclass, field
from typing import Hashable, Iterable

from context_graph.config import DEFAULT_CONFIG, ContextGraphConfig
from context_graph.graph.compound import CompoundGraph
from context_graph.ops.anchors import select_anchors
from context_graph.ops.collapse import collapse
from context_graph.ops.induce import induce
from context_graph.ops.prune import prune_single_child_roots
from context_graph.ops.reduction import reduce
from context_graph.ops.traversal import traverse

logger = logging.getLogger(__name__)


@dataclass
class ContextViewResult:
    """
    Complete output of a single context view build.

    Contains the node set produced by each traversal stage, plus the final
    view graph.
    """

    context_ids: list
    seeds: set = field(default_factory=set)
    neighborhood: set = field(default_factory=set)
    closure: set = field(default_factory=set)
    anchors: set = field(default_factory=set)
    pruned: int = 0
    graph: CompoundGraph = field(default_factory=CompoundGraph)


def build_context_view(
    graph: CompoundGraph,
    context_ids: Iterable[Hashable],
    config: ContextGraphConfig = DEFAULT_CONFIG,
) -> ContextViewResult:
    """
    Build the context view around context_ids.

    Stage order (never branches, only stage 6 is optional):
        1. Seeds        - full descendant closure of the context nodes.
        2. Neighborhood - seeds expanded predecessor_radius hops backwards
                          and successor_radius hops forwards.
        3. Closure      - every ancestor of the neighborhood, so the induced
                          graph has no dangling parent references.
        4. Induce       - compound subgraph over the closure (a fresh copy;
                          nothing after this point touches the caller's graph).
        5. Collapse     - fold branches into anchors from select_anchors().
        6. Tidy         - transitive reduction if config.reduce_edges, then
                          single-pass root pruning if
                          config.prune_single_child_parents (context nodes
                          protected).

    Args:
        graph:       Full compound graph (never mutated).
        context_ids: Focus node ids. An empty list yields an empty view.
        config:      ContextGraphConfig with radii, collapse levels and flags.

    Returns:
        ContextViewResult with every intermediate node set and the view.

    Raises:
        CycleError: if reduce_edges is set and the collapsed view's
                    cross-edges contain a cycle.
    """
    context_ids = list(dict.fromkeys(context_ids))
    result = ContextViewResult(context_ids=context_ids)

    # ── 1. Seeds ──────────────────────────────────────────────────────────────
    result.seeds = traverse(graph, context_ids, ["children"])

    # ── 2. Neighborhood ───────────────────────────────────────────────────────
    preds = traverse(graph, result.seeds, ["predecessors"], config.predecessor_radius)
    succs = traverse(graph, result.seeds, ["successors"], config.successor_radius)
    result.neighborhood = preds | succs

    # ── 3. Ancestor closure ───────────────────────────────────────────────────
    result.closure = traverse(graph, result.neighborhood, ["parent"])

    # ── 4. Induce ─────────────────────────────────────────────────────────────
    sub = induce(graph, result.closure)

    # ── 5. Collapse ───────────────────────────────────────────────────────────
    result.anchors = select_anchors(
        sub,
        context_ids,
        config.context_collapse_level,
        config.outside_collapse_level,
    )
    sub = collapse(sub, result.anchors, config.include_parents, config.root_id)

    # ── 6. Reduce and prune ───────────────────────────────────────────────────
    if config.reduce_edges:
        sub = reduce(sub)
    if config.prune_single_child_parents:
        result.pruned = prune_single_child_roots(sub, context_ids)

    result.graph = sub
    logger.info(
        "Context view complete: %d context nodes, %d in closure → %d nodes, %d edges.",
        len(context_ids),
        len(result.closure),
        sub.number_of_nodes(),
        sub.number_of_edges(),
    )
    return result


def build_context_graph(
    graph: CompoundGraph,
    context_ids: Iterable[Hashable],
    config: ContextGraphConfig = DEFAULT_CONFIG,
) -> CompoundGraph:
    """Build the context view around context_ids and return only the view graph."""
    return build_context_view(graph, context_ids, config).graph
