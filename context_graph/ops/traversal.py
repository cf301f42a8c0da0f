"""
context_graph/ops/traversal.py - Bounded multi-relation reachability.

Breadth-first expansion from a seed set, where one "step" follows every
requested relation from every frontier node at once. The four relations
mix the two layers of a compound graph:

    parent        - hierarchy, upward (zero or one neighbour)
    children      - hierarchy, downward
    predecessors  - cross-edges, backward
    successors    - cross-edges, forward

Every later stage of the context pipeline is phrased in terms of traverse():
descendant closure, neighbourhood radius, ancestor closure, and the
exact-depth sweeps of anchor selection.
"""

import logging
from typing import Hashable, Iterable, Optional

from context_graph.graph.compound import CompoundGraph

logger = logging.getLogger(__name__)

RELATIONS = ("parent", "children", "predecessors", "successors")


def _neighbours(graph: CompoundGraph, n: Hashable, relation: str) -> list:
    if relation == "parent":
        p = graph.parent(n)
        return [] if p is None else [p]
    return getattr(graph, relation)(n)


def traverse(
    graph: CompoundGraph,
    seeds: Iterable[Hashable],
    relations: Iterable[str],
    depth: Optional[int] = None,
    exact: bool = False,
) -> set:
    """
    Return the nodes reachable from seeds within depth steps.

    Args:
        graph:     CompoundGraph to walk.
        seeds:     Starting node ids. Ids absent from graph are kept in the
                   result but have no neighbours. This is intentional: the
                   pipeline drops them at induce().
        relations: Relation names from RELATIONS, queried in the given order.
        depth:     Maximum number of steps. None (or any negative value)
                   expands until the frontier is empty. 0 returns the seeds.
        exact:     If True, return only the frontier discovered at exactly
                   `depth` steps instead of everything visited. The result is
                   empty when the frontier dies out before that depth (and
                   always empty for an unbounded depth).

    Returns:
        Set of node ids.

    Raises:
        ValueError: if a relation name is not in RELATIONS.

    Complexity:
        O(V + E) over the part of the graph actually reached.
    """
    relations = tuple(relations)
    unknown = [r for r in relations if r not in RELATIONS]
    if unknown:
        raise ValueError(f"Unknown traversal relation(s) {unknown}; expected one of {RELATIONS}.")

    frontier = list(dict.fromkeys(seeds))
    if not frontier:
        return set()
    visited = set(frontier)
    if depth == 0:
        return visited

    unbounded = depth is None or depth < 0
    step = 0
    while frontier and (unbounded or step < depth):
        step += 1
        nxt: list = []
        for n in frontier:
            for relation in relations:
                for m in _neighbours(graph, n, relation):
                    if m not in visited:
                        visited.add(m)
                        nxt.append(m)
        frontier = nxt

    if exact:
        return set(frontier) if not unbounded and step == depth else set()
    return visited
