"""
context_graph/tests/test_reduction.py - Tests for transitive reduction.

Tests verify:
- Shortcut edges implied by longer paths are removed; others kept.
- Diamond with a shortcut: only the shortcut goes.
- Idempotence, and agreement with networkx.transitive_reduction on a
  random DAG.
- Nodes, attributes and parent links pass through unchanged.
- A cycle raises CycleError instead of returning a partial result.
"""

import networkx as nx
import pytest

from context_graph.graph.compound import CompoundGraph, CycleError
from context_graph.ops.reduction import reduce


# ── Helpers ───────────────────────────────────────────────────────────────────

def make_graph(edges, label="test") -> CompoundGraph:
    G = CompoundGraph(label=label)
    for u, v in edges:
        G.add_edge(u, v)
    return G


# ── Edge removal ──────────────────────────────────────────────────────────────

def test_simple_transitive_edge_removed():
    G = CompoundGraph()
    G.add_edge("A", "B", weight=1)
    G.add_edge("B", "C", weight=2)
    G.add_edge("A", "C", weight=3)
    result = reduce(G)
    assert result.has_edge("A", "B")
    assert result.has_edge("B", "C")
    assert not result.has_edge("A", "C")


def test_independent_edges_preserved():
    result = reduce(make_graph([("A", "B"), ("A", "C")]))
    assert set(result.edges()) == {("A", "B"), ("A", "C")}


def test_diamond_with_shortcut():
    """A→B→D, A→C→D, A→D: only A→D is removed."""
    G = make_graph([("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"), ("A", "D")])
    result = reduce(G)
    assert set(result.edges()) == {("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")}


def test_long_chain_with_many_shortcuts():
    chain = [("A", "B"), ("B", "C"), ("C", "D"), ("D", "E")]
    shortcuts = [("A", "C"), ("A", "D"), ("B", "D"), ("B", "E")]
    result = reduce(make_graph(chain + shortcuts))
    assert set(result.edges()) == set(chain)


def test_empty_graph():
    result = reduce(CompoundGraph())
    assert result.nodes() == []
    assert result.edges() == []


def test_single_node():
    G = CompoundGraph()
    G.add_node("A")
    result = reduce(G)
    assert result.nodes() == ["A"]
    assert result.edges() == []


# ── Properties ────────────────────────────────────────────────────────────────

def test_idempotent(synthetic_graph):
    once = reduce(synthetic_graph)
    twice = reduce(once)
    assert set(twice.edges()) == set(once.edges())


def test_matches_networkx_transitive_reduction(synthetic_graph):
    D = nx.DiGraph()
    D.add_nodes_from(synthetic_graph.nodes())
    D.add_edges_from(synthetic_graph.edges())
    expected = set(nx.transitive_reduction(D).edges())
    assert set(reduce(synthetic_graph).edges()) == expected


def test_reachability_preserved(synthetic_graph):
    reduced = reduce(synthetic_graph)
    before = nx.DiGraph(synthetic_graph.edges())
    after = nx.DiGraph(reduced.edges())
    for n in ["n000", "n005", "n020"]:
        if n in before:
            assert nx.descendants(before, n) == nx.descendants(after, n)


# ── Pass-through ──────────────────────────────────────────────────────────────

def test_node_and_edge_attributes_preserved():
    G = CompoundGraph()
    G.add_node("A", label="A")
    G.add_node("B", label="B")
    G.add_edge("A", "B", weight=1)
    result = reduce(G)
    assert result.node("A") == {"label": "A"}
    assert result.node("B") == {"label": "B"}
    assert result.edge("A", "B") == {"weight": 1}


def test_parent_links_preserved():
    G = CompoundGraph()
    G.set_parent("B", "A")
    result = reduce(G)
    assert result.parent("B") == "A"


def test_graph_attributes_preserved():
    result = reduce(make_graph([("A", "B")], label="kept"))
    assert result.graph == {"label": "kept"}


def test_source_not_mutated():
    G = make_graph([("A", "B"), ("B", "C"), ("A", "C")])
    reduce(G)
    assert G.has_edge("A", "C")


# ── Cycles ────────────────────────────────────────────────────────────────────

def test_cycle_raises():
    G = make_graph([("A", "B"), ("B", "C"), ("C", "A")])
    with pytest.raises(CycleError):
        reduce(G)


def test_self_loop_raises():
    G = make_graph([("A", "A")])
    with pytest.raises(CycleError):
        reduce(G)


def test_hierarchy_does_not_count_as_cycle():
    """An edge from child to parent is fine: parent links are not cross-edges."""
    G = CompoundGraph()
    G.set_parent("child", "parent")
    G.add_edge("child", "parent")
    result = reduce(G)
    assert result.edges() == [("child", "parent")]
