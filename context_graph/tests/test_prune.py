"""
context_graph/tests/test_prune.py - Tests for single-child root pruning.

Tests verify:
- A parentless node with exactly one child is spliced out in place.
- Protected nodes, nodes with a parent, and nodes with 0 or 2+ children stay.
- Single pass: a chain of wrappers loses one level per call.
- repeat=True flattens the chain completely.
"""

from context_graph.graph.compound import CompoundGraph
from context_graph.ops.prune import prune_single_child_roots


# ── Helpers ───────────────────────────────────────────────────────────────────

def make_wrapper_chain(levels: int) -> CompoundGraph:
    """W0 ⊃ W1 ⊃ ... ⊃ W{levels-1} ⊃ {a, b}."""
    G = CompoundGraph()
    for i in range(1, levels):
        G.set_parent(f"W{i}", f"W{i - 1}")
    G.set_parent("a", f"W{levels - 1}")
    G.set_parent("b", f"W{levels - 1}")
    return G


# ── Single splice ─────────────────────────────────────────────────────────────

def test_single_child_root_removed():
    G = CompoundGraph()
    G.set_parent("child", "wrapper")
    removed = prune_single_child_roots(G, set())
    assert removed == 1
    assert "wrapper" not in G
    assert G.parent("child") is None


def test_wrapper_edges_removed_with_it():
    G = CompoundGraph()
    G.set_parent("child", "wrapper")
    G.add_edge("wrapper", "other")
    prune_single_child_roots(G, set())
    assert G.edges() == []
    assert "other" in G


def test_protected_wrapper_kept():
    G = CompoundGraph()
    G.set_parent("child", "wrapper")
    assert prune_single_child_roots(G, {"wrapper"}) == 0
    assert G.parent("child") == "wrapper"


def test_root_with_two_children_kept():
    G = make_wrapper_chain(1)
    assert prune_single_child_roots(G, set()) == 0
    assert set(G.children("W0")) == {"a", "b"}


def test_childless_root_kept():
    G = CompoundGraph()
    G.add_node("alone")
    assert prune_single_child_roots(G) == 0
    assert "alone" in G


def test_inner_single_child_node_not_pruned():
    """Only parentless nodes are candidates."""
    G = CompoundGraph()
    G.set_parent("mid", "top")
    G.set_parent("x", "top")
    G.set_parent("leaf", "mid")
    assert prune_single_child_roots(G, set()) == 0
    assert G.parent("leaf") == "mid"


# ── Single pass vs repeat ─────────────────────────────────────────────────────

def test_single_pass_removes_one_level():
    G = make_wrapper_chain(3)
    assert prune_single_child_roots(G, set()) == 1
    assert "W0" not in G
    assert G.parent("W1") is None
    assert G.parent("W2") == "W1"


def test_second_call_removes_next_level():
    G = make_wrapper_chain(3)
    prune_single_child_roots(G, set())
    prune_single_child_roots(G, set())
    assert set(G.nodes()) == {"W2", "a", "b"}


def test_repeat_flattens_chain():
    G = make_wrapper_chain(4)
    assert prune_single_child_roots(G, set(), repeat=True) == 3
    assert set(G.nodes()) == {"W3", "a", "b"}
    assert G.roots() == ["W3"]


def test_repeat_stops_at_protected():
    G = make_wrapper_chain(4)
    prune_single_child_roots(G, {"W1"}, repeat=True)
    assert set(G.nodes()) == {"W1", "W2", "W3", "a", "b"}
    assert G.roots() == ["W1"]
