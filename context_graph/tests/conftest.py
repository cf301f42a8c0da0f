"""
context_graph/tests/conftest.py - Shared pytest fixtures for the context_graph test suite.

Fixtures:
    book             - Small hand-written book (three chapters, eleven records).
    book_graph       - CompoundGraph built from `book`.
    synthetic_graph  - Seeded random compound DAG (SEED=41), session-scoped.
"""

import random

import pytest

from context_graph.config import ROOT_ID
from context_graph.graph.builder import build_book_graph
from context_graph.graph.compound import CompoundGraph

SEED = 41


# ── Hand-written book ─────────────────────────────────────────────────────────

def _record(node_id, primary, secondary, reference, chapter="", references=(), name="", proof_lines=()):
    return {
        "id": node_id,
        "reference": reference,
        "name": name,
        "autoSlug": True,
        "nodetype": {"primary": primary, "secondary": secondary},
        "statement": "",
        "references": list(references),
        "chapter": chapter,
        "proof_lines": list(proof_lines),
    }


def _build_book() -> dict:
    """
    Hierarchy:
        ROOT
        ├── ch1           Chapter 1
        │   ├── def-1     Definition 1.1
        │   └── lem-1     Lemma 1.2        refs def-1
        ├── ch2           Chapter 2
        │   ├── sec-2.1   Section 2.1
        │   │   ├── thm-1 Theorem 2.1.1    refs lem-1, proof line refs def-1
        │   │   └── cor-1 Corollary 2.1.2  refs thm-1
        │   └── sec-2.2   Section 2.2
        │       └── rem-1 Note 2.2.1       refs cor-1
        └── ch10          Chapter 10
            └── ex-1      Example 10.1     refs thm-1

    Cross-edges (prerequisite → user):
        def-1→lem-1, lem-1→thm-1, def-1→thm-1, thm-1→cor-1,
        cor-1→rem-1, thm-1→ex-1
    """
    records = [
        _record("ch1", "Group", "Chapter", "1", name="Foundations"),
        _record("def-1", "Definition", "Definition", "1.1", chapter="ch1", name="Group"),
        _record("lem-1", "Proposition", "Lemma", "1.2", chapter="ch1", references=["def-1"]),
        _record("ch2", "Group", "Chapter", "2"),
        _record("sec-2.1", "Group", "Section", "2.1", chapter="ch2"),
        _record(
            "thm-1", "Proposition", "Theorem", "2.1.1", chapter="sec-2.1",
            references=["lem-1"], name="Lagrange",
            proof_lines=[{"references": ["def-1"]}, {"references": []}],
        ),
        _record("cor-1", "Proposition", "Corollary", "2.1.2", chapter="sec-2.1", references=["thm-1"]),
        _record("sec-2.2", "Group", "Section", "2.2", chapter="ch2"),
        _record("rem-1", "Comment", "Note", "2.2.1", chapter="sec-2.2", references=["cor-1"]),
        _record("ch10", "Group", "Chapter", "10"),
        _record("ex-1", "Comment", "Example", "10.1", chapter="ch10", references=["thm-1"]),
    ]
    return {
        "id": "book-1",
        "title": "Test Book",
        "author": "",
        "preface": "",
        "nodes": {r["id"]: r for r in records},
        "slugMap": {},
    }


@pytest.fixture
def book() -> dict:
    """Fresh copy of the hand-written book (tests may mutate it)."""
    return _build_book()


@pytest.fixture
def book_graph(book) -> CompoundGraph:
    return build_book_graph(book)


# ── Synthetic compound DAG ────────────────────────────────────────────────────

def _build_synthetic_graph(n_nodes: int = 120) -> CompoundGraph:
    """
    Seeded random compound graph.

    - Nodes n000..n119, each with a 'rank' attribute.
    - Hierarchy: each node after the first few picks an earlier node as its
      parent with probability 0.8 (ROOT otherwise), so the forest is acyclic.
    - Cross-edges only run from lower to higher index, so they form a DAG.
    """
    rng = random.Random(SEED)
    G = CompoundGraph(label="synthetic")
    G.add_node(ROOT_ID, label="ROOT")

    ids = [f"n{i:03d}" for i in range(n_nodes)]
    for i, n in enumerate(ids):
        G.add_node(n, rank=i)
        if i >= 4 and rng.random() < 0.8:
            G.set_parent(n, ids[rng.randrange(0, i)])
        else:
            G.set_parent(n, ROOT_ID)

    for i, u in enumerate(ids):
        for _ in range(rng.choice([0, 1, 1, 2, 3])):
            j = rng.randrange(i + 1, n_nodes) if i + 1 < n_nodes else None
            if j is not None:
                G.add_edge(u, ids[j], weight=rng.random())
    return G


@pytest.fixture(scope="session")
def synthetic_graph() -> CompoundGraph:
    """Session-scoped; tests must not mutate it (use .copy())."""
    return _build_synthetic_graph()
