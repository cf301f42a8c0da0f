"""
context_graph/graph/builder.py - Whole-graph construction from book records.

A book is a mapping of records (definitions, propositions, comments, and
grouping nodes such as chapters and sections). Each record becomes one node
of a CompoundGraph:

    Hierarchy  - record['chapter'] is the parent id; records without a
                 chapter hang under the ROOT sentinel.
    Cross-edge - ref → record for every id the record references (its own
                 'references' plus, for propositions, every proof line's
                 'references'). Edges point from the prerequisite to the
                 record that uses it.

Every context view is cut from the graph this module builds.
"""

import logging
from typing import Any

from context_graph.config import ROOT_ID
from context_graph.graph.compound import CompoundGraph, HierarchyCycleError

logger = logging.getLogger(__name__)


def node_refs(record: dict) -> list[str]:
    """
    Ids referenced by a book record, deduplicated in first-seen order.

    Only 'Proposition' records contribute proof-line references; proof_lines
    may be a list or an index-keyed mapping of lines.
    """
    refs: list[str] = list(record.get("references") or [])
    nodetype = record.get("nodetype") or {}
    if nodetype.get("primary") == "Proposition":
        lines = record.get("proof_lines") or []
        if isinstance(lines, dict):
            lines = list(lines.values())
        for line in lines:
            # Plain-text proof lines carry no references.
            if isinstance(line, dict):
                refs.extend(line.get("references") or [])
    return list(dict.fromkeys(refs))


def _node_label(record: dict) -> str:
    secondary = (record.get("nodetype") or {}).get("secondary", "")
    label = f"{secondary} {record.get('reference', '')}"
    if record.get("name"):
        label += "\n" + record["name"]
    return label


def build_book_graph(book: dict[str, Any], root_id: str = ROOT_ID) -> CompoundGraph:
    """
    Build the compound graph for a whole book.

    Args:
        book:    Book dict. Only book['nodes'] (id → record) is read.
        root_id: Id of the synthetic root every unchaptered record hangs under.

    Returns:
        G: CompoundGraph with graph attributes label='' and rank_dir='LR',
           a root sentinel node, one node per record and one edge per
           resolved reference.

    Node attributes:
        Every key of the record, plus 'label' = "<secondary type> <reference>"
        with "\\n<name>" appended when the record is named.

    Notes:
        - References to ids not present in the book are skipped (logged at
          DEBUG). They usually point at records deleted since.
        - A chapter id that is not a record, or that would make the hierarchy
          loop, falls back to the root sentinel with a WARNING.
    """
    records: dict[str, dict] = book.get("nodes") or {}

    G = CompoundGraph(label="", rank_dir="LR")
    G.add_node(root_id, label="ROOT")

    # ── Nodes ─────────────────────────────────────────────────────────────────
    for node_id, record in records.items():
        G.add_node(node_id, **{**record, "label": _node_label(record)})

    # ── Reference edges ───────────────────────────────────────────────────────
    edges_added = 0
    for node_id, record in records.items():
        for ref in node_refs(record):
            if ref not in records:
                logger.debug("Skipping dangling reference %r on node %r.", ref, node_id)
                continue
            G.add_edge(ref, node_id, label="")
            edges_added += 1

    # ── Hierarchy ─────────────────────────────────────────────────────────────
    for node_id, record in records.items():
        chapter = record.get("chapter") or root_id
        if chapter != root_id and chapter not in records:
            logger.warning(
                "Node %r names unknown chapter %r; attaching it to %s.",
                node_id,
                chapter,
                root_id,
            )
            chapter = root_id
        try:
            G.set_parent(node_id, chapter)
        except HierarchyCycleError:
            logger.warning(
                "Chapter %r of node %r would loop the hierarchy; attaching it to %s.",
                chapter,
                node_id,
                root_id,
            )
            G.set_parent(node_id, root_id)

    logger.info(
        "Book graph construction complete: %d records, %d reference edges.",
        len(records),
        edges_added,
    )
    return G
