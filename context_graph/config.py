"""
context_graph/config.py - All tunable parameters for context view construction.

No expansion radius or collapse level should be hardcoded in an op module.
Every knob that shapes a context view lives here so that tuning a view is a
single-file diff.
"""

from dataclasses import dataclass

ROOT_ID = "ROOT"
# Synthetic top-level node that domain builders hang parentless records under.
# Collapse always strips it from the view.


@dataclass(frozen=True)
class ContextGraphConfig:
    """
    Immutable configuration for build_context_graph().

    All fields have documented defaults. Override by constructing a new
    ContextGraphConfig, or with dataclasses.replace(DEFAULT_CONFIG, ...).
    """

    # ── Edge reduction ────────────────────────────────────────────────────────
    reduce_edges: bool = True
    # Run transitive reduction on the collapsed view. Requires the view's
    # cross-edges to be acyclic; a cycle raises CycleError.

    # ── Hierarchy collapse ────────────────────────────────────────────────────
    context_collapse_level: int = 1
    # Levels of hierarchy below each context node that stay expanded.
    # 1 = the context node and its direct children are anchors; grandchildren
    # fold into their parent.

    outside_collapse_level: int = 0
    # Extra descent, relative to the shallowest context node, for branches
    # outside the context. 0 = outside branches fold at the same depth as the
    # shallowest context node.

    include_parents: bool = True
    # Keep remapped parent links in the collapsed view. False yields a flat
    # (non-compound) view.

    # ── Neighbourhood expansion ───────────────────────────────────────────────
    predecessor_radius: int = 1
    # Cross-edge hops followed backwards from the context descendants.

    successor_radius: int = 1
    # Cross-edge hops followed forwards from the context descendants.

    # ── Root pruning ──────────────────────────────────────────────────────────
    prune_single_child_parents: bool = True
    # Splice out parentless wrapper nodes that hold exactly one child.
    # Single pass: a chain of wrappers loses one level per call.

    # ── Sentinel ──────────────────────────────────────────────────────────────
    root_id: str = ROOT_ID
    # Id of the synthetic root node removed during collapse.


# Singleton default - import this everywhere instead of constructing anew.
DEFAULT_CONFIG = ContextGraphConfig()
