"""
context_graph.graph - The compound graph model and its domain helpers.

Modules:
    compound    - CompoundGraph: NetworkX DiGraph + parent/child forest.
    hierarchy   - Iterative walks over the forest (depth, subtrees, folding).
    builder     - Build the whole-book graph from book records.
    navigation  - Sibling ordering and next/previous reading order.
"""

from context_graph.graph.compound import CompoundGraph, CycleError, HierarchyCycleError
