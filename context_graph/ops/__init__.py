"""
context_graph.ops - The stages of the context view pipeline.

Modules:
    traversal  - Bounded multi-relation BFS (traverse).
    induce     - Compound subgraph induction (induce).
    collapse   - Union-find hierarchy collapse with edge rewiring (collapse).
    reduction  - Transitive reduction over a DAG (reduce).
    anchors    - Collapse boundary selection (select_anchors).
    prune      - Single-child root pruning (prune_single_child_roots).

Every op except prune returns a new graph and leaves its input untouched.
"""

from context_graph.ops.collapse import collapse
from context_graph.ops.induce import induce
from context_graph.ops.reduction import reduce
from context_graph.ops.traversal import traverse
