"""
context_graph - Context views over compound (hierarchical + directed) graphs.

Given a large graph whose nodes also nest inside one another (chapters hold
sections, sections hold theorems, theorems reference definitions), build a
small renderable view around a few focus nodes: their contents, a bounded
neighbourhood of references, distant branches folded into single boxes, and
shortcut edges removed.

Entry point: context_graph.pipeline.build_context_graph
"""

__version__ = "0.1.0"
