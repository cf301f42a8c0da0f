"""
context_graph/cli.py - Command-line interface for context views.

Loads a book JSON file (an object whose "nodes" member maps node ids to
records), builds the whole-book compound graph, and then:

Usage:
    python -m context_graph view book.json --context thm-2.3
    python -m context_graph view book.json --context a --context b --predecessor-radius 2
    python -m context_graph stats book.json
    python -m context_graph outline book.json [--node ch-2]

view prints the context view as JSON on stdout; logs go to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace

from context_graph.config import DEFAULT_CONFIG, ContextGraphConfig
from context_graph.graph.builder import build_book_graph
from context_graph.graph.compound import CompoundGraph, CycleError
from context_graph.graph.hierarchy import subgraph_tree
from context_graph.graph.navigation import sort_by_reference
from context_graph.pipeline import build_context_graph


# ── Logging setup ─────────────────────────────────────────────────────────────

def _setup_logging(level: str = "INFO") -> None:
    """Configure root logger with timestamps and level names."""
    numeric = getattr(logging, level.upper(), logging.INFO)
    fmt = "%(asctime)s  %(levelname)-8s  %(name)s - %(message)s"
    datefmt = "%H:%M:%S"
    logging.basicConfig(level=numeric, format=fmt, datefmt=datefmt, stream=sys.stderr)


logger = logging.getLogger("context_graph.cli")


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_book_graph(path: str, root_id: str) -> CompoundGraph | None:
    try:
        with open(path, encoding="utf-8") as fh:
            book = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Could not read book file %s: %s", path, exc)
        return None
    if not isinstance(book, dict):
        logger.error("Book file %s must hold a JSON object, got %s.", path, type(book).__name__)
        return None
    return build_book_graph(book, root_id=root_id)


def _config_from_args(args: argparse.Namespace) -> ContextGraphConfig:
    return replace(
        DEFAULT_CONFIG,
        reduce_edges=not args.no_reduce,
        context_collapse_level=args.context_collapse_level,
        outside_collapse_level=args.outside_collapse_level,
        predecessor_radius=args.predecessor_radius,
        successor_radius=args.successor_radius,
        include_parents=not args.flat,
        prune_single_child_parents=not args.no_prune,
        root_id=args.root_id,
    )


# ── Subcommand: view ──────────────────────────────────────────────────────────

def cmd_view(args: argparse.Namespace) -> int:
    """Build a context view and print it as JSON."""
    _setup_logging(args.log_level)
    config = _config_from_args(args)

    G = _load_book_graph(args.book, config.root_id)
    if G is None:
        return 1

    missing = [n for n in args.context if not G.has_node(n)]
    if missing:
        logger.warning("Context ids not in the book (ignored): %s", ", ".join(missing))

    try:
        view = build_context_graph(G, args.context, config)
    except CycleError as exc:
        logger.error("Cannot reduce edges: %s Re-run with --no-reduce.", exc)
        return 2

    json.dump(view.to_dict(), sys.stdout, indent=args.indent, default=str)
    sys.stdout.write("\n")
    return 0


# ── Subcommand: stats ─────────────────────────────────────────────────────────

def cmd_stats(args: argparse.Namespace) -> int:
    """Print node, edge and top-level counts for the whole-book graph."""
    _setup_logging(args.log_level)
    G = _load_book_graph(args.book, args.root_id)
    if G is None:
        return 1

    print(f"\n  Nodes      : {G.number_of_nodes():>6}")
    print(f"  Edges      : {G.number_of_edges():>6}")
    print(f"  Top-level  : {len(G.children(args.root_id)):>6}")
    try:
        G.topological_sort()
        print("  Acyclic    :    yes")
    except CycleError:
        print("  Acyclic    :     no  (views need --no-reduce)")
    print()
    return 0


# ── Subcommand: outline ───────────────────────────────────────────────────────

def cmd_outline(args: argparse.Namespace) -> int:
    """Print the hierarchy below a node (default: the whole book), in reference order."""
    _setup_logging(args.log_level)
    G = _load_book_graph(args.book, args.root_id)
    if G is None:
        return 1

    top = args.node or args.root_id
    if not G.has_node(top):
        logger.error("Node %r is not in the book.", top)
        return 1

    stack = [(entry, 0) for entry in reversed(_ordered(G, subgraph_tree(G, top)))]
    while stack:
        entry, level = stack.pop()
        label = G.node(entry["id"]).get("label", entry["id"]).replace("\n", " - ")
        print(f"{'  ' * level}{label}")
        stack.extend((child, level + 1) for child in reversed(_ordered(G, entry["children"])))
    return 0


def _ordered(G: CompoundGraph, entries: list[dict]) -> list[dict]:
    by_id = {e["id"]: e for e in entries}
    return [by_id[n] for n in sort_by_reference(G, list(by_id))]


# ── Argument parser ───────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="context-graph",
        description="Context views over a book's compound reference graph.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # View around one theorem with default radii
  python -m context_graph view book.json --context thm-2.3

  # Two hops of prerequisites, no dependents, keep shortcut edges
  python -m context_graph view book.json --context thm-2.3 \\
      --predecessor-radius 2 --successor-radius 0 --no-reduce

  # Whole-book counts and outline
  python -m context_graph stats book.json
  python -m context_graph outline book.json
        """,
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: WARNING)",
    )
    parser.add_argument(
        "--root-id",
        default=DEFAULT_CONFIG.root_id,
        metavar="ID",
        help=f"Id of the synthetic root node (default: {DEFAULT_CONFIG.root_id})",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    # view
    p_view = subparsers.add_parser("view", help="Print the context view around one or more nodes")
    p_view.add_argument("book", metavar="BOOK", help="Path to the book JSON file")
    p_view.add_argument(
        "--context", action="append", required=True, metavar="ID",
        help="Focus node id (repeatable)",
    )
    p_view.add_argument(
        "--predecessor-radius", type=int, default=DEFAULT_CONFIG.predecessor_radius, metavar="N",
        help=f"Reference hops backwards (default: {DEFAULT_CONFIG.predecessor_radius})",
    )
    p_view.add_argument(
        "--successor-radius", type=int, default=DEFAULT_CONFIG.successor_radius, metavar="N",
        help=f"Reference hops forwards (default: {DEFAULT_CONFIG.successor_radius})",
    )
    p_view.add_argument(
        "--context-collapse-level", type=int,
        default=DEFAULT_CONFIG.context_collapse_level, metavar="N",
        help=f"Hierarchy levels kept open below the context (default: {DEFAULT_CONFIG.context_collapse_level})",
    )
    p_view.add_argument(
        "--outside-collapse-level", type=int,
        default=DEFAULT_CONFIG.outside_collapse_level, metavar="N",
        help=f"Extra levels kept open outside the context (default: {DEFAULT_CONFIG.outside_collapse_level})",
    )
    p_view.add_argument("--no-reduce", action="store_true", help="Keep transitively implied edges")
    p_view.add_argument("--no-prune", action="store_true", help="Keep single-child top-level boxes")
    p_view.add_argument("--flat", action="store_true", help="Drop parent links from the view")
    p_view.add_argument("--indent", type=int, default=2, metavar="N", help="JSON indent (default: 2)")
    p_view.set_defaults(func=cmd_view)

    # stats
    p_stats = subparsers.add_parser("stats", help="Show whole-book graph counts")
    p_stats.add_argument("book", metavar="BOOK", help="Path to the book JSON file")
    p_stats.set_defaults(func=cmd_stats)

    # outline
    p_outline = subparsers.add_parser("outline", help="Print the hierarchy in reference order")
    p_outline.add_argument("book", metavar="BOOK", help="Path to the book JSON file")
    p_outline.add_argument("--node", default=None, metavar="ID", help="Print only below this node")
    p_outline.set_defaults(func=cmd_outline)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
