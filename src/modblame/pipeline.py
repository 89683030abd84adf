"""Filtering passes applied to a dependency graph before rendering."""

import logging
from collections.abc import Callable, Hashable
from typing import TypeVar

from .config import FilterConfig
from .graph import Graph

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


def substring_predicate(needle: str) -> Callable[[str], bool]:
    """Predicate matching modules whose name contains needle."""
    return lambda module: needle in module


def strip_version(module: str) -> str:
    """Drop the ``@version`` qualifier from a module identity."""
    module, _, _ = module.partition("@")
    return module


def isolate_cycles(graph: Graph[T]) -> Graph[T]:
    """Remove every edge that does not lie on a cycle, in place.

    Repeatedly strips the edges of a root node (nothing depends on it) and,
    when no root is left, the edges of a leaf node (it depends on nothing),
    until neither exists. Every remaining node then has both incoming and
    outgoing edges, which only happens on or between cycles.

    Returns:
        The same graph, for chaining
    """
    while True:
        root = graph.find_root_node()
        if root is not None:
            for dependency in graph.edges_from(root):
                graph.remove(root, dependency)
            continue

        leaf = graph.find_leaf_node()
        if leaf is not None:
            for dependant in graph.edges_to(leaf):
                graph.remove(dependant, leaf)
            continue

        break

    return graph


def _log_size(label: str, graph: Graph) -> None:
    logger.info(f"{label} contains {graph.node_count()} nodes, {graph.edge_count()} edges")


def apply_filters(graph: Graph[str], filters: FilterConfig) -> Graph[str]:
    """Apply the configured filters in a fixed order.

    The order is: from, to, until, cycles only, ignore versions. Steps that
    are not configured are skipped. The input graph is never mutated.
    """
    if filters.from_module:
        logger.info(f"Filtering to modules depended on by {filters.from_module!r}")
        graph = graph.subgraph_from(substring_predicate(filters.from_module))
        _log_size("Subgraph", graph)

    if filters.to_module:
        logger.info(f"Filtering to modules that depend on {filters.to_module!r}")
        graph = graph.subgraph_to(substring_predicate(filters.to_module))
        _log_size("Subgraph", graph)

    if filters.until:
        logger.info(f"Filtering to modules that depend on the first {filters.until!r}")
        graph = graph.subgraph_until(substring_predicate(filters.until))
        _log_size("Subgraph", graph)

    if filters.cycles_only:
        logger.info("Filtering to modules in circular dependencies")
        graph = isolate_cycles(graph.copy())
        _log_size("Subgraph", graph)

    if filters.ignore_versions:
        logger.info("Removing versions from modules")
        graph = graph.map(strip_version)
        _log_size("Graph without versions", graph)

    return graph
