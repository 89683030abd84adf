"""Deterministic node and edge emission order for diagram rendering.

Flowchart layouts read best when a node is declared before the edges that
point at it and when declarations flow from roots to leaves. The ordering
pass repeatedly takes the current root nodes (modules nothing else depends
on), declares them, records each of their outgoing edges under the
dependency it points at, and removes those edges. A dependency left without
any edge is declared immediately as a leaf. When only cycles remain there is
no root, so the smallest node that still has outgoing edges is processed as
a pseudo-root to make progress; it is declared once its last incoming edge
has been removed, or right away when that edge was a self-loop.

Roots and edges are taken in sorted order, so node identities must be
mutually orderable.
"""

import logging
from collections.abc import Hashable
from typing import TypeVar

from ..containers import Multimap
from .digraph import Graph
from .models import Direction, EdgeSpec, GraphSpec, NodeSpec

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


def emission_order(graph: Graph[T]) -> tuple[list[T], Multimap[T, T]]:
    """Compute the declaration order and the incoming edges of each node.

    Works on a copy; the caller's graph is left intact.

    Returns:
        Nodes in declaration order, and a multimap from each node to the
        nodes that depend on it
    """
    remaining = graph.copy()
    nodes: list[T] = []
    edges_by_to: Multimap[T, T] = Multimap()

    while remaining.node_count() > 0:
        roots = sorted(remaining.root_nodes())
        if roots:
            for root in roots:
                nodes.append(root)
                _consume_edges_from(remaining, root, nodes, edges_by_to)
            continue

        pseudo_root = min(node for node in remaining.nodes() if remaining.has_edges_from(node))
        logger.debug(f"No root nodes left, breaking cycle at {pseudo_root!r}")
        _consume_edges_from(remaining, pseudo_root, nodes, edges_by_to)
        if not remaining.contains_node(pseudo_root):
            # its only incoming edge was a self-loop
            nodes.append(pseudo_root)

    return nodes, edges_by_to


def _consume_edges_from(
    remaining: Graph[T],
    module: T,
    nodes: list[T],
    edges_by_to: Multimap[T, T],
) -> None:
    for dependency in sorted(remaining.edges_from(module)):
        edges_by_to.add(dependency, module)
        remaining.remove(module, dependency)
        if dependency != module and not remaining.contains_node(dependency):
            # leaf node, declare it immediately
            nodes.append(dependency)


def build_graph_spec(
    graph: Graph[str],
    title: str | None = None,
    direction: Direction = Direction.LR,
) -> GraphSpec:
    """Organize graph nodes and edges into a renderable specification."""
    nodes, edges_by_to = emission_order(graph)

    spec = GraphSpec(title=title, direction=direction)
    for node in nodes:
        incoming = [EdgeSpec(from_node=source, to_node=node) for source in sorted(edges_by_to.values(node))]
        spec.add_node(NodeSpec(id=node, incoming=incoming))

    logger.debug(f"Organized {spec.node_count} nodes and {spec.edge_count} edges")
    return spec
