"""Directed dependency graph over opaque node identities.

An edge ``(a, b)`` means "a depends on b". At most one edge exists per
ordered pair. Nodes are not stored on their own: a node is a member of the
graph exactly while it is an endpoint of at least one edge.

Adjacency is kept twice, forward (node -> dependencies) and reverse
(node -> dependants), so in-degree and out-degree questions are key lookups
in either direction. The two views are always inverses of each other.

Iteration order of every query is unspecified. Callers that need a stable
order (for example rendering) sort the results themselves.
"""

from collections.abc import Callable, Hashable, Iterator
from typing import Generic, TypeVar

from ..containers import Multimap, Set

T = TypeVar("T", bound=Hashable)
U = TypeVar("U", bound=Hashable)

Predicate = Callable[[T], bool]


class Graph(Generic[T]):
    """Directed graph with forward and reverse adjacency plus a node set.

    ``add`` and ``remove`` mutate in place. Every derivation (``map``,
    ``inverse``, ``subgraph_from``, ``subgraph_to``, ``subgraph_until``,
    ``copy``) returns an independent graph and leaves the receiver untouched.

    Predicates passed to the traversal methods must be pure functions of the
    node identity; mutating the graph from inside a predicate is unsupported.
    """

    __slots__ = ("_forward", "_reverse", "_nodes")

    def __init__(self):
        self._forward: Multimap[T, T] = Multimap()
        self._reverse: Multimap[T, T] = Multimap()
        self._nodes: Set[T] = Set()

    # ---- size ------------------------------------------------------------

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return self._forward.size()

    def any_node(self) -> T | None:
        """Arbitrary member of the node set, or None for an empty graph."""
        return next(iter(self._nodes), None)

    # ---- mutation --------------------------------------------------------

    def add(self, from_node: T, to_node: T) -> None:
        """Add the edge from_node -> to_node; a no-op if it already exists."""
        if self.contains_edge(from_node, to_node):
            return

        self._forward.add(from_node, to_node)
        self._reverse.add(to_node, from_node)
        self._nodes.add(from_node)
        self._nodes.add(to_node)

    def remove(self, from_node: T, to_node: T) -> None:
        """Remove the edge from_node -> to_node if present.

        Endpoints left without any incoming or outgoing edge drop out of the
        node set.
        """
        if not self.contains_edge(from_node, to_node):
            return

        self._forward.remove(from_node, to_node)
        self._reverse.remove(to_node, from_node)
        for node in (from_node, to_node):
            if not self.has_edges_from(node) and not self.has_edges_to(node):
                self._nodes.remove(node)

    # ---- queries ---------------------------------------------------------

    def contains_node(self, node: T) -> bool:
        return node in self._nodes

    def contains_edge(self, from_node: T, to_node: T) -> bool:
        return self._forward.contains(from_node, to_node)

    def has_edges_from(self, node: T) -> bool:
        return self._forward.contains_key(node)

    def has_edges_to(self, node: T) -> bool:
        return self._reverse.contains_key(node)

    def edges_from(self, node: T) -> list[T]:
        """Direct dependencies of node."""
        return self._forward.values(node)

    def edges_to(self, node: T) -> list[T]:
        """Direct dependants of node."""
        return self._reverse.values(node)

    def nodes(self) -> list[T]:
        return self._nodes.to_list()

    def edges(self) -> Iterator[tuple[T, T]]:
        """Iterate every edge as a ``(from_node, to_node)`` pair."""
        return self._forward.pairs()

    def root_nodes(self) -> list[T]:
        """Nodes nothing depends on."""
        return [node for node in self._nodes if not self.has_edges_to(node)]

    def leaf_nodes(self) -> list[T]:
        """Nodes that depend on nothing."""
        return [node for node in self._nodes if not self.has_edges_from(node)]

    def find_root_node(self) -> T | None:
        return self.find_from(lambda node: not self.has_edges_to(node))

    def find_leaf_node(self) -> T | None:
        return self.find_to(lambda node: not self.has_edges_from(node))

    def find_from(self, predicate: Predicate) -> T | None:
        """First node with outgoing edges that satisfies predicate, or None."""
        for node in self._forward.keys():
            if predicate(node):
                return node
        return None

    def find_to(self, predicate: Predicate) -> T | None:
        """First node with incoming edges that satisfies predicate, or None."""
        for node in self._reverse.keys():
            if predicate(node):
                return node
        return None

    # ---- derivations -----------------------------------------------------

    def copy(self) -> "Graph[T]":
        clone: Graph[T] = Graph()
        clone._forward = self._forward.clone()
        clone._reverse = self._reverse.clone()
        clone._nodes = self._nodes.copy()
        return clone

    def map(self, fn: Callable[[T], U]) -> "Graph[U]":
        """Graph with every node identity replaced by ``fn(node)``.

        Every renamed edge is re-added through :meth:`add`, so nodes that
        collapse onto the same identity have their edges merged and duplicate
        edges disappear. Two nodes joined by an edge that map to the same
        identity produce a self-loop.
        """
        mapped: Graph[U] = Graph()
        for from_node, to_node in self._forward.pairs():
            mapped.add(fn(from_node), fn(to_node))
        return mapped

    def inverse(self) -> "Graph[T]":
        """Graph with every edge reversed.

        The adjacency structures are copied, not shared, so the result may be
        mutated freely.
        """
        inverse: Graph[T] = Graph()
        inverse._forward = self._reverse.clone()
        inverse._reverse = self._forward.clone()
        inverse._nodes = self._nodes.copy()
        return inverse

    def subgraph_from(self, predicate: Predicate) -> "Graph[T]":
        """Everything reachable from the nodes that satisfy predicate.

        Seeds are the nodes with outgoing edges that satisfy predicate. From
        each seed every outgoing edge is followed depth first and added to the
        result. Nodes are expanded at most once, so cycles terminate and each
        edge is added once even when reachable along several paths.
        """
        subgraph: Graph[T] = Graph()
        visited: Set[T] = Set()

        for seed in self._forward.keys():
            if predicate(seed):
                self._walk_from(seed, subgraph, visited)

        return subgraph

    def subgraph_to(self, predicate: Predicate) -> "Graph[T]":
        """Every node that satisfies predicate plus every node with a path to one."""
        return self.inverse().subgraph_from(predicate).inverse()

    def subgraph_until(self, predicate: Predicate) -> "Graph[T]":
        """Paths from the root nodes down to the first nodes that satisfy predicate.

        The walk starts at every root node and follows outgoing edges, but
        does not expand past a node that satisfies predicate. An edge
        ``(a, b)`` reached this way is kept when b satisfies predicate or when
        some kept edge leaves b; branches that never reach a match are
        dropped even though they were walked.

        A root node that itself satisfies predicate is not expanded. A graph
        without root nodes (every node on or below a cycle) yields an empty
        result.
        """
        walked: Graph[T] = Graph()
        visited: Set[T] = Set()

        stack = [root for root in self.root_nodes() if not predicate(root)]
        while stack:
            node = stack.pop()
            if node in visited:
                continue
            visited.add(node)

            for dependency in self._forward.values(node):
                walked.add(node, dependency)
                if not predicate(dependency) and dependency not in visited:
                    stack.append(dependency)

        # Matches are never expanded, so they are exactly the sinks of the
        # walk that the backward pass starts from.
        return walked.subgraph_to(predicate)

    def _walk_from(self, seed: T, dst: "Graph[T]", visited: Set[T]) -> None:
        stack = [seed]
        while stack:
            node = stack.pop()
            if node in visited:
                continue
            visited.add(node)

            for dependency in self._forward.values(node):
                dst.add(node, dependency)
                if dependency not in visited:
                    stack.append(dependency)

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
