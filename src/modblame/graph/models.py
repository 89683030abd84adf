"""Diagram data models produced by the ordering pass and consumed by renderers."""

from dataclasses import dataclass, field
from enum import Enum


class Direction(str, Enum):
    """Flowchart layout directions."""
    LR = "LR"
    RL = "RL"
    TB = "TB"
    BT = "BT"


@dataclass
class EdgeSpec:
    """A dependency edge: from_node depends on to_node."""
    from_node: str
    to_node: str


@dataclass
class NodeSpec:
    """A node declaration and the edges to emit right after it."""
    id: str  # Module identity, used as the display label
    incoming: list[EdgeSpec] = field(default_factory=list)


@dataclass
class GraphSpec:
    """Complete diagram specification in emission order."""
    title: str | None = None
    direction: Direction = Direction.LR
    nodes: list[NodeSpec] = field(default_factory=list)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(node.incoming) for node in self.nodes)

    def add_node(self, node: NodeSpec) -> None:
        """Append a node declaration."""
        self.nodes.append(node)

    def edges(self) -> list[EdgeSpec]:
        """All edges in emission order."""
        return [edge for node in self.nodes for edge in node.incoming]
