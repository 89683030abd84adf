"""Mermaid flowchart renderer for dependency graphs."""

import logging

from .framework import GraphRenderer
from .models import GraphSpec

logger = logging.getLogger(__name__)


class MermaidRenderer(GraphRenderer):
    """Mermaid flowchart renderer.

    Each node is declared with a short generated id (``n0``, ``n1``, ...)
    and its full module name as label, followed immediately by the edges
    pointing at it. Ids are assigned on first reference, so an edge whose
    source has not been declared yet still gets a stable id.
    """

    @property
    def format_name(self) -> str:
        return "mermaid"

    def get_file_extension(self) -> str:
        return ".mmd"

    def render(self, spec: GraphSpec) -> str:
        """Render graph specification as Mermaid flowchart."""
        node_ids: dict[str, str] = {}

        def node_id(module: str) -> str:
            if module not in node_ids:
                node_ids[module] = f"n{len(node_ids)}"
            return node_ids[module]

        lines = [f"graph {spec.direction.value};"]
        if spec.title:
            lines.append(f"    %% {self._escape_comment(spec.title)}")

        for node in spec.nodes:
            lines.append(f'    {node_id(node.id)}["{self._escape_label(node.id)}"];')
            for edge in node.incoming:
                lines.append(f"    {node_id(edge.from_node)} --> {node_id(edge.to_node)};")

        logger.debug(f"Rendered {len(node_ids)} Mermaid nodes")
        return "\n".join(lines) + "\n"

    def _escape_label(self, label: str) -> str:
        """Escape label for a quoted Mermaid node label."""
        return label.replace('"', "#quot;")

    def _escape_comment(self, text: str) -> str:
        return " ".join(text.splitlines())
