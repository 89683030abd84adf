"""Renderer registry for dependency diagrams."""

import logging
from abc import ABC, abstractmethod

from .models import GraphSpec

logger = logging.getLogger(__name__)


class GraphRenderer(ABC):
    """Abstract base class for graph renderers."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the output format."""
        pass

    @abstractmethod
    def render(self, spec: GraphSpec) -> str:
        """Render graph specification to string format."""
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get file extension for this format."""
        pass


class DiagramGenerator:
    """Dispatches a graph specification to the renderer for a format."""

    def __init__(self):
        self.renderers: dict[str, GraphRenderer] = {}

    def add_renderer(self, renderer: GraphRenderer) -> None:
        """Add a graph renderer."""
        self.renderers[renderer.format_name] = renderer

    def render_graph(self, spec: GraphSpec, format_name: str = "mermaid") -> str:
        """Render graph specification to string.

        Args:
            spec: Graph specification to render
            format_name: Output format (currently only 'mermaid')

        Returns:
            Rendered graph as string

        Raises:
            ValueError: If no renderer is registered for format_name
        """
        if format_name not in self.renderers:
            available = list(self.renderers.keys())
            raise ValueError(f"Unknown format '{format_name}'. Available: {available}")

        renderer = self.renderers[format_name]
        logger.info(f"Rendering graph with {renderer.format_name} renderer")
        return renderer.render(spec)
