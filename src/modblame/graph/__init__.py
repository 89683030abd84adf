"""Dependency graph engine and diagram generation for modblame.

The :class:`Graph` engine holds the dependency edges and implements the
reachability filters. The ordering pass turns a filtered graph into a
:class:`GraphSpec`, which renderers such as :class:`MermaidRenderer` turn
into diagram text.
"""

from .digraph import Graph
from .framework import DiagramGenerator, GraphRenderer
from .mermaid import MermaidRenderer
from .models import Direction, EdgeSpec, GraphSpec, NodeSpec
from .ordering import build_graph_spec, emission_order

__all__ = [
    "Graph",
    "DiagramGenerator",
    "GraphRenderer",
    "MermaidRenderer",
    "Direction",
    "GraphSpec",
    "NodeSpec",
    "EdgeSpec",
    "build_graph_spec",
    "emission_order",
]
