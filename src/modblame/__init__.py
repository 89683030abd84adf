"""modblame - find out why a module is in your dependency graph.

modblame reads a module dependency edge list (``go mod graph`` by default),
filters it down to the part you care about, and renders it as a Mermaid
flowchart.
"""

__version__ = "0.1.0"
__description__ = "Render and filter module dependency graphs as Mermaid flowcharts"

from modblame.graph import Graph

__all__ = [
    "__version__",
    "__description__",
    "Graph",
]
