"""Pytest configuration and shared fixtures for modblame tests."""

import pytest

from modblame.graph import Graph


def _build_graph(*edges: tuple[str, str]) -> Graph[str]:
    """Graph holding exactly the given edges."""
    graph = Graph()
    for from_node, to_node in edges:
        graph.add(from_node, to_node)
    return graph


@pytest.fixture
def chain_graph():
    """Acyclic chain a -> b -> c."""
    return _build_graph(("a", "b"), ("b", "c"))


@pytest.fixture
def cyclic_graph():
    """Three-module cycle with one module depending on it from outside."""
    return _build_graph(("M1", "M2"), ("M2", "M3"), ("M3", "M1"), ("M4", "M2"))


@pytest.fixture
def go_mod_graph_output():
    """Sample `go mod graph` output with two versions of one module."""
    return (
        "example.com/app example.com/lib@v1.2.0\n"
        "example.com/app golang.org/x/text@v0.3.0\n"
        "example.com/lib@v1.2.0 golang.org/x/text@v0.3.7\n"
        "golang.org/x/text@v0.3.7 golang.org/x/tools@v0.1.0\n"
        "golang.org/x/tools@v0.1.0 golang.org/x/text@v0.3.7\n"
    )


@pytest.fixture
def edge_list_file(tmp_path, go_mod_graph_output):
    """Edge list file holding the sample `go mod graph` output."""
    path = tmp_path / "graph.txt"
    path.write_text(go_mod_graph_output, encoding="utf-8")
    return path


@pytest.fixture
def make_graph():
    """Factory building a graph from (from, to) edge tuples."""
    return _build_graph
