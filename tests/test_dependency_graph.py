"""Tests for graph assembly."""

import networkx as nx
import pytest

from reviewgraph.analyzers import DependencyGraph, EdgeKind, build_dependency_graph


class TestDependencyGraph:
    """Test DependencyGraph assembly."""

    def test_adjacency_keeps_duplicate_pairs_in_edge_order(self, make_edge):
        edges = [
            make_edge("A", "B", kind=EdgeKind.IMPORT),
            make_edge("A", "C"),
            make_edge("A", "B", kind=EdgeKind.EXTENDS),
        ]

        graph = DependencyGraph(edges)

        assert graph.adjacency == {"A": ("B", "C", "B")}
        assert graph.successors("A") == ("B", "C", "B")
        assert len(graph) == 3

    def test_sources_ordered_by_first_appearance_as_source(self, make_edge):
        graph = DependencyGraph([make_edge("B", "A"), make_edge("A", "C"), make_edge("B", "C")])

        assert list(graph.adjacency) == ["B", "A"]

    def test_affected_files_index_inverts_edges(self, make_edge):
        graph = DependencyGraph([make_edge("A", "C"), make_edge("B", "C"), make_edge("A", "C")])

        assert graph.affected_files == {"C": ("A", "B", "A")}
        assert graph.dependents("C") == ("A", "B", "A")
        assert graph.dependents("A") == ()

    def test_networkx_view_has_one_edge_per_dependency(self, make_edge):
        graph = DependencyGraph([make_edge("A", "B"), make_edge("A", "B", kind=EdgeKind.IMPORT)])

        assert graph.graph.number_of_edges("A", "B") == 2
        assert graph.files == ["A", "B"]

    def test_networkx_view_is_frozen(self, make_edge):
        graph = DependencyGraph([make_edge("A", "B")])

        with pytest.raises(nx.NetworkXError):
            graph.graph.add_edge("B", "A")

    def test_edges_cannot_be_mutated(self, make_edge):
        graph = DependencyGraph([make_edge("A", "B")])

        with pytest.raises(AttributeError):
            graph.edges[0].target = "C"

    def test_build_concatenates_groups_in_order(self, make_edge):
        graph = build_dependency_graph([make_edge("A", "B")], [], [make_edge("C", "D")])

        assert [(e.source, e.target) for e in graph.edges] == [("A", "B"), ("C", "D")]

    def test_empty_graph(self):
        graph = build_dependency_graph()

        assert graph.adjacency == {}
        assert graph.affected_files == {}
        assert graph.files == []
