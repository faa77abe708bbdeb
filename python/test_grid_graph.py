"""Tests for grid_graph module."""

import pytest

from grid_graph import NodeMap, PositionGraph, find_regions, region_graph
from grid_parser import parse_digit_grid, parse_grid
from grid_types import CARDINAL_DIRECTIONS, Position


class TestNodeMap:
    """Tests for the node index <-> position map."""

    def test_insert_assigns_sequential_indices(self) -> None:
        nodes = NodeMap()
        assert nodes.insert(Position(3, 3)) == 0
        assert nodes.insert(Position(0, 1)) == 1
        assert len(nodes) == 2

    def test_lookup_both_ways(self) -> None:
        nodes = NodeMap()
        nodes.insert(Position(2, 5))
        assert nodes.node_of(Position(2, 5)) == 0
        assert nodes.position_of(0) == Position(2, 5)
        assert Position(2, 5) in nodes

    def test_missing(self) -> None:
        nodes = NodeMap()
        assert nodes.node_of(Position(0, 0)) is None
        assert nodes.position_of(0) is None
        assert nodes.position_of(-1) is None

    def test_double_insert_rejected(self) -> None:
        nodes = NodeMap()
        nodes.insert(Position(1, 1))
        with pytest.raises(ValueError, match="already mapped"):
            nodes.insert(Position(1, 1))

    def test_getitem(self) -> None:
        nodes = NodeMap()
        nodes.insert(Position(4, 2))
        assert nodes[0] == Position(4, 2)
        with pytest.raises(IndexError):
            nodes[1]

    def test_iteration(self) -> None:
        nodes = NodeMap()
        nodes.insert(Position(1, 0))
        nodes.insert(Position(0, 1))
        assert list(nodes) == [(0, Position(1, 0)), (1, Position(0, 1))]


class TestPositionGraph:
    """Tests for the position graph."""

    def test_node_or_insert_reuses_nodes(self) -> None:
        graph = PositionGraph()
        a = graph.node_or_insert(Position(0, 0))
        b = graph.node_or_insert(Position(1, 0))
        assert graph.node_or_insert(Position(0, 0)) == a
        assert a != b
        assert graph.node_count == 2

    def test_undirected_edges_both_ways(self) -> None:
        graph = PositionGraph()
        graph.add_edge(Position(0, 0), Position(1, 0))
        graph.add_edge(Position(1, 0), Position(0, 0))
        assert graph.edge_count == 1
        assert graph.successors(0) == [1]
        assert graph.successors(1) == [0]

    def test_directed_edges_one_way(self) -> None:
        graph = PositionGraph(directed=True)
        graph.add_edge(Position(0, 0), Position(1, 0))
        assert graph.successors(0) == [1]
        assert graph.successors(1) == []

    def test_reachable_undirected(self) -> None:
        """Undirected edges can be followed both ways."""
        graph = PositionGraph()
        graph.add_edge(Position(0, 0), Position(1, 0))
        graph.add_edge(Position(2, 0), Position(1, 0))
        graph.node_or_insert(Position(5, 5))
        assert graph.reachable_from(Position(2, 0)) == {
            Position(0, 0),
            Position(1, 0),
            Position(2, 0),
        }
        assert graph.reachable_from(Position(5, 5)) == {Position(5, 5)}

    def test_directed_duplicate_edges_ignored(self) -> None:
        graph = PositionGraph(directed=True)
        graph.add_edge(Position(0, 0), Position(1, 0))
        graph.add_edge(Position(0, 0), Position(1, 0))
        graph.add_edge(Position(1, 0), Position(0, 0))
        assert graph.edge_count == 2

    def test_reachable_directed(self) -> None:
        """Reachability follows edge direction (uphill trails)."""
        graph = PositionGraph(directed=True)
        graph.add_edge(Position(0, 0), Position(1, 0))
        graph.add_edge(Position(1, 0), Position(2, 0))
        graph.add_edge(Position(3, 0), Position(2, 0))
        assert graph.reachable_from(Position(0, 0)) == {
            Position(0, 0),
            Position(1, 0),
            Position(2, 0),
        }
        assert graph.reachable_from(Position(2, 0)) == {Position(2, 0)}
        assert graph.reachable_from(Position(9, 9)) == set()

    def test_components_require_undirected(self) -> None:
        with pytest.raises(ValueError, match="undirected"):
            PositionGraph(directed=True).connected_components()

    def test_isolated_nodes_are_components(self) -> None:
        graph = PositionGraph()
        graph.node_or_insert(Position(2, 2))
        graph.add_edge(Position(0, 0), Position(0, 1))
        assert graph.connected_components() == [
            [Position(0, 0), Position(0, 1)],
            [Position(2, 2)],
        ]


class TestRegions:
    """Tests for flood-fill region finding."""

    def test_example_regions(self) -> None:
        grid = parse_grid("AAAA\nBBCD\nBBCC\nEEEC\n")
        regions = find_regions(grid)
        sizes = {grid.get(region[0]): len(region) for region in regions}
        assert sizes == {"A": 4, "B": 4, "C": 4, "D": 1, "E": 3}

    def test_same_value_disconnected(self) -> None:
        """Equal cells that only touch diagonally form separate regions."""
        grid = parse_grid("XO\nOX\n")
        regions = find_regions(grid)
        assert len(regions) == 4
        assert all(len(region) == 1 for region in regions)

    def test_region_order_and_sorting(self) -> None:
        grid = parse_grid("ab\nbb\n")
        assert find_regions(grid) == [
            [Position(0, 0)],
            [Position(1, 0), Position(0, 1), Position(1, 1)],
        ]

    def test_region_graph_counts(self) -> None:
        grid = parse_grid("aa\naa\n")
        graph = region_graph(grid, CARDINAL_DIRECTIONS)
        assert graph.node_count == 4
        assert graph.edge_count == 4

    def test_digit_trail_graph(self) -> None:
        """A directed graph of +1 height steps built from a digit grid."""
        grid = parse_digit_grid("0123\n1234\n8765\n9876\n")
        graph = PositionGraph(directed=True)
        for pos, height in grid.items():
            graph.node_or_insert(pos)
            for neighbor_pos, neighbor in grid.neighbors(pos):
                if neighbor == height + 1:
                    graph.add_edge(pos, neighbor_pos)
        peaks = {
            pos for pos in graph.reachable_from(Position(0, 0)) if grid.get(pos) == 9
        }
        assert peaks == {Position(0, 3)}
