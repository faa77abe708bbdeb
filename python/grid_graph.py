"""
Graphs over grid positions.

Nodes are integer ids (0, 1, 2, ...) in a networkx graph, and a NodeMap
translates between node ids and grid positions.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

import networkx as nx  # type: ignore[import-untyped]

from grid import Grid
from grid_types import CARDINAL_DIRECTIONS, Direction, Position

logger = logging.getLogger(__name__)


class NodeMap:
    """Bidirectional node id <-> position mapping."""

    def __init__(self) -> None:
        self._positions: list[Position] = []
        self._nodes: dict[Position, int] = {}

    def insert(self, pos: Position) -> int:
        """Assign the next node id to pos. pos must not be mapped yet."""
        if pos in self._nodes:
            raise ValueError(f"Position already mapped: {pos} -> node {self._nodes[pos]}")
        node = len(self._positions)
        self._positions.append(pos)
        self._nodes[pos] = node
        return node

    def node_of(self, pos: Position) -> int | None:
        return self._nodes.get(pos)

    def position_of(self, node: int) -> Position | None:
        if 0 <= node < len(self._positions):
            return self._positions[node]
        return None

    def __getitem__(self, node: int) -> Position:
        """Position of a known node; IndexError otherwise."""
        return self._positions[node]

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, pos: object) -> bool:
        return pos in self._nodes

    def __iter__(self) -> Iterator[tuple[int, Position]]:
        return iter(enumerate(self._positions))


class PositionGraph:
    """
    Graph whose nodes are grid positions.

    Backed by ``networkx.Graph`` or ``networkx.DiGraph`` keyed by NodeMap ids.
    Parallel edges are ignored.
    """

    def __init__(self, directed: bool = False) -> None:
        self.directed = directed
        self.nodes = NodeMap()
        self._graph = nx.DiGraph() if directed else nx.Graph()

    def node_or_insert(self, pos: Position) -> int:
        """Node id for pos, adding a fresh node if pos is new."""
        node = self.nodes.node_of(pos)
        if node is None:
            node = self.nodes.insert(pos)
            self._graph.add_node(node)
        return node

    def add_edge(self, a: Position, b: Position) -> None:
        self._graph.add_edge(self.node_or_insert(a), self.node_or_insert(b))

    def successors(self, node: int) -> list[int]:
        if self.directed:
            return list(self._graph.successors(node))
        return list(self._graph.neighbors(node))

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def reachable_from(self, pos: Position) -> set[Position]:
        """Positions reachable from pos along edges, pos included when it is a node."""
        start = self.nodes.node_of(pos)
        if start is None:
            return set()
        reached = nx.descendants(self._graph, start) | {start}
        return {self.nodes[node] for node in reached}

    def connected_components(self) -> list[list[Position]]:
        """
        Components of an undirected graph.

        Each component is sorted row-major; components are ordered by their
        first position.

        Raises:
            ValueError: For directed graphs
        """
        if self.directed:
            raise ValueError("connected_components requires an undirected graph")

        components = [
            sorted((self.nodes[node] for node in members), key=_row_major)
            for members in nx.connected_components(self._graph)
        ]
        components.sort(key=lambda comp: _row_major(comp[0]))
        return components


def _row_major(pos: Position) -> tuple[int, int]:
    return pos.to_shape()


def region_graph(
    grid: Grid,
    directions: Iterable[Direction] = CARDINAL_DIRECTIONS,
) -> PositionGraph:
    """Undirected graph linking neighbouring cells that hold equal values."""
    dirs = tuple(directions)
    graph = PositionGraph()

    for pos, cell in grid.items():
        graph.node_or_insert(pos)
        for neighbor_pos, neighbor in grid.neighbors(pos, dirs):
            if neighbor == cell:
                graph.add_edge(pos, neighbor_pos)

    logger.debug("region_graph: %d nodes, %d edges", graph.node_count, graph.edge_count)
    return graph


def find_regions(grid: Grid) -> list[list[Position]]:
    """Flood-fill regions: maximal orthogonally connected groups of equal cells."""
    return region_graph(grid).connected_components()
