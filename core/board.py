"""Transport graph model for the Scotland Yard game engine.

The board is represented as a static attributed graph:
- Nodes represent numbered locations on the map
- Edges connect adjacent locations and carry the set of transport modes
  that run between them
- Topology is immutable once built; nothing about the board changes in play
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

import networkx as nx

from .constants import Transport


# Type aliases for clarity
NodeId = int
Route = tuple[NodeId, NodeId, Iterable[Transport]]

TRANSPORTS_ATTR = "transports"


class TransportGraph:
    """The game board as a frozen networkx graph.

    Each edge stores a frozenset of Transport values under the
    ``transports`` attribute. Parallel routes between the same pair of
    locations (e.g. taxi and bus) share one edge.
    """

    def __init__(self, graph: nx.Graph):
        self._graph = graph if nx.is_frozen(graph) else nx.freeze(graph.copy())

    @classmethod
    def from_routes(
        cls,
        routes: Iterable[Route],
        nodes: Iterable[NodeId] = (),
    ) -> TransportGraph:
        """Build a graph from (node_a, node_b, transports) triples.

        Args:
            routes: Edges with the transports that run along them.
            nodes: Extra locations to include even if no route touches them.

        Raises:
            ValueError: If a route is a self-loop or carries no transport.
        """
        graph = nx.Graph()
        graph.add_nodes_from(nodes)
        for node_a, node_b, transports in routes:
            if node_a == node_b:
                raise ValueError(f"Self-loop route not allowed: [{node_a}, {node_b}]")
            modes = frozenset(transports)
            if not modes:
                raise ValueError(f"Route [{node_a}, {node_b}] carries no transport")
            if graph.has_edge(node_a, node_b):
                modes |= graph.edges[node_a, node_b][TRANSPORTS_ATTR]
            graph.add_edge(node_a, node_b, **{TRANSPORTS_ATTR: modes})
        return cls(graph)

    @property
    def nx_graph(self) -> nx.Graph:
        """The underlying (frozen) networkx graph."""
        return self._graph

    @property
    def nodes(self) -> frozenset[NodeId]:
        return frozenset(self._graph.nodes)

    def has_node(self, node_id: NodeId) -> bool:
        return self._graph.has_node(node_id)

    def adjacent_nodes(self, node_id: NodeId) -> frozenset[NodeId]:
        """Get all locations one edge away from a given location."""
        if not self._graph.has_node(node_id):
            return frozenset()
        return frozenset(self._graph.neighbors(node_id))

    def transports_between(self, node_a: NodeId, node_b: NodeId) -> frozenset[Transport]:
        """Get the transports running between two locations (empty if none)."""
        data = self._graph.get_edge_data(node_a, node_b)
        if data is None:
            return frozenset()
        return data[TRANSPORTS_ATTR]

    def routes(self) -> list[tuple[NodeId, NodeId, frozenset[Transport]]]:
        """Return every edge with its transports."""
        return [
            (node_a, node_b, modes)
            for node_a, node_b, modes in self._graph.edges(data=TRANSPORTS_ATTR)
        ]

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def is_connected(self) -> bool:
        """Check if every location is reachable from every other."""
        return self.node_count() > 0 and nx.is_connected(self._graph)

    def __repr__(self) -> str:
        return f"TransportGraph(nodes={self.node_count()}, edges={self.edge_count()})"


@dataclass(frozen=True)
class GameSetup:
    """Immutable configuration of a game: the board and its reveal schedule.

    Attributes:
        graph: The transport graph the game is played on.
        reveal_schedule: One entry per round; True where MrX's destination
            is revealed in the travel log. Its length is the round count.
    """

    graph: TransportGraph
    reveal_schedule: tuple[bool, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "reveal_schedule", tuple(bool(r) for r in self.reveal_schedule))

    @property
    def total_rounds(self) -> int:
        return len(self.reveal_schedule)

    def is_reveal_round(self, log_length: int) -> bool:
        """Check if the log entry appended at ``log_length`` is revealed."""
        return self.reveal_schedule[log_length]
