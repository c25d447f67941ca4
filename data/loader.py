"""Graph data loader for the Scotland Yard game engine.

Loads and validates transport graphs and reveal schedules from JSON files,
converting them into TransportGraph and GameSetup instances ready for use
in the game.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import networkx as nx

from core.constants import Transport, STANDARD_REVEAL_SCHEDULE
from core.board import GameSetup, NodeId, TransportGraph


logger = logging.getLogger(__name__)


class GraphLoadError(Exception):
    """Raised when graph loading or validation fails."""
    pass


class GraphLoader:
    """Loads and validates transport graph data from JSON files."""

    def __init__(self, strict: bool = True):
        """Initialize the loader.

        Args:
            strict: If True, require the graph to be connected. Set to False
                    for partial or test boards.
        """
        self.strict = strict

    def load_from_file(self, file_path: str | Path) -> TransportGraph:
        """Load a graph from a JSON file.

        Raises:
            GraphLoadError: If the file cannot be read, parsed or validated.
        """
        return self.load_from_dict(self._read_json(file_path))

    def load_setup_from_file(self, file_path: str | Path) -> GameSetup:
        """Load a graph and its reveal schedule from a JSON file."""
        return self.load_setup_from_dict(self._read_json(file_path))

    def load_from_dict(self, data: dict[str, Any]) -> TransportGraph:
        """Load a graph from a dictionary.

        Args:
            data: Dictionary with an 'edges' key and an optional 'nodes' key.

        Returns:
            A TransportGraph with the loaded topology.

        Raises:
            GraphLoadError: If validation fails.
        """
        self._validate_structure(data)

        nodes = [self._parse_node_id(node) for node in data.get("nodes", [])]
        if len(set(nodes)) != len(nodes):
            raise GraphLoadError("Duplicate node IDs in 'nodes'")

        routes = [self._parse_route(edge) for edge in data["edges"]]
        if nodes:
            known = set(nodes)
            for node_a, node_b, _ in routes:
                for node_id in (node_a, node_b):
                    if node_id not in known:
                        raise GraphLoadError(f"Edge references unknown node: {node_id}")

        try:
            graph = TransportGraph.from_routes(routes, nodes=nodes)
        except ValueError as e:
            raise GraphLoadError(str(e))

        self._validate_graph(graph)
        logger.info("Loaded transport graph: %d nodes, %d edges", graph.node_count(), graph.edge_count())
        return graph

    def load_setup_from_dict(self, data: dict[str, Any]) -> GameSetup:
        """Load a graph plus 'reveal_schedule' into a GameSetup.

        The standard 24-round schedule is used when none is given.
        """
        graph = self.load_from_dict(data)
        schedule = data.get("reveal_schedule", STANDARD_REVEAL_SCHEDULE)
        if not isinstance(schedule, (list, tuple)) or not schedule:
            raise GraphLoadError("'reveal_schedule' must be a non-empty list")
        if not all(isinstance(entry, bool) for entry in schedule):
            raise GraphLoadError("'reveal_schedule' entries must be true or false")
        return GameSetup(graph=graph, reveal_schedule=tuple(schedule))

    def _read_json(self, file_path: str | Path) -> dict[str, Any]:
        path = Path(file_path)

        if not path.exists():
            raise GraphLoadError(f"Graph file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise GraphLoadError(f"Invalid JSON in graph file: {e}")
        except UnicodeDecodeError as e:
            raise GraphLoadError(f"Graph file is not valid UTF-8: {e}")
        except IOError as e:
            raise GraphLoadError(f"Error reading graph file: {e}")

    def _validate_structure(self, data: dict[str, Any]) -> None:
        """Validate the basic structure of the graph data."""
        if not isinstance(data, dict):
            raise GraphLoadError("Graph data must be a dictionary")

        if "edges" not in data:
            raise GraphLoadError("Graph data missing 'edges' key")

        if not isinstance(data["edges"], list):
            raise GraphLoadError("'edges' must be a list")

        if not isinstance(data.get("nodes", []), list):
            raise GraphLoadError("'nodes' must be a list")

        if len(data["edges"]) == 0:
            raise GraphLoadError("Graph must have at least one edge")

    def _parse_node_id(self, value: Any) -> NodeId:
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise GraphLoadError(f"Invalid node ID: {value!r}")
        return value

    def _parse_route(self, edge_data: Any) -> tuple[NodeId, NodeId, frozenset[Transport]]:
        """Parse an edge written as [a, b, ["taxi", ...]]."""
        if not isinstance(edge_data, list) or len(edge_data) != 3:
            raise GraphLoadError(f"Edge must be [node_a, node_b, transports]: {edge_data!r}")

        node_a = self._parse_node_id(edge_data[0])
        node_b = self._parse_node_id(edge_data[1])

        names = edge_data[2]
        if isinstance(names, str):
            names = [names]
        if not isinstance(names, list) or not names:
            raise GraphLoadError(f"Edge [{node_a}, {node_b}] must list at least one transport")

        transports = set()
        for name in names:
            try:
                transports.add(Transport(str(name).lower()))
            except ValueError:
                raise GraphLoadError(
                    f"Invalid transport '{name}' on edge [{node_a}, {node_b}]. "
                    f"Valid transports: {', '.join(t.value for t in Transport)}"
                )
        return node_a, node_b, frozenset(transports)

    def _validate_graph(self, graph: TransportGraph) -> None:
        """Validate the complete graph structure."""
        if self.strict and graph.node_count() > 1 and not graph.is_connected():
            reachable = nx.node_connected_component(graph.nx_graph, min(graph.nodes))
            unreachable = graph.nodes - reachable
            raise GraphLoadError(
                f"Graph is not connected. Unreachable nodes: {sorted(unreachable)}"
            )


def load_graph(file_path: str | Path, strict: bool = True) -> TransportGraph:
    """Convenience function to load a graph from a file."""
    loader = GraphLoader(strict=strict)
    return loader.load_from_file(file_path)


def load_setup(file_path: str | Path, strict: bool = True) -> GameSetup:
    """Convenience function to load a GameSetup from a file."""
    loader = GraphLoader(strict=strict)
    return loader.load_setup_from_file(file_path)


def get_graph_stats(graph: TransportGraph) -> dict[str, Any]:
    """Get statistics about a transport graph.

    Returns:
        Dictionary with node/edge counts and edges per transport.
    """
    edges_by_transport = {t.value: 0 for t in Transport}
    for _, _, transports in graph.routes():
        for transport in transports:
            edges_by_transport[transport.value] += 1

    return {
        "num_nodes": graph.node_count(),
        "num_edges": graph.edge_count(),
        "edges_by_transport": edges_by_transport,
        "is_connected": graph.is_connected(),
    }
