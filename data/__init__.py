"""Data loading utilities for the Scotland Yard game engine."""

from .loader import (
    GraphLoader,
    GraphLoadError,
    load_graph,
    load_setup,
    get_graph_stats,
)

__all__ = [
    "GraphLoader",
    "GraphLoadError",
    "load_graph",
    "load_setup",
    "get_graph_stats",
]
