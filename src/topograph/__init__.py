"""Topological sorting of dependency graphs with arbitrary payloads."""

__all__ = [
    "ConfigError",
    "CyclicDependency",
    "Graph",
    "GraphFileError",
    "Node",
    "SortResult",
    "TopographError",
    "export_result_to_toml",
    "graph_from_dict",
    "load_graph_from_toml",
    "result_to_dict",
]

from ._errors import ConfigError, GraphFileError, TopographError
from ._graph import Graph, Node
from ._io import export_result_to_toml, graph_from_dict, load_graph_from_toml, result_to_dict
from ._result import CyclicDependency, SortResult
