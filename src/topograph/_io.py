import logging
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ._errors import GraphFileError
from ._graph import Graph, Node
from ._result import SortResult

logger = logging.getLogger(__name__)


# =============================================================================
# Graph file schema
# =============================================================================


class NodeEntry(BaseModel):
    """A single ``[nodes.<name>]`` table."""

    model_config = ConfigDict(extra="forbid")

    depends_on: list[str] = Field(default_factory=list)


class GraphFile(BaseModel):
    """Top-level layout of a graph definition file."""

    model_config = ConfigDict(extra="forbid")

    nodes: dict[str, NodeEntry] = Field(default_factory=dict)


# =============================================================================
# Loading
# =============================================================================


def graph_from_dict(contents: dict[str, Any]) -> tuple[Graph[str], dict[str, Node[str]]]:
    """Build a graph from parsed graph file contents.

    Nodes are created in table order, and each node's dependencies are
    declared in the order they are listed.

    Args:
        contents: Parsed TOML contents with a ``nodes`` table.

    Returns:
        The populated graph and a mapping from node name to node.

    Raises:
        GraphFileError: If the contents do not match the schema or a node
            depends on an undeclared node.

    """
    try:
        graph_file = GraphFile.model_validate(contents)
    except ValidationError as e:
        msg = f"Invalid graph definition: {e}"
        raise GraphFileError(msg) from e

    graph: Graph[str] = Graph()
    nodes = {name: graph.create(name) for name in graph_file.nodes}

    for name, entry in graph_file.nodes.items():
        for dep in entry.depends_on:
            if dep not in nodes:
                msg = f"Reference to an undefined node '{dep}' in '{name}'"
                raise GraphFileError(msg)
            nodes[name].depends_on(nodes[dep])

    return graph, nodes


def load_graph_from_toml(input_path: Path | str) -> tuple[Graph[str], dict[str, Node[str]]]:
    """Load a graph definition from a TOML file.

    Args:
        input_path: Path to the graph definition file.

    Returns:
        The populated graph and a mapping from node name to node.

    Raises:
        GraphFileError: If the file is not valid TOML or not a valid graph.

    """
    input_path = Path(input_path)

    with input_path.open("rb") as f:
        try:
            contents = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {input_path}: {e}"
            raise GraphFileError(msg) from e

    graph, nodes = graph_from_dict(contents)
    logger.debug(f"Loaded {len(nodes)} nodes from {input_path}")
    return graph, nodes


# =============================================================================
# Export
# =============================================================================


def result_to_dict(result: SortResult[Any]) -> dict[str, Any]:
    """Convert a sort result into a TOML-serializable dictionary.

    Payloads are written with ``str()``.
    """
    data: dict[str, Any] = {
        "success": result.is_success,
        "order": [str(value) for value in result.values()],
    }
    if result.cycle is not None:
        node, ancestor = result.cycle.values()
        data["cycle"] = {"node": str(node), "ancestor": str(ancestor)}
    return data


def export_result_to_toml(result: SortResult[Any], output_path: Path | str) -> None:
    """Write a sort result to a TOML file.

    Args:
        result: The result returned by ``Graph.sort``.
        output_path: Path to the output TOML file.

    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("wb") as f:
        tomli_w.dump(result_to_dict(result), f)

    logger.debug(f"Exported sort result to {output_path}")
