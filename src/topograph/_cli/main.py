import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from topograph._errors import ConfigError, TopographError
from topograph._graph import Graph, Node
from topograph._io import export_result_to_toml, load_graph_from_toml
from topograph._result import CyclicDependency

from .config import TopographConfig, get_config

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Topological sorting of dependency graphs."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> TopographConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _resolve_graph_path(graph: Path | None) -> Path:
    """Use the given graph path, or fall back to [tool.topograph].graph."""
    if graph is not None:
        return graph

    config = _load_config()
    if config.graph is None:
        err_console.print("[red]Error: No graph file given and no \\[tool.topograph].graph configured[/red]")
        raise typer.Exit(code=1)

    logger.debug(f"Using graph file from configuration: {config.graph}")
    return config.graph


def _load_graph(path: Path) -> tuple[Graph[str], dict[str, Node[str]]]:
    err_console.print(f"[cyan]Loading graph from:[/cyan] {path}")
    if not path.exists():
        err_console.print(f"[red]Error: Graph file not found: {path}[/red]")
        raise typer.Exit(code=1)

    try:
        return load_graph_from_toml(path)
    except TopographError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _cycle_message(cycle: CyclicDependency[str] | None) -> str:
    if cycle is None:
        return "Cyclic dependency"
    node, ancestor = cycle.values()
    return f"Cyclic dependency between {node} and {ancestor}"


@app.command()
def demo() -> None:
    """Sort a small example graph and print the order."""
    graph: Graph[str] = Graph()

    a = graph.create("a")
    b = graph.create("b")
    c = graph.create("c")
    d = graph.create("d")
    e = graph.create("e")

    b.depends_on(a)
    b.depends_on(c)
    d.depends_on(b)
    e.depends_on(c)

    result = graph.sort()

    if result.is_success:
        out_console.print(f"Sorting successful! Order: {', '.join(result.values())}")
    else:
        out_console.print(f"Failed to sort! {_cycle_message(result.cycle)}")
        raise typer.Exit(code=1)


@app.command()
def sort(
    graph: Annotated[
        Path | None,
        typer.Argument(help="Path to graph definition TOML file (defaults to the graph path configured in pyproject.toml)"),
    ] = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ] = None,
    plain: Annotated[
        bool,
        typer.Option("--plain", help="Print one node name per line instead of a table"),
    ] = False,
) -> None:
    """Sort a graph file so that every node follows its dependencies."""
    err_console.print()

    graph_path = _resolve_graph_path(graph)
    dependency_graph, nodes = _load_graph(graph_path)
    err_console.print(f"[cyan]Sorting {len(nodes)} nodes...[/cyan]")
    result = dependency_graph.sort()

    if output is None:
        output = _load_config().output

    if output is not None:
        err_console.print(f"[cyan]Exporting result to:[/cyan] {output}")
        export_result_to_toml(result, output)

    if not result.is_success:
        err_console.print(f"[red]✗ Failed to sort! {escape(_cycle_message(result.cycle))}[/red]")
        raise typer.Exit(code=1)

    if plain:
        for value in result.values():
            out_console.print(value, markup=False, highlight=False)
    else:
        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Node")
        for position, value in enumerate(result.values(), start=1):
            table.add_row(str(position), escape(value))
        out_console.print(table)

    err_console.print()
    err_console.print("[green]✓ Sorting successful[/green]")
    err_console.print()


@app.command()
def check(
    graph: Annotated[
        Path | None,
        typer.Argument(help="Path to graph definition TOML file (defaults to the graph path configured in pyproject.toml)"),
    ] = None,
) -> None:
    """Check that a graph file is valid and free of cycles."""
    err_console.print()

    graph_path = _resolve_graph_path(graph)
    dependency_graph, nodes = _load_graph(graph_path)
    n_edges = sum(len(node.dependencies) for node in nodes.values())
    n_roots = sum(1 for node in nodes.values() if not node.dependencies)
    result = dependency_graph.sort()

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Nodes", justify="right", style="yellow")
    table.add_column("Edges", justify="right", style="yellow")
    table.add_column("Without dependencies", justify="right", style="green")
    table.add_row(str(len(nodes)), str(n_edges), str(n_roots))

    err_console.print(
        Panel(
            table,
            title=f"[bold]Graph: {escape(graph_path.name)}[/bold]",
            border_style="cyan",
        ),
    )
    err_console.print()

    if not result.is_success:
        err_console.print(f"[red]✗ {escape(_cycle_message(result.cycle))}[/red]")
        err_console.print()
        raise typer.Exit(code=1)

    err_console.print("[green]✓ Graph is acyclic[/green]")
    err_console.print()


def main() -> None:
    app()
