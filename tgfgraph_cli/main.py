"""
tgfgraph CLI

Command-line interface for reading and walking graphs stored as Trivial
Graph Format (TGF) files.

Commands:
    tgfgraph traverse <file> [source]   Walk the graph breadth-first from source
    tgfgraph info <file>                Show node and edge counts
    tgfgraph format <file>              Rewrite the file in canonical order

Usage:
    $ tgfgraph traverse months.tgf
    $ tgfgraph traverse numbers.tgf 3 --values int
    $ tgfgraph format months.tgf --output months.sorted.tgf
"""

import logging
from enum import Enum
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

from tgfgraph import __version__
from tgfgraph.codec import TGFParseError, codec_for, parse, serialize
from tgfgraph.graph import Graph
from tgfgraph.models import MAX_NODE_ID
from tgfgraph.traversal import DEFAULT_SOURCE_ID, bfs

# Initialize Typer app and Rich consoles
app = typer.Typer(
    name="tgfgraph",
    help="tgfgraph: Traverse and inspect graphs stored in Trivial Graph Format",
    add_completion=False,
)
console = Console(highlight=False, soft_wrap=True, emoji=False)
err_console = Console(stderr=True, highlight=False, soft_wrap=True, emoji=False)


class ValueType(str, Enum):
    """Node value types selectable from the command line."""

    STR = "str"
    INT = "int"
    FLOAT = "float"


FileArgument = typer.Argument(
    ...,
    help="Path to the TGF file",
    dir_okay=False,
)

ValuesOption = typer.Option(
    ValueType.STR,
    "--values",
    "-t",
    help="How node values are decoded",
    case_sensitive=False,
)


@app.command()
def traverse(
    file: Path = FileArgument,
    source: int = typer.Argument(
        DEFAULT_SOURCE_ID,
        help="Id of the node to start from",
        min=0,
        max=MAX_NODE_ID,
    ),
    values: ValueType = ValuesOption,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Log debug diagnostics to stderr",
    ),
) -> None:
    """
    Walk a graph breadth-first and print every node reached.

    Each node is printed as its id, its value and the ids it points to.
    A source id that is not in the graph prints nothing.
    """
    _configure_logging(verbose)
    graph = _load_graph(file, values)

    for visit in bfs(graph, source):
        console.print(visit.format(), markup=False)


@app.command()
def info(
    file: Path = FileArgument,
    values: ValueType = ValuesOption,
) -> None:
    """
    Parse a graph and print a summary.
    """
    graph = _load_graph(file, values)
    _print_summary(graph, file)


@app.command("format")
def format_file(
    file: Path = FileArgument,
    values: ValueType = ValuesOption,
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write here instead of standard output",
        dir_okay=False,
    ),
) -> None:
    """
    Re-serialize a graph with nodes and edges in ascending order.

    Duplicate node ids and edges to unknown nodes are dropped on the way.
    """
    graph = _load_graph(file, values)
    codec = codec_for(values.value)

    try:
        text = serialize(graph, codec)
    except ValueError as e:
        _fail(str(e))

    if output is None:
        typer.echo(text, nl=False)
        return

    try:
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        _fail(f"Failed to write graph file: {e}")

    err_console.print(f"[green]✓[/green] Wrote {escape(str(output))}")


# Helper functions


def _fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    raise typer.Exit(1)


def _configure_logging(verbose: bool) -> None:
    """Route library diagnostics to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )


def _load_graph(file: Path, values: ValueType) -> Graph:
    """Read and parse a TGF file, exiting with status 1 on any failure."""
    try:
        text = file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Failed to read graph file: {e}")

    try:
        return parse(text, codec_for(values.value))
    except TGFParseError as e:
        _fail(f"Failed to parse graph: {e}")


def _print_summary(graph: Graph, file: Path) -> None:
    """Print a summary panel for a parsed graph."""
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Label", style="dim")
    table.add_column("Value", style="bold")

    isolated = graph.isolated_nodes()
    table.add_row("File", escape(str(file)))
    table.add_row("Nodes", str(graph.node_count))
    table.add_row("Edges", str(graph.edge_count))
    table.add_row("Isolated nodes", ", ".join(map(str, isolated)) if isolated else "-")

    panel = Panel(table, title="[bold green]✓ Graph Loaded[/bold green]", border_style="green")
    console.print(panel)


# Version command
def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]tgfgraph[/bold] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """
    tgfgraph: Traverse and inspect graphs stored in Trivial Graph Format.
    """


if __name__ == "__main__":
    app()
