"""CLI interface for modblame using Typer framework."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from modblame import __description__, __version__
from modblame.config import LogLevel, ModblameConfig, load_config
from modblame.graph import DiagramGenerator, Direction, Graph, MermaidRenderer, build_graph_spec
from modblame.pipeline import apply_filters, isolate_cycles
from modblame.source import SourceError, read_dependency_graph, read_edge_list_file

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="modblame",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

# Diagram text goes to stdout, so progress and errors go to stderr
console = Console(stderr=True)
out_console = Console()


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        out_console.print(f"modblame version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """modblame - render module dependency graphs as Mermaid flowcharts."""


def _configure_logging(level: LogLevel) -> None:
    package_logger = logging.getLogger("modblame")
    package_logger.handlers.clear()
    package_logger.addHandler(RichHandler(console=console, show_time=False, show_path=False))
    package_logger.setLevel(level.to_logging_level())


def _resolve_config(
    config_path: Path | None,
    from_module: str | None,
    to_module: str | None,
    until: str | None,
    cycles_only: bool,
    ignore_versions: bool,
    log_level: LogLevel | None,
) -> ModblameConfig:
    """Load configuration and overlay command-line flags.

    Raises:
        typer.Exit: If the configuration file is missing or invalid
    """
    try:
        config = load_config(config_path)
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    filters = config.filters
    if from_module is not None:
        filters.from_module = from_module
    if to_module is not None:
        filters.to_module = to_module
    if until is not None:
        filters.until = until
    if cycles_only:
        filters.cycles_only = True
    if ignore_versions:
        filters.ignore_versions = True
    if log_level is not None:
        config.logging.level = log_level

    return config


def _load_filtered_graph(config: ModblameConfig, input_path: str | None) -> Graph[str]:
    """Read the dependency graph and apply the configured filters.

    Raises:
        typer.Exit: If the graph cannot be read
    """
    try:
        if input_path is not None:
            logger.info(f"Reading edge list from {input_path}")
            graph = read_edge_list_file(input_path)
        else:
            logger.info("Reading dependency graph...")
            graph = read_dependency_graph(config.source.command, config.source.workdir)
    except SourceError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    logger.info(f"Dependency graph contains {graph.node_count()} nodes, {graph.edge_count()} edges")
    return apply_filters(graph, config.filters)


FromOption = Annotated[
    Optional[str],
    typer.Option("--from", help="Include the subgraph depended on by modules containing this text")
]
ToOption = Annotated[
    Optional[str],
    typer.Option("--to", help="Include the subgraph that depends on modules containing this text")
]
UntilOption = Annotated[
    Optional[str],
    typer.Option("--until", help="Include the subgraph from the root modules until a module containing this text")
]
CyclesOnlyOption = Annotated[
    bool,
    typer.Option("--cycles-only", help="Only include modules that are part of a cycle")
]
IgnoreVersionsOption = Annotated[
    bool,
    typer.Option("--ignore-versions", help="Ignore module versions, merging versions of the same module")
]
InputOption = Annotated[
    Optional[str],
    typer.Option("--input", "-i", help="Read the edge list from this file ('-' for stdin) instead of running the source command")
]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Configuration file path (default: search for .modblame.json)")
]
LogLevelOption = Annotated[
    Optional[LogLevel],
    typer.Option("--log-level", help="Logging level (default: info)")
]


@app.command()
def graph(
    from_module: FromOption = None,
    to_module: ToOption = None,
    until: UntilOption = None,
    cycles_only: CyclesOnlyOption = False,
    ignore_versions: IgnoreVersionsOption = False,
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Write output to this file instead of stdout")
    ] = None,
    input_path: InputOption = None,
    direction: Annotated[
        Optional[Direction],
        typer.Option("--direction", "-d", help="Flowchart direction (default: LR)")
    ] = None,
    title: Annotated[
        Optional[str],
        typer.Option("--title", help="Title comment placed at the top of the diagram")
    ] = None,
    config: ConfigOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Render the module dependency graph as a Mermaid flowchart."""
    modblame_config = _resolve_config(
        config, from_module, to_module, until, cycles_only, ignore_versions, log_level
    )
    _configure_logging(modblame_config.logging.level)

    output = modblame_config.output
    if direction is not None:
        output.direction = direction
    if title is not None:
        output.title = title
    if out is not None:
        output.path = str(out)

    dependency_graph = _load_filtered_graph(modblame_config, input_path)

    logger.info("Organizing graph nodes and edges...")
    spec = build_graph_spec(dependency_graph, title=output.title, direction=output.direction)

    generator = DiagramGenerator()
    generator.add_renderer(MermaidRenderer())
    try:
        rendered = generator.render_graph(spec, output.format.value)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if output.path:
        try:
            with open(output.path, "w", encoding="utf-8") as f:
                f.write(rendered)
        except OSError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)
        logger.info(f"Graph written to {output.path}")
    else:
        typer.echo(rendered, nl=False)


@app.command()
def stats(
    from_module: FromOption = None,
    to_module: ToOption = None,
    until: UntilOption = None,
    cycles_only: CyclesOnlyOption = False,
    ignore_versions: IgnoreVersionsOption = False,
    input_path: InputOption = None,
    config: ConfigOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Summarize the module dependency graph without rendering it."""
    modblame_config = _resolve_config(
        config, from_module, to_module, until, cycles_only, ignore_versions, log_level
    )
    _configure_logging(modblame_config.logging.level)

    dependency_graph = _load_filtered_graph(modblame_config, input_path)
    cyclic = isolate_cycles(dependency_graph.copy())

    table = Table(title="Dependency graph")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Count", style="white", justify="right")

    table.add_row("Modules", str(dependency_graph.node_count()))
    table.add_row("Dependencies", str(dependency_graph.edge_count()))
    table.add_row("Root modules", str(len(dependency_graph.root_nodes())))
    table.add_row("Leaf modules", str(len(dependency_graph.leaf_nodes())))
    table.add_row("Modules in cycles", str(cyclic.node_count()))

    out_console.print(table)


if __name__ == "__main__":
    app()
