import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.table import Table

from docgraph.config import configure_logging, settings
from docgraph.core.identity import ConfigError, load_docgraph_config
from docgraph.core.pipeline import build_graph
from docgraph.core.scanner import CorpusError
from docgraph.core.schemas import GraphSnapshot
from docgraph.core.traversal import reachability, shortest_path
from docgraph.exporter import export_index, export_json

logger = logging.getLogger(__name__)

APP_HELP = """
docgraph: map and repair the cross-references of a markdown folder.

Builds a directed graph of every markdown document under a folder, then
reports broken links, missing backlinks, orphans, per-document health scores
and keyword-similar documents that are not linked yet.

CORE WORKFLOW:
1. ANALYZE: Run `docgraph analyze ./docs` for the health summary.
2. NAVIGATE: Run `docgraph reach ./docs ./docs/index.md` to see what an
   agent starting at index.md can reach, and in how many hops.
3. EXPORT: Run `docgraph export ./docs --format index` to write an index.
"""

app = typer.Typer(name="docgraph", help=APP_HELP, no_args_is_help=True)


class ExportFormat(str, Enum):
    json = "json"
    index = "index"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """
    docgraph: knowledge graph analysis for markdown folders.
    """
    configure_logging("DEBUG" if verbose else settings.log_level)


def _load_snapshot(root: Path) -> GraphSnapshot:
    """Run the full analysis, turning engine failures into a clean exit."""
    try:
        config = load_docgraph_config(root, settings.config_filename)
        return build_graph(root, config)
    except (CorpusError, ConfigError) as e:
        logger.error("Analysis of %s failed: %s", root, e)
        print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=2)


def _node_id(path: str) -> str:
    return os.path.abspath(path)


@app.command()
def analyze(
    root: Path = typer.Argument(..., help="Folder containing markdown documents"),
    json_output: bool = typer.Option(False, "--json", help="Print the full snapshot as JSON"),
    limit: int = typer.Option(10, "--limit", "-n", help="Rows to show per report table"),
):
    """
    Analyze a folder and print its link health summary.

    Examples:
        docgraph analyze ./docs
        docgraph analyze ./docs --json > graph.json
    """
    snapshot = _load_snapshot(root)

    if json_output:
        typer.echo(snapshot.model_dump_json(indent=2))
        return

    if not snapshot.nodes:
        print(f"[yellow]No markdown files found in {root}[/yellow]")
        return

    stats = snapshot.stats()
    print(f"[bold]{snapshot.root}[/bold]")
    print(
        f"Documents: {stats['nodes']}  Links: {stats['edges']}  "
        f"Orphans: {stats['orphans']}  Tokens: ~{stats['total_token_estimate']}"
    )
    print(f"Corpus health: [bold]{snapshot.health_score}/100[/bold]")

    table = Table(title="Documents (lowest health first)")
    table.add_column("Document", style="cyan")
    table.add_column("Health", justify="right")
    table.add_column("In", justify="right")
    table.add_column("Out", justify="right")
    table.add_column("Broken", justify="right")
    table.add_column("Warnings", style="dim")
    for node in sorted(snapshot.nodes, key=lambda n: n.health_score)[:limit]:
        table.add_row(
            node.relative_path,
            str(node.health_score),
            str(node.in_degree),
            str(node.out_degree),
            str(node.broken_outgoing_count),
            ", ".join(w.type.value for w in node.warnings),
        )
    print(table)

    if snapshot.broken_links:
        print(f"\n[red]Broken links: {len(snapshot.broken_links)}[/red]")
        for broken in snapshot.broken_links[:limit]:
            target = os.path.relpath(broken.target_path, snapshot.root)
            print(f"  - {broken.source_label} -> {target} ({broken.label})")

    if snapshot.backlink_suggestions:
        print(f"\n[yellow]Missing backlinks: {len(snapshot.backlink_suggestions)}[/yellow]")
        for suggestion in snapshot.backlink_suggestions[:limit]:
            print(f"  - {suggestion.from_label} should link to {suggestion.to_label}")

    if snapshot.similarity_suggestions:
        print(f"\n[green]Similar documents: {len(snapshot.similarity_suggestions)}[/green]")
        for suggestion in snapshot.similarity_suggestions[:limit]:
            print(
                f"  - {suggestion.node_a_label} <-> {suggestion.node_b_label} "
                f"({suggestion.score:.2f})"
            )


@app.command()
def reach(
    root: Path = typer.Argument(..., help="Folder containing markdown documents"),
    entry: str = typer.Argument(..., help="Path of the entry document"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show every document reachable from ENTRY and its hop distance.
    """
    snapshot = _load_snapshot(root)
    entry_id = _node_id(entry)
    if snapshot.node(entry_id) is None:
        print(f"[red]Not a document in {root}: {entry}[/red]")
        raise typer.Exit(code=1)

    distances = reachability(snapshot, entry_id)
    if json_output:
        typer.echo(json.dumps(distances, indent=2))
        return

    print(f"Reachable from {snapshot.node(entry_id).label}: {len(distances)}/{len(snapshot.nodes)}")
    for node_id, hops in sorted(distances.items(), key=lambda item: (item[1], item[0])):
        print(f"  {hops}  {os.path.relpath(node_id, snapshot.root)}")


@app.command()
def path(
    root: Path = typer.Argument(..., help="Folder containing markdown documents"),
    source: str = typer.Argument(..., help="Path of the starting document"),
    target: str = typer.Argument(..., help="Path of the destination document"),
):
    """
    Print the shortest chain of links from SOURCE to TARGET.
    """
    snapshot = _load_snapshot(root)
    route = shortest_path(snapshot, _node_id(source), _node_id(target))
    if route is None:
        print(f"[yellow]No path from {source} to {target}[/yellow]")
        raise typer.Exit(code=1)

    for hops, node_id in enumerate(route):
        print(f"  {hops}  {os.path.relpath(node_id, snapshot.root)}")


@app.command()
def export(
    root: Path = typer.Argument(..., help="Folder containing markdown documents"),
    format: ExportFormat = typer.Option(ExportFormat.json, "--format", "-f", help="Export format"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path"),
):
    """
    Write the graph as raw JSON or as a markdown index document.

    Examples:
        docgraph export ./docs
        docgraph export ./docs --format index -o ./docs/INDEX.md
    """
    snapshot = _load_snapshot(root)

    if format == ExportFormat.json:
        destination = output or Path(snapshot.root) / settings.json_export_name
        export_json(snapshot, destination)
    else:
        destination = output or Path(snapshot.root) / settings.index_export_name
        export_index(snapshot, destination)

    print(f"[green]Wrote {destination}[/green]")


if __name__ == "__main__":
    app()
