"""Command-line interface for the reviewgraph tool."""

import json
import logging

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.traceback import install

from .analyzers import DependencyMapper, DependencyMap, MapperConfiguration
from .core import load_snapshot

# Set up rich error handling
install()
console = Console()


@click.group()
@click.version_option(package_name="reviewgraph")
def cli():
    """reviewgraph - Cross-file dependency mapping for pull requests

    Builds a file-level dependency graph from a review snapshot (PR files,
    PR symbols, baseline symbols, call relationships) and reports dependency
    chains, circular dependencies and constants shared across files.

    USAGE:
        reviewgraph map snapshot.json                  # Text report
        reviewgraph map snapshot.json --format json    # JSON output
        reviewgraph map snapshot.json --impact src/A.java
        reviewgraph map snapshot.json --hotspots       # Most coupled files
    """


@cli.command(name="map")
@click.argument('snapshot_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', type=click.Path(), help='Output file for analysis results')
@click.option('--format', '-f', 'output_format', type=click.Choice(['text', 'json']), default='text',
              help='Output format')
@click.option('--suffix', type=str, default=None,
              help='Source suffix for guessed import targets (default: most common PR suffix)')
@click.option('--parallel/--sequential', default=False, help='Run the edge extractors in parallel')
@click.option('--cycle-components', is_flag=True,
              help='Also report loops of more than two files')
@click.option('--impact', '-i', multiple=True,
              help='Changed file to compute the impact scope for (repeatable)')
@click.option('--hotspots', 'show_hotspots', is_flag=True,
              help='Rank files by severity-weighted incoming coupling')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def map_command(snapshot_file, output, output_format, suffix, parallel, cycle_components,
                impact, show_hotspots, verbose):
    """Map cross-file dependencies for a review snapshot."""
    _configure_logging(verbose)

    try:
        snapshot = load_snapshot(snapshot_file)

        config = MapperConfiguration(
            source_suffix=suffix,
            parallel_extraction=parallel,
            include_cycle_components=cycle_components,
        )
        mapper = DependencyMapper(caller_lookup=snapshot.call_index(), configuration=config)
        dependency_map = mapper.map_dependencies(
            snapshot.pr_symbols, snapshot.pr_files, snapshot.baseline_symbols
        )

        if output_format == 'json':
            _output_json(dependency_map, impact, show_hotspots, output)
        else:
            _display_text_results(dependency_map, impact, show_hotspots)
            if output:
                with open(output, 'w', encoding='utf-8') as f:
                    f.write(mapper.get_dependency_report(dependency_map))
                console.print(f"💾 Report written to {output}")

    except Exception as e:
        console.print(f"[red]❌ Error:[/red] {str(e)}")
        raise click.Abort()


def _configure_logging(verbose: bool):
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _output_json(dependency_map: DependencyMap, impact, show_hotspots, output):
    data = dependency_map.to_dict()
    if impact:
        data['impact_scope'] = dependency_map.impact_scope(impact).to_dict()
    if show_hotspots:
        data['hotspots'] = [hotspot.to_dict() for hotspot in dependency_map.hotspots()]

    text = json.dumps(data, indent=2)
    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(text)
    else:
        click.echo(text)


def _display_text_results(dependency_map: DependencyMap, impact, show_hotspots=False):
    console.print(f"🔗 [bold]{dependency_map.summary}[/bold]")

    if dependency_map.edges:
        table = Table(title="Dependencies")
        table.add_column("From", style="cyan")
        table.add_column("To", style="cyan")
        table.add_column("Kind")
        table.add_column("Element")
        table.add_column("Line", justify="right")
        table.add_column("Severity")
        for edge in dependency_map.edges:
            kind = edge.kind.value if edge.verified else f"{edge.kind.value} (unverified)"
            table.add_row(edge.source, edge.target, kind, edge.element,
                          str(edge.line) if edge.line is not None else "-",
                          edge.severity.value)
        console.print(table)

    if dependency_map.chains:
        table = Table(title="Dependency Chains")
        table.add_column("Depth", justify="right")
        table.add_column("Files")
        table.add_column("Critical")
        for chain in dependency_map.chains:
            table.add_row(str(chain.depth), " → ".join(chain.files),
                          "[red]yes[/red]" if chain.critical else "no")
        console.print(table)

    circular = dependency_map.cycles + dependency_map.cycle_components
    if circular:
        console.print("\n🔄 [bold]Circular Dependencies:[/bold]")
        for i, cycle in enumerate(circular, 1):
            console.print(f"   {i}. [yellow]{cycle.description}[/yellow]")

    if dependency_map.constants:
        table = Table(title="Constants Shared Across Files")
        table.add_column("Constant", style="magenta")
        table.add_column("Value")
        table.add_column("Files", justify="right")
        table.add_column("Extract")
        for constant in dependency_map.constants:
            table.add_row(constant.name, constant.value, str(constant.count),
                          "[green]yes[/green]" if constant.should_extract else "no")
        console.print(table)

    if impact:
        scope = dependency_map.impact_scope(impact)
        console.print(f"\n🎯 [bold]Impact of {', '.join(scope.changed_files)}:[/bold]")
        console.print(f"   Direct: {', '.join(scope.direct_impacts) or 'none'}")
        console.print(f"   Indirect: {', '.join(scope.indirect_impacts) or 'none'}")
        console.print(f"   Total impacted files: {scope.total_impacts} (depth {scope.impact_depth})")

    if show_hotspots:
        hotspots = dependency_map.hotspots()
        if hotspots:
            table = Table(title="Dependency Hotspots")
            table.add_column("File", style="cyan")
            table.add_column("Dependents", justify="right")
            table.add_column("Coupling", justify="right")
            table.add_column("Centrality", justify="right")
            table.add_column("High risk")
            for hotspot in hotspots:
                table.add_row(hotspot.file, str(hotspot.dependents), str(hotspot.coupling_weight),
                              f"{hotspot.centrality:.2f}",
                              "[red]yes[/red]" if hotspot.high_risk else "no")
            console.print(table)
        else:
            console.print("\n🔥 No dependency hotspots")


if __name__ == "__main__":
    cli()
