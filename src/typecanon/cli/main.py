"""Command-line interface for typecanon.

Provides CLI commands for closure extraction and canonical renaming.
"""

import importlib.metadata
import sys
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("typecanon")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.3.0"  # Fallback for development


@click.group()
@click.version_option(version=__version__, prog_name="typecanon")
def cli() -> None:
    """Transitive closure and content-based canonical naming for schema graphs.

    Use 'typecanon COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("catalog_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--root",
    "-r",
    "roots",
    multiple=True,
    required=True,
    help="Root type name (repeatable)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    required=True,
    help="Output catalog JSON file path",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def closure(catalog_path: str, roots: tuple[str, ...], output: str, verbose: bool) -> None:
    """Extract the types needed to fully define the given roots.

    CATALOG_PATH is a JSON file mapping type names to {"fields": [...]}.

    Examples
    --------
        typecanon closure catalog.json -r visualization_msgs/Marker -o marker.json
    """
    from typecanon import closure as transitive_closure
    from typecanon import load_catalog, write_catalog

    try:
        catalog = load_catalog(catalog_path)
        if verbose:
            click.echo(f"Loaded {len(catalog)} types from {catalog_path}", err=True)

        subset = transitive_closure(catalog, roots)
        write_catalog(subset, output)

        if verbose:
            for type_name in sorted(subset):
                click.echo(f"  {type_name}", err=True)

        click.secho(f"✓ Wrote {len(subset)} types to {output}", fg="green")

    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


@cli.command()
@click.argument("sources_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default="out",
    help="Output directory for results (default: out)",
)
@click.option(
    "--prefix",
    type=str,
    default="f",
    help="Leading component of generated names (default: f)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Fail the run when any source references a missing or cyclic type",
)
@click.option(
    "--no-audit-log",
    is_flag=True,
    help="Do not write events.jsonl",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def canonicalize(
    sources_path: str,
    output_dir: str,
    prefix: str,
    strict: bool,
    no_audit_log: bool,
    verbose: bool,
) -> None:
    """Assign content-based canonical type names to SOURCES_PATH.

    SOURCES_PATH is a JSON file holding {"sources": [...]}. Sources whose type
    graphs are structurally identical receive the same canonical root name.

    Outputs are written to OUTPUT_DIR: names_by_source.json,
    canonical_catalog.json, report.json and events.jsonl.

    Examples
    --------
        typecanon canonicalize sources.json
        typecanon canonicalize sources.json -o results --prefix dt --strict
    """
    from typecanon.engine import CanonicalizeConfig, run_canonicalization

    try:
        config = CanonicalizeConfig(
            output_dir=Path(output_dir),
            name_prefix=prefix,
            strict=strict,
            write_audit_log=not no_audit_log,
        )
    except ValueError as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)

    if verbose:
        click.echo("Starting canonicalization...", err=True)
        click.echo(f"  Input: {sources_path}", err=True)
        click.echo(f"  Output: {output_dir}", err=True)
        click.echo(f"  Prefix: {prefix}", err=True)

    result = run_canonicalization(Path(sources_path), config=config)

    if not result.success:
        click.secho(f"✗ Canonicalization failed: {result.error_message}", fg="red", err=True)
        sys.exit(1)

    if verbose:
        click.echo("\nResults:", err=True)
        click.echo(f"  Sources: {result.total_sources}", err=True)
        click.echo(f"  Resolved: {result.resolved_sources}", err=True)
        click.echo(f"  Unresolved: {result.unresolved_sources}", err=True)
        click.echo(f"  Failed groups: {result.failed_groups}", err=True)
        click.echo("\nOutputs:", err=True)
        for name, path in result.output_files.items():
            click.echo(f"  {name}: {path}", err=True)

    click.secho(
        f"✓ Canonicalized {result.resolved_sources}/{result.total_sources} sources "
        f"into {result.canonical_types} types",
        fg="green",
    )


if __name__ == "__main__":
    cli()
