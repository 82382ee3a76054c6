"""Command-line interface for Folio.

The ``folio`` command takes no arguments: it builds the project in the
current directory into its output directory and prints a summary. A build
failure is reported with the offending file and exits with status 1.
"""

from __future__ import annotations

from pathlib import Path

import click


@click.command()
def cli():
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import BuildError, build_site

    click.echo("Building portfolio...\n")
    try:
        result = build_site(project_root)
    except BuildError as exc:
        # Display user-friendly error message
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  File: {_display_path(exc.source_path, project_root)}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    click.echo(
        f"\nBuild complete! Generated {len(result.posts)} posts "
        f"in {result.manifest.index.total_chunks} chunks"
    )


def _display_path(path: Path, project_root: Path) -> Path:
    try:
        return path.relative_to(project_root)
    except ValueError:
        return path


def main():
    """Entry point for the CLI application."""
    cli()
