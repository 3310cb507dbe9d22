"""CLI interface for reclaim."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

from reclaim import __version__
from reclaim.analyzer import analyze_disk
from reclaim.cleaner import execute_cleanup, plan_cleanup
from reclaim.config import load_config
from reclaim.display import (
    confirm_action,
    console,
    show_analysis,
    show_cleanup_preview,
    show_cleanup_result,
    show_cleanup_summary,
    show_patterns,
    show_scanning_progress,
)
from reclaim.filters import is_excluded
from reclaim.models import AnalysisConfig, CleanupSelection, DiskAnalysis

# Create Typer app
app = typer.Typer(
    name="reclaim",
    help="Find large, duplicate, stale and cache files and reclaim disk space",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"reclaim version {__version__}")
        raise typer.Exit()


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: int = typer.Option(
        0, "--verbose", count=True, help="Increase verbosity (--verbose info, twice for debug)"
    ),
) -> None:
    """reclaim - disk space reclamation analyzer."""
    _setup_logging(verbose)


def _check_root(root: Path) -> Path:
    if not root.exists():
        console.print(f"[red]Path does not exist: {root}[/red]")
        raise typer.Exit(1)
    if not root.is_dir():
        console.print(f"[red]Not a directory: {root}[/red]")
        raise typer.Exit(1)
    root = root.absolute()
    if is_excluded(root):
        console.print(f"[yellow]Warning: excluded path, nothing will be scanned: {root}[/yellow]")
    return root


def _run_analysis(root: Path, config: AnalysisConfig) -> DiskAnalysis:
    with show_scanning_progress() as progress:
        task = progress.add_task("Scanning...", total=4)

        def update_progress(name: str, current: int, total: int):
            progress.update(task, completed=current, total=total, description=f"Scanning {name}...")

        return analyze_disk(root, config, progress_callback=update_progress)


@app.command()
def analyze(
    root: Path = typer.Argument(Path("."), help="Directory to analyze"),
    min_size: Optional[int] = typer.Option(
        None, "--min-size", help="Minimum size in MB for large files [default: 100]"
    ),
    days: Optional[int] = typer.Option(
        None, "--days", help="Days without access before a file is stale [default: 180]"
    ),
    top: Optional[int] = typer.Option(
        None, "--top", help="Number of large files to show [default: 10]"
    ),
) -> None:
    """Analyze a directory and show what could be reclaimed."""
    root = _check_root(root)
    config = load_config(min_size_mb=min_size, stale_days=days, max_large_files=top)

    console.print(f"[bold blue]Analyzing {root}...[/bold blue]\n")
    analysis = _run_analysis(root, config)

    console.print()
    show_analysis(analysis)

    if not analysis.is_empty:
        console.print()
        console.print(
            "[dim]Run [bold]reclaim clean --duplicates --caches --stale[/bold] to clean up[/dim]"
        )


@app.command()
def clean(
    root: Path = typer.Argument(Path("."), help="Directory to clean"),
    duplicates: bool = typer.Option(
        False, "--duplicates", help="Remove all but one copy of each duplicate"
    ),
    caches: bool = typer.Option(False, "--caches", help="Remove cache and build directories"),
    stale: bool = typer.Option(False, "--stale", help="Remove files not accessed recently"),
    large: bool = typer.Option(
        False, "--large", help="Remove the largest files (the --top list shown by analyze)"
    ),
    min_size: Optional[int] = typer.Option(None, "--min-size", help="Minimum size in MB for large files"),
    days: Optional[int] = typer.Option(None, "--days", help="Days without access before a file is stale"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Simulate without deleting"),
    yes: bool = typer.Option(False, "-y", "--yes", help="Skip confirmation prompts"),
) -> None:
    """Delete selected duplicates, caches, stale files and large files."""
    if not (duplicates or caches or stale or large):
        console.print("[red]Error: Specify --duplicates, --caches, --stale or --large[/red]")
        console.print("  reclaim clean --caches            # Remove cache directories")
        console.print("  reclaim clean --duplicates --yes  # Remove duplicate copies")
        raise typer.Exit(1)

    root = _check_root(root)
    config = load_config(min_size_mb=min_size, stale_days=days)

    console.print(f"[bold]Scanning {root} for items to clean...[/bold]\n")
    analysis = _run_analysis(root, config)

    selection = CleanupSelection(
        duplicates=duplicates,
        caches=caches,
        stale=stale,
        large_files=[f.path for f in analysis.top_large_files] if large else [],
    )
    plan = plan_cleanup(analysis, selection)

    if plan.is_empty:
        console.print("[yellow]Nothing to clean.[/yellow]")
        raise typer.Exit(0)

    console.print()
    show_cleanup_preview(plan, dry_run=dry_run)

    if not yes and not dry_run:
        console.print()
        if not confirm_action("Proceed with cleanup?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

    console.print("\n[bold]Cleaning...[/bold]")
    results = execute_cleanup(plan, dry_run=dry_run)

    for result in results:
        show_cleanup_result(result)

    if not dry_run:
        show_cleanup_summary(results)


@app.command()
def patterns() -> None:
    """List the cache directory patterns."""
    show_patterns()


if __name__ == "__main__":
    app()
