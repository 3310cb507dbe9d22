"""Rich terminal display for reclaim."""

from datetime import datetime

from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from reclaim.cache_dirs import CACHE_PATTERNS
from reclaim.models import CleanupPlan, CleanupResult, DiskAnalysis, format_size

console = Console()

# Rows shown per table before summarising the rest
MAX_ROWS = 20


def _age_days(moment: datetime, now: datetime) -> str:
    return f"{max((now - moment).days, 0)}d"


def _more_row(table: Table, hidden: int, columns: int) -> None:
    if hidden > 0:
        table.add_row(f"[dim]... {hidden} more[/dim]", *[""] * (columns - 1))


def show_large_files(analysis: DiskAnalysis) -> None:
    """Display the largest files."""
    top = analysis.top_large_files
    if not top:
        return

    console.print(
        f"[bold]Large Files[/bold] [dim](>= {analysis.config.min_size_mb} MB)[/dim]"
    )
    table = Table(show_header=True, header_style="bold")
    table.add_column("Size", justify="right")
    table.add_column("Modified")
    table.add_column("Path")

    for record in top:
        table.add_row(
            format_size(record.size_bytes),
            record.last_modified.strftime("%Y-%m-%d"),
            record.path,
        )
    _more_row(table, len(analysis.large_files) - len(top), 3)

    console.print(table)
    console.print()


def show_duplicates(analysis: DiskAnalysis) -> None:
    """Display duplicate groups."""
    if not analysis.duplicate_groups:
        return

    console.print("[bold magenta]Duplicate Files[/bold magenta]")
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Copies", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Wasted", justify="right")
    table.add_column("Paths")

    shown = analysis.duplicate_groups[:MAX_ROWS]
    for group in shown:
        table.add_row(
            str(group.count),
            format_size(group.size_bytes),
            format_size(group.reclaimable_bytes),
            "\n".join(group.paths),
        )
    _more_row(table, len(analysis.duplicate_groups) - len(shown), 4)

    console.print(table)
    console.print(
        f"[magenta]Reclaimable from duplicates: "
        f"{format_size(analysis.duplicate_reclaimable_bytes)}[/magenta]"
    )
    console.print()


def show_stale_files(analysis: DiskAnalysis) -> None:
    """Display files not accessed recently."""
    if not analysis.stale_files:
        return

    now = analysis.timestamp
    console.print(
        f"[bold yellow]Stale Files[/bold yellow] "
        f"[dim](not accessed in {analysis.config.stale_days} days)[/dim]"
    )
    table = Table(show_header=True, header_style="bold yellow")
    table.add_column("Size", justify="right")
    table.add_column("Last Access", justify="right")
    table.add_column("Path")

    shown = analysis.stale_files[:MAX_ROWS]
    for record in shown:
        table.add_row(
            format_size(record.size_bytes),
            _age_days(record.last_accessed, now),
            record.path,
        )
    _more_row(table, len(analysis.stale_files) - len(shown), 3)

    console.print(table)
    console.print(
        f"[yellow]Reclaimable from stale files: "
        f"{format_size(analysis.stale_reclaimable_bytes)}[/yellow]"
    )
    console.print()


def show_cache_directories(analysis: DiskAnalysis) -> None:
    """Display cache and build directories."""
    if not analysis.cache_directories:
        return

    console.print("[bold green]Cache Directories[/bold green]")
    table = Table(show_header=True, header_style="bold green")
    table.add_column("Type", style="green")
    table.add_column("Size", justify="right")
    table.add_column("Path")

    shown = analysis.cache_directories[:MAX_ROWS]
    for cache in shown:
        table.add_row(cache.label, format_size(cache.size_bytes), cache.path)
    _more_row(table, len(analysis.cache_directories) - len(shown), 3)

    console.print(table)
    console.print(
        f"[green]Reclaimable from caches: "
        f"{format_size(analysis.cache_reclaimable_bytes)}[/green]"
    )
    console.print()


def show_analysis(analysis: DiskAnalysis) -> None:
    """Display full analysis results."""
    if analysis.is_empty:
        console.print(f"[green]Nothing to reclaim under {analysis.root}[/green]")
        return

    show_large_files(analysis)
    show_duplicates(analysis)
    show_stale_files(analysis)
    show_cache_directories(analysis)

    console.print(
        Panel(
            f"[bold]Potential space to reclaim:[/bold] "
            f"{format_size(analysis.total_reclaimable_bytes)}\n"
            f"  Duplicates: {format_size(analysis.duplicate_reclaimable_bytes)}\n"
            f"  Caches: {format_size(analysis.cache_reclaimable_bytes)}\n"
            f"  Stale: {format_size(analysis.stale_reclaimable_bytes)}\n"
            f"[dim]Categories can overlap, so the total may be an overestimate.[/dim]",
            title="Summary",
            border_style="blue",
        )
    )


def show_cleanup_preview(plan: CleanupPlan, dry_run: bool = False) -> None:
    """Display what a cleanup is about to remove."""
    if dry_run:
        console.print("[yellow]DRY RUN - No files will be deleted[/yellow]\n")

    table = Table(title="Cleanup Preview", show_header=True, header_style="bold")
    table.add_column("Kind")
    table.add_column("Path")

    for path in plan.directories:
        table.add_row("[green]directory[/green]", path)
    for path in plan.files:
        table.add_row("file", path)

    console.print(table)
    console.print(
        f"\n[bold]{len(plan.directories)} directories and {len(plan.files)} files selected[/bold]"
    )


def show_cleanup_result(result: CleanupResult) -> None:
    """Display result of a single deletion."""
    if result.success:
        verb = "would free" if result.dry_run else "freed"
        console.print(f"  [green]✓[/green] {result.path}: {format_size(result.bytes_freed)} {verb}")
    else:
        console.print(f"  [red]✗[/red] {result.path}: {result.error}")


def show_cleanup_summary(results: list[CleanupResult]) -> None:
    """Display cleanup summary."""
    total_freed = sum(r.bytes_freed for r in results if r.success)
    success_count = sum(1 for r in results if r.success)
    failure_count = sum(1 for r in results if not r.success)

    console.print()
    console.print("[bold green]Cleanup Complete![/bold green]")
    console.print()

    table = Table(show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Space freed", format_size(total_freed))
    table.add_row("Items removed", str(success_count))
    if failure_count > 0:
        table.add_row("[red]Failed[/red]", str(failure_count))

    console.print(table)


def show_patterns() -> None:
    """Display the cache pattern table."""
    table = Table(title="Cache Patterns", show_header=True, header_style="bold")
    table.add_column("Pattern")
    table.add_column("Type")
    for pattern, label in CACHE_PATTERNS:
        table.add_row(pattern, label)
    console.print(table)


def show_scanning_progress() -> Progress:
    """Create progress bar for scanning."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
    )


def confirm_action(message: str) -> bool:
    """Ask for confirmation."""
    from rich.prompt import Confirm

    return Confirm.ask(message)
