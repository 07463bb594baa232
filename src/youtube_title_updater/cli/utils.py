"""Utility functions for CLI operations."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from youtube_title_updater.domain.models.processing import BatchResult, PerformanceReport
from youtube_title_updater.domain.models.video import UpdateStatus

console = Console()

STATUS_LABELS = {
    UpdateStatus.UPDATED: "[green]✅ Updated[/green]",
    UpdateStatus.UNCHANGED: "[dim]📋 Unchanged[/dim]",
    UpdateStatus.PREVIEWED: "[yellow]🔍 Preview[/yellow]",
    UpdateStatus.FAILED: "[red]❌ Failed[/red]",
}


def display_error_summary(errors: list[str]) -> None:
    """Display configuration or processing errors."""
    if not errors:
        return

    console.print(Panel(
        "\n".join(f"• {error}" for error in errors),
        title="[red]❌ Errors Found[/red]",
        border_style="red"
    ))


def display_success_message(message: str) -> None:
    """Display a success message."""
    console.print(Panel(
        f"[green]{message}[/green]",
        title="[green]✅ Success[/green]",
        border_style="green"
    ))


def display_warning_message(message: str) -> None:
    """Display a warning message."""
    console.print(Panel(
        f"[yellow]{message}[/yellow]",
        title="[yellow]⚠️ Warning[/yellow]",
        border_style="yellow"
    ))


def format_duration(seconds: float | None) -> str:
    """Format duration in seconds to human-readable format."""
    if seconds is None:
        return "Unknown"

    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds}s"
    elif seconds < 3600:
        minutes = seconds // 60
        remaining_seconds = seconds % 60
        return f"{minutes}m {remaining_seconds}s"
    else:
        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        return f"{hours}h {minutes}m"


def format_count(count: int | None) -> str:
    """Format an engagement count in human-readable format."""
    if count is None:
        return "0"

    if count < 1000:
        return str(count)
    elif count < 1000000:
        return f"{count / 1000:.1f}K"
    else:
        return f"{count / 1000000:.1f}M"


def create_results_table(batch_result: BatchResult, title: str = "📊 Processing Results") -> Table:
    """Create a table with one row per processed video."""
    table = Table(title=title)
    table.add_column("Video", style="cyan")
    table.add_column("Views", justify="right")
    table.add_column("Likes", justify="right")
    table.add_column("Comments", justify="right")
    table.add_column("Title", max_width=50)
    table.add_column("Status", justify="center")

    for result in batch_result.results:
        stats = result.stats
        if result.success:
            shown_title = result.new_title or ""
        else:
            shown_title = f"[red]{result.error}[/red]"

        table.add_row(
            result.video_id,
            format_count(stats.views) if stats else "-",
            format_count(stats.likes) if stats else "-",
            format_count(stats.comments) if stats else "-",
            shown_title,
            STATUS_LABELS[result.status],
        )

    return table


def create_report_table(report: PerformanceReport) -> Table:
    """Create a table for a performance report."""
    table = Table(title="📈 Performance Report")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")

    table.add_row("Total Updates", str(report.total_updates))
    table.add_row(
        "Last Update",
        report.last_update.isoformat(timespec="seconds") if report.last_update else "Never",
    )
    table.add_row("Peak Engagement", f"{report.peak_engagement:,}")
    table.add_row("Uptime", format_duration(report.uptime_seconds))
    table.add_row("Next Update", report.next_update_estimate.isoformat(timespec="seconds"))

    return table
