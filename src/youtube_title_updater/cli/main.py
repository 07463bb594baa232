"""Main CLI interface for YouTube Title Updater."""

from __future__ import annotations

import asyncio
import signal
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from youtube_title_updater import __version__
from youtube_title_updater.application.services.scheduler import CycleScheduler
from youtube_title_updater.application.use_cases.validate_config import ValidateConfigUseCase
from youtube_title_updater.cli.utils import (
    create_report_table,
    create_results_table,
    display_error_summary,
    display_success_message,
    display_warning_message,
)
from youtube_title_updater.domain.exceptions import (
    AuthenticationError,
    ConfigurationError,
    TitleUpdaterError,
)
from youtube_title_updater.domain.models.processing import BatchResult
from youtube_title_updater.domain.models.video import VideoTask
from youtube_title_updater.infrastructure.config.models import YOUTUBE_SCOPE
from youtube_title_updater.infrastructure.config.yaml_provider import load_auth_setup_config
from youtube_title_updater.infrastructure.container import (
    create_container,
    get_configuration_provider,
    get_scheduler,
    get_title_service,
    get_token_manager,
)
from youtube_title_updater.infrastructure.logging_setup import configure_logging
from youtube_title_updater.infrastructure.youtube.auth_manager import run_authorization_flow

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="YouTube Title Updater")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default="config/config.yml",
    help="Path to configuration file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def cli(ctx: click.Context, config: Path, verbose: bool) -> None:
    """
    YouTube Title Updater - keeps video titles in sync with their live stats.

    Every cycle reads the view, like and comment counts of each configured
    video and rewrites its title to show them, skipping videos whose title
    is already current.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose

    if verbose:
        console.print(f"[dim]Using configuration: {config}[/dim]")


@cli.command()
@click.option(
    "--dry-run",
    is_flag=True,
    help="Render titles without writing them",
)
@click.pass_context
def run(ctx: click.Context, dry_run: bool) -> None:
    """Run update cycles on a fixed interval until interrupted."""
    config_path = ctx.obj["config_path"]
    verbose = ctx.obj["verbose"]

    try:
        container = create_container(config_path)
        config_provider = get_configuration_provider(container)
        configure_logging(config_provider.get_logging_config(), verbose=verbose)

        scheduler = get_scheduler(container, dry_run=True if dry_run else None)

        console.print(Panel(
            f"[blue]🔄 Updating {len(scheduler.tasks)} videos every "
            f"{config_provider.get_update_interval_minutes()} minutes[/blue]\n"
            "Press Ctrl+C to stop after the current cycle, twice to cancel it.",
            title="Automation",
            border_style="blue"
        ))

        asyncio.run(_run_scheduler(scheduler))

    except ConfigurationError as e:
        console.print(f"[red]❌ Configuration Error:[/red] {e}")
        sys.exit(1)
    except TitleUpdaterError as e:
        console.print(f"[red]❌ Error:[/red] {e}")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]❌ Unexpected Error:[/red] {e}")
        if verbose:
            console.print_exception()
        sys.exit(1)


@cli.command()
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show the titles that would be written without making changes",
)
@click.option(
    "--videos",
    multiple=True,
    help="Process only specific video IDs (can be used multiple times)",
)
@click.pass_context
def process(ctx: click.Context, dry_run: bool, videos: tuple[str, ...]) -> None:
    """Run a single update cycle and show the results."""
    config_path = ctx.obj["config_path"]
    verbose = ctx.obj["verbose"]

    if dry_run:
        console.print(Panel(
            "[yellow]🔍 DRY RUN MODE[/yellow]\n"
            "No titles will be changed.\n"
            "This will show you the titles that would be written.",
            title="Dry Run",
            border_style="yellow"
        ))

    try:
        container = create_container(config_path)
        config_provider = get_configuration_provider(container)
        configure_logging(config_provider.get_logging_config(), verbose=verbose)

        tasks = _select_tasks(config_provider.get_video_tasks(), videos)
        title_service = get_title_service(container, dry_run=True if dry_run else None)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task(f"Processing {len(tasks)} videos...", total=None)
            result = asyncio.run(title_service.process_batch(tasks))
            progress.update(task, description="Processing complete!")

        _display_processing_results(result, dry_run or config_provider.get_dry_run_mode())
        console.print(create_report_table(title_service.get_performance_report()))

        if result.has_errors:
            sys.exit(1)

    except ConfigurationError as e:
        console.print(f"[red]❌ Configuration Error:[/red] {e}")
        sys.exit(1)
    except AuthenticationError as e:
        console.print(f"[red]❌ Authentication Error:[/red] {e}")
        console.print("\n[yellow]💡 Tip:[/yellow] Run 'youtube-title-updater auth setup' to mint a new refresh token.")
        sys.exit(1)
    except TitleUpdaterError as e:
        console.print(f"[red]❌ Error:[/red] {e}")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]❌ Unexpected Error:[/red] {e}")
        if verbose:
            console.print_exception()
        sys.exit(1)


@cli.command()
@click.pass_context
def validate(ctx: click.Context) -> None:
    """Validate configuration and check that the refresh token works."""
    config_path = ctx.obj["config_path"]
    verbose = ctx.obj["verbose"]

    console.print(Panel(
        "[blue]🔍 Configuration Validation[/blue]\n"
        "Checking configuration file and authentication...",
        title="Validation",
        border_style="blue"
    ))

    try:
        container = create_container(config_path)
        config_provider = get_configuration_provider(container)

        console.print("\n[cyan]📋 Configuration Check[/cyan]")
        errors = ValidateConfigUseCase(config_provider).execute()
        if errors:
            display_error_summary(errors)
            sys.exit(1)

        tasks = config_provider.get_video_tasks()
        console.print(f"✅ Found {len(tasks)} enabled videos")
        console.print(f"✅ Update interval: {config_provider.get_update_interval_minutes()} minutes")
        console.print(f"✅ Pause between videos: {config_provider.get_inter_video_delay_seconds()} seconds")
        console.print(f"✅ Dry run mode: {config_provider.get_dry_run_mode()}")

        console.print("\n[cyan]🔐 Authentication Check[/cyan]")
        token = asyncio.run(get_token_manager(container).refresh())
        console.print(f"✅ Access token obtained (expires {token.expires_at.isoformat(timespec='seconds')})")

        console.print("\n[green]✅ Validation complete![/green]")

    except ConfigurationError as e:
        console.print(f"\n[red]❌ Configuration Error:[/red] {e}")
        sys.exit(1)
    except AuthenticationError as e:
        console.print(f"\n[red]❌ Authentication Error:[/red] {e}")
        _show_auth_help()
        sys.exit(1)
    except Exception as e:
        console.print(f"\n[red]❌ Validation failed:[/red] {e}")
        if verbose:
            console.print_exception()
        sys.exit(1)


@cli.group()
def auth() -> None:
    """Authentication management commands."""
    pass


@auth.command()
@click.option(
    "--client-secrets",
    type=click.Path(path_type=Path),
    default=None,
    help="OAuth2 client secrets JSON (defaults to youtube_api.client_secrets_file)",
)
@click.pass_context
def setup(ctx: click.Context, client_secrets: Path | None) -> None:
    """Run the OAuth2 consent flow and print a refresh token."""
    config_path = ctx.obj["config_path"]
    verbose = ctx.obj["verbose"]

    console.print(Panel(
        "[blue]🔐 YouTube API Authentication Setup[/blue]\n\n"
        "A browser window will open to grant this application access to your channel.\n"
        "The refresh token printed at the end goes into your configuration.",
        title="Authentication Setup",
        border_style="blue"
    ))

    try:
        scopes = [YOUTUBE_SCOPE]
        if client_secrets is None:
            setup_config = load_auth_setup_config(config_path)
            client_secrets_file = setup_config.client_secrets_file
            scopes = setup_config.scopes
            error = ValidateConfigUseCase.validate_client_secrets(client_secrets_file)
            if error:
                raise ConfigurationError(error)
        else:
            client_secrets_file = str(client_secrets)

        credentials = run_authorization_flow(client_secrets_file, scopes)

        console.print("\n[green]✅ Authorization granted![/green]")
        console.print("\nSet this refresh token in your environment or configuration:\n")
        console.print(f"[bold]REFRESH_TOKEN={credentials.refresh_token}[/bold]", soft_wrap=True)

    except ConfigurationError as e:
        console.print(f"\n[red]❌ Configuration Error:[/red] {e}")
        _show_auth_help()
        sys.exit(1)
    except AuthenticationError as e:
        console.print(f"\n[red]❌ Authentication Error:[/red] {e}")
        _show_auth_help()
        sys.exit(1)
    except Exception as e:
        console.print(f"\n[red]❌ Unexpected Error:[/red] {e}")
        if verbose:
            console.print_exception()
        sys.exit(1)


@auth.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Check that the configured refresh token still yields access tokens."""
    config_path = ctx.obj["config_path"]
    verbose = ctx.obj["verbose"]

    try:
        container = create_container(config_path)
        token = asyncio.run(get_token_manager(container).refresh())

        console.print("[green]✅ Authenticated[/green]")
        console.print(f"Access token valid until {token.expires_at.isoformat(timespec='seconds')}")

    except AuthenticationError as e:
        console.print("[red]❌ Not authenticated[/red]")
        console.print(f"[dim]{e}[/dim]")
        console.print("\n[yellow]💡 Tip:[/yellow] Run 'youtube-title-updater auth setup' to authenticate.")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]❌ Error checking authentication:[/red] {e}")
        if verbose:
            console.print_exception()
        sys.exit(1)


async def _run_scheduler(scheduler: CycleScheduler) -> None:
    """Run the scheduler, stopping it cleanly on SIGINT or SIGTERM."""
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, scheduler.stop)
        except NotImplementedError:
            # Windows event loops have no signal handler support.
            pass

    await scheduler.run()
    scheduler.log_performance_report()


def _select_tasks(tasks: list[VideoTask], video_ids: tuple[str, ...]) -> list[VideoTask]:
    """Restrict tasks to the requested video IDs, keeping configured order."""
    if not video_ids:
        return tasks

    configured = {task.video_id for task in tasks}
    unknown = [video_id for video_id in video_ids if video_id not in configured]
    if unknown:
        raise ConfigurationError(f"Videos not enabled in configuration: {', '.join(unknown)}")

    return [task for task in tasks if task.video_id in video_ids]


def _display_processing_results(result: BatchResult, dry_run: bool) -> None:
    """Display the results of one update cycle."""
    console.print(create_results_table(result))

    console.print("\n[bold]📈 Overall Summary:[/bold]")
    console.print(f"📺 Videos processed: {len(result)}")
    console.print(f"✅ Titles updated: {result.updated_count}")
    console.print(f"📋 Titles unchanged: {result.unchanged_count}")
    console.print(f"❌ Videos failed: {result.failed_count}")
    console.print(f"⏱️ Processing time: {result.processing_time_seconds:.1f} seconds")

    if result.has_errors:
        display_error_summary([f"{r.video_id}: {r.error}" for r in result.failed_results])
        display_warning_message(
            f"{result.failed_count} of {len(result)} videos could not be processed."
        )
    elif dry_run:
        previewed = len(result) - result.unchanged_count
        display_warning_message(
            f"DRY RUN: {previewed} titles would change. "
            "Run without --dry-run to write them."
        )
    elif result.updated_count > 0:
        display_success_message(f"Successfully updated {result.updated_count} titles!")
    else:
        display_success_message("All titles are already up to date. No changes needed!")


def _show_auth_help() -> None:
    """Show authentication help information."""
    console.print(Panel(
        "[yellow]🔧 Authentication Setup Help[/yellow]\n\n"
        "To set up authentication:\n\n"
        "1. Go to Google Cloud Console (console.cloud.google.com)\n"
        "2. Create a new project or select existing project\n"
        "3. Enable the YouTube Data API v3 and create an API key\n"
        "4. Create OAuth2 credentials (Desktop application)\n"
        "5. Download the client secrets JSON file\n"
        "6. Run 'youtube-title-updater auth setup --client-secrets <file>'\n"
        "7. Put the printed refresh token in REFRESH_TOKEN",
        title="Setup Help",
        border_style="yellow"
    ))


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
