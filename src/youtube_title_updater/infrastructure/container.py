"""Dependency injection container configuration."""

from __future__ import annotations

from pathlib import Path

from dependency_injector import containers, providers

from youtube_title_updater.application.services.scheduler import CycleScheduler
from youtube_title_updater.application.services.title_renderer import TitleRenderer
from youtube_title_updater.application.services.title_service import DefaultTitleService
from youtube_title_updater.domain.models.processing import RunStats
from youtube_title_updater.domain.services.configuration_provider import ConfigurationProvider
from youtube_title_updater.domain.services.stats_repository import StatsRepository
from youtube_title_updater.domain.services.title_service import TitleService
from youtube_title_updater.domain.services.title_updater import TitleUpdater
from youtube_title_updater.infrastructure.config.yaml_provider import YamlConfigurationProvider
from youtube_title_updater.infrastructure.youtube.api import build_youtube_service
from youtube_title_updater.infrastructure.youtube.auth_manager import YouTubeTokenManager
from youtube_title_updater.infrastructure.youtube.stats_repository import YouTubeStatsRepository
from youtube_title_updater.infrastructure.youtube.title_updater import YouTubeTitleUpdater


class Container(containers.DeclarativeContainer):
    """
    Dependency injection container for the YouTube Title Updater application.

    The run statistics, the access token and the API client are process-wide
    singletons; everything built from them shares the same instances.
    """

    # Configuration
    config_file_path = providers.Configuration()

    # Configuration Provider
    configuration_provider = providers.Singleton(
        YamlConfigurationProvider,
        config_path=config_file_path,
    )

    run_stats = providers.Singleton(RunStats)

    youtube_service = providers.Singleton(
        build_youtube_service,
        api_key=configuration_provider.provided.get_credentials.call().api_key,
        timeout=configuration_provider.provided.get_request_timeout_seconds.call(),
    )

    token_manager = providers.Singleton(
        YouTubeTokenManager,
        credentials=configuration_provider.provided.get_credentials.call(),
    )


def create_container(config_path: str | Path) -> Container:
    """
    Create and configure the dependency injection container.

    Args:
        config_path: Path to the configuration file

    Returns:
        Configured container instance
    """
    container = Container()
    container.config_file_path.override(str(config_path))
    return container


def get_configuration_provider(container: Container) -> ConfigurationProvider:
    """
    Get the configuration provider from the container.

    Args:
        container: The dependency injection container

    Returns:
        Configuration provider instance
    """
    return container.configuration_provider()


def get_run_stats(container: Container) -> RunStats:
    """Get the process-wide run statistics."""
    return container.run_stats()


def get_token_manager(container: Container) -> YouTubeTokenManager:
    """Get the OAuth2 access token manager."""
    return container.token_manager()


def _num_retries(container: Container) -> int:
    return get_configuration_provider(container).get_retry_settings().num_retries


def get_stats_repository(container: Container) -> StatsRepository:
    """Get the video stats repository."""
    return YouTubeStatsRepository(
        service=container.youtube_service(),
        run_stats=get_run_stats(container),
        num_retries=_num_retries(container),
    )


def get_title_updater(container: Container) -> TitleUpdater:
    """Get the title updater."""
    return YouTubeTitleUpdater(
        service=container.youtube_service(),
        token_provider=get_token_manager(container),
        stats_repository=get_stats_repository(container),
        run_stats=get_run_stats(container),
        num_retries=_num_retries(container),
    )


def get_title_renderer(container: Container) -> TitleRenderer:
    """Get the title renderer."""
    config_provider = get_configuration_provider(container)
    return TitleRenderer(max_length=config_provider.get_max_title_length())


def get_title_service(container: Container, dry_run: bool | None = None) -> TitleService:
    """
    Get the main title update service.

    Args:
        container: The dependency injection container
        dry_run: Override the configured dry-run mode (None keeps it)
    """
    config_provider = get_configuration_provider(container)
    stats_repository = get_stats_repository(container)

    return DefaultTitleService(
        stats_repository=stats_repository,
        title_updater=get_title_updater(container),
        renderer=get_title_renderer(container),
        run_stats=get_run_stats(container),
        inter_video_delay_seconds=config_provider.get_inter_video_delay_seconds(),
        update_interval_minutes=config_provider.get_update_interval_minutes(),
        dry_run=config_provider.get_dry_run_mode() if dry_run is None else dry_run,
    )


def get_scheduler(container: Container, dry_run: bool | None = None) -> CycleScheduler:
    """Get the scheduler running every enabled video once per interval."""
    config_provider = get_configuration_provider(container)
    return CycleScheduler(
        title_service=get_title_service(container, dry_run=dry_run),
        tasks=config_provider.get_video_tasks(),
        interval_seconds=config_provider.get_update_interval_minutes() * 60,
        report_interval_seconds=config_provider.get_report_interval_minutes() * 60,
    )
