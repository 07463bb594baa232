"""Abstract base classes for domain services."""

from youtube_title_updater.domain.services.configuration_provider import (
    ConfigurationProvider,
)
from youtube_title_updater.domain.services.stats_repository import StatsRepository
from youtube_title_updater.domain.services.title_service import TitleService
from youtube_title_updater.domain.services.title_updater import TitleUpdater
from youtube_title_updater.domain.services.token_provider import TokenProvider

__all__ = [
    "TokenProvider",
    "StatsRepository",
    "TitleUpdater",
    "ConfigurationProvider",
    "TitleService",
]
