"""YouTube API integration implementations."""

from youtube_title_updater.infrastructure.youtube.auth_manager import YouTubeTokenManager
from youtube_title_updater.infrastructure.youtube.stats_repository import YouTubeStatsRepository
from youtube_title_updater.infrastructure.youtube.title_updater import YouTubeTitleUpdater

__all__ = [
    "YouTubeTokenManager",
    "YouTubeStatsRepository",
    "YouTubeTitleUpdater",
]
