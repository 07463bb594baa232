"""Domain models for the YouTube Title Updater application."""

from youtube_title_updater.domain.models.credentials import AccessToken, OAuthCredentials
from youtube_title_updater.domain.models.processing import (
    BatchResult,
    PerformanceReport,
    ProcessResult,
    RunStats,
)
from youtube_title_updater.domain.models.video import UpdateStatus, VideoStats, VideoTask

__all__ = [
    "AccessToken",
    "OAuthCredentials",
    "VideoTask",
    "VideoStats",
    "UpdateStatus",
    "ProcessResult",
    "BatchResult",
    "RunStats",
    "PerformanceReport",
]
