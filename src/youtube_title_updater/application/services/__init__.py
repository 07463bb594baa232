"""Application services for business logic orchestration."""

from youtube_title_updater.application.services.scheduler import CycleScheduler
from youtube_title_updater.application.services.title_renderer import TitleRenderer
from youtube_title_updater.application.services.title_service import DefaultTitleService

__all__ = [
    "CycleScheduler",
    "DefaultTitleService",
    "TitleRenderer",
]
