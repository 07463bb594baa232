"""YouTube Title Updater - Keeps video titles in sync with live engagement stats."""

__version__ = "0.1.0"
__author__ = "YouTube Title Updater Developers"
__email__ = "dev@example.org"
__description__ = "Scheduled job that rewrites YouTube video titles with live view, like and comment counts"

from youtube_title_updater.domain.models import VideoStats, VideoTask

__all__ = ["VideoStats", "VideoTask"]
