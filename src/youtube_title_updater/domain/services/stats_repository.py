"""Abstract base class for video statistics retrieval."""

from abc import ABC, abstractmethod
from typing import Any

from youtube_title_updater.domain.models.video import VideoStats


class StatsRepository(ABC):
    """
    Abstract repository for reading video data.

    This interface defines the contract for retrieving engagement counts and
    metadata from external sources (like the YouTube API). Implementations
    should handle API calls, error mapping, and data parsing.
    """

    @abstractmethod
    async def fetch_stats(self, video_id: str) -> VideoStats:
        """
        Retrieve the current engagement counts and title of a video.

        Implementations also record the observed engagement in the shared
        run statistics.

        Args:
            video_id: YouTube video ID

        Returns:
            Current stats of the video

        Raises:
            VideoNotFoundError: If the platform reports no matching video
            APIError: If the API call fails
        """
        pass

    @abstractmethod
    async def get_snippet(self, video_id: str) -> dict[str, Any]:
        """
        Retrieve the current metadata snippet of a video.

        Args:
            video_id: YouTube video ID

        Returns:
            The snippet resource exactly as the platform returned it

        Raises:
            VideoNotFoundError: If the platform reports no matching video
            APIError: If the API call fails
        """
        pass
