"""Abstract base class for video title write-back."""

from abc import ABC, abstractmethod


class TitleUpdater(ABC):
    """
    Abstract service for changing a video's title on the platform.

    Implementations must preserve every other metadata field of the video
    and may recover from an expired access token by refreshing it once.
    """

    @abstractmethod
    async def update_title(self, video_id: str, new_title: str) -> bool:
        """
        Replace the title of a video.

        Args:
            video_id: YouTube video ID
            new_title: Title to write

        Returns:
            True once the platform has accepted the new title

        Raises:
            AuthenticationError: If a token refresh fails
            VideoNotFoundError: If the video doesn't exist or isn't accessible
            InsufficientPermissionsError: If lacking permissions to modify the video
            APIError: If the API call fails for a non-auth reason
            UpdateError: If the write fails again after the token refresh retry
        """
        pass
