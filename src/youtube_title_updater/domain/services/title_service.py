"""Abstract base class for the title update orchestration."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from youtube_title_updater.domain.models.processing import (
    BatchResult,
    PerformanceReport,
    ProcessResult,
)
from youtube_title_updater.domain.models.video import VideoTask


class TitleService(ABC):
    """
    Abstract service for orchestrating a title update cycle.

    This is the main business logic interface that coordinates between the
    stats repository, the title renderer, and the title updater. It is the
    error boundary of a cycle: no per-video failure escapes it.
    """

    @abstractmethod
    async def process_video(self, video_id: str, original_title: str) -> ProcessResult:
        """
        Bring one video's title in line with its current stats.

        This method should:
        1. Fetch the current stats
        2. Render the candidate title
        3. Skip the write when the candidate equals the current title
        4. Otherwise write the candidate title

        Args:
            video_id: YouTube video ID
            original_title: The base title embedded in every rendering

        Returns:
            ProcessResult describing the outcome; never raises
        """
        pass

    @abstractmethod
    async def process_batch(self, tasks: Sequence[VideoTask]) -> BatchResult:
        """
        Process every task strictly one after another.

        A fixed pause separates consecutive tasks. A failing task never stops
        the remaining ones.

        Args:
            tasks: Videos to process, in order

        Returns:
            BatchResult with one ProcessResult per task, in input order
        """
        pass

    @abstractmethod
    def get_performance_report(self) -> PerformanceReport:
        """
        Get a snapshot of the process-wide run statistics.

        Returns:
            PerformanceReport with update totals, peak engagement and uptime
        """
        pass
