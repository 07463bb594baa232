"""Default implementation of the title update service."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import timedelta

from youtube_title_updater.application.services.title_renderer import TitleRenderer
from youtube_title_updater.domain.exceptions import (
    APIError,
    AuthenticationError,
    TitleUpdaterError,
    UpdateError,
    VideoNotFoundError,
)
from youtube_title_updater.domain.models.processing import (
    BatchResult,
    PerformanceReport,
    ProcessResult,
    RunStats,
)
from youtube_title_updater.domain.models.video import UpdateStatus, VideoTask
from youtube_title_updater.domain.services.stats_repository import StatsRepository
from youtube_title_updater.domain.services.title_service import TitleService
from youtube_title_updater.domain.services.title_updater import TitleUpdater

logger = logging.getLogger(__name__)

Pause = Callable[[float], Awaitable[None]]


class DefaultTitleService(TitleService):
    """
    Default implementation of the title update service.

    Videos are processed strictly one at a time with a fixed pause between
    them, which keeps the job well inside the API quota. Every per-video
    error is caught here and reported as a failed result.
    """

    def __init__(
        self,
        stats_repository: StatsRepository,
        title_updater: TitleUpdater,
        renderer: TitleRenderer,
        run_stats: RunStats,
        inter_video_delay_seconds: float = 2.0,
        update_interval_minutes: int = 5,
        dry_run: bool = False,
        pause: Pause = asyncio.sleep,
    ) -> None:
        """
        Initialize the title service.

        Args:
            stats_repository: Source of video stats
            title_updater: Writer of new titles
            renderer: Builds candidate titles from stats
            run_stats: Process-wide statistics
            inter_video_delay_seconds: Pause between two consecutive videos
            update_interval_minutes: Cycle interval, used for report estimates
            dry_run: Render titles without writing them
            pause: Awaitable sleep used between videos
        """
        self.stats_repository = stats_repository
        self.title_updater = title_updater
        self.renderer = renderer
        self.run_stats = run_stats
        self.inter_video_delay_seconds = inter_video_delay_seconds
        self.update_interval_minutes = update_interval_minutes
        self.dry_run = dry_run
        self.pause = pause

    async def process_video(self, video_id: str, original_title: str) -> ProcessResult:
        """Bring one video's title in line with its current stats."""
        logger.info("🎬 Processing video: %s", video_id)

        try:
            stats = await self.stats_repository.fetch_stats(video_id)
            logger.info("📊 Current stats: %s", stats)

            new_title = self.renderer.render(stats, original_title)
            logger.info("💡 Generated title: \"%s\"", new_title)

            if new_title == stats.current_title:
                logger.info("📋 Title unchanged, skipping update to preserve API quota")
                status = UpdateStatus.UNCHANGED
            elif self.dry_run:
                logger.info("🔍 DRY RUN: would change \"%s\" to \"%s\"", stats.current_title, new_title)
                status = UpdateStatus.PREVIEWED
            else:
                await self.title_updater.update_title(video_id, new_title)
                status = UpdateStatus.UPDATED

            return ProcessResult(
                video_id=video_id,
                status=status,
                old_title=stats.current_title,
                new_title=new_title,
                stats=stats,
            )

        except VideoNotFoundError as e:
            return self._failed(video_id, f"Video not found: {e}")
        except AuthenticationError as e:
            return self._failed(video_id, f"Authentication error: {e}")
        except UpdateError as e:
            return self._failed(video_id, f"Update failed: {e}")
        except APIError as e:
            return self._failed(video_id, f"API error: {e}")
        except TitleUpdaterError as e:
            return self._failed(video_id, str(e))
        except Exception as e:
            logger.exception("Unexpected error processing video %s", video_id)
            return self._failed(video_id, f"Unexpected error: {e}")

    async def process_batch(self, tasks: Sequence[VideoTask]) -> BatchResult:
        """Process every task strictly one after another."""
        logger.info("🚀 Starting batch processing of %d videos", len(tasks))

        batch_result = BatchResult()

        for index, task in enumerate(tasks):
            logger.info("[%d/%d] Processing video...", index + 1, len(tasks))
            result = await self.process_video(task.video_id, task.original_title)
            batch_result.add_result(result)

            if index < len(tasks) - 1:
                await self.pause(self.inter_video_delay_seconds)

        batch_result.complete()

        logger.info(
            "📈 Batch processing complete: %d successful, %d failed "
            "(%d updated, %d unchanged), %d total title updates",
            batch_result.successful_count,
            batch_result.failed_count,
            batch_result.updated_count,
            batch_result.unchanged_count,
            self.run_stats.updates_performed,
        )
        return batch_result

    def get_performance_report(self) -> PerformanceReport:
        """Get a snapshot of the process-wide run statistics."""
        return self.run_stats.snapshot(timedelta(minutes=self.update_interval_minutes))

    def _failed(self, video_id: str, message: str) -> ProcessResult:
        logger.error("❌ Failed to process video %s: %s", video_id, message)
        return ProcessResult(
            video_id=video_id,
            status=UpdateStatus.FAILED,
            error=message,
        )
