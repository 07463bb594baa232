"""YouTube API stats repository implementation."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httplib2
from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

from youtube_title_updater.domain.exceptions import APIError, VideoNotFoundError
from youtube_title_updater.domain.models.processing import RunStats
from youtube_title_updater.domain.models.video import VideoStats
from youtube_title_updater.domain.services.stats_repository import StatsRepository
from youtube_title_updater.infrastructure.youtube.api import (
    execute_request,
    translate_http_error,
)

logger = logging.getLogger(__name__)


class YouTubeStatsRepository(StatsRepository):
    """
    YouTube API implementation of the stats repository.

    Reads are public and authorized by the API key the service was built
    with, so they never consume the OAuth2 access token.
    """

    def __init__(
        self, service: Resource, run_stats: RunStats, num_retries: int = 0
    ) -> None:
        """
        Initialize the YouTube stats repository.

        Args:
            service: YouTube Data API v3 service built with an API key
            run_stats: Process-wide statistics updated with observed engagement
            num_retries: Transient-failure retries per request
        """
        self.service = service
        self.run_stats = run_stats
        self.num_retries = num_retries

    async def fetch_stats(self, video_id: str) -> VideoStats:
        """Retrieve the current engagement counts and title of a video."""
        item = await self._get_video_item(video_id, "statistics,snippet", "fetch stats")
        stats = self._parse_stats(video_id, item)

        self.run_stats.observe_engagement(stats.engagement)
        logger.debug("Fetched stats for %s: %s", video_id, stats)
        return stats

    async def get_snippet(self, video_id: str) -> dict[str, Any]:
        """Retrieve the current metadata snippet of a video."""
        item = await self._get_video_item(video_id, "snippet", "read metadata")
        return dict(item["snippet"])

    async def _get_video_item(self, video_id: str, part: str, operation: str) -> dict[str, Any]:
        """Fetch one video resource, mapping every failure to a domain error."""
        try:
            request = self.service.videos().list(part=part, id=video_id)
            response = await execute_request(request, self.num_retries)
        except HttpError as e:
            raise translate_http_error(e, video_id, operation) from e
        except (httplib2.HttpLib2Error, OSError) as e:
            raise APIError(f"Failed to {operation} for video {video_id}: {e}", cause=e) from e

        items = response.get("items") or []
        if not items:
            raise VideoNotFoundError(video_id)

        return items[0]  # type: ignore[no-any-return]

    def _parse_stats(self, video_id: str, item: dict[str, Any]) -> VideoStats:
        """
        Parse a YouTube API video item into VideoStats.

        Counts the channel has hidden (e.g. likes) are absent from the
        response and read as 0.
        """
        statistics = item.get("statistics", {})
        snippet = item.get("snippet", {})

        try:
            return VideoStats(
                video_id=video_id,
                views=_parse_count(statistics.get("viewCount")),
                likes=_parse_count(statistics.get("likeCount")),
                comments=_parse_count(statistics.get("commentCount")),
                current_title=snippet.get("title", ""),
                published_at=_parse_timestamp(snippet.get("publishedAt")),
            )
        except ValueError as e:
            raise APIError(f"Unexpected stats payload for video {video_id}: {e}", cause=e) from e


def _parse_count(raw: Any) -> int:
    try:
        return max(int(raw), 0)
    except (TypeError, ValueError):
        return 0


def _parse_timestamp(raw: str | None) -> datetime | None:
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
