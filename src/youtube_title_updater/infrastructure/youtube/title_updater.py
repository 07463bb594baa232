"""YouTube API title updater implementation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

import httplib2
from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

from youtube_title_updater.domain.exceptions import (
    APIError,
    TitleUpdaterError,
    TokenRejectedError,
    UpdateError,
)
from youtube_title_updater.domain.models.processing import RunStats, utc_now
from youtube_title_updater.domain.services.stats_repository import StatsRepository
from youtube_title_updater.domain.services.title_updater import TitleUpdater
from youtube_title_updater.domain.services.token_provider import TokenProvider
from youtube_title_updater.infrastructure.youtube.api import (
    execute_request,
    translate_http_error,
)

logger = logging.getLogger(__name__)


class YouTubeTitleUpdater(TitleUpdater):
    """
    YouTube API implementation of the title updater.

    Each write re-reads the video's snippet first so fields the renderer
    knows nothing about (description, tags, category) are sent back
    unchanged. A rejected access token is refreshed once and the whole
    write is retried once.
    """

    def __init__(
        self,
        service: Resource,
        token_provider: TokenProvider,
        stats_repository: StatsRepository,
        run_stats: RunStats,
        num_retries: int = 0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize the YouTube title updater.

        Args:
            service: YouTube Data API v3 service
            token_provider: Owner of the OAuth2 access token
            stats_repository: Source of the current metadata snippet
            run_stats: Process-wide statistics updated on every write
            num_retries: Transient-failure retries per request
            clock: Source of the current time
        """
        self.service = service
        self.token_provider = token_provider
        self.stats_repository = stats_repository
        self.run_stats = run_stats
        self.num_retries = num_retries
        self.clock = clock

    async def update_title(self, video_id: str, new_title: str) -> bool:
        """Replace the title of a video, refreshing the token once if rejected."""
        try:
            await self._write_title(video_id, new_title)
        except TokenRejectedError:
            logger.warning("🔄 Access token rejected for %s, refreshing and retrying once", video_id)
            await self.token_provider.refresh()
            try:
                await self._write_title(video_id, new_title)
            except TitleUpdaterError as e:
                raise UpdateError(video_id, f"retry after token refresh failed: {e}", e) from e

        self.run_stats.record_update(self.clock())
        logger.info("✅ Title of %s updated to \"%s\"", video_id, new_title)
        return True

    async def _write_title(self, video_id: str, new_title: str) -> None:
        """One complete write attempt: token, snapshot, update."""
        token = await self.token_provider.ensure_valid_token()
        snippet = await self.stats_repository.get_snippet(video_id)

        body = self._build_update_body(video_id, snippet, new_title)

        try:
            request = self.service.videos().update(part="snippet", body=body)
            request.headers["authorization"] = f"Bearer {token.value}"
            response = await execute_request(request, self.num_retries)
        except HttpError as e:
            raise translate_http_error(e, video_id, "update title") from e
        except (httplib2.HttpLib2Error, OSError) as e:
            raise APIError(f"Failed to update title of video {video_id}: {e}", cause=e) from e

        if response.get("id") != video_id:
            raise APIError(f"API response did not confirm title update of video {video_id}")

    def _build_update_body(
        self, video_id: str, snippet: dict[str, Any], new_title: str
    ) -> dict[str, Any]:
        """Copy the existing snippet with only the title replaced."""
        return {
            "id": video_id,
            "snippet": {
                **snippet,
                "title": new_title,
            },
        }
