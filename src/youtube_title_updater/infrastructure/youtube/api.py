"""Shared helpers for talking to the YouTube Data API v3."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import httplib2
from googleapiclient.discovery import Resource, build
from googleapiclient.errors import HttpError

from youtube_title_updater.domain.exceptions import (
    APIError,
    InsufficientPermissionsError,
    RateLimitError,
    TitleUpdaterError,
    TokenRejectedError,
    VideoNotFoundError,
)

RATE_LIMIT_REASONS = ("quotaExceeded", "rateLimitExceeded", "userRateLimitExceeded")


def build_youtube_service(api_key: str, timeout: float) -> Resource:
    """
    Build a YouTube Data API v3 client.

    Requests carry the API key; authorized calls add their own bearer
    header. Every socket operation is bounded by ``timeout``.

    Args:
        api_key: API key for the Google Cloud project
        timeout: Socket timeout in seconds

    Returns:
        YouTube Data API v3 service
    """
    return build(
        "youtube",
        "v3",
        developerKey=api_key,
        http=httplib2.Http(timeout=timeout),
        cache_discovery=False,
    )


async def execute_request(request: Any, num_retries: int = 0) -> dict[str, Any]:
    """
    Execute a prepared API request off the event loop.

    ``num_retries`` enables the client library's exponential backoff, which
    only retries transient outcomes (connection errors, 5xx, 429 and
    rate-limit 403 responses).
    """
    response = await asyncio.to_thread(request.execute, num_retries=num_retries)
    return response or {}


def error_reasons(error: HttpError) -> list[str]:
    """Extract the machine-readable reasons of an API error response."""
    reasons: list[str] = []
    details = getattr(error, "error_details", None)
    if isinstance(details, list):
        reasons.extend(d["reason"] for d in details if isinstance(d, dict) and "reason" in d)

    content = getattr(error, "content", b"")
    try:
        payload = json.loads(content.decode("utf-8") if isinstance(content, bytes) else content)
        for item in payload.get("error", {}).get("errors", []):
            if "reason" in item and item["reason"] not in reasons:
                reasons.append(item["reason"])
    except (ValueError, AttributeError, TypeError):
        pass

    return reasons


def translate_http_error(
    error: HttpError, video_id: str, operation: str
) -> TitleUpdaterError:
    """
    Map an API error response to the matching domain exception.

    Args:
        error: The HTTP error from the API
        video_id: The video the request targeted
        operation: Short description of the request, used in messages

    Returns:
        Domain exception to raise in place of the HTTP error
    """
    status_code = error.resp.status
    reasons = error_reasons(error)

    if status_code == 401:
        return TokenRejectedError(
            f"Access token rejected while trying to {operation}", payload=reasons, cause=error
        )
    elif status_code == 404:
        return VideoNotFoundError(video_id, error)
    elif status_code == 403:
        if any(reason in RATE_LIMIT_REASONS for reason in reasons) or "quotaExceeded" in str(error):
            return RateLimitError("YouTube API quota exceeded", cause=error)
        return InsufficientPermissionsError(operation, video_id, error)
    elif status_code == 429:
        return RateLimitError(cause=error)
    elif status_code == 400:
        return APIError(
            f"Invalid request while trying to {operation} ({', '.join(reasons) or 'badRequest'})",
            status_code,
            error,
        )
    else:
        return APIError(f"YouTube API error (HTTP {status_code}): {error}", status_code, error)
