"""Tests for the shared YouTube API helpers."""

from __future__ import annotations

import json
from unittest.mock import Mock, patch

import httplib2
import pytest
from googleapiclient.errors import HttpError

from youtube_title_updater.domain.exceptions import (
    APIError,
    InsufficientPermissionsError,
    RateLimitError,
    TokenRejectedError,
    VideoNotFoundError,
)
from youtube_title_updater.infrastructure.youtube.api import (
    build_youtube_service,
    error_reasons,
    execute_request,
    translate_http_error,
)


def http_error(status: int, reason: str = "", message: str = "error") -> HttpError:
    """Build an HttpError shaped like a YouTube API error response."""
    errors = [{"reason": reason, "message": message}] if reason else []
    content = json.dumps({"error": {"code": status, "message": message, "errors": errors}})
    return HttpError(httplib2.Response({"status": status}), content.encode("utf-8"))


class TestTranslateHttpError:
    """Tests for translate_http_error."""

    def test_unauthorized(self) -> None:
        """Test 401 marks the access token as rejected."""
        error = translate_http_error(http_error(401, "authError"), "vid", "update title")

        assert isinstance(error, TokenRejectedError)
        assert error.payload == ["authError"]

    def test_not_found(self) -> None:
        """Test 404 maps to a missing video."""
        error = translate_http_error(http_error(404, "videoNotFound"), "vid", "fetch stats")

        assert isinstance(error, VideoNotFoundError)
        assert error.video_id == "vid"

    def test_quota_exceeded(self) -> None:
        """Test quota 403s are rate limits."""
        error = translate_http_error(http_error(403, "quotaExceeded"), "vid", "update title")

        assert isinstance(error, RateLimitError)
        assert error.status_code == 429

    def test_forbidden(self) -> None:
        """Test other 403s are permission problems."""
        error = translate_http_error(http_error(403, "forbidden"), "vid", "update title")

        assert isinstance(error, InsufficientPermissionsError)
        assert error.status_code == 403

    def test_too_many_requests(self) -> None:
        """Test 429 is a rate limit."""
        assert isinstance(translate_http_error(http_error(429), "vid", "op"), RateLimitError)

    def test_bad_request(self) -> None:
        """Test 400 carries the API reasons."""
        error = translate_http_error(http_error(400, "invalidTitle"), "vid", "update title")

        assert type(error) is APIError
        assert error.status_code == 400
        assert "invalidTitle" in str(error)

    def test_server_error(self) -> None:
        """Test anything else is a generic API error."""
        error = translate_http_error(http_error(503), "vid", "op")

        assert type(error) is APIError
        assert error.status_code == 503

    def test_error_reasons_without_json(self) -> None:
        """Test non-JSON bodies yield no reasons."""
        error = HttpError(httplib2.Response({"status": 500}), b"<html>oops</html>")

        assert error_reasons(error) == []


class TestExecuteRequest:
    """Tests for execute_request."""

    @pytest.mark.asyncio
    async def test_passes_num_retries(self) -> None:
        """Test the client library backoff is enabled."""
        request = Mock()
        request.execute.return_value = {"items": []}

        response = await execute_request(request, num_retries=2)

        assert response == {"items": []}
        request.execute.assert_called_once_with(num_retries=2)

    @pytest.mark.asyncio
    async def test_empty_response(self) -> None:
        """Test an empty body reads as an empty mapping."""
        request = Mock()
        request.execute.return_value = None

        assert await execute_request(request) == {}


def test_build_youtube_service_uses_api_key_and_timeout() -> None:
    """Test the client is built with the key and a bounded socket timeout."""
    with patch("youtube_title_updater.infrastructure.youtube.api.build") as mock_build:
        build_youtube_service("test-key", 15)

    args, kwargs = mock_build.call_args
    assert args == ("youtube", "v3")
    assert kwargs["developerKey"] == "test-key"
    assert kwargs["http"].timeout == 15
    assert kwargs["cache_discovery"] is False
