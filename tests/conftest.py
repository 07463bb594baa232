"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
import yaml

from youtube_title_updater.domain.models.credentials import AccessToken, OAuthCredentials
from youtube_title_updater.domain.models.processing import RunStats
from youtube_title_updater.domain.models.video import VideoStats, VideoTask
from youtube_title_updater.infrastructure.config.models import AppConfig

VIDEO_ID_1 = "dQw4w9WgXcQ"
VIDEO_ID_2 = "9bZkp7q5f_0"
VIDEO_ID_3 = "kJQP7kiw5Fk"


@pytest.fixture
def sample_config_data() -> dict[str, Any]:
    """Sample configuration data for testing."""
    return {
        "youtube_api": {
            "api_key": "test-api-key",
            "client_id": "test-client-id.apps.googleusercontent.com",
            "client_secret": "test-client-secret",
            "refresh_token": "test-refresh-token",
            "channel_id": "UCTestChannelID000000001",
            "scopes": ["https://www.googleapis.com/auth/youtube"],
            "request_timeout_seconds": 30,
        },
        "videos": [
            {
                "video_id": VIDEO_ID_1,
                "original_title": "Building Vaultittech: Real-Time Revenue Tracking",
                "enabled": True,
            },
            {
                "video_id": VIDEO_ID_2,
                "original_title": "Second Demo",
                "enabled": True,
            },
            {
                "video_id": VIDEO_ID_3,
                "original_title": "Paused Video",
                "enabled": False,
            },
        ],
        "processing": {
            "update_interval_minutes": 5,
            "inter_video_delay_seconds": 2.0,
            "report_interval_minutes": 60,
            "max_title_length": 100,
            "dry_run": False,
        },
        "retry_settings": {
            "max_attempts": 3,
            "backoff_factor": 2.0,
            "max_delay": 300,
        },
        "logging": {
            "level": "INFO",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "file_path": None,
            "max_file_size": 10485760,
            "backup_count": 5,
        },
    }


@pytest.fixture
def temp_config_file(sample_config_data: dict[str, Any]) -> Path:
    """Create a temporary configuration file for testing."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yml", delete=False) as f:
        yaml.dump(sample_config_data, f)
        return Path(f.name)


@pytest.fixture
def app_config(sample_config_data: dict[str, Any]) -> AppConfig:
    """Create an AppConfig instance for testing."""
    return AppConfig(**sample_config_data)


@pytest.fixture
def oauth_credentials() -> OAuthCredentials:
    """Create sample OAuth credentials."""
    return OAuthCredentials(
        api_key="test-api-key",
        client_id="test-client-id.apps.googleusercontent.com",
        client_secret="test-client-secret",
        refresh_token="test-refresh-token",
    )


@pytest.fixture
def fresh_token() -> AccessToken:
    """Create an access token valid for the next hour."""
    return AccessToken(
        value="ya29.test-access-token",
        expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
    )


@pytest.fixture
def sample_task() -> VideoTask:
    """Create a sample video task."""
    return VideoTask(video_id=VIDEO_ID_1, original_title="Demo")


@pytest.fixture
def sample_stats() -> VideoStats:
    """Create sample stats for the demo video."""
    return VideoStats(
        video_id=VIDEO_ID_1,
        views=1000,
        likes=50,
        comments=10,
        current_title="Demo",
    )


@pytest.fixture
def run_stats() -> RunStats:
    """Create fresh run statistics."""
    return RunStats()


@pytest.fixture
def mock_youtube_service() -> MagicMock:
    """Create a mock YouTube Data API service."""
    return MagicMock()


@pytest.fixture
def mock_token_provider(fresh_token: AccessToken) -> AsyncMock:
    """Create a mock token provider."""
    mock = AsyncMock()
    mock.ensure_valid_token.return_value = fresh_token
    mock.refresh.return_value = fresh_token
    return mock


@pytest.fixture
def mock_stats_repository(sample_stats: VideoStats) -> AsyncMock:
    """Create a mock stats repository."""
    mock = AsyncMock()
    mock.fetch_stats.return_value = sample_stats
    mock.get_snippet.return_value = {
        "title": sample_stats.current_title,
        "description": "Live engagement demo",
        "categoryId": "28",
        "tags": ["demo"],
    }
    return mock


@pytest.fixture
def mock_title_updater() -> AsyncMock:
    """Create a mock title updater."""
    mock = AsyncMock()
    mock.update_title.return_value = True
    return mock


@pytest.fixture
def mock_config_provider(app_config: AppConfig) -> Mock:
    """Create a mock configuration provider."""
    mock = Mock()
    mock.get_credentials.return_value = app_config.youtube_api.to_domain()
    mock.get_video_tasks.return_value = [
        video.to_domain() for video in app_config.get_enabled_videos()
    ]
    mock.get_update_interval_minutes.return_value = app_config.processing.update_interval_minutes
    mock.get_inter_video_delay_seconds.return_value = app_config.processing.inter_video_delay_seconds
    mock.get_report_interval_minutes.return_value = app_config.processing.report_interval_minutes
    mock.get_max_title_length.return_value = app_config.processing.max_title_length
    mock.get_dry_run_mode.return_value = app_config.processing.dry_run
    mock.get_request_timeout_seconds.return_value = app_config.youtube_api.request_timeout_seconds
    mock.get_retry_settings.return_value = app_config.retry_settings
    mock.get_logging_config.return_value = app_config.logging
    return mock
