"""Pydantic configuration models for application settings."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from youtube_title_updater.domain.models.credentials import OAuthCredentials
from youtube_title_updater.domain.models.video import VideoTask

YOUTUBE_SCOPE = "https://www.googleapis.com/auth/youtube"
VIDEO_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{11}$")


class RetrySettings(BaseModel):
    """Configuration for API retry behavior."""

    model_config = ConfigDict(extra="forbid")

    max_attempts: int = Field(default=3, ge=1, le=10, description="Maximum attempts per API request")
    backoff_factor: float = Field(default=2.0, ge=1.0, le=10.0, description="Exponential backoff factor")
    max_delay: int = Field(default=300, ge=1, description="Maximum delay between retries in seconds")

    @property
    def num_retries(self) -> int:
        """Retries on top of the first attempt."""
        return self.max_attempts - 1


class LoggingConfig(BaseModel):
    """Configuration for application logging."""

    model_config = ConfigDict(extra="forbid")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string"
    )
    file_path: str | None = Field(default=None, description="Log file path (None for console only)")
    max_file_size: int = Field(default=10485760, ge=1024, description="Max log file size in bytes (10MB)")
    backup_count: int = Field(default=5, ge=1, description="Number of backup log files to keep")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


class ProcessingSettings(BaseModel):
    """Configuration for the update cycle."""

    model_config = ConfigDict(extra="forbid")

    update_interval_minutes: int = Field(default=5, ge=1, le=1440, description="Minutes between update cycles")
    inter_video_delay_seconds: float = Field(default=2.0, ge=0, le=60, description="Pause between two videos")
    report_interval_minutes: int = Field(default=60, ge=1, description="Minutes between performance reports")
    max_title_length: int = Field(default=100, ge=10, le=100, description="Maximum rendered title length")
    dry_run: bool = Field(default=False, description="Render titles without writing them")


class VideoConfig(BaseModel):
    """
    Configuration for a tracked video with validation.

    This Pydantic model provides runtime validation for video entries
    loaded from the YAML file.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    video_id: str = Field(..., min_length=1, description="YouTube video ID")
    original_title: str = Field(..., min_length=1, max_length=100, description="Base title embedded in every rendering")
    enabled: bool = Field(default=True, description="Whether to process this video")

    @field_validator("video_id")
    @classmethod
    def validate_video_id(cls, v: str) -> str:
        """Validate YouTube video ID format."""
        if not VIDEO_ID_PATTERN.match(v):
            raise ValueError(f"Invalid YouTube video ID format: {v}")
        return v

    def to_domain(self) -> VideoTask:
        """Convert to domain VideoTask entity."""
        return VideoTask(video_id=self.video_id, original_title=self.original_title)


class YouTubeAPIConfig(BaseModel):
    """Configuration for YouTube API access."""

    model_config = ConfigDict(extra="forbid")

    api_key: str = Field(..., min_length=1, description="API key for public reads")
    client_id: str = Field(..., min_length=1, description="OAuth2 client ID")
    client_secret: str = Field(..., min_length=1, description="OAuth2 client secret")
    refresh_token: str = Field(..., min_length=1, description="OAuth2 refresh token")
    channel_id: str | None = Field(default=None, description="Channel owning the videos")
    client_secrets_file: str | None = Field(
        default=None, description="OAuth2 client secrets JSON used by 'auth setup'"
    )
    scopes: list[str] = Field(
        default=[YOUTUBE_SCOPE],
        description="OAuth2 scopes requested by 'auth setup'"
    )
    request_timeout_seconds: float = Field(default=30.0, gt=0, le=300, description="Socket timeout per request")

    @field_validator("channel_id", "client_secrets_file", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat empty substituted values as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("scopes")
    @classmethod
    def validate_scopes(cls, v: list[str]) -> list[str]:
        """Validate YouTube API scopes."""
        if YOUTUBE_SCOPE not in v:
            raise ValueError(f"Required scope {YOUTUBE_SCOPE} must be included")
        return v

    def to_domain(self) -> OAuthCredentials:
        """Convert to domain OAuthCredentials."""
        return OAuthCredentials(
            api_key=self.api_key,
            client_id=self.client_id,
            client_secret=self.client_secret,
            refresh_token=self.refresh_token,
            channel_id=self.channel_id,
        )


class AuthSetupConfig(BaseModel):
    """
    The part of ``youtube_api`` needed to mint a refresh token.

    Unlike YouTubeAPIConfig it accepts a file whose secrets are still unset.
    """

    model_config = ConfigDict(extra="ignore")

    client_secrets_file: str | None = None
    scopes: list[str] = Field(default=[YOUTUBE_SCOPE])

    @field_validator("client_secrets_file", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("scopes")
    @classmethod
    def validate_scopes(cls, v: list[str]) -> list[str]:
        if YOUTUBE_SCOPE not in v:
            raise ValueError(f"Required scope {YOUTUBE_SCOPE} must be included")
        return v


class AppConfig(BaseModel):
    """
    Main application configuration model.

    This is the root configuration object that contains all application settings,
    validated using Pydantic for type safety and runtime validation.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    # Core settings
    youtube_api: YouTubeAPIConfig
    videos: list[VideoConfig] = Field(..., description="Videos to keep up to date", min_length=1)

    # Cycle configuration
    processing: ProcessingSettings = Field(default_factory=ProcessingSettings)

    # Infrastructure settings
    retry_settings: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("videos")
    @classmethod
    def validate_videos(cls, v: list[VideoConfig]) -> list[VideoConfig]:
        """Validate video configurations."""
        if not v:
            raise ValueError("At least one video must be configured")

        video_ids = [video.video_id for video in v]
        if len(video_ids) != len(set(video_ids)):
            raise ValueError("Duplicate video IDs found in configuration")

        return v

    def get_enabled_videos(self) -> list[VideoConfig]:
        """Get only the enabled videos."""
        return [video for video in self.videos if video.enabled]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return self.model_dump()
