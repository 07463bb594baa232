"""Abstract base class for configuration management."""

from abc import ABC, abstractmethod
from typing import Any

from youtube_title_updater.domain.models.credentials import OAuthCredentials
from youtube_title_updater.domain.models.video import VideoTask


class ConfigurationProvider(ABC):
    """
    Abstract service for providing application configuration.

    This interface defines the contract for loading and validating
    configuration data from various sources (files, environment variables,
    etc.). Configuration is read-only once loaded.
    """

    @abstractmethod
    def get_credentials(self) -> OAuthCredentials:
        """
        Get the API key and OAuth2 secrets.

        Returns:
            Validated credentials with every required field present

        Raises:
            ConfigurationError: If a required secret is missing
        """
        pass

    @abstractmethod
    def get_video_tasks(self) -> list[VideoTask]:
        """
        Get the enabled videos whose titles should be kept up to date.

        Returns:
            Video tasks in configuration order
        """
        pass

    @abstractmethod
    def get_update_interval_minutes(self) -> int:
        """
        Get the interval between two update cycles.

        Returns:
            Interval in minutes (typically 5)
        """
        pass

    @abstractmethod
    def get_inter_video_delay_seconds(self) -> float:
        """
        Get the pause inserted between two videos of the same cycle.

        Returns:
            Delay in seconds (typically 2)
        """
        pass

    @abstractmethod
    def get_report_interval_minutes(self) -> int:
        """Get the interval between two performance report log entries."""
        pass

    @abstractmethod
    def get_max_title_length(self) -> int:
        """Get the maximum length of a rendered title."""
        pass

    @abstractmethod
    def get_dry_run_mode(self) -> bool:
        """
        Get whether the application should run in dry-run mode.

        In dry-run mode titles are rendered but never written.

        Returns:
            True if in dry-run mode, False for normal operation
        """
        pass

    @abstractmethod
    def get_request_timeout_seconds(self) -> float:
        """Get the socket timeout applied to every API request."""
        pass

    @abstractmethod
    def get_retry_settings(self) -> Any:
        """
        Get retry configuration for API operations.

        Returns:
            Retry settings (max_attempts, backoff_factor, max_delay)
        """
        pass

    @abstractmethod
    def get_logging_config(self) -> Any:
        """
        Get logging configuration.

        Returns:
            Logging settings (level, format, file_path, rotation)
        """
        pass
