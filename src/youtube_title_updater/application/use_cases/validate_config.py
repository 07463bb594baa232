"""Use case for validating application configuration."""

from __future__ import annotations

from pathlib import Path

from youtube_title_updater.domain.exceptions import ConfigurationError
from youtube_title_updater.domain.services.configuration_provider import ConfigurationProvider


class ValidateConfigUseCase:
    """
    Use case for validating the application configuration.

    Checks settings that each parse fine on their own but do not work
    together, such as a cycle interval too short for the configured videos.
    """

    def __init__(self, config_provider: ConfigurationProvider) -> None:
        """
        Initialize the validation use case.

        Args:
            config_provider: Configuration provider to validate
        """
        self.config_provider = config_provider

    def execute(self) -> list[str]:
        """
        Execute configuration validation.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors: list[str] = []

        try:
            self.config_provider.get_credentials()
        except ConfigurationError as e:
            errors.append(str(e))

        try:
            tasks = self.config_provider.get_video_tasks()
            if not tasks:
                errors.append("No enabled videos configured")

            interval_minutes = self.config_provider.get_update_interval_minutes()
            if interval_minutes < 1:
                errors.append(f"Invalid update interval: {interval_minutes} minutes (must be >= 1)")

            # Pauses alone must fit in one interval or every other tick is skipped.
            pause_seconds = max(len(tasks) - 1, 0) * self.config_provider.get_inter_video_delay_seconds()
            if pause_seconds >= interval_minutes * 60:
                errors.append(
                    f"Update interval of {interval_minutes} minutes is shorter than the "
                    f"{pause_seconds:.0f} seconds of pauses between {len(tasks)} videos"
                )

            max_length = self.config_provider.get_max_title_length()
            if max_length < 10 or max_length > 100:
                errors.append(f"Invalid max title length: {max_length} (must be 10-100)")

            retry_settings = self.config_provider.get_retry_settings()
            if retry_settings.max_attempts < 1 or retry_settings.max_attempts > 10:
                errors.append(
                    f"Invalid max retry attempts: {retry_settings.max_attempts} (must be 1-10)"
                )

            logging_config = self.config_provider.get_logging_config()
            valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
            if logging_config.level.upper() not in valid_levels:
                errors.append(
                    f"Invalid log level: {logging_config.level} (must be one of {valid_levels})"
                )

        except Exception as e:
            errors.append(f"Configuration validation failed: {e}")

        return errors

    @staticmethod
    def validate_client_secrets(client_secrets_file: str | None) -> str | None:
        """
        Validate the OAuth2 client secrets file used by 'auth setup'.

        Returns:
            Error message if validation fails, None if successful
        """
        if not client_secrets_file:
            return "No client_secrets_file configured under youtube_api"
        if not Path(client_secrets_file).exists():
            return f"Client secrets file not found: {client_secrets_file}"
        return None
