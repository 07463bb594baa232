"""YAML-based configuration provider implementation."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from youtube_title_updater.domain.exceptions import ConfigurationError
from youtube_title_updater.domain.models.credentials import OAuthCredentials
from youtube_title_updater.domain.models.video import VideoTask
from youtube_title_updater.domain.services.configuration_provider import ConfigurationProvider
from youtube_title_updater.infrastructure.config.models import (
    AppConfig,
    AuthSetupConfig,
    LoggingConfig,
    RetrySettings,
)

# Matches ${VAR_NAME} or ${VAR_NAME:default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


def read_config_file(config_path: str | Path) -> dict[str, Any]:
    """
    Read a YAML configuration file and substitute environment variables.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a mapping
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in configuration file: {e}", e) from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read configuration file: {e}", e) from e

    if not raw_config:
        raise ConfigurationError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ConfigurationError("Configuration file must contain a mapping")

    return substitute_env_vars(raw_config)


def substitute_env_vars(obj: Any) -> Any:
    """
    Recursively substitute environment variables in configuration.

    Supports ${VAR_NAME} and ${VAR_NAME:default_value} syntax.
    """
    if isinstance(obj, dict):
        return {key: substitute_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [substitute_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return _substitute_string_env_vars(obj)
    else:
        return obj


def _substitute_string_env_vars(value: str) -> str:
    """Substitute environment variables in a string value."""

    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default_value = match.group(2) if match.group(2) is not None else ""
        return os.getenv(var_name, default_value)

    return ENV_VAR_PATTERN.sub(replace_var, value)


def load_auth_setup_config(config_path: str | Path) -> AuthSetupConfig:
    """
    Load only the settings 'auth setup' needs.

    The rest of the file is not validated, so this works before a refresh
    token (or any other secret) has been configured.
    """
    raw_config = read_config_file(config_path)
    youtube_api = raw_config.get("youtube_api") or {}
    if not isinstance(youtube_api, dict):
        raise ConfigurationError("'youtube_api' must be a mapping")

    try:
        return AuthSetupConfig(**youtube_api)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}", e) from e


class YamlConfigurationProvider(ConfigurationProvider):
    """
    Configuration provider that loads settings from YAML files.

    This implementation supports loading configuration from YAML files
    with environment variable substitution and validation using Pydantic models,
    so secrets can stay in the environment of the deployment.
    """

    def __init__(self, config_path: str | Path) -> None:
        """
        Initialize the YAML configuration provider.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            ConfigurationError: If the configuration file cannot be loaded or is invalid
        """
        self.config_path = Path(config_path)
        self._config: AppConfig | None = None
        self._load_config()

    def _load_config(self) -> None:
        """Load and validate configuration from YAML file."""
        raw_config = read_config_file(self.config_path)

        try:
            self._config = AppConfig(**raw_config)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}", e) from e

    @property
    def config(self) -> AppConfig:
        """Get the loaded configuration."""
        if self._config is None:
            raise ConfigurationError("Configuration not loaded")
        return self._config

    def get_credentials(self) -> OAuthCredentials:
        """Get the API key and OAuth2 secrets."""
        try:
            return self.config.youtube_api.to_domain()
        except ValueError as e:
            raise ConfigurationError(f"Invalid credentials: {e}", e) from e

    def get_video_tasks(self) -> list[VideoTask]:
        """Get the enabled videos as domain tasks."""
        return [video.to_domain() for video in self.config.get_enabled_videos()]

    def get_update_interval_minutes(self) -> int:
        return self.config.processing.update_interval_minutes

    def get_inter_video_delay_seconds(self) -> float:
        return self.config.processing.inter_video_delay_seconds

    def get_report_interval_minutes(self) -> int:
        return self.config.processing.report_interval_minutes

    def get_max_title_length(self) -> int:
        return self.config.processing.max_title_length

    def get_dry_run_mode(self) -> bool:
        """Get whether the application should run in dry-run mode."""
        return self.config.processing.dry_run

    def get_request_timeout_seconds(self) -> float:
        return self.config.youtube_api.request_timeout_seconds

    def get_retry_settings(self) -> RetrySettings:
        """Get retry configuration for API operations."""
        return self.config.retry_settings

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration."""
        return self.config.logging

    def get_client_secrets_file(self) -> str | None:
        """Get the path to the OAuth2 client secrets file."""
        return self.config.youtube_api.client_secrets_file

    def get_oauth_scopes(self) -> list[str]:
        """Get the OAuth2 scopes requested during authorization."""
        return self.config.youtube_api.scopes
