"""Configuration providers and models."""

from youtube_title_updater.infrastructure.config.models import AppConfig, VideoConfig
from youtube_title_updater.infrastructure.config.yaml_provider import YamlConfigurationProvider

__all__ = [
    "AppConfig",
    "VideoConfig",
    "YamlConfigurationProvider",
]
