"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, require_env_var, require_env_vars
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .ingest import IngestConfig, get_ingest_config
from .logging import configure_logging
from .musicbrainz import MusicBrainzConfig, get_musicbrainz_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "IngestConfig",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "MusicBrainzConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "get_database_config",
    "get_ingest_config",
    "get_musicbrainz_config",
    "get_storage_config",
    "require_env_var",
    "require_env_vars",
]
