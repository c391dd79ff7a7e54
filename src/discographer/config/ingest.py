"""Import workflow settings."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag


@dataclass(frozen=True, slots=True)
class IngestConfig:
    dry_run: bool = False


def get_ingest_config() -> IngestConfig:
    return IngestConfig(dry_run=env_flag("DISCOGRAPHER_DRY_RUN"))
