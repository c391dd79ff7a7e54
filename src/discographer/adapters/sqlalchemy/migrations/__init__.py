"""Alembic entry points for the SQLAlchemy adapter."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Final

from alembic import command
from alembic.config import Config

from discographer.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

MIGRATIONS_PATH: Final[Path] = Path(__file__).resolve().parent
# src/discographer/adapters/sqlalchemy/migrations -> repository root
PROJECT_ROOT: Final[Path] = MIGRATIONS_PATH.parents[4]
PYPROJECT_PATH: Final[Path] = PROJECT_ROOT / "pyproject.toml"


def _alembic_section() -> dict[str, str]:
    """``[tool.alembic]`` of the checkout's pyproject.toml; empty for installed packages."""

    if not PYPROJECT_PATH.is_file():
        return {}
    with PYPROJECT_PATH.open("rb") as handle:
        section = tomllib.load(handle).get("tool", {}).get("alembic", {})
    return {str(key): str(value) for key, value in section.items()}


def _script_location(configured: str | None) -> Path:
    if configured is None:
        return MIGRATIONS_PATH
    candidate = Path(configured)
    if not candidate.is_absolute():
        candidate = PROJECT_ROOT / candidate
    return candidate if candidate.exists() else MIGRATIONS_PATH


def _build_config() -> Config:
    section = _alembic_section()
    config = Config()
    script_location = _script_location(section.pop("script_location", None))
    config.set_main_option("script_location", str(script_location))
    section.pop("prepend_sys_path", None)
    for key, value in section.items():
        config.set_main_option(key, value)
    return config


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Migrate ``engine`` (or the database at ``database_uri``) to the latest revision."""

    config = _build_config()
    if engine is None:
        config.set_main_option("sqlalchemy.url", database_uri or get_database_config().uri)
        command.upgrade(config, "head")
        return
    with engine.begin() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, "head")
