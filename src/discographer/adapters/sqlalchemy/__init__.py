"""SQLAlchemy adapter package for discographer."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import SqlAlchemyImportOrderRepository, SqlAlchemyRecordStore
from .unit_of_work import SqlAlchemyIngestUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyImportOrderRepository",
    "SqlAlchemyIngestUnitOfWork",
    "SqlAlchemyRecordStore",
    "create_all_tables",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
