"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import PayloadFetcher
from .persistence import RecordStore
from .unit_of_work import IngestUnitOfWork, UnitOfWork

__all__ = [
    "IngestUnitOfWork",
    "PayloadFetcher",
    "RecordStore",
    "UnitOfWork",
]
