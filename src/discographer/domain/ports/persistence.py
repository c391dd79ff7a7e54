"""Ports for persisting ingested records."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RecordStore(Protocol):
    """Minimal store contract required by finders and persisters.

    ``add`` must make the record durable enough to be found by ``find_by`` and
    must raise ``PersistenceError`` (``DuplicateRecordError`` for uniqueness
    violations) when the store rejects it.
    """

    def find_by[TRecord](self, record_class: type[TRecord], **key: object) -> TRecord | None: ...

    def add(self, record: object) -> None: ...
