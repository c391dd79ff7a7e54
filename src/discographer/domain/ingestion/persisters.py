"""Commit strategies for built records."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from discographer.domain.ports.persistence import RecordStore

log = getLogger(__name__)


@runtime_checkable
class Persister(Protocol):
    """Persist a record, or decide not to.

    ``active`` tells callers whether persisted identities exist afterwards;
    enhancement steps that attach children are skipped when it is false.
    """

    @property
    def active(self) -> bool: ...

    def __call__[TRecord](self, record: TRecord) -> TRecord: ...


@dataclass(frozen=True, slots=True)
class StorePersister:
    store: RecordStore

    @property
    def active(self) -> bool:
        return True

    def __call__[TRecord](self, record: TRecord) -> TRecord:
        self.store.add(record)
        log.debug("Persisted %s", type(record).__name__)
        return record


class NullPersister:
    """Dry-run persister: leaves records in memory only."""

    @property
    def active(self) -> bool:
        return False

    def __call__[TRecord](self, record: TRecord) -> TRecord:
        return record
