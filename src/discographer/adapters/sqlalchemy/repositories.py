"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from discographer.domain.ingestion import DuplicateRecordError, PersistenceError
from discographer.domain.model import ImportOrder

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.orm import Session

log = getLogger(__name__)


class SqlAlchemyRecordStore:
    """Record store for the ingestion pipeline.

    ``add`` flushes immediately so the new row is visible to later lookups
    within the same transaction; committing is left to the unit of work.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by[TRecord](self, record_class: type[TRecord], **key: object) -> TRecord | None:
        stmt = select(record_class).filter_by(**key).limit(1)
        with self.session.no_autoflush:
            return self.session.execute(stmt).scalars().first()

    def add(self, record: object) -> None:
        self.session.add(record)
        try:
            self.session.flush()
        except IntegrityError as exc:
            log.warning("Duplicate %s rejected: %s", type(record).__name__, exc.orig)
            raise DuplicateRecordError(
                f"{type(record).__name__} violates a uniqueness constraint", record=record
            ) from exc
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Failed to persist {type(record).__name__}: {exc}", record=record
            ) from exc


class SqlAlchemyImportOrderRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, order: ImportOrder) -> None:
        self.session.add(order)

    def get(self, order_id: uuid.UUID) -> ImportOrder | None:
        return self.session.get(ImportOrder, order_id)
