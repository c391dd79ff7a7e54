"""Bookkeeping for one requested import."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, ClassVar

from discographer.domain.model.entity import Entity
from discographer.domain.model.enums import EntityType, ImportStatus, ImportTarget

if TYPE_CHECKING:
    from uuid import UUID

    from discographer.domain.model.primitives import Mbid


def _now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(eq=False, kw_only=True)
class ImportOrder(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.IMPORT_ORDER

    mbid: Mbid
    target: ImportTarget = ImportTarget.RELEASE
    status: ImportStatus = ImportStatus.PENDING
    message: str | None = None
    edition_id: UUID | None = None
    created_at: datetime = field(default_factory=_now)
    finished_at: datetime | None = None

    @property
    def is_finished(self) -> bool:
        return self.status is not ImportStatus.PENDING

    def mark_succeeded(self, edition_id: UUID | None) -> None:
        self._finish(ImportStatus.SUCCEEDED)
        self.edition_id = edition_id
        self.message = None

    def mark_failed(self, message: str) -> None:
        self._finish(ImportStatus.FAILED)
        self.message = message

    def _finish(self, status: ImportStatus) -> None:
        if self.is_finished:
            raise ValueError(f"import order already {self.status}")
        self.status = status
        self.finished_at = _now()
