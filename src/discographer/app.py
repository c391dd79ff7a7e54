"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from discographer.adapters.musicbrainz import (
    EDITION,
    SONG_EDITION,
    MusicBrainzAPIError,
    build_http_musicbrainz_fetcher,
    build_reflections,
)
from discographer.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyIngestUnitOfWork,
    is_started,
    startup,
)
from discographer.config import get_ingest_config
from discographer.domain.ingestion import (
    IngestionError,
    NullPersister,
    describe_failure,
    ingest,
    scrape,
)
from discographer.domain.model import (
    Edition,
    ImportOrder,
    ImportStatus,
    ImportTarget,
    SongEdition,
)
from discographer.domain.ports.unit_of_work import IngestUnitOfWork

if TYPE_CHECKING:
    from uuid import UUID

    from discographer.domain.ingestion import IngestionReflections
    from discographer.domain.ports.fetching import PayloadFetcher

UnitOfWorkFactory = Callable[[], IngestUnitOfWork]

log = getLogger(__name__)

_ROOT_TYPES: dict[ImportTarget, str] = {
    ImportTarget.RELEASE: EDITION,
    ImportTarget.RECORDING: SONG_EDITION,
}


@dataclass(frozen=True, slots=True)
class ImportResult:
    order: ImportOrder
    record: object | None = None
    dry_run: bool = False

    @property
    def succeeded(self) -> bool:
        return self.order.status is ImportStatus.SUCCEEDED

    @property
    def edition(self) -> Edition | None:
        return _edition_of(self.record)


def import_release(
    mbid: str,
    *,
    target: ImportTarget = ImportTarget.RELEASE,
    dry_run: bool | None = None,
    fetcher: PayloadFetcher | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    reflections: IngestionReflections | None = None,
) -> ImportResult:
    """Fetch one MusicBrainz release (or recording) and ingest its record tree.

    Every run is tracked by an ``ImportOrder`` committed up front. An ingestion
    failure rolls back all records flushed for the tree and leaves the order
    marked failed with a message naming the failing association. Any other
    error also marks the order failed before it is re-raised. Dry runs
    build the tree in memory and write nothing, not even the order.
    """

    if unit_of_work_factory is None and not is_started():
        startup()
    effective_dry_run = get_ingest_config().dry_run if dry_run is None else dry_run
    effective_fetcher = fetcher or build_http_musicbrainz_fetcher(target)
    effective_uow = unit_of_work_factory or SqlAlchemyIngestUnitOfWork
    registry = reflections or build_reflections()
    reflection = registry.for_type(_ROOT_TYPES[target])

    log.info("Starting %s import: mbid=%s, dry_run=%s", target, mbid, effective_dry_run)
    order = ImportOrder(mbid=mbid, target=target)

    with effective_uow() as uow:
        if not effective_dry_run:
            uow.repositories.import_orders.add(order)
            uow.commit()

        try:
            payload = effective_fetcher(mbid)
        except MusicBrainzAPIError as exc:
            log.warning("Fetching %s %s failed: %s", target, mbid, exc)
            order.mark_failed(f"{type(exc).__name__}: {exc}")
            _finish(uow, dry_run=effective_dry_run)
            return ImportResult(order=order, dry_run=effective_dry_run)
        except Exception as exc:
            _abandon(uow, order, exc, dry_run=effective_dry_run)
            raise

        persister = NullPersister() if effective_dry_run else None
        try:
            record = ingest(
                scrape(reflection.scraper, payload),
                reflection,
                persister,
                store=uow.repositories.records,
                registry=registry,
            )
        except IngestionError as exc:
            uow.rollback()
            message = describe_failure(exc)
            log.warning("Import of %s %s failed: %s", target, mbid, message)
            order.mark_failed(message)
            _finish(uow, dry_run=effective_dry_run)
            return ImportResult(order=order, dry_run=effective_dry_run)
        except Exception as exc:
            _abandon(uow, order, exc, dry_run=effective_dry_run)
            raise

        edition = _edition_of(record)
        order.mark_succeeded(None if effective_dry_run or edition is None else edition.id)
        _finish(uow, dry_run=effective_dry_run)

    log.info("Finished %s import: mbid=%s, status=%s", target, mbid, order.status)
    return ImportResult(order=order, record=record, dry_run=effective_dry_run)


def get_import_order(
    order_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ImportOrder | None:
    if unit_of_work_factory is None and not is_started():
        startup()
    effective_uow = unit_of_work_factory or SqlAlchemyIngestUnitOfWork
    with effective_uow() as uow:
        return uow.repositories.import_orders.get(order_id)


def _finish(uow: IngestUnitOfWork, *, dry_run: bool) -> None:
    if dry_run:
        uow.rollback()
    else:
        uow.commit()


def _abandon(
    uow: IngestUnitOfWork, order: ImportOrder, exc: Exception, *, dry_run: bool
) -> None:
    # The order must not stay pending when an unexpected error escapes
    uow.rollback()
    log.error("Import of %s %s aborted: %r", order.target, order.mbid, exc)
    order.mark_failed(f"{type(exc).__name__}: {exc}")
    _finish(uow, dry_run=dry_run)


def _edition_of(record: object) -> Edition | None:
    if isinstance(record, Edition):
        return record
    if isinstance(record, SongEdition):
        return record.edition
    return None
