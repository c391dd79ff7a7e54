"""SQLAlchemy-backed unit of work for the import workflow.

The adapter owns one engine per process. ``startup`` creates (or adopts) it,
migrates the schema to head and resets the session factory; every
``SqlAlchemyIngestUnitOfWork`` opens one session from that factory.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from discographer.adapters.sqlalchemy.mappings import start_mappers
from discographer.adapters.sqlalchemy.migrations import upgrade_head
from discographer.adapters.sqlalchemy.repositories import (
    SqlAlchemyImportOrderRepository,
    SqlAlchemyRecordStore,
)
from discographer.config import get_database_config
from discographer.domain.ports.unit_of_work import IngestRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the SQLAlchemy adapter is used before ``startup`` or configured twice."""


class _Adapter:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None


def _enforce_sqlite_foreign_keys(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection: object, _record: object) -> None:
        cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Adopt ``engine`` (or create one from config), migrate it and reset the session factory.

    Engines created here enforce foreign keys on SQLite; adopted engines are
    used as configured by the caller.
    """

    if _Adapter.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    if engine is None:
        config = get_database_config()
        engine = create_engine(database_uri or config.uri, echo=config.echo, future=True)
        if engine.dialect.name == "sqlite":
            _enforce_sqlite_foreign_keys(engine)

    start_mappers()
    upgrade_head(engine=engine)
    _Adapter.engine = engine
    _Adapter.sessions = sessionmaker(bind=engine, expire_on_commit=False)
    log.debug("SQLAlchemy adapter started on %s", engine.url.render_as_string(hide_password=True))


def configured_engine() -> Engine | None:
    return _Adapter.engine


def is_started() -> bool:
    return _Adapter.engine is not None


def shutdown() -> None:
    """Dispose the managed engine; mostly useful between tests."""

    if _Adapter.engine is not None:
        _Adapter.engine.dispose()
    _Adapter.engine = None
    _Adapter.sessions = None


class SqlAlchemyIngestUnitOfWork:
    """One session for one import.

    Leaving the block with an exception rolls back everything flushed since
    the last commit, including records persisted by a partially built tree.
    """

    def __init__(self) -> None:
        if _Adapter.sessions is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call discographer.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        self._sessions = _Adapter.sessions
        self._session: Session | None = None
        self._repositories: IngestRepositories | None = None

    def __enter__(self) -> SqlAlchemyIngestUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work already entered")
        self._session = self._sessions()
        self._repositories = IngestRepositories(
            records=SqlAlchemyRecordStore(self._session),
            import_orders=SqlAlchemyImportOrderRepository(self._session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        if exc_type is not None:
            session.rollback()
        session.close()
        self._session = None
        self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @property
    def repositories(self) -> IngestRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from discographer.domain.ports.unit_of_work import IngestUnitOfWork

    _uow_check: IngestUnitOfWork = SqlAlchemyIngestUnitOfWork()
