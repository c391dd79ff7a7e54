from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from discographer.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyIngestUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from discographer.domain.model import Artist, ImportOrder

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Engine


def test_unit_of_work_requires_startup() -> None:
    shutdown()

    with pytest.raises(StartupError):
        SqlAlchemyIngestUnitOfWork()


def test_startup_refuses_to_reconfigure_without_force(
    sqlite_unit_of_work: Callable[[], SqlAlchemyIngestUnitOfWork],
    sqlite_engine: Engine,
) -> None:
    assert is_started()
    assert configured_engine() is sqlite_engine

    with pytest.raises(StartupError):
        startup(engine=sqlite_engine)


def test_commit_persists_across_units(
    sqlite_unit_of_work: Callable[[], SqlAlchemyIngestUnitOfWork],
) -> None:
    order = ImportOrder(mbid="release-1")
    with sqlite_unit_of_work() as uow:
        uow.repositories.import_orders.add(order)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        loaded = uow.repositories.import_orders.get(order.id)
        assert loaded is not None
        assert loaded.mbid == "release-1"


def test_exception_rolls_back_flushed_records(
    sqlite_unit_of_work: Callable[[], SqlAlchemyIngestUnitOfWork],
) -> None:
    with pytest.raises(RuntimeError, match="boom"), sqlite_unit_of_work() as uow:
        uow.repositories.records.add(Artist(mbid="artist-1", name="Yoko Ono"))
        assert uow.repositories.records.find_by(Artist, mbid="artist-1") is not None
        raise RuntimeError("boom")

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.records.find_by(Artist, mbid="artist-1") is None


def test_repositories_unavailable_outside_block(
    sqlite_unit_of_work: Callable[[], SqlAlchemyIngestUnitOfWork],
) -> None:
    uow = sqlite_unit_of_work()

    with pytest.raises(StartupError):
        _ = uow.repositories
