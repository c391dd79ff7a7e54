from __future__ import annotations

import pytest

from discographer.domain.ingestion import (
    DuplicateRecordError,
    NullPersister,
    Persister,
    StorePersister,
)
from discographer.domain.model import Artist
from tests.helpers.ingestion import FakeRecordStore


def test_store_persister_adds_to_store() -> None:
    store = FakeRecordStore()
    persister = StorePersister(store)
    artist = Artist(mbid="artist-1", name="Yoko Ono")

    assert persister(artist) is artist
    assert persister.active is True
    assert store.records == [artist]


def test_store_persister_propagates_store_rejection() -> None:
    store = FakeRecordStore(reject=lambda record: isinstance(record, Artist))

    with pytest.raises(DuplicateRecordError) as exc:
        StorePersister(store)(Artist(mbid="artist-1", name="Yoko Ono"))

    assert exc.value.is_duplicate


def test_null_persister_leaves_record_untouched() -> None:
    persister = NullPersister()
    artist = Artist(mbid="artist-1", name="Yoko Ono")

    assert persister(artist) is artist
    assert persister.active is False


def test_persisters_satisfy_protocol() -> None:
    assert isinstance(StorePersister(FakeRecordStore()), Persister)
    assert isinstance(NullPersister(), Persister)
