from __future__ import annotations

from discographer.domain.ingestion import (
    DelegatedVariantFinder,
    NaturalKeyFinder,
    NullFinder,
    build,
    natural_key,
    scrape,
)
from discographer.domain.model import Artist, Edition, EditionKind, SongEdition
from tests.helpers.ingestion import FakeRecordStore

ARTIST = build("artist", {"mbid": "id", "name": "name"})


def test_natural_key_finder_returns_matching_record() -> None:
    store = FakeRecordStore()
    existing = Artist(mbid="artist-1", name="Yoko Ono")
    store.records.append(existing)
    finder = NaturalKeyFinder(store=store, record_class=Artist, key={"mbid": "mbid"})

    found = finder(scrape(ARTIST, {"id": "artist-1", "name": "Yoko"}))

    assert found is existing
    assert store.lookups == [(Artist, {"mbid": "artist-1"})]


def test_natural_key_finder_returns_none_when_absent() -> None:
    finder = natural_key(Artist, "mbid")(FakeRecordStore())

    assert finder(scrape(ARTIST, {"id": "artist-9", "name": "Nobody"})) is None


def test_missing_key_value_skips_the_lookup() -> None:
    store = FakeRecordStore()
    finder = natural_key(Artist, "mbid")(store)

    assert finder(scrape(ARTIST, {"name": "Anonymous"})) is None
    assert store.lookups == []


def test_natural_key_maps_columns_to_renamed_fields() -> None:
    store = FakeRecordStore()
    store.records.append(Artist(mbid="artist-1", name="Yoko Ono"))
    finder = natural_key(Artist, name="mbid")(store)

    assert finder(scrape(ARTIST, {"id": "Yoko Ono"})) is store.records[0]


def test_delegated_variant_finder_returns_the_variant_of_the_base() -> None:
    store = FakeRecordStore()
    song = SongEdition(length_ms=1000)
    edition = Edition(mbid="rec-1", title="Song", kind=EditionKind.SONG)
    edition.editionable = song
    store.records.append(edition)
    finder = DelegatedVariantFinder(
        store=store,
        base_class=Edition,
        key={"mbid": "mbid", "kind": "kind"},
        role="song_edition",
    )
    recording = build("recording", {"mbid": "id", "kind": lambda _: EditionKind.SONG})

    assert finder(scrape(recording, {"id": "rec-1"})) is song
    assert finder(scrape(recording, {"id": "rec-2"})) is None


def test_null_finder_never_finds() -> None:
    assert NullFinder()(scrape(ARTIST, {"id": "artist-1", "name": "Yoko"})) is None
