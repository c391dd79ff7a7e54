"""Ingest captured MusicBrainz payloads into SQLite through the MusicBrainz reflections."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select

from discographer.adapters.musicbrainz import EDITION, SONG_EDITION, build_reflections
from discographer.domain.ingestion import ingest, scrape
from discographer.domain.model import (
    AlbumEdition,
    Archetype,
    Artist,
    ArtistCredit,
    ArtistCreditParticipant,
    Edition,
    EditionKind,
    EditionPosition,
    SongEdition,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from discographer.adapters.sqlalchemy import SqlAlchemyRecordStore

    from tests.helpers.musicbrainz import MusicBrainzPayload

COUNTED = (
    Edition,
    AlbumEdition,
    SongEdition,
    EditionPosition,
    ArtistCredit,
    ArtistCreditParticipant,
    Artist,
    Archetype,
)


def _counts(session: Session) -> dict[str, int]:
    return {
        record_class.__name__: session.execute(
            select(func.count()).select_from(record_class)
        ).scalar_one()
        for record_class in COUNTED
    }


def _ingest(payload: MusicBrainzPayload, type_id: str, store: SqlAlchemyRecordStore) -> object:
    registry = build_reflections()
    reflection = registry.for_type(type_id)
    return ingest(scrape(reflection.scraper, payload), reflection, store=store, registry=registry)


def test_registry_covers_the_release_graph() -> None:
    assert set(build_reflections().type_ids()) == {
        "edition",
        "album_edition",
        "song_edition",
        "edition_position",
        "artist_credit",
        "participant",
        "artist",
        "archetype",
    }


def test_release_builds_full_tree(
    release_payload: MusicBrainzPayload,
    sqlite_store: SqlAlchemyRecordStore,
    sqlite_session: Session,
) -> None:
    edition = _ingest(release_payload, EDITION, sqlite_store)
    sqlite_session.commit()

    assert isinstance(edition, Edition)
    assert edition.kind is EditionKind.ALBUM
    assert isinstance(edition.album_edition, AlbumEdition)
    assert edition.album_edition.country == "US"
    assert edition.archetype is not None
    assert edition.archetype.kind == "album"
    assert edition.artist_credit is not None
    assert edition.artist_credit.name == "John Lennon & Yoko Ono"
    assert [artist.name for artist in edition.artist_credit.artists] == ["John Lennon", "Yoko Ono"]
    assert [(p.medium, p.position, p.title) for p in edition.ordered_positions] == [
        (1, 1, "(Just Like) Starting Over"),
        (1, 2, "Kiss Kiss Kiss"),
        (2, 1, "Watching the Wheels"),
    ]
    song = edition.ordered_positions[2].song_edition
    assert song is not None
    assert song.edition is not None
    assert song.edition.kind is EditionKind.SONG
    assert song.edition.artist_credit is not None
    assert song.edition.artist_credit.name == "John Lennon"
    assert _counts(sqlite_session) == {
        "Edition": 4,
        "AlbumEdition": 1,
        "SongEdition": 3,
        "EditionPosition": 3,
        "ArtistCredit": 3,
        "ArtistCreditParticipant": 4,
        "Artist": 2,
        "Archetype": 4,
    }


def test_reimport_writes_nothing_new(
    release_payload: MusicBrainzPayload,
    sqlite_store: SqlAlchemyRecordStore,
    sqlite_session: Session,
) -> None:
    first = _ingest(release_payload, EDITION, sqlite_store)
    sqlite_session.commit()
    before = _counts(sqlite_session)

    second = _ingest(release_payload, EDITION, sqlite_store)
    sqlite_session.commit()

    assert second is first
    assert _counts(sqlite_session) == before


def test_recording_reuses_song_edition_from_release(
    release_payload: MusicBrainzPayload,
    recording_payload: MusicBrainzPayload,
    sqlite_store: SqlAlchemyRecordStore,
    sqlite_session: Session,
) -> None:
    edition = _ingest(release_payload, EDITION, sqlite_store)
    assert isinstance(edition, Edition)
    before = _counts(sqlite_session)

    song = _ingest(recording_payload, SONG_EDITION, sqlite_store)

    assert song is edition.ordered_positions[2].song_edition
    assert _counts(sqlite_session) == before


def test_recording_alone_builds_its_base_edition(
    recording_payload: MusicBrainzPayload,
    sqlite_store: SqlAlchemyRecordStore,
    sqlite_session: Session,
) -> None:
    song = _ingest(recording_payload, SONG_EDITION, sqlite_store)
    sqlite_session.commit()

    assert isinstance(song, SongEdition)
    assert song.length_ms == 210500
    assert song.edition is not None
    assert song.edition.mbid == "a1b2c3d4-0000-4000-8000-000000000003"
    assert song.edition.editionable is song
    assert song.edition.archetype is not None
    assert song.edition.archetype.kind == "song"
    artist = sqlite_session.execute(select(Artist)).scalar_one()
    assert artist.country == "GB"
