"""Find-or-build behaviour of the recursive record builder, against an in-memory store."""

from __future__ import annotations

import pytest

from discographer.domain.ingestion import (
    AssociationResolutionError,
    DuplicateRecordError,
    ExtractionError,
    NullPersister,
    One,
    RecordBuilder,
    ingest,
    scrape,
)
from discographer.domain.model import (
    AlbumEdition,
    Artist,
    ArtistCredit,
    ArtistCreditParticipant,
    Edition,
    EditionKind,
    EditionPosition,
    SongEdition,
)
from tests.helpers.ingestion import (
    FakeRecordStore,
    RecordingPersister,
    credited_reflections,
    credited_release_payload,
    release_payload,
    tracklist_reflections,
)


def _ingest_release(
    payload: dict[str, object],
    store: FakeRecordStore,
    persister: object | None = None,
) -> object:
    registry = tracklist_reflections()
    reflection = registry.for_type("edition")
    return ingest(
        scrape(reflection.scraper, payload),
        reflection,
        persister,  # type: ignore[arg-type]
        store=store,
        registry=registry,
    )


class _SpyEnhancer:
    def __init__(self) -> None:
        self.calls: list[object] = []

    def __call__(self, kit: object, persister: object, record: object) -> object:
        self.calls.append(record)
        return record


def test_fresh_ingest_builds_edition_with_positions() -> None:
    store = FakeRecordStore()

    edition = _ingest_release(release_payload(), store)

    assert isinstance(edition, Edition)
    assert edition.title == "Foo"
    assert [(p.position, p.title) for p in edition.positions] == [(1, "A"), (2, "B")]
    assert all(p.edition is edition for p in edition.positions)
    assert store.of_type(Edition) == [edition]
    assert len(store.of_type(EditionPosition)) == 2


def test_reingest_takes_found_branch() -> None:
    store = FakeRecordStore()
    first = _ingest_release(release_payload(), store)

    second = _ingest_release(release_payload(), store)

    assert second is first
    assert len(store.of_type(Edition)) == 1
    assert len(store.of_type(EditionPosition)) == 2


def test_found_record_is_not_enhanced() -> None:
    store = FakeRecordStore()
    first = _ingest_release(release_payload(tracks=1), store)

    _ingest_release(release_payload(tracks=4), store)

    assert isinstance(first, Edition)
    assert len(first.positions) == 1
    assert len(store.of_type(EditionPosition)) == 1


def test_has_many_children_keep_source_order() -> None:
    persister = RecordingPersister()

    edition = _ingest_release(release_payload(tracks=6), persister.store, persister)

    positions = [r for r in persister.persisted if isinstance(r, EditionPosition)]
    assert [p.position for p in positions] == [1, 2, 3, 4, 5, 6]
    assert isinstance(edition, Edition)
    assert [p.position for p in edition.positions] == [1, 2, 3, 4, 5, 6]


def test_parent_is_persisted_before_children() -> None:
    persister = RecordingPersister()

    edition = _ingest_release(release_payload(tracks=3), persister.store, persister)

    assert persister.persisted[0] is edition
    assert all(isinstance(r, EditionPosition) for r in persister.persisted[1:])


def test_inverse_reference_is_set_before_persisting_children() -> None:
    persister = RecordingPersister()

    edition = _ingest_release(release_payload(tracks=3), persister.store, persister)

    for record in persister.persisted[1:]:
        assert persister.snapshot_of(record)["edition"] is edition


def test_belongs_to_is_assigned_before_persisting_owner() -> None:
    persister = RecordingPersister()
    registry = credited_reflections()
    reflection = registry.for_type("edition")

    edition = ingest(
        scrape(reflection.scraper, credited_release_payload()),
        reflection,
        persister,
        store=persister.store,
        registry=registry,
    )

    assert isinstance(edition, Edition)
    credit = edition.artist_credit
    assert isinstance(credit, ArtistCredit)
    assert persister.snapshot_of(edition)["artist_credit"] is credit
    assert persister.persisted.index(credit) < persister.persisted.index(edition)
    for participant in credit.participants:
        snapshot = persister.snapshot_of(participant)
        assert isinstance(snapshot["artist"], Artist)
        assert snapshot["artist_credit"] is credit


def test_inactive_persister_returns_unpersisted_record_without_enhancing() -> None:
    store = FakeRecordStore()
    registry = tracklist_reflections()
    reflection = registry.for_type("edition")
    builder = RecordBuilder(store, NullPersister())
    spy = _SpyEnhancer()
    builder.enhancer = spy  # type: ignore[assignment]

    edition = builder(One.from_raw(release_payload(), reflection, registry))

    assert isinstance(edition, Edition)
    assert edition.title == "Foo"
    assert edition.positions == []
    assert spy.calls == []
    assert store.records == []


def test_inactive_persister_still_resolves_belongs_to() -> None:
    store = FakeRecordStore()
    registry = credited_reflections()
    reflection = registry.for_type("edition")

    edition = ingest(
        scrape(reflection.scraper, credited_release_payload()),
        reflection,
        NullPersister(),
        store=store,
        registry=registry,
    )

    assert isinstance(edition, Edition)
    assert isinstance(edition.artist_credit, ArtistCredit)
    assert edition.artist_credit.participants == []
    assert store.records == []


def test_extraction_failure_stops_remaining_siblings() -> None:
    persister = RecordingPersister()
    payload = release_payload(tracks=5)
    payload["tracks"][2] = {"title": "C"}  # type: ignore[index]

    with pytest.raises(AssociationResolutionError) as exc:
        _ingest_release(payload, persister.store, persister)

    assert exc.value.path == ("positions[2]",)
    assert isinstance(exc.value.cause, ExtractionError)
    # No cleanup: the parent and the first two siblings stay persisted
    positions = persister.store.of_type(EditionPosition)
    assert [p.position for p in positions] == [1, 2]
    assert len(persister.store.of_type(Edition)) == 1


def test_nested_failure_reports_full_association_path() -> None:
    registry = credited_reflections()
    reflection = registry.for_type("edition")
    payload = credited_release_payload()
    names = payload["credit"]["names"]  # type: ignore[index]
    names.append({"position": 2, "name": "Ghost", "artist": {"name": "No Id"}})

    with pytest.raises(AssociationResolutionError) as exc:
        ingest(
            scrape(reflection.scraper, payload),
            reflection,
            store=FakeRecordStore(),
            registry=registry,
        )

    assert exc.value.path == ("artist_credit", "participants[2]", "artist")
    assert exc.value.path_label == "artist_credit.participants[2].artist"
    assert isinstance(exc.value.cause, ExtractionError)


def test_persistence_failure_of_child_is_wrapped() -> None:
    store = FakeRecordStore(reject=lambda record: isinstance(record, EditionPosition))

    with pytest.raises(AssociationResolutionError) as exc:
        _ingest_release(release_payload(), store)

    assert exc.value.path == ("positions[0]",)
    assert isinstance(exc.value.cause, DuplicateRecordError)


def test_persistence_failure_of_root_propagates_unchanged() -> None:
    store = FakeRecordStore(reject=lambda record: isinstance(record, Edition))

    with pytest.raises(DuplicateRecordError):
        _ingest_release(release_payload(), store)


def test_extra_attrs_are_applied_last() -> None:
    store = FakeRecordStore()
    registry = tracklist_reflections()
    kit = One.from_raw(release_payload(tracks=0), registry.for_type("edition"), registry)

    edition = RecordBuilder(store).build(kit, extra_attrs={"title": "Override"})

    assert isinstance(edition, Edition)
    assert edition.title == "Override"


def test_build_skips_the_finder() -> None:
    store = FakeRecordStore()
    registry = tracklist_reflections()
    kit = One.from_raw(release_payload(tracks=0), registry.for_type("edition"), registry)
    builder = RecordBuilder(store)

    first = builder(kit)
    second = builder.build(kit)

    assert first is not second
    assert len(store.of_type(Edition)) == 2


class TestDelegatedTypes:
    def test_base_record_gets_variant_selected_by_discriminator(self) -> None:
        store = FakeRecordStore()
        registry = credited_reflections()
        reflection = registry.for_type("edition")

        edition = ingest(
            scrape(reflection.scraper, credited_release_payload()),
            reflection,
            store=store,
            registry=registry,
        )

        assert isinstance(edition, Edition)
        assert edition.kind is EditionKind.ALBUM
        assert isinstance(edition.editionable, AlbumEdition)
        assert edition.album_edition is edition.editionable
        assert edition.album_edition.barcode == "075992729924"
        assert edition.album_edition.edition is edition
        assert edition.song_edition is None

    def test_variant_reached_directly_gets_a_base_record(self) -> None:
        store = FakeRecordStore()
        registry = credited_reflections()
        reflection = registry.for_type("edition")

        album = ingest(
            scrape(reflection.scraper, credited_release_payload()),
            reflection,
            store=store,
            registry=registry,
        )

        assert isinstance(album, Edition)
        songs = [position.song_edition for position in album.positions]
        assert all(isinstance(song, SongEdition) for song in songs)
        first = songs[0]
        assert isinstance(first, SongEdition)
        assert first.length_ms == 236000
        assert isinstance(first.edition, Edition)
        assert first.edition.mbid == "rec-1"
        assert first.edition.kind is EditionKind.SONG
        assert first.edition.editionable is first
        assert len(store.of_type(Edition)) == 3

    def test_variant_is_found_through_its_base(self) -> None:
        store = FakeRecordStore()
        registry = credited_reflections()
        reflection = registry.for_type("edition")
        payload = credited_release_payload()
        ingest(scrape(reflection.scraper, payload), reflection, store=store, registry=registry)

        # A second release sharing the first recording
        payload["id"] = "release-2"
        payload["tracks"] = payload["tracks"][:1]  # type: ignore[index]
        reissue = ingest(
            scrape(reflection.scraper, payload), reflection, store=store, registry=registry
        )

        assert isinstance(reissue, Edition)
        assert len(store.of_type(SongEdition)) == 2
        assert len(store.of_type(ArtistCredit)) == 1
        assert len(store.of_type(ArtistCreditParticipant)) == 2
        assert reissue.positions[0].song_edition is store.of_type(SongEdition)[0]

    def test_variant_is_persisted_before_its_base(self) -> None:
        persister = RecordingPersister()
        registry = credited_reflections()
        reflection = registry.for_type("edition")

        edition = ingest(
            scrape(reflection.scraper, credited_release_payload()),
            reflection,
            persister,
            store=persister.store,
            registry=registry,
        )

        assert isinstance(edition, Edition)
        album = edition.album_edition
        assert isinstance(album, AlbumEdition)
        assert persister.persisted.index(album) < persister.persisted.index(edition)
        assert persister.snapshot_of(edition)["album_edition"] is album
        assert persister.store.of_type(AlbumEdition) == [album]

    def test_variant_is_attached_to_existing_base_without_one(self) -> None:
        store = FakeRecordStore()
        orphan = Edition(mbid="rec-1", title="(Just Like) Starting Over", kind=EditionKind.SONG)
        store.records.append(orphan)
        registry = credited_reflections()
        reflection = registry.for_type("edition")

        album = ingest(
            scrape(reflection.scraper, credited_release_payload()),
            reflection,
            store=store,
            registry=registry,
        )

        assert isinstance(album, Edition)
        song = album.ordered_positions[0].song_edition
        assert isinstance(song, SongEdition)
        assert song.edition is orphan
        assert orphan.song_edition is song
        assert orphan.editionable is song
        assert [e.mbid for e in store.of_type(Edition)].count("rec-1") == 1
        assert len(store.of_type(Edition)) == 3
