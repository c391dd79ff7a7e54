"""Reflection graph for MusicBrainz releases and recordings.

::

    edition (release) --editionable--> album_edition | song_edition
        |-- archetype
        |-- artist_credit --participants[]--> participant --> artist
        '-- positions[] --> edition_position --> song_edition (recording)
                                                     '-- edition (base)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from discographer.domain.ingestion import (
    BelongsTo,
    DelegatedBase,
    DelegatedType,
    DelegatedVariantFinder,
    HasMany,
    IngestionReflections,
    Reflection,
    natural_key,
)
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

from . import scrapers

if TYPE_CHECKING:
    from discographer.domain.ingestion import Facade, Finder
    from discographer.domain.ports.persistence import RecordStore

EDITION: Final = "edition"
ALBUM_EDITION: Final = "album_edition"
SONG_EDITION: Final = "song_edition"
EDITION_POSITION: Final = "edition_position"
ARTIST_CREDIT: Final = "artist_credit"
PARTICIPANT: Final = "participant"
ARTIST: Final = "artist"
ARCHETYPE: Final = "archetype"


def _edition_kind(facade: Facade) -> str | None:
    kind = facade.get("kind")
    return None if kind is None else str(kind)


def _song_edition_finder(store: RecordStore) -> Finder:
    return DelegatedVariantFinder(
        store=store,
        base_class=Edition,
        key={"mbid": "mbid", "kind": "kind"},
        role="song_edition",
    )


def build_reflections() -> IngestionReflections:
    return IngestionReflections(
        (
            Reflection(
                type_id=EDITION,
                record_class=Edition,
                scraper=scrapers.RELEASE,
                columns=("mbid", "title", "kind"),
                belongs_to=(
                    BelongsTo("archetype", ARCHETYPE),
                    BelongsTo("artist_credit", ARTIST_CREDIT),
                ),
                has_many=(HasMany("positions", "edition", EDITION_POSITION),),
                delegated_type=DelegatedType(
                    role="editionable",
                    discriminator=_edition_kind,
                    variants={
                        EditionKind.ALBUM: ALBUM_EDITION,
                        EditionKind.SONG: SONG_EDITION,
                    },
                ),
                finder_factory=natural_key(Edition, "mbid"),
            ),
            Reflection(
                type_id=ALBUM_EDITION,
                record_class=AlbumEdition,
                scraper=scrapers.RELEASE,
                columns=("barcode", "status", "country", "release_date"),
                delegated_base=DelegatedBase(role="edition", base=EDITION),
            ),
            Reflection(
                type_id=SONG_EDITION,
                record_class=SongEdition,
                scraper=scrapers.RECORDING,
                columns=("length_ms", "disambiguation"),
                delegated_base=DelegatedBase(role="edition", base=EDITION),
                finder_factory=_song_edition_finder,
            ),
            Reflection(
                type_id=EDITION_POSITION,
                record_class=EditionPosition,
                scraper=scrapers.TRACK,
                columns=("position", "medium", "title", "length_ms"),
                belongs_to=(BelongsTo("song_edition", SONG_EDITION, source="recording"),),
            ),
            Reflection(
                type_id=ARTIST_CREDIT,
                record_class=ArtistCredit,
                scraper=scrapers.ARTIST_CREDIT,
                columns=("name",),
                has_many=(
                    HasMany("participants", "artist_credit", PARTICIPANT, source="credits"),
                ),
                finder_factory=natural_key(ArtistCredit, "name"),
            ),
            Reflection(
                type_id=PARTICIPANT,
                record_class=ArtistCreditParticipant,
                scraper=scrapers.PARTICIPANT,
                columns=("position", "credited_as", "join_phrase"),
                belongs_to=(BelongsTo("artist", ARTIST),),
            ),
            Reflection(
                type_id=ARTIST,
                record_class=Artist,
                scraper=scrapers.ARTIST,
                columns=("mbid", "name", "sort_name", "country", "disambiguation"),
                finder_factory=natural_key(Artist, "mbid"),
            ),
            Reflection(
                type_id=ARCHETYPE,
                record_class=Archetype,
                scraper=scrapers.ARCHETYPE,
                columns=("title", "kind"),
            ),
        )
    )
