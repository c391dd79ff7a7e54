"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    """Discriminator naming each record type."""

    ARTIST = "artist"
    ARTIST_CREDIT = "artist_credit"
    ARTIST_CREDIT_PARTICIPANT = "artist_credit_participant"
    ARCHETYPE = "archetype"
    EDITION = "edition"
    ALBUM_EDITION = "album_edition"
    SONG_EDITION = "song_edition"
    EDITION_POSITION = "edition_position"
    IMPORT_ORDER = "import_order"


class EditionKind(StrEnum):
    """Delegated-type tag of an edition."""

    ALBUM = "album"
    SONG = "song"


class ImportTarget(StrEnum):
    RELEASE = "release"
    RECORDING = "recording"


class ImportStatus(StrEnum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
