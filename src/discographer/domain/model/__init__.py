"""Public domain model surface."""

from __future__ import annotations

from discographer.domain.model.editions import (
    AlbumEdition,
    Edition,
    Editionable,
    EditionPosition,
    SongEdition,
)
from discographer.domain.model.entity import Entity
from discographer.domain.model.enums import EditionKind, EntityType, ImportStatus, ImportTarget
from discographer.domain.model.import_order import ImportOrder
from discographer.domain.model.music import (
    Archetype,
    Artist,
    ArtistCredit,
    ArtistCreditParticipant,
)
from discographer.domain.model.primitives import (
    Barcode,
    CountryCode,
    DurationMs,
    Mbid,
    ReleaseDate,
)

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    # music
    "Artist",
    "ArtistCredit",
    "ArtistCreditParticipant",
    "Archetype",
    # editions
    "Edition",
    "Editionable",
    "AlbumEdition",
    "SongEdition",
    "EditionPosition",
    # workflow
    "ImportOrder",
    # enums
    "EditionKind",
    "EntityType",
    "ImportStatus",
    "ImportTarget",
    # primitives
    "Barcode",
    "CountryCode",
    "DurationMs",
    "Mbid",
    "ReleaseDate",
]
