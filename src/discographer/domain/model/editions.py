"""Editions and their delegated types.

An ``Edition`` is the base record shared by every concrete kind; the kind
specific columns live on exactly one variant record (``AlbumEdition`` or
``SongEdition``) selected by ``Edition.kind``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

from discographer.domain.model.entity import Entity
from discographer.domain.model.enums import EditionKind, EntityType

if TYPE_CHECKING:
    from discographer.domain.model.music import Archetype, ArtistCredit
    from discographer.domain.model.primitives import (
        Barcode,
        CountryCode,
        DurationMs,
        Mbid,
        ReleaseDate,
    )


@runtime_checkable
class Editionable(Protocol):
    """Contract shared by every delegated edition variant."""

    EDITION_KIND: ClassVar[EditionKind]
    edition: Edition | None


@dataclass(eq=False, kw_only=True)
class AlbumEdition(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ALBUM_EDITION
    EDITION_KIND: ClassVar[EditionKind] = EditionKind.ALBUM

    barcode: Barcode | None = None
    status: str | None = None
    country: CountryCode | None = None
    release_date: ReleaseDate | None = None

    edition: Edition | None = field(default=None, repr=False)


@dataclass(eq=False, kw_only=True)
class SongEdition(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.SONG_EDITION
    EDITION_KIND: ClassVar[EditionKind] = EditionKind.SONG

    length_ms: DurationMs | None = None
    disambiguation: str | None = None

    edition: Edition | None = field(default=None, repr=False)


@dataclass(eq=False, kw_only=True)
class Edition(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.EDITION

    mbid: Mbid
    title: str
    kind: EditionKind | None = None

    archetype: Archetype | None = field(default=None, repr=False)
    artist_credit: ArtistCredit | None = field(default=None, repr=False)

    # Delegated-type variants; at most one is set, matching ``kind``
    album_edition: AlbumEdition | None = field(default=None, repr=False)
    song_edition: SongEdition | None = field(default=None, repr=False)

    # Owned children
    positions: list[EditionPosition] = field(
        default_factory=list["EditionPosition"], repr=False
    )

    def __post_init__(self) -> None:
        if self.kind is not None:
            self.kind = EditionKind(self.kind)

    @property
    def editionable(self) -> Editionable | None:
        if self.kind is EditionKind.ALBUM:
            return self.album_edition
        if self.kind is EditionKind.SONG:
            return self.song_edition
        return None

    @editionable.setter
    def editionable(self, variant: Editionable) -> None:
        if isinstance(variant, AlbumEdition):
            self.album_edition = variant
        elif isinstance(variant, SongEdition):
            self.song_edition = variant
        else:
            raise TypeError(f"Not an edition variant: {type(variant).__name__}")
        self.kind = variant.EDITION_KIND
        variant.edition = self

    @property
    def ordered_positions(self) -> tuple[EditionPosition, ...]:
        return tuple(sorted(self.positions, key=lambda p: (p.medium or 0, p.position)))


@dataclass(eq=False, kw_only=True)
class EditionPosition(Entity):
    """Placement of a song on an edition's tracklist."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.EDITION_POSITION

    position: int
    medium: int | None = None
    title: str | None = None
    length_ms: DurationMs | None = None

    edition: Edition | None = field(default=None, repr=False)
    song_edition: SongEdition | None = field(default=None, repr=False)
