"""Artists, artist credits and archetypes.

An artist credit is the credited line of an edition ("A feat. B"); each
participant places one artist at a position within it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from discographer.domain.model.entity import Entity
from discographer.domain.model.enums import EntityType

if TYPE_CHECKING:
    from discographer.domain.model.primitives import CountryCode, Mbid


@dataclass(eq=False, kw_only=True)
class Artist(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ARTIST

    mbid: Mbid
    name: str
    sort_name: str | None = None
    country: CountryCode | None = None
    disambiguation: str | None = None


@dataclass(eq=False, kw_only=True)
class ArtistCredit(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ARTIST_CREDIT

    name: str

    # Owned children
    participants: list[ArtistCreditParticipant] = field(
        default_factory=list["ArtistCreditParticipant"], repr=False
    )

    @property
    def artists(self) -> tuple[Artist, ...]:
        ordered = sorted(self.participants, key=lambda p: p.position)
        return tuple(p.artist for p in ordered if p.artist is not None)


@dataclass(eq=False, kw_only=True)
class ArtistCreditParticipant(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ARTIST_CREDIT_PARTICIPANT

    position: int
    credited_as: str | None = None
    join_phrase: str | None = None

    artist_credit: ArtistCredit | None = field(default=None, repr=False)
    artist: Artist | None = field(default=None, repr=False)


@dataclass(eq=False, kw_only=True)
class Archetype(Entity):
    """The abstract work an edition realises (a release group, a song)."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.ARCHETYPE

    title: str
    kind: str | None = None
