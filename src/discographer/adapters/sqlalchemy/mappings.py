"""SQLAlchemy mapping metadata for the discographer domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from enum import StrEnum
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Integer,
    String,
    Table,
    TypeDecorator,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from discographer.domain.model import (
    AlbumEdition,
    Archetype,
    Artist,
    ArtistCredit,
    ArtistCreditParticipant,
    Edition,
    EditionKind,
    EditionPosition,
    ImportOrder,
    ImportStatus,
    ImportTarget,
    SongEdition,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _str_enum(enum_class: type[StrEnum]) -> Enum:
    """Store enum values ("album"), not member names ("ALBUM")."""

    return Enum(
        enum_class,
        native_enum=False,
        values_callable=lambda members: [member.value for member in members],
    )


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Music -----------------------------------------------------------------------

artist_table = Table(
    "artist",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("mbid", String(36), nullable=False, unique=True),
    Column("name", String, nullable=False),
    Column("sort_name", String, nullable=True),
    Column("country", String(3), nullable=True),
    Column("disambiguation", String, nullable=True),
)

artist_credit_table = Table(
    "artist_credit",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False, unique=True),
)

artist_credit_participant_table = Table(
    "artist_credit_participant",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "artist_credit_id",
        UUIDColumnType,
        ForeignKey("artist_credit.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "artist_id", UUIDColumnType, ForeignKey("artist.id", ondelete="RESTRICT"), nullable=True
    ),
    Column("position", Integer, nullable=False),
    Column("credited_as", String, nullable=True),
    Column("join_phrase", String, nullable=True),
)

archetype_table = Table(
    "archetype",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("title", String, nullable=False),
    Column("kind", String, nullable=True),
)

# Editions --------------------------------------------------------------------

album_edition_table = Table(
    "album_edition",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("barcode", String, nullable=True),
    Column("status", String, nullable=True),
    Column("country", String(3), nullable=True),
    Column("release_date", String(10), nullable=True),
)

song_edition_table = Table(
    "song_edition",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("length_ms", Integer, nullable=True),
    Column("disambiguation", String, nullable=True),
)

edition_table = Table(
    "edition",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("mbid", String(36), nullable=False, unique=True),
    Column("title", String, nullable=False),
    Column("kind", _str_enum(EditionKind), nullable=True),
    Column(
        "archetype_id",
        UUIDColumnType,
        ForeignKey("archetype.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "artist_credit_id",
        UUIDColumnType,
        ForeignKey("artist_credit.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "album_edition_id",
        UUIDColumnType,
        ForeignKey("album_edition.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    ),
    Column(
        "song_edition_id",
        UUIDColumnType,
        ForeignKey("song_edition.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    ),
)

edition_position_table = Table(
    "edition_position",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "edition_id",
        UUIDColumnType,
        ForeignKey("edition.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "song_edition_id",
        UUIDColumnType,
        ForeignKey("song_edition.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("position", Integer, nullable=False),
    Column("medium", Integer, nullable=True),
    Column("title", String, nullable=True),
    Column("length_ms", Integer, nullable=True),
)

# Bookkeeping -----------------------------------------------------------------

import_order_table = Table(
    "import_order",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("mbid", String(36), nullable=False),
    Column("target", _str_enum(ImportTarget), nullable=False),
    Column("status", _str_enum(ImportStatus), nullable=False),
    Column("message", String, nullable=True),
    Column("edition_id", UUIDColumnType, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("finished_at", UTCDateTime(), nullable=True),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model.

    Belongs-to relationships are one-directional; only owned collections
    (positions, participants) and the edition variants carry a back-reference.
    """

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Artist, artist_table)

    mapper_registry.map_imperatively(
        ArtistCredit,
        artist_credit_table,
        properties={
            "participants": relationship(
                ArtistCreditParticipant,
                back_populates="artist_credit",
                cascade="all, delete-orphan",
                order_by=artist_credit_participant_table.c.position,
            ),
        },
    )

    mapper_registry.map_imperatively(
        ArtistCreditParticipant,
        artist_credit_participant_table,
        properties={
            "artist_credit": relationship(ArtistCredit, back_populates="participants"),
            "artist": relationship(Artist),
        },
    )

    mapper_registry.map_imperatively(Archetype, archetype_table)

    mapper_registry.map_imperatively(
        AlbumEdition,
        album_edition_table,
        properties={
            "edition": relationship(Edition, back_populates="album_edition", uselist=False),
        },
    )

    mapper_registry.map_imperatively(
        SongEdition,
        song_edition_table,
        properties={
            "edition": relationship(Edition, back_populates="song_edition", uselist=False),
        },
    )

    mapper_registry.map_imperatively(
        Edition,
        edition_table,
        properties={
            "archetype": relationship(Archetype),
            "artist_credit": relationship(ArtistCredit),
            "album_edition": relationship(AlbumEdition, back_populates="edition"),
            "song_edition": relationship(SongEdition, back_populates="edition"),
            "positions": relationship(
                EditionPosition,
                back_populates="edition",
                cascade="all, delete-orphan",
                order_by=(edition_position_table.c.medium, edition_position_table.c.position),
            ),
        },
    )

    mapper_registry.map_imperatively(
        EditionPosition,
        edition_position_table,
        properties={
            "edition": relationship(Edition, back_populates="positions"),
            "song_edition": relationship(SongEdition),
        },
    )

    mapper_registry.map_imperatively(ImportOrder, import_order_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
