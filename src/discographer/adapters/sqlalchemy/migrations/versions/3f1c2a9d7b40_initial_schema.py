"""initial schema

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-09-28 10:12:44.512331

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from discographer.adapters.sqlalchemy.mappings import UTCDateTime

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "artist",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("mbid", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("sort_name", sa.String(), nullable=True),
        sa.Column("country", sa.String(length=3), nullable=True),
        sa.Column("disambiguation", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_artist")),
        sa.UniqueConstraint("mbid", name=op.f("uq_artist_mbid")),
    )
    op.create_table(
        "artist_credit",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_artist_credit")),
        sa.UniqueConstraint("name", name=op.f("uq_artist_credit_name")),
    )
    op.create_table(
        "archetype",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("kind", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_archetype")),
    )
    op.create_table(
        "album_edition",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("barcode", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=True),
        sa.Column("country", sa.String(length=3), nullable=True),
        sa.Column("release_date", sa.String(length=10), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_album_edition")),
    )
    op.create_table(
        "song_edition",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("length_ms", sa.Integer(), nullable=True),
        sa.Column("disambiguation", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_song_edition")),
    )
    op.create_table(
        "import_order",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("mbid", sa.String(length=36), nullable=False),
        sa.Column(
            "target",
            sa.Enum("release", "recording", name="importtarget", native_enum=False),
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.Enum("pending", "succeeded", "failed", name="importstatus", native_enum=False),
            nullable=False,
        ),
        sa.Column("message", sa.String(), nullable=True),
        sa.Column("edition_id", sa.Uuid(), nullable=True),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("finished_at", UTCDateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_import_order")),
    )
    op.create_table(
        "artist_credit_participant",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("artist_credit_id", sa.Uuid(), nullable=False),
        sa.Column("artist_id", sa.Uuid(), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("credited_as", sa.String(), nullable=True),
        sa.Column("join_phrase", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(
            ["artist_credit_id"],
            ["artist_credit.id"],
            name=op.f("fk_artist_credit_participant_artist_credit_id_artist_credit"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["artist_id"],
            ["artist.id"],
            name=op.f("fk_artist_credit_participant_artist_id_artist"),
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_artist_credit_participant")),
    )
    op.create_table(
        "edition",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("mbid", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column(
            "kind",
            sa.Enum("album", "song", name="editionkind", native_enum=False),
            nullable=True,
        ),
        sa.Column("archetype_id", sa.Uuid(), nullable=True),
        sa.Column("artist_credit_id", sa.Uuid(), nullable=True),
        sa.Column("album_edition_id", sa.Uuid(), nullable=True),
        sa.Column("song_edition_id", sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(
            ["archetype_id"],
            ["archetype.id"],
            name=op.f("fk_edition_archetype_id_archetype"),
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["artist_credit_id"],
            ["artist_credit.id"],
            name=op.f("fk_edition_artist_credit_id_artist_credit"),
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["album_edition_id"],
            ["album_edition.id"],
            name=op.f("fk_edition_album_edition_id_album_edition"),
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["song_edition_id"],
            ["song_edition.id"],
            name=op.f("fk_edition_song_edition_id_song_edition"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_edition")),
        sa.UniqueConstraint("mbid", name=op.f("uq_edition_mbid")),
        sa.UniqueConstraint("album_edition_id", name=op.f("uq_edition_album_edition_id")),
        sa.UniqueConstraint("song_edition_id", name=op.f("uq_edition_song_edition_id")),
    )
    op.create_table(
        "edition_position",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("edition_id", sa.Uuid(), nullable=False),
        sa.Column("song_edition_id", sa.Uuid(), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("medium", sa.Integer(), nullable=True),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("length_ms", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ["edition_id"],
            ["edition.id"],
            name=op.f("fk_edition_position_edition_id_edition"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["song_edition_id"],
            ["song_edition.id"],
            name=op.f("fk_edition_position_song_edition_id_song_edition"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_edition_position")),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("edition_position")
    op.drop_table("edition")
    op.drop_table("artist_credit_participant")
    op.drop_table("import_order")
    op.drop_table("song_edition")
    op.drop_table("album_edition")
    op.drop_table("archetype")
    op.drop_table("artist_credit")
    op.drop_table("artist")
