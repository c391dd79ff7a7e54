"""Scraper definitions over raw MusicBrainz JSON.

Nested payloads are reshaped here, not in the builder: the artist-credit
list becomes one ``{"name", "credits"}`` payload and a release's media are
flattened into a single track list carrying the medium number.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from discographer.domain.ingestion import REQUIRED, build, derive, read
from discographer.domain.model import EditionKind

if TYPE_CHECKING:
    from discographer.domain.ingestion.scraper import FacadeDraft, FieldCallback


def _blank_to_none(key: str) -> FieldCallback:
    def callback(draft: FacadeDraft) -> object:
        value = draft.raw.get(key)
        if isinstance(value, str) and not value.strip():
            return None
        return value

    return callback


def _mappings(value: object) -> list[Mapping[str, object]]:
    if not isinstance(value, Sequence) or isinstance(value, str | bytes):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def credit_payload(credits: object) -> dict[str, object] | None:
    """Wrap an ``artist-credit`` list into a single artist credit payload."""

    items = _mappings(credits)
    if not items:
        return None
    name = "".join(f"{item.get('name') or ''}{item.get('joinphrase') or ''}" for item in items)
    return {
        "name": name,
        "credits": [{**item, "position": index} for index, item in enumerate(items)],
    }


def track_payloads(media: object) -> list[dict[str, object]]:
    """Flatten ``media[*].tracks`` into one list, in medium then track order."""

    tracks: list[dict[str, object]] = []
    for medium in _mappings(media):
        number = medium.get("position")
        tracks.extend({**track, "medium": number} for track in _mappings(medium.get("tracks")))
    return tracks


ARTIST = build(
    "artist",
    {
        "mbid": read("id", default=REQUIRED),
        "name": read("name", default=REQUIRED),
        "sort_name": "sort-name",
        "country": "country",
        "disambiguation": _blank_to_none("disambiguation"),
    },
)

PARTICIPANT = build(
    "artist_credit_participant",
    {
        "position": read("position", default=REQUIRED),
        "credited_as": "name",
        "join_phrase": _blank_to_none("joinphrase"),
        "artist": read("artist", default=REQUIRED),
    },
)

ARTIST_CREDIT = build(
    "artist_credit",
    {
        "name": read("name", default=REQUIRED),
        "credits": "credits",
    },
)

ARCHETYPE = build(
    "archetype",
    {
        "title": read("title", default=REQUIRED),
        "kind": lambda draft: _lowered(draft.raw.get("primary-type")),
    },
)

RELEASE = build(
    "release",
    {
        "mbid": read("id", default=REQUIRED),
        "title": read("title", default=REQUIRED),
        "kind": lambda _: EditionKind.ALBUM,
        "barcode": _blank_to_none("barcode"),
        "status": lambda draft: _lowered(draft.raw.get("status")),
        "country": "country",
        "release_date": _blank_to_none("date"),
        "archetype": "release-group",
        "artist_credit": lambda draft: credit_payload(draft.raw.get("artist-credit")),
        "positions": lambda draft: track_payloads(draft.raw.get("media")),
    },
)

RECORDING = build(
    "recording",
    {
        "mbid": read("id", default=REQUIRED),
        "title": read("title", default=REQUIRED),
        "kind": lambda _: EditionKind.SONG,
        "length_ms": "length",
        "disambiguation": _blank_to_none("disambiguation"),
        "archetype": derive(lambda draft: {"title": draft["title"], "primary-type": "song"}),
        "artist_credit": lambda draft: credit_payload(draft.raw.get("artist-credit")),
    },
)

TRACK = build(
    "track",
    {
        "position": read("position", default=REQUIRED),
        "medium": "medium",
        "title": "title",
        "length_ms": "length",
        "recording": "recording",
    },
)


def _lowered(value: object) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip().lower()
