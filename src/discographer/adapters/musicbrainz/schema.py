"""MusicBrainz response schemas.

Payloads are validated against these models before they enter the pipeline,
but the pipeline itself consumes the raw JSON: scrapers read the original
hyphenated keys.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)

type MBId = str
type MBDate = str  # Format: YYYY, YYYY-MM or YYYY-MM-DD
type CountryCode = str  # ISO 3166-1 + specials, see https://musicbrainz.org/doc/Release/Country


class MusicBrainzBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "MusicBrainz %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class MBEntityType(StrEnum):
    ARTIST = "artist"
    LABEL = "label"
    RECORDING = "recording"
    RELEASE = "release"
    RELEASE_GROUP = "release-group"


class MusicBrainzArtist(MusicBrainzBaseModel):
    id: MBId
    name: str
    sort_name: str | None = Field(default=None, alias="sort-name")
    disambiguation: str | None = None
    country: str | None = None
    type: str | None = None


class MusicBrainzArtistCredit(MusicBrainzBaseModel):
    artist: MusicBrainzArtist
    name: str
    join_phrase: str | None = Field(default=None, alias="joinphrase")


class MusicBrainzReleaseGroup(MusicBrainzBaseModel):
    id: MBId
    title: str
    primary_type: str | None = Field(default=None, alias="primary-type")
    secondary_types: list[str] = Field(default_factory=list, alias="secondary-types")
    first_release_date: MBDate | None = Field(default=None, alias="first-release-date")


class MusicBrainzRecording(MusicBrainzBaseModel):
    id: MBId
    title: str
    length: int | None = Field(default=None, description="Length in ms")
    disambiguation: str | None = None
    artist_credit: list[MusicBrainzArtistCredit] = Field(
        default_factory=list["MusicBrainzArtistCredit"], alias="artist-credit"
    )
    first_release_date: MBDate | None = Field(default=None, alias="first-release-date")


class MusicBrainzTrack(MusicBrainzBaseModel):
    id: MBId
    position: int
    number: str | None = None
    title: str
    length: int | None = None
    recording: MusicBrainzRecording | None = None


class MusicBrainzMedium(MusicBrainzBaseModel):
    position: int
    format: str | None = None
    title: str | None = None
    track_count: int | None = Field(default=None, alias="track-count")
    tracks: list[MusicBrainzTrack] = Field(default_factory=list["MusicBrainzTrack"])


class MusicBrainzRelease(MusicBrainzBaseModel):
    id: MBId
    title: str
    status: str | None = None
    country: CountryCode | None = None
    date: MBDate | None = None
    barcode: str | None = None
    disambiguation: str | None = None
    artist_credit: list[MusicBrainzArtistCredit] = Field(
        default_factory=list["MusicBrainzArtistCredit"], alias="artist-credit"
    )
    release_group: MusicBrainzReleaseGroup | None = Field(default=None, alias="release-group")
    media: list[MusicBrainzMedium] = Field(default_factory=list["MusicBrainzMedium"])
