"""MusicBrainz ingestion adapter."""

from __future__ import annotations

from .client import MusicBrainzAPIError, MusicBrainzClient
from .fetcher import build_http_musicbrainz_fetcher
from .reflections import EDITION, SONG_EDITION, build_reflections

__all__ = [
    "EDITION",
    "SONG_EDITION",
    "MusicBrainzAPIError",
    "MusicBrainzClient",
    "build_http_musicbrainz_fetcher",
    "build_reflections",
]
