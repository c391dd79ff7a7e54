"""MusicBrainz payload fetchers for the import workflow."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from discographer.config.musicbrainz import get_musicbrainz_config
from discographer.domain.model import ImportTarget

from .client import MusicBrainzClient

if TYPE_CHECKING:
    from discographer.domain.ports.fetching import PayloadFetcher


@lru_cache(maxsize=1)
def _get_default_client() -> MusicBrainzClient:
    return MusicBrainzClient(config=get_musicbrainz_config())


def build_http_musicbrainz_fetcher(
    target: ImportTarget = ImportTarget.RELEASE,
    *,
    client: MusicBrainzClient | None = None,
) -> PayloadFetcher:
    """Return a fetcher yielding raw release or recording JSON by MBID."""

    active_client = client or _get_default_client()

    def fetch(mbid: str) -> dict[str, object]:
        if target is ImportTarget.RECORDING:
            return active_client.fetch_recording(mbid=mbid)
        return active_client.fetch_release(mbid=mbid)

    return fetch
