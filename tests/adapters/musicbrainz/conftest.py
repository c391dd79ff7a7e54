"""Shared fixtures for MusicBrainz adapter tests."""

from __future__ import annotations

import pytest

from discographer.config.http_resilience import ResilienceConfig
from discographer.config.musicbrainz import DEFAULT_MUSICBRAINZ_BASE_URL, MusicBrainzConfig
from tests.helpers.musicbrainz import MusicBrainzPayload, load_payload


@pytest.fixture
def release_payload() -> MusicBrainzPayload:
    return load_payload("release.json")


@pytest.fixture
def recording_payload() -> MusicBrainzPayload:
    return load_payload("recording.json")


@pytest.fixture
def musicbrainz_config() -> MusicBrainzConfig:
    return MusicBrainzConfig(
        resilience=ResilienceConfig(
            name="musicbrainz-test",
            base_url=DEFAULT_MUSICBRAINZ_BASE_URL,
            cache=None,
            default_headers={"User-Agent": "discographer-tests (tests@example.com)"},
        )
    )
