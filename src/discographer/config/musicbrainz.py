"""MusicBrainz configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

from .env import env_flag, require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_MUSICBRAINZ_BASE_URL: Final[str] = "https://musicbrainz.org/ws/2/"

# Sub-resources requested alongside each entity
DEFAULT_RELEASE_INC: Final[tuple[str, ...]] = (
    "artist-credits",
    "recordings",
    "release-groups",
    "media",
)
DEFAULT_RECORDING_INC: Final[tuple[str, ...]] = ("artist-credits",)


@dataclass(frozen=True, slots=True)
class MusicBrainzConfig:
    resilience: ResilienceConfig
    release_inc: tuple[str, ...] = DEFAULT_RELEASE_INC
    recording_inc: tuple[str, ...] = DEFAULT_RECORDING_INC


def user_agent(app_name: str, contact: str) -> str:
    """MusicBrainz asks every client to identify itself as ``app (contact)``."""

    return f"{app_name} ({contact})"


def get_musicbrainz_config() -> MusicBrainzConfig:
    values = require_env_vars(("MUSICBRAINZ_APP_NAME", "MUSICBRAINZ_CONTACT"))
    base_url = os.getenv("MUSICBRAINZ_BASE_URL") or DEFAULT_MUSICBRAINZ_BASE_URL
    cache = CacheConfig(enabled=env_flag("DISCOGRAPHER_HTTP_CACHE", default=True), backend="sqlite")

    # One request per second per client; mirrors are usually less strict
    resilience = ResilienceConfig(
        name="musicbrainz",
        base_url=base_url,
        ratelimit=RateLimit(max_calls=1, per_seconds=1.0),
        retry=RetryPolicy(total=4),
        cache=cache,
        default_headers={
            "User-Agent": user_agent(values["MUSICBRAINZ_APP_NAME"], values["MUSICBRAINZ_CONTACT"]),
            "Accept": "application/json",
        },
    )
    return MusicBrainzConfig(resilience=resilience)
