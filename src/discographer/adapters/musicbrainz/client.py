"""MusicBrainz API client."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ValidationError

from discographer.adapters.http_resilience import ResilientClient

from .schema import MBEntityType, MusicBrainzRecording, MusicBrainzRelease

if TYPE_CHECKING:
    from collections.abc import Callable

    from discographer.config.http_resilience import ResilienceConfig
    from discographer.config.musicbrainz import MusicBrainzConfig

log = getLogger(__name__)


class MusicBrainzAPIError(RuntimeError):
    """Raised when the MusicBrainz API returns an unexpected response."""


class MusicBrainzClient:
    """Low-level HTTP client for the MusicBrainz API.

    Payloads are validated against the response schemas but returned as the
    raw JSON dictionaries the scrapers read.
    """

    def __init__(
        self,
        *,
        config: MusicBrainzConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def fetch_release(
        self,
        *,
        mbid: str,
        inc: tuple[str, ...] | None = None,
    ) -> dict[str, object]:
        inc_values = inc if inc is not None else self._config.release_inc
        return asyncio.run(
            self._fetch_async(
                path=f"{MBEntityType.RELEASE}/{mbid}",
                inc=inc_values,
                schema=MusicBrainzRelease,
            )
        )

    def fetch_recording(
        self,
        *,
        mbid: str,
        inc: tuple[str, ...] | None = None,
    ) -> dict[str, object]:
        inc_values = inc if inc is not None else self._config.recording_inc
        return asyncio.run(
            self._fetch_async(
                path=f"{MBEntityType.RECORDING}/{mbid}",
                inc=inc_values,
                schema=MusicBrainzRecording,
            )
        )

    async def _fetch_async(
        self,
        *,
        path: str,
        inc: tuple[str, ...],
        schema: type[BaseModel],
    ) -> dict[str, object]:
        params: dict[str, str] = {"fmt": "json"}
        if inc:
            params["inc"] = "+".join(inc)

        async with self._client_factory(self._resilience) as client:
            return await self._perform_request(client=client, path=path, params=params, schema=schema)

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        path: str,
        params: dict[str, str],
        schema: type[BaseModel],
    ) -> dict[str, object]:
        if self._resilience.base_url is None:
            raise MusicBrainzAPIError("Missing MusicBrainz base_url in resilience configuration")
        try:
            response = await client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise MusicBrainzAPIError(
                f"MusicBrainz returned {exc.response.status_code} for {path}"
            ) from exc
        except httpx.HTTPError as exc:
            raise MusicBrainzAPIError(f"MusicBrainz request for {path} failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise MusicBrainzAPIError(f"MusicBrainz returned invalid JSON for {path}") from exc
        if not isinstance(payload, dict):
            raise MusicBrainzAPIError("Unexpected MusicBrainz response payload")
        try:
            schema.model_validate(payload)
        except ValidationError as exc:
            raise MusicBrainzAPIError(f"Malformed MusicBrainz payload for {path}: {exc}") from exc
        log.debug("Fetched MusicBrainz %s", path)
        return payload
