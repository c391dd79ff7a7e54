"""Ports for fetching raw payloads from external providers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from discographer.domain.ingestion.scraper import RawPayload


@runtime_checkable
class PayloadFetcher(Protocol):
    """Callable port returning the raw payload for one top-level entity."""

    def __call__(self, mbid: str) -> RawPayload: ...


__all__ = ["PayloadFetcher"]
