"""Ingestion kits: facades paired with the reflection that describes them.

Kits are derived lazily. A child payload is only scraped when the builder
reaches it, so an extraction failure halfway through a collection leaves the
earlier siblings built and the later ones untouched.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import AssociationResolutionError, ExtractionError, ReflectionError
from .scraper import scrape

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .reflections import IngestionReflections, Reflection
    from .scraper import Facade, RawPayload


@dataclass(frozen=True, slots=True)
class DelegatedTypeKit:
    """The variant chosen for a delegated-type record."""

    role: str
    tag: str
    kit: One


@dataclass(frozen=True, slots=True)
class One:
    facade: Facade
    reflection: Reflection
    registry: IngestionReflections

    @classmethod
    def from_raw(
        cls,
        raw: RawPayload,
        reflection: Reflection,
        registry: IngestionReflections,
    ) -> One:
        return cls(scrape(reflection.scraper, raw), reflection, registry)

    def belongs_to_kits(self) -> Iterator[tuple[str, One]]:
        for association in self.reflection.belongs_to:
            payload = self.facade.get(association.source_field)
            if payload is None:
                continue
            target = self.registry.for_type(association.target)
            try:
                facade = scrape(target.scraper, payload)
            except ExtractionError as exc:
                raise AssociationResolutionError.wrap(association.name, exc) from exc
            yield association.name, One(facade, target, self.registry)

    def delegated_type_kit(self) -> DelegatedTypeKit | None:
        delegated = self.reflection.delegated_type
        if delegated is None:
            return None
        tag = delegated.discriminator(self.facade)
        if tag is None:
            return None
        variant_type = delegated.variants.get(tag)
        if variant_type is None:
            raise ReflectionError(
                f"{self.reflection.type_id} has no {delegated.role} variant for tag {tag!r}"
            )
        variant = self.registry.for_type(variant_type)
        return DelegatedTypeKit(
            role=delegated.role,
            tag=tag,
            kit=One(self.facade, variant, self.registry),
        )

    def has_many_kits(self) -> Iterator[tuple[str, str, Many]]:
        for association in self.reflection.has_many:
            payload = self.facade.get(association.source_field)
            items = _as_items(payload, self.reflection.type_id, association.source_field)
            many = Many(
                association.name,
                items,
                self.registry.for_type(association.target),
                self.registry,
            )
            yield association.name, association.inverse, many

    def inherent_attributes(self) -> dict[str, object]:
        return {column: self.facade[column] for column in self.reflection.columns}

    def base_kit(self) -> One:
        """Kit for the base record of a delegated-type variant, over the same facade."""

        base = self.reflection.delegated_base
        if base is None:
            raise ReflectionError(f"{self.reflection.type_id} is not a delegated-type variant")
        return One(self.facade, self.registry.for_type(base.base), self.registry)


@dataclass(frozen=True, slots=True)
class Many:
    """Sibling payloads of one has-many association, sharing a reflection."""

    name: str
    items: tuple[object, ...]
    reflection: Reflection
    registry: IngestionReflections

    def __len__(self) -> int:
        return len(self.items)

    def one_kits(self) -> Iterator[One]:
        for index, raw in enumerate(self.items):
            try:
                facade = scrape(self.reflection.scraper, raw)
            except ExtractionError as exc:
                raise AssociationResolutionError.wrap(self.segment(index), exc) from exc
            yield One(facade, self.reflection, self.registry)

    def segment(self, index: int) -> str:
        return f"{self.name}[{index}]"


def _as_items(payload: object, type_id: str, source: str) -> tuple[object, ...]:
    if payload is None:
        return ()
    if isinstance(payload, Mapping | str | bytes) or not isinstance(payload, Sequence):
        raise ReflectionError(f"{type_id}.{source} must hold a sequence of payloads")
    return tuple(payload)
