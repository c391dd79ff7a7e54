"""Per-record-type ingestion metadata."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import ReflectionError
from .finders import null_finder

if TYPE_CHECKING:
    from discographer.domain.ports.persistence import RecordStore

    from .finders import Finder
    from .scraper import Facade, ScraperDefinition

type FinderFactory = Callable[[RecordStore], Finder]
type Discriminator = Callable[[Facade], str | None]


@dataclass(frozen=True, slots=True)
class BelongsTo:
    """Association resolved before the owning record is persisted.

    ``source`` names the facade field holding the raw payload of the target;
    it defaults to the association name.
    """

    name: str
    target: str
    source: str | None = None

    @property
    def source_field(self) -> str:
        return self.source or self.name


@dataclass(frozen=True, slots=True)
class HasMany:
    """Association built after the owner is persisted; ``inverse`` is the child's back-reference."""

    name: str
    inverse: str
    target: str
    source: str | None = None

    @property
    def source_field(self) -> str:
        return self.source or self.name


@dataclass(frozen=True, slots=True)
class DelegatedType:
    """Closed set of concrete variants for a base record.

    ``discriminator`` maps a facade to a tag in ``variants``; each tag names the
    reflection of the variant record assigned to ``role`` on the base record.
    """

    role: str
    discriminator: Discriminator
    variants: Mapping[str, str]


@dataclass(frozen=True, slots=True)
class DelegatedBase:
    """Marks a variant reflection whose record needs a base record under ``role``."""

    role: str
    base: str


@dataclass(frozen=True, slots=True)
class Reflection:
    type_id: str
    record_class: Callable[..., object]
    scraper: ScraperDefinition
    columns: tuple[str, ...] = ()
    belongs_to: tuple[BelongsTo, ...] = ()
    has_many: tuple[HasMany, ...] = ()
    delegated_type: DelegatedType | None = None
    delegated_base: DelegatedBase | None = None
    finder_factory: FinderFactory = field(default=null_finder)

    def create_finder(self, store: RecordStore) -> Finder:
        return self.finder_factory(store)

    @property
    def record_name(self) -> str:
        return getattr(self.record_class, "__name__", self.type_id)


class IngestionReflections:
    """Registry of reflections keyed by type id."""

    def __init__(self, reflections: Iterable[Reflection] = ()) -> None:
        self._reflections: dict[str, Reflection] = {}
        for reflection in reflections:
            self.register(reflection)

    def register(self, reflection: Reflection) -> None:
        if reflection.type_id in self._reflections:
            raise ReflectionError(f"Reflection already registered: {reflection.type_id}")
        self._reflections[reflection.type_id] = reflection

    def for_type(self, type_id: str) -> Reflection:
        try:
            return self._reflections[type_id]
        except KeyError:
            raise ReflectionError(f"Unknown record type: {type_id}") from None

    def type_ids(self) -> tuple[str, ...]:
        return tuple(self._reflections)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._reflections
