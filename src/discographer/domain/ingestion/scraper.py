"""Declarative extraction of facades from raw payloads.

A scraper definition is an ordered list of fields. Each field either reads a
key from the raw payload or derives its value from a callback that receives
the facade under construction, so later fields can build on earlier ones::

    RELEASE = build(
        "release",
        {
            "mbid": "id",
            "title": "title",
            "kind": lambda _: "album",
            "label": lambda draft: f"{draft['title']} ({draft['mbid']})",
        },
    )
    facade = scrape(RELEASE, payload)

Values are computed eagerly, once, when ``scrape`` runs. Nested payloads stay
raw inside their field; kits scrape them with the target type's definition
when they are reached.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Final, cast

from .errors import ExtractionError

if TYPE_CHECKING:
    from collections.abc import Iterator

type RawPayload = Mapping[str, object]
type FieldCallback = Callable[["FacadeDraft"], object]


class _Missing:
    def __repr__(self) -> str:
        return "REQUIRED"


REQUIRED: Final = _Missing()


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One declared field: either a raw key or a callback."""

    name: str
    key: str | None = None
    callback: FieldCallback | None = None
    default: object = None

    def extract(self, draft: FacadeDraft) -> object:
        if self.callback is not None:
            return self.callback(draft)
        key = self.key or self.name
        if key in draft.raw:
            return draft.raw[key]
        if self.default is REQUIRED:
            raise KeyError(key)
        return self.default


def read(key: str, *, default: object = None) -> FieldSpec:
    """Read ``key`` from the raw payload. Pass ``default=REQUIRED`` to reject absence."""

    return FieldSpec(name="", key=key, default=default)


def derive(callback: FieldCallback) -> FieldSpec:
    """Compute the field from the facade under construction."""

    return FieldSpec(name="", callback=callback)


@dataclass(frozen=True, slots=True)
class ScraperDefinition:
    name: str
    fields: tuple[FieldSpec, ...]

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)


@dataclass(frozen=True, slots=True)
class Facade:
    """Immutable, extracted view over one raw payload."""

    name: str
    raw: RawPayload = field(repr=False)
    fields: Mapping[str, object]

    def __getitem__(self, name: str) -> object:
        return self.fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def get(self, name: str, default: object = None) -> object:
        return self.fields.get(name, default)


class FacadeDraft:
    """The facade as seen by callbacks: raw data plus fields computed so far."""

    __slots__ = ("_values", "raw")

    def __init__(self, raw: RawPayload) -> None:
        self.raw = raw
        self._values: dict[str, object] = {}

    def __getitem__(self, name: str) -> object:
        return self._values[name]

    def get(self, name: str, default: object = None) -> object:
        return self._values.get(name, default)


class FacadeScraper:
    """Namespace for the build/scrape pair."""

    @staticmethod
    def build(name: str, spec: Mapping[str, str | FieldCallback | FieldSpec]) -> ScraperDefinition:
        fields: list[FieldSpec] = []
        for field_name, value in spec.items():
            if isinstance(value, FieldSpec):
                fields.append(
                    FieldSpec(
                        name=field_name,
                        key=value.key,
                        callback=value.callback,
                        default=value.default,
                    )
                )
            elif isinstance(value, str):
                fields.append(FieldSpec(name=field_name, key=value))
            elif callable(value):
                fields.append(FieldSpec(name=field_name, callback=value))
            else:
                raise TypeError(f"Unsupported field spec for {name}.{field_name}: {value!r}")
        return ScraperDefinition(name=name, fields=tuple(fields))

    @staticmethod
    def scrape(definition: ScraperDefinition, raw: object) -> Facade:
        if not isinstance(raw, Mapping):
            raise ExtractionError(
                definition.name,
                "<raw>",
                TypeError(f"expected a mapping payload, got {type(raw).__name__}"),
            )
        payload = cast("RawPayload", raw)
        draft = FacadeDraft(payload)
        for spec in definition.fields:
            try:
                value = spec.extract(draft)
            except Exception as exc:
                raise ExtractionError(definition.name, spec.name, exc) from exc
            draft._values[spec.name] = value  # noqa: SLF001
        return Facade(
            name=definition.name,
            raw=payload,
            fields=MappingProxyType(dict(draft._values)),  # noqa: SLF001
        )


build = FacadeScraper.build
scrape = FacadeScraper.scrape
