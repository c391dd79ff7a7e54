"""Deduplication strategies: look up a record that already exists for a facade."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

    from discographer.domain.ports.persistence import RecordStore

    from .scraper import Facade

log = getLogger(__name__)


@runtime_checkable
class Finder(Protocol):
    def __call__(self, facade: Facade) -> object | None: ...


class NullFinder:
    """Never finds anything, so every ingest creates a fresh record."""

    def __call__(self, facade: Facade) -> object | None:
        _ = facade


@dataclass(frozen=True, slots=True)
class NaturalKeyFinder:
    """Look up ``record_class`` by columns whose values come from facade fields.

    ``key`` maps column names to facade field names. A facade lacking any key
    value cannot match and yields ``None``.
    """

    store: RecordStore
    record_class: type
    key: Mapping[str, str]

    def __call__(self, facade: Facade) -> object | None:
        values = _key_values(facade, self.key)
        if values is None:
            return None
        found = self.store.find_by(self.record_class, **values)
        if found is not None:
            log.debug("Found existing %s for %s", self.record_class.__name__, values)
        return found


@dataclass(frozen=True, slots=True)
class DelegatedVariantFinder:
    """Find a variant record through its base record's natural key."""

    store: RecordStore
    base_class: type
    key: Mapping[str, str]
    role: str

    def __call__(self, facade: Facade) -> object | None:
        values = _key_values(facade, self.key)
        if values is None:
            return None
        base = self.store.find_by(self.base_class, **values)
        if base is None:
            return None
        return getattr(base, self.role)


def _key_values(facade: Facade, key: Mapping[str, str]) -> dict[str, object] | None:
    values: dict[str, object] = {}
    for column, field_name in key.items():
        value = facade.get(field_name)
        if value is None:
            return None
        values[column] = value
    return values


def natural_key(
    record_class: type, *columns: str, **renamed: str
) -> Callable[[RecordStore], Finder]:
    """Return a finder factory for ``NaturalKeyFinder`` keyed on ``columns``."""

    key = {column: column for column in columns} | renamed

    def factory(store: RecordStore) -> Finder:
        return NaturalKeyFinder(store=store, record_class=record_class, key=key)

    return factory


def null_finder(_store: RecordStore) -> Finder:
    return NullFinder()
