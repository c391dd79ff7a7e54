"""Recursive find-or-build engine.

For every kit the builder walks the same sequence::

    FIND -> FOUND
         -> RESOLVE_TYPE -> RESOLVE_BELONGS_TO -> ASSIGN_ATTRS -> PERSIST
            -> INACTIVE
            -> ENHANCE (delegated base, has-many children)

Belongs-to targets and the resolved delegated variant are built and persisted
before their owner so foreign keys exist at insert time; has-many children are
built after it so their back-reference points at a persisted parent. A record
returned by a finder is trusted as-is: its associations are neither rebuilt
nor enhanced. A new delegated-type variant whose base record already exists
with an empty variant slot is attached to that base instead of getting a
second one.

Failures are not cleaned up here. Children persisted before a failing
sibling stay in the store until the caller rolls back its unit of work.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .errors import AssociationResolutionError, IngestionError, ReflectionError
from .kit import One
from .persisters import StorePersister

if TYPE_CHECKING:
    from collections.abc import Mapping

    from discographer.domain.ports.persistence import RecordStore

    from .kit import Many
    from .persisters import Persister
    from .reflections import IngestionReflections, Reflection
    from .scraper import Facade

log = getLogger(__name__)


class RecordBuilder:
    def __init__(self, store: RecordStore, persister: Persister | None = None) -> None:
        self.store = store
        self.persister: Persister = persister or StorePersister(store)
        self.enhancer = RecordEnhancer(self)
        self.has_many_builder = HasManyBuilder(self)

    def __call__(
        self,
        kit: One,
        persister: Persister | None = None,
        extra_attrs: Mapping[str, object] | None = None,
    ) -> object:
        finder = kit.reflection.create_finder(self.store)
        found = finder(kit.facade)
        if found is not None:
            log.debug("Reusing existing %s", kit.reflection.type_id)
            return found
        return self.build(kit, persister, extra_attrs)

    def build(
        self,
        kit: One,
        persister: Persister | None = None,
        extra_attrs: Mapping[str, object] | None = None,
    ) -> object:
        """Build, persist and enhance a new record for ``kit`` without looking it up first."""

        active_persister = persister or self.persister
        attrs = dict(extra_attrs or {})
        record = kit.reflection.record_class(**kit.inherent_attributes())

        delegated = kit.delegated_type_kit()
        if delegated is not None and delegated.role not in attrs:
            log.debug("Resolved %s variant %r", kit.reflection.type_id, delegated.tag)
            variant = self._build_variant(delegated.role, delegated.kit, active_persister)
            attrs = {delegated.role: variant, **attrs}

        for name, child_kit in kit.belongs_to_kits():
            setattr(record, name, self._build_child(name, child_kit, active_persister))

        for name, value in attrs.items():
            setattr(record, name, value)

        active_persister(record)
        if not active_persister.active:
            log.debug("Persister inactive, skipping enhancement of %s", kit.reflection.type_id)
            return record
        return self.enhancer(kit, active_persister, record)

    def _build_child(self, segment: str, kit: One, persister: Persister) -> object:
        try:
            return self(kit, persister)
        except IngestionError as exc:
            raise AssociationResolutionError.wrap(segment, exc) from exc

    def _build_variant(self, role: str, kit: One, persister: Persister) -> object:
        # The owner references its variant, so the variant is stored first
        variant = kit.reflection.record_class(**kit.inherent_attributes())
        try:
            persister(variant)
        except IngestionError as exc:
            raise AssociationResolutionError.wrap(role, exc) from exc
        return variant


class RecordEnhancer:
    """Post-persistence work that needs the record's stored identity."""

    def __init__(self, builder: RecordBuilder) -> None:
        self.builder = builder

    def __call__[TRecord](self, kit: One, persister: Persister, record: TRecord) -> TRecord:
        base = kit.reflection.delegated_base
        if base is not None and getattr(record, base.role, None) is None:
            self._build_base(kit, persister, record, base.role)

        for _name, inverse, many in kit.has_many_kits():
            self.builder.has_many_builder(many, persister, record, inverse)
        return record

    def _build_base(self, kit: One, persister: Persister, record: object, role: str) -> None:
        base_kit = kit.base_kit()
        delegated = base_kit.reflection.delegated_type
        if delegated is None:
            raise ReflectionError(
                f"{base_kit.reflection.type_id} declares no delegated type for "
                f"{kit.reflection.type_id}"
            )
        existing = base_kit.reflection.create_finder(self.builder.store)(base_kit.facade)
        if existing is not None and getattr(existing, delegated.role, None) is None:
            log.debug(
                "Attaching %s to existing %s", kit.reflection.type_id, base_kit.reflection.type_id
            )
            setattr(existing, delegated.role, record)
            return

        log.debug("Creating %s base for %s", base_kit.reflection.type_id, kit.reflection.type_id)
        try:
            self.builder.build(base_kit, persister, {delegated.role: record})
        except IngestionError as exc:
            raise AssociationResolutionError.wrap(role, exc) from exc


class HasManyBuilder:
    def __init__(self, builder: RecordBuilder) -> None:
        self.builder = builder

    def __call__(
        self,
        many: Many,
        persister: Persister,
        parent: object,
        inverse: str,
    ) -> list[object]:
        records: list[object] = []
        for index, kit in enumerate(many.one_kits()):
            try:
                child = self.builder(kit, persister, {inverse: parent})
            except IngestionError as exc:
                raise AssociationResolutionError.wrap(many.segment(index), exc) from exc
            if getattr(child, inverse, None) is parent:
                _attach(parent, many.name, child)
            records.append(child)
        log.debug("Built %d %s for %s", len(records), many.name, type(parent).__name__)
        return records


def _attach(parent: object, collection_name: str, child: object) -> None:
    # Mapped collections are already kept in step by the inverse relationship
    collection = getattr(parent, collection_name, None)
    if isinstance(collection, list) and not any(item is child for item in collection):
        collection.append(child)


def ingest(
    facade: Facade,
    reflection: Reflection,
    persister: Persister | None = None,
    *,
    store: RecordStore,
    registry: IngestionReflections,
) -> object:
    """Find or build the record tree rooted at ``facade``."""

    return RecordBuilder(store, persister)(One(facade, reflection, registry))
