"""Metadata-driven ingestion of nested payloads into persisted record graphs.

Raw payloads are scraped into facades, paired with reflections into kits and
handed to the recursive ``RecordBuilder``, which finds or builds every node of
the tree through pluggable finders and persisters.
"""

from __future__ import annotations

from .builder import HasManyBuilder, RecordBuilder, RecordEnhancer, ingest
from .errors import (
    AssociationResolutionError,
    DuplicateRecordError,
    ExtractionError,
    IngestionError,
    PersistenceError,
    ReflectionError,
    describe_failure,
)
from .finders import (
    DelegatedVariantFinder,
    Finder,
    NaturalKeyFinder,
    NullFinder,
    natural_key,
    null_finder,
)
from .kit import DelegatedTypeKit, Many, One
from .persisters import NullPersister, Persister, StorePersister
from .reflections import (
    BelongsTo,
    DelegatedBase,
    DelegatedType,
    HasMany,
    IngestionReflections,
    Reflection,
)
from .scraper import (
    REQUIRED,
    Facade,
    FacadeScraper,
    FieldSpec,
    ScraperDefinition,
    build,
    derive,
    read,
    scrape,
)

__all__ = [
    "REQUIRED",
    "AssociationResolutionError",
    "BelongsTo",
    "DelegatedBase",
    "DelegatedType",
    "DelegatedTypeKit",
    "DelegatedVariantFinder",
    "DuplicateRecordError",
    "ExtractionError",
    "Facade",
    "FacadeScraper",
    "FieldSpec",
    "Finder",
    "HasMany",
    "HasManyBuilder",
    "IngestionError",
    "IngestionReflections",
    "Many",
    "NaturalKeyFinder",
    "NullFinder",
    "NullPersister",
    "One",
    "PersistenceError",
    "Persister",
    "RecordBuilder",
    "RecordEnhancer",
    "Reflection",
    "ReflectionError",
    "ScraperDefinition",
    "StorePersister",
    "build",
    "derive",
    "describe_failure",
    "ingest",
    "natural_key",
    "null_finder",
    "read",
    "scrape",
]
