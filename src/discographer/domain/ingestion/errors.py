"""Error taxonomy of the ingestion pipeline."""

from __future__ import annotations


class IngestionError(RuntimeError):
    """Base class for failures raised while ingesting a record tree."""


class ExtractionError(IngestionError):
    """Raised when a scraper could not compute one of its fields."""

    def __init__(self, definition: str, field: str, cause: BaseException) -> None:
        super().__init__(f"Failed to extract {definition}.{field}: {cause}")
        self.definition = definition
        self.field = field
        self.cause = cause


class ReflectionError(IngestionError):
    """Raised for unknown or inconsistent reflection metadata."""


class PersistenceError(IngestionError):
    """Raised when the store rejects a record."""

    def __init__(self, message: str, *, record: object | None = None) -> None:
        super().__init__(message)
        self.record = record

    @property
    def is_duplicate(self) -> bool:
        return False


class DuplicateRecordError(PersistenceError):
    """A uniqueness constraint was violated, usually by a concurrent import."""

    @property
    def is_duplicate(self) -> bool:
        return True


class AssociationResolutionError(IngestionError):
    """A belongs-to or has-many child failed to build.

    ``path`` lists the association segments from the failing node's parent
    down to the failing child, e.g. ``("artist_credit", "participants[2]")``.
    ``cause`` is the error raised by the child itself; nested failures are
    flattened so ``cause`` is never another ``AssociationResolutionError``.
    """

    def __init__(self, path: tuple[str, ...], cause: IngestionError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to build {self.path_label}: {cause}")

    @property
    def path_label(self) -> str:
        return ".".join(self.path)

    @classmethod
    def wrap(cls, segment: str, error: IngestionError) -> AssociationResolutionError:
        if isinstance(error, AssociationResolutionError):
            return cls((segment, *error.path), error.cause)
        return cls((segment,), error)


def describe_failure(error: IngestionError) -> str:
    """Return a human-readable message suitable for an import order."""

    if isinstance(error, AssociationResolutionError):
        return f"{type(error.cause).__name__} at {error.path_label}: {error.cause}"
    return f"{type(error).__name__}: {error}"
