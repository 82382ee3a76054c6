"""Build errors and outcomes for Folio.

Every failure the pipeline knows about is a subclass of BuildError, carrying
the file it concerns and a human-readable message. The ``fatal`` flag marks
whether the orchestrator must abort the run: only OptionalAssetMissing and
ScriptMinifyFailure are recoverable, and those are caught right where they
are raised.

Parsing, template rendering and the size guard do not raise. They return an
Outcome holding either a value or the error, and the orchestrator unwraps it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Generic, TypeVar

T = TypeVar("T")


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught, if any.
    """

    fatal = True

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


class MalformedDocument(BuildError):
    """The front-matter block is missing, unterminated or not a YAML mapping."""


class MissingRequiredField(BuildError):
    """A required front-matter field is absent or empty.

    Attributes:
        field: Name of the first missing field (title, slug, then date).
    """

    def __init__(self, source_path: Path, field: str):
        self.field = field
        super().__init__(source_path, f"Missing required field: {field}")


class InvalidField(BuildError):
    """A front-matter field is present but unusable (bad date, unsafe slug)."""

    def __init__(self, source_path: Path, field: str, reason: str):
        self.field = field
        super().__init__(source_path, f"Invalid field {field}: {reason}")


class DuplicateSlug(BuildError):
    """Two posts resolve to the same output directory."""

    def __init__(self, source_path: Path, slug: str, first_path: Path):
        self.slug = slug
        self.first_path = first_path
        super().__init__(
            source_path, f"Slug '{slug}' is already used by {first_path.name}"
        )


class MalformedTemplate(BuildError):
    """The post template cannot produce a page (no content placeholder)."""


class PageTooLarge(BuildError):
    """A rendered page does not fit in the initial congestion window.

    Attributes:
        size: Size of the page in bytes.
        limit: Budget in bytes.
    """

    def __init__(self, source_path: Path, label: str, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            source_path,
            f"The post {label} is {size / 1024:.1f}KB and cannot be contained "
            f"in an initial TCP round trip ({limit / 1024:.0f}KB). Reduce it in size.",
        )


class OptionalAssetMissing(BuildError):
    """A page or static asset is absent from the sources; the build continues."""

    fatal = False


class ScriptMinifyFailure(BuildError):
    """An inline script could not be minified; its source is kept verbatim."""

    fatal = False


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a pipeline stage: either a value or the error that stopped it.

    Attributes:
        value: Stage output when successful.
        error: The failure when unsuccessful.
    """

    value: T | None = None
    error: BuildError | None = None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: BuildError) -> Outcome[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
