"""Exception hierarchy for specmodel.

All exceptions inherit from :class:`SpecModelError`.  Reference resolution
failures form their own branch under :class:`SpecParseError` so callers can
catch "the document is unusable" in one place while still telling a missing
pointer apart from an external reference.

Subclass hierarchy::

    SpecModelError
    +-- ConfigError
    +-- SpecLoadError
    +-- SpecParseError
        +-- ReferenceError_
            +-- ReferenceNotFoundError
            +-- UnsupportedReferenceFormatError
            +-- ResolutionDepthError

A pointer that indexes into a scalar or a non-numeric list position is
reported as :class:`ReferenceNotFoundError`, the same as a missing key.
"""

from __future__ import annotations


class SpecModelError(Exception):
    """Base exception for all specmodel errors."""


class ConfigError(SpecModelError):
    """Raised for invalid settings (bad project file, non-numeric env var, etc.)."""


class SpecLoadError(SpecModelError):
    """Raised when a document cannot be read, fetched, or decoded."""


class SpecParseError(SpecModelError):
    """Raised when a document cannot be resolved or turned into the typed model."""


class ReferenceError_(SpecParseError):
    """Base class for ``$ref`` resolution failures.

    Named with a trailing underscore to avoid shadowing the built-in
    ``ReferenceError``.

    Args:
        message: Human-readable error description.
        pointer: The offending ``$ref`` string.
    """

    def __init__(self, message: str, pointer: str | None = None):
        super().__init__(message)
        self.pointer = pointer


class ReferenceNotFoundError(ReferenceError_):
    """Raised when a pointer segment is absent at the expected level."""


class UnsupportedReferenceFormatError(ReferenceError_):
    """Raised when a ``$ref`` is not a same-document ``#/...`` pointer."""


class ResolutionDepthError(ReferenceError_):
    """Raised when the document nests deeper than the configured maximum."""

    def __init__(self, message: str, depth: int, pointer: str | None = None):
        super().__init__(message, pointer=pointer)
        self.depth = depth
