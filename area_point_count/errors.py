"""
Error types raised at the file boundary of the area point counter.

ARCHITECTURAL OVERVIEW:
=======================
Responsibility: Classify the three ways a run can fail. The geometry core
never raises for malformed geometry; only loading, parsing and
re-serialising the feature collections can abort a run.

Error kinds:
- InputReadError: a named file cannot be opened or read
- ParseError: file contents are not the expected feature collection
- SerializationError: the enriched area collection cannot be re-encoded
"""

from typing import Optional


class AreaPointCountError(Exception):
    """Base class for every error that aborts a run."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class InputReadError(AreaPointCountError):
    """A named input file cannot be opened or read."""


class ParseError(AreaPointCountError):
    """Input contents do not conform to the feature collection structure."""

    def __init__(
        self, message: str, path: Optional[str] = None, kind: Optional[str] = None
    ) -> None:
        super().__init__(message, path)
        self.kind = kind


class SerializationError(AreaPointCountError):
    """The enriched output collection cannot be re-encoded."""
