# src/core/errors.py - v1
"""Exception hierarchy for scanning, document access and payload parsing.

Batch-level errors (ScanError, MalformedPayloadError) abort a whole request.
DocumentError subclasses are per-file and end up in an ImportOutcome.
"""

from __future__ import annotations


class AnnoSyncError(Exception):
    """Base class for all annosync errors."""


class ScanError(AnnoSyncError):
    """Raised when the scan root cannot be walked."""


class MalformedPayloadError(AnnoSyncError):
    """Raised when an import body cannot be read or parsed."""


class DocumentError(AnnoSyncError):
    """Base class for per-document failures."""


class OpenError(DocumentError):
    """Raised when a document cannot be opened."""


class ReadError(DocumentError):
    """Raised when an open document's pages or annotations cannot be read."""


class MergeError(DocumentError):
    """Raised when applying annotations fails part way.

    ``applied`` is the number of records applied before the failure.
    """

    def __init__(self, message: str, applied: int = 0) -> None:
        super().__init__(message)
        self.applied = applied


class SaveError(DocumentError):
    """Raised when a modified document cannot be written back to disk."""
