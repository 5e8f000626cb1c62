# src/documents/base_document.py - v1
"""Abstract document capability interface.

The export/import core talks to documents only through these two classes,
so it can run against the PyMuPDF backend or an in-memory fake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from types import TracebackType

from annosync.core.models import AnnotationMap


class BaseDocument(ABC):
    """An open document. Use as a context manager to guarantee close()."""

    @property
    @abstractmethod
    def path(self) -> Path:
        """Location the document was opened from."""

    @abstractmethod
    def annotations(self) -> AnnotationMap:
        """Current annotations, per page, in document order."""

    @abstractmethod
    def content_hash(self) -> str:
        """Stable fingerprint of the durable content (annotations excluded)."""

    @abstractmethod
    def import_annotations(self, annotations: AnnotationMap) -> int:
        """Apply records to the in-memory document.

        Returns:
            Number of records newly applied. Records the backend considers
            already present are not counted.

        Raises:
            MergeError: With ``applied`` set to the work done before failing.
        """

    @abstractmethod
    def save(self) -> bool:
        """Persist pending changes to disk.

        Returns:
            True when the file was written.

        Raises:
            SaveError: If writing fails.
        """

    @abstractmethod
    def close(self) -> None:
        """Release the document. Safe to call more than once."""

    def __enter__(self) -> BaseDocument:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class BaseDocumentStore(ABC):
    """Opens documents of one format."""

    @property
    @abstractmethod
    def extension(self) -> str:
        """File extension handled by this store (e.g. '.pdf')."""

    @abstractmethod
    def open(self, path: Path) -> BaseDocument:
        """Open a document.

        Raises:
            OpenError: If the file is missing, unreadable or not a valid
                document of this format.
        """
