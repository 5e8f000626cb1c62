# src/sync/exporter.py - v1
"""Export: read the annotation set and content hash of every scanned document."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from annosync.batch.scanner import DocumentScanner
from annosync.core.errors import DocumentError
from annosync.core.models import DocumentSummary
from annosync.logging.context import set_document_context

if TYPE_CHECKING:
    from annosync.documents.base_document import BaseDocumentStore

logger = logging.getLogger(__name__)


class HighlightExporter:
    """Build one DocumentSummary per readable document under a root.

    Export is best effort: a document that cannot be opened or read is left
    out of the result and the batch goes on. Each document is closed before
    the next one is opened.
    """

    def __init__(
        self,
        store: BaseDocumentStore,
        scanner: DocumentScanner | None = None,
    ) -> None:
        self._store = store
        self._scanner = scanner or DocumentScanner(extension=store.extension)

    def export_all(self, scan_root: Path | str) -> list[DocumentSummary]:
        """Scan scan_root and summarize each document.

        Raises:
            ScanError: If the tree cannot be walked.
        """
        paths = self._scanner.scan(scan_root)
        summaries: list[DocumentSummary] = []
        skipped = 0

        for path in paths:
            set_document_context(str(path))
            try:
                summary = self._export_one(path)
            except DocumentError as exc:
                skipped += 1
                logger.warning("Skipping %s: %s", path, exc)
                continue
            finally:
                set_document_context(None)
            summaries.append(summary)

        logger.info(
            "Exported %d document(s), skipped %d",
            len(summaries), skipped,
            extra={"data": {"exported": len(summaries), "skipped": skipped}},
        )
        return summaries

    def _export_one(self, path: Path) -> DocumentSummary:
        with self._store.open(path) as doc:
            summary = DocumentSummary(
                path=str(path),
                content_hash=doc.content_hash(),
                annotations=doc.annotations(),
            )
        logger.debug(
            "Exported %d record(s) from %s", summary.record_count, path,
        )
        return summary
