# src/sync/importer.py - v1
"""Import: merge aggregated annotation sets into matching local documents.

Documents are matched by content hash only. The tree is scanned again for
every import so that the current files are used, not an earlier export.

Per-document flow:
    open -> content hash -> lookup -> import_annotations -> [save] -> close

A failure on one document is recorded in its outcome and never stops the
batch. Documents whose hash has no aggregated entry are closed and left out
of the summary.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from annosync.batch.scanner import DocumentScanner
from annosync.core.errors import DocumentError, MergeError, OpenError, SaveError
from annosync.core.models import (
    AggregatedAnnotations,
    AnnotationMap,
    ImportOutcome,
    ImportSummary,
)
from annosync.logging.context import set_document_context
from annosync.sync.reporter import ImportReporter

if TYPE_CHECKING:
    from annosync.documents.base_document import BaseDocument, BaseDocumentStore

logger = logging.getLogger(__name__)


class HighlightImporter:
    """Apply an AggregatedAnnotations mapping to the documents under a root."""

    def __init__(
        self,
        store: BaseDocumentStore,
        scanner: DocumentScanner | None = None,
    ) -> None:
        self._store = store
        self._scanner = scanner or DocumentScanner(extension=store.extension)

    def import_into(
        self,
        scan_root: Path | str,
        aggregated: AggregatedAnnotations,
    ) -> ImportSummary:
        """Merge aggregated annotations into every matching document.

        Args:
            scan_root: Directory to scan for target documents.
            aggregated: Output of sync.aggregator.aggregate().

        Returns:
            ImportSummary with one outcome per matched or unopenable document.

        Raises:
            ScanError: If the tree cannot be walked (no file is touched).
        """
        paths = self._scanner.scan(scan_root)
        reporter = ImportReporter()

        for path in paths:
            set_document_context(str(path))
            try:
                outcome = self._import_one(path, aggregated)
            finally:
                set_document_context(None)
            if outcome is not None:
                reporter.record(outcome)

        summary = reporter.summary()
        logger.info(
            "Import complete: %d target document(s), %d record(s) imported",
            len(summary.files), summary.total_imported,
            extra={"data": {
                "scanned": len(paths),
                "targets": len(summary.files),
                "total_imported": summary.total_imported,
            }},
        )
        return summary

    def _import_one(
        self, path: Path, aggregated: AggregatedAnnotations,
    ) -> ImportOutcome | None:
        """Process one document. Returns None when it is not an import target."""
        try:
            doc = self._store.open(path)
        except OpenError as exc:
            logger.warning("Cannot open %s: %s", path, exc)
            return ImportOutcome(path=str(path), error=str(exc))

        with doc:
            try:
                content_hash = doc.content_hash()
            except DocumentError as exc:
                logger.warning("Cannot hash %s, not importing: %s", path, exc)
                return None

            annotations = aggregated.get(content_hash)
            if annotations is None:
                logger.debug("No annotations for %s (hash %s)", path, content_hash)
                return None

            return self._merge(doc, path, annotations)

    @staticmethod
    def _merge(
        doc: BaseDocument, path: Path, annotations: AnnotationMap,
    ) -> ImportOutcome:
        outcome = ImportOutcome(path=str(path))

        try:
            outcome.imported_count = doc.import_annotations(annotations)
        except MergeError as exc:
            outcome.imported_count = exc.applied
            outcome.error = str(exc)
            logger.warning(
                "Merge into %s failed after %d record(s): %s", path, exc.applied, exc,
            )
            return outcome

        if outcome.imported_count > 0:
            try:
                outcome.saved = doc.save()
            except SaveError as exc:
                outcome.saved = False
                outcome.error = str(exc)
                logger.warning("Cannot save %s: %s", path, exc)

        logger.debug(
            "Imported %d record(s) into %s (saved=%s)",
            outcome.imported_count, path, outcome.saved,
        )
        return outcome
