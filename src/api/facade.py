# src/api/facade.py - v1
"""Public API facade for exporting and importing annotations.

Usage:
    from annosync.api.facade import export_highlights, import_highlights
    summaries = export_highlights("~/papers")
    summary = import_highlights("~/papers", summaries)

Both functions are synchronous and process one document at a time. The
HTTP server and the CLI are thin wrappers around them.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from annosync.api.models import parse_import_payload
from annosync.batch.scanner import DocumentScanner
from annosync.core.models import DocumentSummary, ImportSummary
from annosync.logging.context import set_request_context
from annosync.sync.aggregator import aggregate
from annosync.sync.exporter import HighlightExporter
from annosync.sync.importer import HighlightImporter

if TYPE_CHECKING:
    from annosync.documents.base_document import BaseDocumentStore

logger = logging.getLogger(__name__)


def export_highlights(
    scan_root: Path | str,
    store: BaseDocumentStore | None = None,
    extension: str | None = None,
) -> list[DocumentSummary]:
    """Export the annotation set and content hash of every document under scan_root.

    Args:
        scan_root: Directory tree to export.
        store: Document backend. Defaults to the PyMuPDF PDF store.
        extension: Overrides the extension scanned for (store default otherwise).

    Raises:
        ScanError: If the tree cannot be walked.
    """
    store = store or _default_store()
    set_request_context("export")
    logger.info("Starting export of %s", scan_root)
    exporter = HighlightExporter(store, _scanner(store, extension))
    return exporter.export_all(scan_root)


def import_highlights(
    scan_root: Path | str,
    payload: list[DocumentSummary] | bytes | str,
    store: BaseDocumentStore | None = None,
    extension: str | None = None,
) -> ImportSummary:
    """Import previously exported annotations into matching documents.

    Args:
        scan_root: Directory tree holding the target documents.
        payload: Export result, either parsed or as raw JSON.
        store: Document backend. Defaults to the PyMuPDF PDF store.
        extension: Overrides the extension scanned for.

    Raises:
        MalformedPayloadError: If a raw payload cannot be parsed. Raised
            before any document is opened.
        ScanError: If the tree cannot be walked.
    """
    if isinstance(payload, (bytes, str)):
        payload = parse_import_payload(payload)

    store = store or _default_store()
    set_request_context("import")
    aggregated = aggregate(payload)
    logger.info(
        "Starting import into %s: %d summary(ies), %d content hash(es)",
        scan_root, len(payload), len(aggregated),
    )
    importer = HighlightImporter(store, _scanner(store, extension))
    return importer.import_into(scan_root, aggregated)


def _scanner(store: BaseDocumentStore, extension: str | None) -> DocumentScanner:
    return DocumentScanner(extension=extension or store.extension)


def _default_store() -> BaseDocumentStore:
    from annosync.documents.pdf_document import PdfDocumentStore

    return PdfDocumentStore()
