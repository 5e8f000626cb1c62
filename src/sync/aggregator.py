# src/sync/aggregator.py - v1
"""Group exported annotation sets by content hash.

Summaries that share a hash are the same logical document (for instance the
same PDF exported from two paths), so their per-page records are
concatenated. Nothing is deduplicated here; the document backend decides
which records are already present when the result is imported.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from annosync.core.models import AggregatedAnnotations, DocumentSummary

logger = logging.getLogger(__name__)


def aggregate(summaries: Iterable[DocumentSummary]) -> AggregatedAnnotations:
    """Union annotation sets by content hash, preserving input order.

    Summaries with an empty hash or no annotations are skipped.
    """
    result: AggregatedAnnotations = {}
    skipped = 0
    for summary in summaries:
        if not summary.content_hash or not summary.annotations:
            skipped += 1
            continue
        pages = result.setdefault(summary.content_hash, {})
        for page, records in summary.annotations.items():
            pages.setdefault(page, []).extend(records)

    logger.debug(
        "Aggregated %d content hash(es), skipped %d empty summary(ies)",
        len(result), skipped,
    )
    return result
