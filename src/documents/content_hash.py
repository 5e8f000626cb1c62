# src/documents/content_hash.py - v1
"""Content hash used as the cross-machine identity of a document.

The hash covers the durable page content only. Annotations, file names and
incremental-save trailers do not take part, so a document keeps its hash
after highlights are imported into it.
"""

from __future__ import annotations

import hashlib
import re
from collections.abc import Iterable

# Separates pages so that moving text across a page break changes the hash.
_PAGE_SEPARATOR = b"\x00page\x00"


def compute_content_hash(pages: Iterable[str | bytes]) -> str:
    """SHA-256 over the pages of a document, in order.

    Args:
        pages: One item per page. Text is normalized before hashing; bytes
            (e.g. a raw content stream for a page without text) are
            digested as-is.

    Returns:
        Lowercase hex digest.
    """
    digest = hashlib.sha256()
    for page in pages:
        digest.update(_PAGE_SEPARATOR)
        if isinstance(page, bytes):
            digest.update(hashlib.sha256(page).digest())
        else:
            digest.update(normalize_text(page).encode("utf-8"))
    return digest.hexdigest()


def normalize_text(text: str) -> str:
    """Lowercase, strip punctuation and collapse whitespace."""
    text = text.lower()
    text = re.sub(r"[^\w\s]", "", text)
    text = re.sub(r"\s+", " ", text).strip()
    return text
