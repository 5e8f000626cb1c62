# src/documents/pdf_document.py - v1
"""PDF document backend using PyMuPDF (fitz).

Reads and writes text-markup annotations (highlight, underline, strike-out,
squiggly) and sticky notes. Requires the 'pymupdf' package.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from annosync.core.errors import MergeError, OpenError, ReadError, SaveError
from annosync.core.models import AnnotationMap, AnnotationRecord
from annosync.documents.base_document import BaseDocument, BaseDocumentStore
from annosync.documents.content_hash import compute_content_hash

logger = logging.getLogger(__name__)

MARKUP_TYPES = ("Highlight", "Underline", "StrikeOut", "Squiggly")
NOTE_TYPES = ("Text",)
SUPPORTED_TYPES = MARKUP_TYPES + NOTE_TYPES

# Suffix of the sibling file written by a full (non-incremental) save.
TMP_SUFFIX = ".annosync-tmp"

# Geometry is compared at this precision (PDF points) when detecting duplicates.
_KEY_PRECISION = 1


def _import_fitz() -> Any:
    try:
        import fitz  # PyMuPDF
    except ImportError as e:
        raise ImportError(
            "pymupdf package required for PDF documents: pip install pymupdf"
        ) from e
    return fitz


def record_key(record: AnnotationRecord) -> tuple:
    """Identity of a record for duplicate detection on import.

    Quad points identify text markup; the anchor point identifies a note.
    """
    if record.vertices:
        geometry = tuple(
            round(coord, _KEY_PRECISION) for point in record.vertices for coord in point
        )
    elif record.type in NOTE_TYPES:
        geometry = tuple(round(coord, _KEY_PRECISION) for coord in record.rect[:2])
    else:
        geometry = tuple(round(coord, _KEY_PRECISION) for coord in record.rect)
    return (record.type, geometry, record.contents)


class PdfDocument(BaseDocument):
    """An open PDF file."""

    def __init__(self, path: Path, doc: Any, fitz_module: Any) -> None:
        self._path = path
        self._doc = doc
        self._fitz = fitz_module
        self._hash: str | None = None
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def annotations(self) -> AnnotationMap:
        result: AnnotationMap = {}
        try:
            for page in self._doc:
                records = self._page_records(page)
                if records:
                    result[page.number] = records
        except (RuntimeError, ValueError) as exc:
            raise ReadError(f"cannot read annotations of {self._path}: {exc}") from exc
        return result

    def content_hash(self) -> str:
        if self._hash is None:
            try:
                contents = self._page_contents()
            except (RuntimeError, ValueError) as exc:
                raise ReadError(f"cannot read pages of {self._path}: {exc}") from exc
            self._hash = compute_content_hash(contents)
        return self._hash

    def import_annotations(self, annotations: AnnotationMap) -> int:
        applied = 0
        for page_number in sorted(annotations):
            if page_number >= self._doc.page_count:
                raise MergeError(
                    f"page {page_number} out of range "
                    f"({self._doc.page_count} pages in {self._path.name})",
                    applied=applied,
                )
            try:
                page = self._doc[page_number]
                seen = {record_key(r) for r in self._page_records(page)}
            except (RuntimeError, ValueError) as exc:
                raise MergeError(
                    f"cannot read page {page_number} of {self._path.name}: {exc}",
                    applied=applied,
                ) from exc
            for record in annotations[page_number]:
                key = record_key(record)
                if key in seen:
                    continue
                try:
                    self._add_annotation(page, record)
                except MergeError as exc:
                    exc.applied = applied
                    raise
                except (RuntimeError, ValueError) as exc:
                    raise MergeError(
                        f"cannot add {record.type} on page {page_number}: {exc}",
                        applied=applied,
                    ) from exc
                seen.add(key)
                applied += 1
        logger.debug("Applied %d annotation(s) to %s", applied, self._path)
        return applied

    def save(self) -> bool:
        fitz = self._fitz
        try:
            if self._doc.can_save_incrementally():
                self._doc.save(
                    str(self._path), incremental=True,
                    encryption=fitz.PDF_ENCRYPT_KEEP,
                )
            else:
                self._save_replacing()
        except (RuntimeError, ValueError, OSError) as exc:
            raise SaveError(f"cannot save {self._path}: {exc}") from exc
        return True

    def _save_replacing(self) -> None:
        """Full save to a sibling file, then swap it in place of the original."""
        tmp_path = self._path.with_name(self._path.name + TMP_SUFFIX)
        try:
            self._doc.save(str(tmp_path), garbage=3, deflate=True)
            os.replace(tmp_path, self._path)
        except (RuntimeError, ValueError, OSError):
            tmp_path.unlink(missing_ok=True)
            raise

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._doc.close()

    # --- Internals ---

    def _page_contents(self) -> list[str | bytes]:
        """Page text, or the raw content stream for pages without text."""
        contents: list[str | bytes] = []
        for page in self._doc:
            text = page.get_text("text")
            if text.strip():
                contents.append(text)
            else:
                contents.append(page.read_contents())
        return contents

    def _page_records(self, page: Any) -> list[AnnotationRecord]:
        records: list[AnnotationRecord] = []
        for annot in page.annots():
            subtype = annot.type[1]
            if subtype not in SUPPORTED_TYPES:
                continue
            info = annot.info
            stroke = annot.colors.get("stroke") if annot.colors else None
            opacity = annot.opacity
            records.append(
                AnnotationRecord(
                    type=subtype,
                    rect=list(annot.rect),
                    vertices=[list(p) for p in (annot.vertices or [])],
                    contents=info.get("content", ""),
                    author=info.get("title", ""),
                    color=list(stroke) if stroke else None,
                    opacity=opacity if opacity is not None and opacity >= 0 else None,
                    created=info.get("creationDate", ""),
                    modified=info.get("modDate", ""),
                )
            )
        return records

    def _add_annotation(self, page: Any, record: AnnotationRecord) -> None:
        fitz = self._fitz
        if record.type in MARKUP_TYPES:
            adders = {
                "Highlight": page.add_highlight_annot,
                "Underline": page.add_underline_annot,
                "StrikeOut": page.add_strikeout_annot,
                "Squiggly": page.add_squiggly_annot,
            }
            if len(record.vertices) >= 4:
                points = record.vertices
                target: Any = [
                    fitz.Quad(points[i : i + 4]) for i in range(0, len(points) - 3, 4)
                ]
            elif len(record.rect) == 4:
                target = fitz.Rect(record.rect)
            else:
                raise MergeError(f"{record.type} record has no geometry")
            annot = adders[record.type](target)
        elif record.type in NOTE_TYPES:
            if len(record.rect) < 2:
                raise MergeError("Text record has no position")
            annot = page.add_text_annot(
                fitz.Point(record.rect[0], record.rect[1]), record.contents,
            )
        else:
            raise MergeError(f"unsupported annotation type {record.type!r}")

        if annot is None:
            raise MergeError(f"{record.type} annotation was not created")

        annot.set_info(
            content=record.contents,
            title=record.author,
            creationDate=record.created or None,
            modDate=record.modified or None,
        )
        if record.color:
            annot.set_colors(stroke=tuple(record.color))
        if record.opacity is not None and 0 <= record.opacity < 1:
            annot.set_opacity(record.opacity)
        annot.update()


class PdfDocumentStore(BaseDocumentStore):
    """Opens PDF files with PyMuPDF."""

    @property
    def extension(self) -> str:
        return ".pdf"

    def open(self, path: Path) -> PdfDocument:
        fitz = _import_fitz()
        try:
            doc = fitz.open(str(path))
        except (RuntimeError, OSError, ValueError) as exc:
            raise OpenError(f"cannot open {path}: {exc}") from exc

        if not doc.is_pdf:
            doc.close()
            raise OpenError(f"not a PDF document: {path}")
        if doc.needs_pass:
            doc.close()
            raise OpenError(f"document is encrypted: {path}")
        return PdfDocument(Path(path), doc, fitz)
