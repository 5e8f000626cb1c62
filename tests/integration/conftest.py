# tests/integration/conftest.py - v1
"""Fixtures for integration tests against real PDF files (PyMuPDF).

Test modules call pytest.importorskip("fitz") so they are skipped when the
'pymupdf' package is missing.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path

import pytest


def _fitz():
    return pytest.importorskip("fitz")


def write_pdf(path: Path, pages: list[str]) -> Path:
    """Write a PDF with one text line per page."""
    fitz = _fitz()
    path.parent.mkdir(parents=True, exist_ok=True)
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text, fontsize=12)
    doc.save(str(path))
    doc.close()
    return path


def highlight_text(path: Path, page_number: int, needle: str, note: str = "") -> None:
    """Highlight the first occurrence of needle and save incrementally."""
    fitz = _fitz()
    doc = fitz.open(str(path))
    page = doc[page_number]
    rects = page.search_for(needle)
    assert rects, f"{needle!r} not found on page {page_number}"
    annot = page.add_highlight_annot(rects[0])
    annot.set_info(content=note, title="tester")
    annot.update()
    doc.save(str(path), incremental=True, encryption=fitz.PDF_ENCRYPT_KEEP)
    doc.close()


@pytest.fixture
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    """Create PDFs under tmp_path: pdf_factory("a/b.pdf", ["page 1", ...])."""

    def _make(name: str, pages: list[str]) -> Path:
        return write_pdf(tmp_path / name, pages)

    return _make


@pytest.fixture
def copy_file() -> Callable[[Path, Path], Path]:
    def _copy(src: Path, dst: Path) -> Path:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dst)
        return dst

    return _copy
