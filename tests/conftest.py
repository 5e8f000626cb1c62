# tests/conftest.py - v1
"""Shared test fixtures for unit and integration tests.

Provides an in-memory document store with fault injection, sample
annotation records and helpers that lay out document trees on disk.
No PDF library is needed for anything defined here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from annosync.core.errors import MergeError, OpenError, ReadError, SaveError
from annosync.core.models import AnnotationMap, AnnotationRecord, DocumentSummary
from annosync.documents.base_document import BaseDocument, BaseDocumentStore


# === FAKE DOCUMENT STORE ===


@dataclass
class FakeFile:
    """State of one fake document, kept across open/close cycles."""

    content_hash: str
    annotations: AnnotationMap = field(default_factory=dict)
    fail_open: bool = False
    # Raise ReadError when the pages or annotations are read.
    fail_read: bool = False
    # Raise MergeError after applying this many records.
    fail_merge_after: int | None = None
    fail_save: bool = False
    saves: int = 0


class FakeDocument(BaseDocument):
    """Document backed by a FakeFile; dedups on (type, rect, contents)."""

    def __init__(self, path: Path, file: FakeFile, store: FakeDocumentStore) -> None:
        self._path = path
        self._file = file
        self._store = store
        self._pending: AnnotationMap = {
            page: list(records) for page, records in file.annotations.items()
        }
        self.closed = False

    @property
    def path(self) -> Path:
        return self._path

    def annotations(self) -> AnnotationMap:
        if self._file.fail_read:
            raise ReadError(f"injected read failure for {self._path.name}")
        return {page: list(records) for page, records in self._pending.items()}

    def content_hash(self) -> str:
        if self._file.fail_read:
            raise ReadError(f"injected read failure for {self._path.name}")
        return self._file.content_hash

    def import_annotations(self, annotations: AnnotationMap) -> int:
        applied = 0
        for page, records in annotations.items():
            existing = self._pending.setdefault(page, [])
            for record in records:
                if self._file.fail_merge_after is not None and applied >= self._file.fail_merge_after:
                    raise MergeError("injected merge failure", applied=applied)
                if any(_same(record, other) for other in existing):
                    continue
                existing.append(record)
                applied += 1
        return applied

    def save(self) -> bool:
        if self._file.fail_save:
            raise SaveError(f"injected save failure for {self._path.name}")
        self._file.annotations = self.annotations()
        self._file.saves += 1
        return True

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self._store.open_handles -= 1


class FakeDocumentStore(BaseDocumentStore):
    """Maps file names (relative to nothing, just ``path.name``) to FakeFiles."""

    def __init__(self, files: dict[str, FakeFile] | None = None) -> None:
        self.files: dict[str, FakeFile] = dict(files or {})
        self.opened: list[FakeDocument] = []
        self.open_handles = 0
        self.max_open_handles = 0

    @property
    def extension(self) -> str:
        return ".pdf"

    def open(self, path: Path) -> FakeDocument:
        file = self.files.get(Path(path).name)
        if file is None or file.fail_open:
            raise OpenError(f"cannot open {path}")
        doc = FakeDocument(Path(path), file, self)
        self.opened.append(doc)
        self.open_handles += 1
        self.max_open_handles = max(self.max_open_handles, self.open_handles)
        return doc


def _same(a: AnnotationRecord, b: AnnotationRecord) -> bool:
    return (a.type, a.rect, a.contents) == (b.type, b.rect, b.contents)


def make_tree(root: Path, names: list[str]) -> list[Path]:
    """Create empty files under root (names may contain subdirectories)."""
    paths = []
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"%PDF-1.7 placeholder")
        paths.append(path)
    return paths


def highlight(text: str, y: float = 100.0) -> AnnotationRecord:
    """Highlight record with distinct geometry per y value."""
    return AnnotationRecord(
        type="Highlight",
        rect=[72.0, y, 200.0, y + 12.0],
        vertices=[[72.0, y], [200.0, y], [72.0, y + 12.0], [200.0, y + 12.0]],
        contents=text,
    )


# === FIXTURES ===


@pytest.fixture
def fake_store() -> FakeDocumentStore:
    """Empty fake store; tests register FakeFiles by file name."""
    return FakeDocumentStore()


@pytest.fixture
def sample_records() -> list[AnnotationRecord]:
    return [highlight("h1", 100.0), highlight("h2", 130.0), highlight("h3", 160.0)]


@pytest.fixture
def sample_summary(sample_records: list[AnnotationRecord]) -> DocumentSummary:
    return DocumentSummary(
        path="/elsewhere/paper.pdf",
        content_hash="abc",
        annotations={0: sample_records[:2], 2: sample_records[2:]},
    )
