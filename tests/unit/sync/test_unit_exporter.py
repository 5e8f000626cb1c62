# tests/unit/sync/test_unit_exporter.py - v1
"""Tests for sync/exporter.py: best-effort document summaries."""

from __future__ import annotations

from pathlib import Path

import pytest

from annosync.core.errors import ScanError
from annosync.sync.exporter import HighlightExporter
from tests.conftest import FakeFile, highlight, make_tree


class TestExportAll:
    def test_empty_directory(self, tmp_path: Path, fake_store):
        assert HighlightExporter(fake_store).export_all(tmp_path) == []

    def test_summary_fields(self, tmp_path: Path, fake_store):
        (path,) = make_tree(tmp_path, ["paper.pdf"])
        fake_store.files["paper.pdf"] = FakeFile(
            content_hash="abc", annotations={2: [highlight("note")]},
        )

        (summary,) = HighlightExporter(fake_store).export_all(tmp_path)

        assert summary.path == str(path.absolute())
        assert summary.content_hash == "abc"
        assert summary.annotations[2][0].contents == "note"
        assert summary.record_count == 1

    def test_document_without_annotations_is_exported(self, tmp_path: Path, fake_store):
        make_tree(tmp_path, ["plain.pdf"])
        fake_store.files["plain.pdf"] = FakeFile(content_hash="abc")

        (summary,) = HighlightExporter(fake_store).export_all(tmp_path)

        assert summary.annotations == {}

    def test_unopenable_document_skipped(self, tmp_path: Path, fake_store):
        make_tree(tmp_path, ["a.pdf", "broken.pdf", "c.pdf"])
        fake_store.files["a.pdf"] = FakeFile(content_hash="h1")
        fake_store.files["broken.pdf"] = FakeFile(content_hash="h2", fail_open=True)
        fake_store.files["c.pdf"] = FakeFile(content_hash="h3")

        summaries = HighlightExporter(fake_store).export_all(tmp_path)

        assert [s.content_hash for s in summaries] == ["h1", "h3"]

    def test_unreadable_document_skipped(self, tmp_path: Path, fake_store):
        make_tree(tmp_path, ["a.pdf", "b.pdf"])
        fake_store.files["a.pdf"] = FakeFile(content_hash="h1", fail_read=True)
        fake_store.files["b.pdf"] = FakeFile(content_hash="h2")

        summaries = HighlightExporter(fake_store).export_all(tmp_path)

        assert [s.content_hash for s in summaries] == ["h2"]
        assert all(doc.closed for doc in fake_store.opened)

    def test_documents_closed_one_at_a_time(self, tmp_path: Path, fake_store):
        make_tree(tmp_path, ["a.pdf", "b.pdf", "c.pdf"])
        for name in ("a.pdf", "b.pdf", "c.pdf"):
            fake_store.files[name] = FakeFile(content_hash=name)

        HighlightExporter(fake_store).export_all(tmp_path)

        assert all(doc.closed for doc in fake_store.opened)
        assert fake_store.max_open_handles == 1

    def test_only_matching_extension(self, tmp_path: Path, fake_store):
        make_tree(tmp_path, ["a.pdf", "b.PDF", "c.txt"])
        for name in ("a.pdf", "b.PDF", "c.txt"):
            fake_store.files[name] = FakeFile(content_hash=name)

        summaries = HighlightExporter(fake_store).export_all(tmp_path)

        assert [s.content_hash for s in summaries] == ["a.pdf"]

    def test_scan_error_propagates(self, tmp_path: Path, fake_store):
        with pytest.raises(ScanError):
            HighlightExporter(fake_store).export_all(tmp_path / "missing")
