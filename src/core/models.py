# src/core/models.py - v1
"""Shared Pydantic domain models for annotation export and import.

No module redefines these types; all imports come from core.models.
Field aliases match the JSON wire format (``file``, ``hash``,
``highlights``, ``imported``, ``totalImported``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


# === ANNOTATIONS ===


class AnnotationRecord(BaseModel):
    """A single highlight or note attached to one page of a document."""

    model_config = ConfigDict(extra="ignore")

    type: str = "Highlight"
    rect: list[float] = Field(default_factory=list)
    vertices: list[list[float]] = Field(default_factory=list)
    contents: str = ""
    author: str = ""
    color: list[float] | None = None
    opacity: float | None = None
    created: str = ""
    modified: str = ""


# Page index (0-based) -> records in append order.
AnnotationMap = dict[NonNegativeInt, list[AnnotationRecord]]

# Content hash -> per-page records, built by sync.aggregator.
AggregatedAnnotations = dict[str, AnnotationMap]


# === EXPORT ===


class DocumentSummary(BaseModel):
    """Annotation set and identity of one document at export time.

    ``content_hash`` is the only identity used on import; ``path`` is
    informational and differs between machines.
    """

    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(default="", alias="file")
    content_hash: str = Field(default="", alias="hash")
    annotations: AnnotationMap | None = Field(default=None, alias="highlights")

    @property
    def record_count(self) -> int:
        """Total number of records across all pages."""
        if not self.annotations:
            return 0
        return sum(len(records) for records in self.annotations.values())


# === IMPORT ===


class ImportOutcome(BaseModel):
    """Per-document result of an import run."""

    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(alias="file")
    imported_count: NonNegativeInt = Field(default=0, alias="imported")
    saved: bool = False
    error: str | None = None


class ImportSummary(BaseModel):
    """Import run result: outcomes in scan order plus the optimistic total."""

    model_config = ConfigDict(populate_by_name=True)

    files: list[ImportOutcome] = Field(default_factory=list)
    total_imported: NonNegativeInt = Field(default=0, alias="totalImported")
