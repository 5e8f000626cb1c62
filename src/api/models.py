# src/api/models.py - v1
"""Wire-level helpers: parse import payloads, dump export and import results.

The JSON shape is an array of ``{"file", "hash", "highlights"}`` objects for
export/import bodies and ``{"files": [...], "totalImported": n}`` for the
import response.
"""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter, ValidationError

from annosync.core.errors import MalformedPayloadError
from annosync.core.models import DocumentSummary, ImportSummary

_SUMMARY_LIST = TypeAdapter(list[DocumentSummary])
# Import bodies may be null or hold null placeholders; both mean "nothing here".
_IMPORT_BODY = TypeAdapter(list[DocumentSummary | None] | None)


def parse_import_payload(body: bytes | str) -> list[DocumentSummary]:
    """Decode an import body into DocumentSummary objects.

    Page keys may be JSON strings ("3") and are coerced to integers. A null
    body is an empty batch and null array elements are dropped.

    Raises:
        MalformedPayloadError: If the body is not JSON or not an array of
            document summaries.
    """
    try:
        entries = _IMPORT_BODY.validate_json(body)
    except ValidationError as exc:
        raise MalformedPayloadError(f"invalid json: {_first_error(exc)}") from exc
    return [entry for entry in entries or () if entry is not None]


def dump_export(summaries: list[DocumentSummary]) -> list[dict[str, Any]]:
    """JSON-ready export array."""
    return _SUMMARY_LIST.dump_python(
        summaries, mode="json", by_alias=True, exclude_none=True,
    )


def dump_import_summary(summary: ImportSummary) -> dict[str, Any]:
    """JSON-ready import response; outcome errors are omitted when empty."""
    return summary.model_dump(mode="json", by_alias=True, exclude_none=True)


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors(include_url=False)
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "validation error")
    extra = f" ({len(errors) - 1} more)" if len(errors) > 1 else ""
    return f"{location}: {message}{extra}" if location else f"{message}{extra}"
