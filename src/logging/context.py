# src/logging/context.py - v1
"""Contextual logging support: attach request_id, operation, document to log records."""

from __future__ import annotations

import contextvars
import uuid
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per request and per document.
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)
_document: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "document", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    operation: str | None = None
    document: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        operation=_operation.get(),
        document=_document.get(),
    )


def set_request_context(operation: str, request_id: str | None = None) -> str:
    """Set request-level context (called once per export/import run).

    Returns the request id in effect, generating a short one if omitted.
    """
    request_id = request_id or uuid.uuid4().hex[:12]
    _request_id.set(request_id)
    _operation.set(operation)
    _document.set(None)
    return request_id


def set_document_context(document: str | None) -> None:
    """Set the document currently being processed (None when done)."""
    _document.set(document)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _operation.set(None)
    _document.set(None)
