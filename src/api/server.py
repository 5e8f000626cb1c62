# src/api/server.py - v1
"""HTTP surface: POST /export and POST /import over the configured scan root.

Request-level failures are answered with a plain-text body (400 for an
unreadable or malformed import body, 500 when the tree cannot be scanned).
Per-document failures are reported inside the JSON import summary.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool
from starlette.requests import ClientDisconnect

from annosync.api.facade import export_highlights, import_highlights
from annosync.api.models import dump_export, dump_import_summary, parse_import_payload
from annosync.config.settings import Settings
from annosync.core.errors import MalformedPayloadError, ScanError
from annosync.version import __version__

if TYPE_CHECKING:
    from annosync.documents.base_document import BaseDocumentStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: BaseDocumentStore | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Scan root and extension come from here. Loaded if None.
        store: Document backend. Defaults to the PyMuPDF PDF store.
    """
    settings = settings or Settings()
    if store is None:
        from annosync.documents.pdf_document import PdfDocumentStore

        store = PdfDocumentStore()

    app = FastAPI(title="annosync", version=__version__)
    app.state.settings = settings
    app.state.store = store

    app.add_exception_handler(ScanError, _scan_error_handler)
    app.add_exception_handler(MalformedPayloadError, _payload_error_handler)

    @app.post("/export")
    def export() -> JSONResponse:
        summaries = export_highlights(
            settings.scan_root, store, extension=settings.document_extension,
        )
        return JSONResponse(content=dump_export(summaries))

    @app.post("/import")
    async def import_(request: Request) -> JSONResponse:
        try:
            body = await request.body()
        except ClientDisconnect as exc:
            raise MalformedPayloadError("cannot read request body") from exc

        payload = parse_import_payload(body)
        summary = await run_in_threadpool(
            import_highlights,
            settings.scan_root,
            payload,
            store,
            settings.document_extension,
        )
        return JSONResponse(content=dump_import_summary(summary))

    @app.get("/healthcheck")
    async def healthcheck() -> JSONResponse:
        return JSONResponse(content={"status": "healthy"}, status_code=200)

    return app


async def _scan_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.error("Scan failed for %s: %s", request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=500)


async def _payload_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.warning("Rejected import payload: %s", exc)
    return PlainTextResponse(str(exc), status_code=400)


def run_server(settings: Settings, store: BaseDocumentStore | None = None) -> None:
    """Serve the API with uvicorn until interrupted."""
    import uvicorn

    app = create_app(settings, store)
    logger.info(
        "Listening on %s (root=%s)", settings.listen_addr, settings.scan_root,
    )
    uvicorn.run(
        app,
        host=settings.listen_host,
        port=settings.listen_port,
        log_config=None,
    )
