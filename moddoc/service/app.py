"""FastAPI application that regenerates documentation on every request."""

from __future__ import annotations

import asyncio
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, Response

from .. import __version__
from ..errors import ModDocError
from ..logging import adopt_logger, get_logger
from ..orchestrator import Orchestrator
from ..render import INDEX_PAGE

logger = get_logger("service")


@dataclass
class ServedFile:
    path: Path
    body: bytes
    media_type: str


def resolve_request_path(out_dir: Path, request_path: str) -> Optional[Path]:
    """Map a URL path onto a file inside `out_dir`, or None when there is none."""
    root = out_dir.resolve()
    candidate = (root / request_path.lstrip("/")).resolve()
    if candidate != root and root not in candidate.parents:
        return None
    if candidate.is_dir():
        candidate = candidate / INDEX_PAGE
    return candidate if candidate.is_file() else None


def regenerate_and_read(orchestrator: Orchestrator, request_path: str) -> Optional[ServedFile]:
    """Rebuild everything, then read the requested file under the same lock."""
    with orchestrator.lock:
        orchestrator.run_build()
        target = resolve_request_path(orchestrator.config.output_dir, request_path)
        if target is None:
            return None
        media_type = mimetypes.guess_type(target.name)[0] or "application/octet-stream"
        return ServedFile(path=target, body=target.read_bytes(), media_type=media_type)


def create_app(orchestrator: Orchestrator) -> FastAPI:
    """Create the application serving the orchestrator's output directory."""

    app = FastAPI(
        title="moddoc",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.get("/{request_path:path}")
    async def serve(request_path: str) -> Response:
        loop = asyncio.get_running_loop()
        try:
            served = await loop.run_in_executor(None, regenerate_and_read, orchestrator, request_path)
        except ModDocError as exc:
            logger.error("Documentation rebuild failed: %s", exc)
            return PlainTextResponse(f"documentation build failed: {exc}\n", status_code=500)
        if served is None:
            return PlainTextResponse("404 page not found\n", status_code=404)
        return Response(content=served.body, media_type=served.media_type)

    return app


def run_service(
    orchestrator: Orchestrator, host: str = "127.0.0.1", port: int = 8080
) -> None:  # pragma: no cover - integration path
    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise ModDocError(
            "uvicorn is required to run the server. Install it with `pip install uvicorn`."
        ) from exc

    app = create_app(orchestrator)
    adopt_logger("uvicorn.error", level=logging.INFO)
    adopt_logger("uvicorn.access", level=logging.WARNING)
    logger.info("Listening on http://%s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)


__all__ = ["ServedFile", "create_app", "regenerate_and_read", "resolve_request_path", "run_service"]
