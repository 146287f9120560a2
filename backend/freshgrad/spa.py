# backend/freshgrad/spa.py
"""
Static host for the prebuilt single-page front end.

Both routers here are catch-alls and must be included after every API
router: unmatched `/api/*` paths get a JSON 404, everything else gets a file
from the build directory or the SPA entry document.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import FileResponse, PlainTextResponse

logger = logging.getLogger(__name__)

_REPO_ROOT = Path(__file__).resolve().parents[2]
FRONTEND_DIST_DIR = Path(os.getenv("FRONTEND_DIST_DIR", str(_REPO_ROOT / "dist")))

api_fallback_router = APIRouter(include_in_schema=False)
spa_router = APIRouter(include_in_schema=False)


@api_fallback_router.api_route(
    "/api/{rest:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
)
def api_route_not_found(rest: str):
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="API route not found")


def _resolve_static(dist_dir: Path, requested: str) -> Path | None:
    """Return the file for `requested` if it exists inside `dist_dir`."""
    if not requested:
        return None
    root = dist_dir.resolve()
    candidate = (root / requested).resolve()
    try:
        candidate.relative_to(root)
    except ValueError:
        return None
    return candidate if candidate.is_file() else None


@spa_router.get("/{full_path:path}")
def serve_frontend(full_path: str):
    dist_dir = FRONTEND_DIST_DIR
    index = dist_dir / "index.html"
    if not index.is_file():
        logger.warning("Front-end build not found at %s", dist_dir)
        return PlainTextResponse("Frontend not deployed", status_code=status.HTTP_404_NOT_FOUND)

    static_file = _resolve_static(dist_dir, full_path)
    if static_file is not None:
        return FileResponse(static_file)
    return FileResponse(index)
