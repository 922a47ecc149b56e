"""Page Routes — GET page paths and the static/render catch-all.

Invariants:
    - One GET route per declared page path, built from services/pages.py at startup
    - Every page request gets its own RenderContext
    - Catch-all tries a static asset first, then renders; it never renders the admin page
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio.api.dependencies import get_record_store
from portfolio.config import get_settings
from portfolio.core.repository_protocols import RecordStore
from portfolio.services.pages import (
    PUBLIC_PAGE_PATHS, build_page, normalize_page_path, not_found_page,
)
from portfolio.services.render_pipeline import RenderContext, page_response

logger = logging.getLogger(__name__)


def _page_endpoint(path: str):
    async def render_page(store: RecordStore = Depends(get_record_store)):
        ctx = RenderContext(store=store, settings=get_settings(), path=path)
        return page_response(build_page(path, ctx), ctx)
    return render_page


def build_page_router(paths: tuple[str, ...]) -> APIRouter:
    """Register a streamed-HTML GET route for each page path."""
    router = APIRouter(tags=["pages"])
    for path in paths:
        router.add_api_route(
            path, _page_endpoint(path), methods=["GET"],
            name=f"page:{path}", include_in_schema=False,
        )
    return router


def build_fallback_router(site_root: str) -> APIRouter:
    """Catch-all: static asset from site_root, else the rendered page."""
    router = APIRouter()
    static = StaticFiles(directory=site_root, check_dir=False)

    @router.get("/{full_path:path}", include_in_schema=False)
    async def file_and_error_handler(
        full_path: str, request: Request,
        store: RecordStore = Depends(get_record_store),
    ):
        try:
            return await static.get_response(full_path, request.scope)
        except StarletteHTTPException as e:
            logger.debug(f"No static asset for /{full_path}: {e.status_code}")

        path = normalize_page_path(full_path)
        ctx = RenderContext(store=store, settings=get_settings(), path=path)
        if path in PUBLIC_PAGE_PATHS:
            page = build_page(path, ctx)
        else:
            page = not_found_page(ctx)
        return page_response(page, ctx)

    return router
