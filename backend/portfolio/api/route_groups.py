"""Route Groups — the public and protected route tables, built independently then merged.

Invariants:
    - Every protected route is wrapped by require_session at the group level
    - Page paths split once: ADMIN_PAGE_PATH protected, every other declared path public
    - Protected concrete /api/* paths are included ahead of the public /api/{rpc_name} pattern

Design Decisions:
    - Gate as a group dependency rather than per route: adding a protected route can't forget it
"""

from fastapi import APIRouter, Depends

from portfolio.api.dependencies import require_session
from portfolio.api.routes import auth, pages, rpc
from portfolio.services.pages import PROTECTED_PAGE_PATHS, PUBLIC_PAGE_PATHS


def build_protected_routes() -> APIRouter:
    router = APIRouter(dependencies=[Depends(require_session)])
    router.include_router(rpc.protected_router)
    router.include_router(pages.build_page_router(PROTECTED_PAGE_PATHS))
    return router


def build_public_routes() -> APIRouter:
    router = APIRouter()
    router.include_router(auth.router)
    router.include_router(rpc.public_router)
    router.include_router(pages.build_page_router(PUBLIC_PAGE_PATHS))
    return router


def include_route_groups(app, site_root: str) -> None:
    """Merge both tables into the app, then the catch-all fallback last."""
    app.include_router(build_protected_routes())
    app.include_router(build_public_routes())
    app.include_router(pages.build_fallback_router(site_root))
