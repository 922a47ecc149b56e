"""RPC Routes — HTTP POST transport for the RPC dispatcher.

Invariants:
    - POST /api/{rpc_name} dispatches PUBLIC operations only
    - POST /api/admin/{rpc_name}, /api/publish-blog, /api/publish-project dispatch PROTECTED ones
    - Bodies are read raw and decoded after the route group's gate and the name lookup
    - 204 results carry no body

Design Decisions:
    - Publish endpoints go through the dispatcher instead of typed FastAPI bodies:
      FastAPI parses typed bodies before dependencies, which would answer 400 to an
      anonymous caller instead of 401
    - protected_router carries no gate of its own; route_groups wraps it
"""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from portfolio.api.dependencies import get_record_store
from portfolio.core.domain_types import RouteGroup
from portfolio.core.repository_protocols import RecordStore
from portfolio.services.rpc_dispatcher import RpcDispatcher

public_router = APIRouter(prefix="/api", tags=["rpc"])
protected_router = APIRouter(prefix="/api", tags=["admin"])


async def _dispatch(
    rpc_name: str, group: RouteGroup, request: Request, store: RecordStore,
) -> Response:
    result = await RpcDispatcher(store).dispatch(
        rpc_name, group, await request.body(),
    )
    if result.body is None:
        return Response(status_code=result.status_code)
    return JSONResponse(status_code=result.status_code, content=result.body)


@protected_router.post("/publish-blog", status_code=201)
async def publish_blog(
    request: Request, store: RecordStore = Depends(get_record_store),
):
    """Create a blog post from {title, content}."""
    return await _dispatch("publish-blog", RouteGroup.PROTECTED, request, store)


@protected_router.post("/publish-project", status_code=201)
async def publish_project(
    request: Request, store: RecordStore = Depends(get_record_store),
):
    """Create a project from {title, content, link}."""
    return await _dispatch("publish-project", RouteGroup.PROTECTED, request, store)


@protected_router.post("/admin/{rpc_name}")
async def call_protected_rpc(
    rpc_name: str, request: Request,
    store: RecordStore = Depends(get_record_store),
):
    """delete-project / delete-blog."""
    return await _dispatch(rpc_name, RouteGroup.PROTECTED, request, store)


@public_router.post("/{rpc_name}")
async def call_public_rpc(
    rpc_name: str, request: Request,
    store: RecordStore = Depends(get_record_store),
):
    """list-projects / list-blogs."""
    return await _dispatch(rpc_name, RouteGroup.PUBLIC, request, store)
