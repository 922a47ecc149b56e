"""Render Pipeline — streams a page shell, then resolves data boundaries out of order.

Invariants:
    - RenderContext is created per request and passed explicitly; nothing is read from globals
    - Every Boundary fetch runs in its own task, started before the first byte is sent
    - The shell streams immediately with each boundary's fallback in place
    - A boundary's fragment streams as soon as its own fetch finishes — siblings never wait on it
    - A failed fetch or fragment render degrades that boundary only; the stream never aborts
    - Client disconnect does not cancel fetch tasks; they finish and their results are dropped

Design Decisions:
    - Out-of-order streaming: resolved fragments arrive as <template> + a one-line swap
      script, so the browser replaces the placeholder without a second request
    - Strong references held in _inflight: the event loop only keeps weak references to tasks
    - Jinja2 with autoescape for every .html template; fragments re-enter as Markup
"""

import asyncio
import logging
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any, AsyncIterator, Awaitable, Callable

from fastapi.responses import StreamingResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from portfolio.config import Settings
from portfolio.core.errors import PortfolioError
from portfolio.core.repository_protocols import RecordStore

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

templates = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)

_inflight: set[asyncio.Task] = set()


@dataclass
class RenderContext:
    """Per-request dependencies available to every page and fetch."""
    store: RecordStore
    settings: Settings
    path: str


@dataclass
class Boundary:
    """A data-dependent subtree: fallback now, fragment once fetch resolves."""
    key: str
    fallback: str
    fetch: Callable[[RenderContext], Awaitable[Any]]
    template: str
    error_label: str
    template_vars: dict = field(default_factory=dict)


@dataclass
class Page:
    title: str
    template: str
    context: dict = field(default_factory=dict)
    boundaries: list[Boundary] = field(default_factory=list)
    status_code: int = 200


def _placeholder(page: Page, key: str) -> Markup:
    for b in page.boundaries:
        if b.key == key:
            return Markup('<div id="boundary-{0}" data-boundary="{0}">{1}</div>').format(
                key, b.fallback,
            )
    raise KeyError(f"Page '{page.title}' has no boundary '{key}'")


def _error_message(exc: Exception) -> str:
    if isinstance(exc, PortfolioError):
        return exc.message
    return "An unexpected error occurred"


async def _resolve(boundary: Boundary, ctx: RenderContext) -> tuple[str, str]:
    """Run one fetch and render its fragment. Never raises."""
    try:
        value = await boundary.fetch(ctx)
        html = templates.get_template(boundary.template).render(
            records=value, **boundary.template_vars,
        )
    except Exception as e:
        logger.error(
            f"Boundary '{boundary.key}' failed on {ctx.path}: {e}",
            exc_info=not isinstance(e, PortfolioError),
            extra={"path": ctx.path},
        )
        html = templates.get_template("partials/boundary_error.html").render(
            message=f"Error loading {boundary.error_label}: {_error_message(e)}",
        )
    return boundary.key, html


def _spawn(coro) -> asyncio.Task:
    task = asyncio.create_task(coro)
    _inflight.add(task)
    task.add_done_callback(_inflight.discard)
    return task


async def stream_page(page: Page, ctx: RenderContext) -> AsyncIterator[str]:
    """Yield the shell, then one fragment per boundary in completion order."""
    pending = {_spawn(_resolve(b, ctx)) for b in page.boundaries}

    yield templates.get_template("layout_head.html").render(
        title=page.title, site_title=ctx.settings.site_title,
    )
    yield templates.get_template(page.template).render(
        boundary=partial(_placeholder, page),
        settings=ctx.settings,
        **page.context,
    )
    while pending:
        done, pending = await asyncio.wait(
            pending, return_when=asyncio.FIRST_COMPLETED,
        )
        for task in done:
            key, html = task.result()
            yield templates.get_template("partials/resolved.html").render(
                key=key, html=Markup(html),
            )
    yield templates.get_template("layout_tail.html").render()


async def render_to_string(page: Page, ctx: RenderContext) -> str:
    """Drain the stream — for callers that need the whole document at once."""
    return "".join([chunk async for chunk in stream_page(page, ctx)])


def page_response(page: Page, ctx: RenderContext) -> StreamingResponse:
    return StreamingResponse(
        stream_page(page, ctx),
        status_code=page.status_code,
        media_type="text/html; charset=utf-8",
    )
