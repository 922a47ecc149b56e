"""Pages — the declared page paths and the page tree each one renders.

Invariants:
    - PAGE_PATHS is the single declaration of page routes; ADMIN_PAGE_PATH is one of them
    - Every path except ADMIN_PAGE_PATH is public; the split is computed once at import
    - Data-dependent parts of a page are Boundaries fetching through ctx.store only
    - Unknown paths build the not-found page (404), never the admin page
"""

from portfolio.core.domain_types import Collection
from portfolio.services.render_pipeline import Boundary, Page, RenderContext

ADMIN_PAGE_PATH = "/adminpanel"
LOGIN_PAGE_PATH = "/login"

PAGE_PATHS = ("/", "/projects", "/views", "/contacts", LOGIN_PAGE_PATH, ADMIN_PAGE_PATH)

PUBLIC_PAGE_PATHS = tuple(p for p in PAGE_PATHS if p != ADMIN_PAGE_PATH)
PROTECTED_PAGE_PATHS = (ADMIN_PAGE_PATH,)


async def fetch_projects(ctx: RenderContext) -> list[dict]:
    return await ctx.store.list(Collection.PROJECT)


async def fetch_blogs(ctx: RenderContext) -> list[dict]:
    return await ctx.store.list(Collection.BLOG_POST)


def _projects_boundary(show_ids: bool) -> Boundary:
    return Boundary(
        key="projects",
        fallback="Loading projects...",
        fetch=fetch_projects,
        template="partials/project_list.html",
        error_label="projects",
        template_vars={"show_ids": show_ids},
    )


def _blogs_boundary(show_ids: bool) -> Boundary:
    return Boundary(
        key="blogs",
        fallback="Loading views...",
        fetch=fetch_blogs,
        template="partials/blog_list.html",
        error_label="views",
        template_vars={"show_ids": show_ids},
    )


def home_page(ctx: RenderContext) -> Page:
    return Page(title=ctx.settings.site_title, template="home.html")


def projects_page(ctx: RenderContext) -> Page:
    return Page(
        title="Projects", template="projects.html",
        boundaries=[_projects_boundary(show_ids=False)],
    )


def views_page(ctx: RenderContext) -> Page:
    return Page(
        title="Views", template="views.html",
        boundaries=[_blogs_boundary(show_ids=False)],
    )


def contacts_page(ctx: RenderContext) -> Page:
    return Page(
        title="Contacts", template="contacts.html",
        context={"contact_lines": ctx.settings.contact_lines},
    )


def login_page(ctx: RenderContext) -> Page:
    return Page(title="Login", template="login.html")


def admin_page(ctx: RenderContext) -> Page:
    """Publish/delete forms plus both collections with their ids."""
    return Page(
        title="Admin Dashboard", template="adminpanel.html",
        boundaries=[
            _projects_boundary(show_ids=True),
            _blogs_boundary(show_ids=True),
        ],
    )


def not_found_page(ctx: RenderContext) -> Page:
    return Page(title="Not Found", template="not_found.html", status_code=404)


PAGE_BUILDERS = {
    "/": home_page,
    "/projects": projects_page,
    "/views": views_page,
    "/contacts": contacts_page,
    LOGIN_PAGE_PATH: login_page,
    ADMIN_PAGE_PATH: admin_page,
}


def build_page(path: str, ctx: RenderContext) -> Page:
    builder = PAGE_BUILDERS.get(path, not_found_page)
    return builder(ctx)


def normalize_page_path(raw: str) -> str:
    """'projects/' -> '/projects'; '' -> '/'."""
    return "/" + raw.strip("/")
