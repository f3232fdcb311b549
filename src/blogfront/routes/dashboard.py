"""Dashboard routes."""

from fasthtml.common import *
from starlette.responses import Response

from .utils import get_ctx, parse_page_index, parse_page_size, redirect_after_logout
from ..components.dashboard import DashboardContent
from ..components.layout import AppShell
from ..context import RequestContext
from ..services.dashboard import DashboardState


def build_dashboard(
    ctx: RequestContext,
    page: str = "0",
    rows: str = "",
    users_page: str = "0",
    users_rows: str = "",
) -> DashboardState:
    """Create dashboard state positioned on the requested pages (nothing loaded yet)."""
    config = ctx.config
    state = DashboardState(
        ctx.session,
        ctx.api,
        ctx.notifier,
        posts_page_size=config.posts_page_size,
        users_page_size=config.users_page_size,
        navigate=ctx.navigator,
    )
    state.my_posts.seek(parse_page_index(page), parse_page_size(rows, config.posts_page_size))
    state.users.seek(parse_page_index(users_page), parse_page_size(users_rows, config.users_page_size))
    return state


def render_dashboard(req, state: DashboardState, tab: str):
    """Dashboard fragment after a load or mutation, or a login redirect if the session ended."""
    state.close()
    redirect = redirect_after_logout(req)
    if redirect:
        return redirect
    return DashboardContent(state, get_ctx(req).identity, tab)


def register(app, rt):
    """Register dashboard routes."""

    @app.get("/dashboard")
    def dashboard(
        req,
        tab: str = "posts",
        page: str = "0",
        rows: str = "",
        users_page: str = "0",
        users_rows: str = "",
    ):
        ctx = get_ctx(req)
        state = build_dashboard(ctx, page, rows, users_page, users_rows)
        state.refresh()
        content = render_dashboard(req, state, tab)
        if isinstance(content, Response):
            return content
        return AppShell(ctx.identity, "/dashboard", content, title="Dashboard")
