"""Public blog routes: published posts list and post detail."""

from fasthtml.common import *
from starlette.responses import RedirectResponse

from .utils import get_ctx, parse_page_index, parse_page_size
from ..components.layout import AppShell, NotFoundPage
from ..components.posts import PostDetail, PostListContent
from ..services.api_client import ApiError
from ..services.paged_list import PagedList
from ..services.session import HOME_ROUTE


def register(app, rt):
    """Register public blog routes."""

    @app.get("/")
    def index():
        return RedirectResponse(HOME_ROUTE, status_code=303)

    @app.get("/blogs")
    def blogs(req, page: str = "0", rows: str = ""):
        """Published posts, one page at a time."""
        ctx = get_ctx(req)
        posts = PagedList(
            ctx.api.list_published_posts,
            page_size=ctx.config.published_page_size,
            notifier=ctx.notifier,
            error_message="Failed to load posts.",
            name="published posts",
        )
        posts.change_page(
            parse_page_index(page),
            parse_page_size(rows, ctx.config.published_page_size),
        )
        return AppShell(ctx.identity, "/blogs", PostListContent(posts), title="Blog")

    @app.get("/notfound")
    def not_found(req):
        return NotFoundPage(get_ctx(req).identity)


def register_post_detail(app, rt):
    """Register /posts/{post_id}. Must come after the more specific /posts/* routes."""

    @app.get("/posts/{post_id}")
    def post_detail(req, post_id: str):
        ctx = get_ctx(req)
        try:
            post = ctx.api.get_post(post_id)
        except ApiError as e:
            if e.status != 404:
                ctx.notifier.error("Failed to load post.")
            return NotFoundPage(ctx.identity, message="This post does not exist or is not available.")

        return AppShell(ctx.identity, "/blogs", PostDetail(post, ctx.identity), title=post.title)
