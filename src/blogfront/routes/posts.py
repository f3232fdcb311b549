"""Post authoring routes: create, edit and delete."""

from fasthtml.common import *
from starlette.responses import RedirectResponse, Response

from .dashboard import build_dashboard, render_dashboard
from .utils import get_ctx, redirect_after_logout, require_author, sanitize_string
from ..components.layout import AppShell
from ..components.posts import PostEditor
from ..models.post import PostDraft
from ..services.api_client import ApiError
from ..services.session import DASHBOARD_ROUTE


def _draft_from_form(title: str, excerpt: str, body: str, published: str) -> PostDraft:
    return PostDraft(
        title=sanitize_string(title, max_len=200),
        excerpt=sanitize_string(excerpt, max_len=500),
        body=body or "",
        published=published.lower() in ("true", "on", "1"),
    )


def register(app, rt):
    """Register post authoring routes. /posts/new must precede /posts/{post_id}."""

    def editor_page(ctx, draft: PostDraft, post_id: str | None = None, errors=None):
        title = "Edit Post" if post_id else "New Post"
        return AppShell(ctx.identity, "/dashboard", PostEditor(draft, post_id, errors), title=title)

    @app.get("/posts/new")
    def new_post(req):
        error = require_author(req)
        if error:
            return error
        return editor_page(get_ctx(req), PostDraft())

    @app.post("/posts/new")
    def create_post(req, title: str = "", excerpt: str = "", body: str = "", published: str = ""):
        error = require_author(req)
        if error:
            return error

        ctx = get_ctx(req)
        draft = _draft_from_form(title, excerpt, body, published)
        errors = draft.validate()
        if errors:
            return editor_page(ctx, draft, errors=errors)

        try:
            ctx.api.create_post(draft)
        except ApiError as e:
            redirect = redirect_after_logout(req)
            if redirect:
                return redirect
            message = e.server_message or "Failed to create post."
            ctx.notifier.error(message)
            return editor_page(ctx, draft, errors=[message])

        ctx.notifier.success("Post created successfully!")
        return RedirectResponse(DASHBOARD_ROUTE, status_code=303)

    @app.get("/posts/{post_id}/edit")
    def edit_post(req, post_id: str):
        error = require_author(req)
        if error:
            return error

        ctx = get_ctx(req)
        try:
            post = ctx.api.get_post(post_id)
        except ApiError:
            redirect = redirect_after_logout(req)
            if redirect:
                return redirect
            ctx.notifier.error("Failed to load post for editing.")
            return RedirectResponse(DASHBOARD_ROUTE, status_code=303)

        if not post.can_be_edited_by(ctx.identity):
            return Response("You can only edit your own posts", status_code=403)
        return editor_page(ctx, PostDraft.from_post(post), post_id=post.id)

    @app.post("/posts/{post_id}/edit")
    def update_post(req, post_id: str, title: str = "", excerpt: str = "", body: str = "", published: str = ""):
        error = require_author(req)
        if error:
            return error

        ctx = get_ctx(req)
        draft = _draft_from_form(title, excerpt, body, published)
        errors = draft.validate()
        if errors:
            return editor_page(ctx, draft, post_id=post_id, errors=errors)

        try:
            ctx.api.update_post(post_id, draft)
        except ApiError as e:
            redirect = redirect_after_logout(req)
            if redirect:
                return redirect
            message = e.server_message or "Failed to update post."
            ctx.notifier.error(message)
            return editor_page(ctx, draft, post_id=post_id, errors=[message])

        ctx.notifier.success("Post updated successfully!")
        return RedirectResponse(DASHBOARD_ROUTE, status_code=303)

    @app.post("/posts/{post_id}/delete")
    def delete_post(
        req,
        post_id: str,
        page: str = "0",
        rows: str = "",
        users_page: str = "0",
        users_rows: str = "",
    ):
        """Delete a post from the dashboard and return the refreshed posts tab."""
        error = require_author(req)
        if error:
            return error

        state = build_dashboard(get_ctx(req), page, rows, users_page, users_rows)
        state.delete_post(post_id)
        return render_dashboard(req, state, "posts")
