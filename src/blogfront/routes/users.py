"""Admin routes for user management and author requests."""

from fasthtml.common import *
from starlette.responses import Response

from .dashboard import build_dashboard, render_dashboard
from .utils import get_ctx, require_admin
from ..models.user import AuthorRequestStatus, Role
from ..services.author_requests import AuthorRequestError


def register(app, rt):
    """Register user management routes. Every action returns the refreshed users tab."""

    def run(req, action, page, rows, users_page, users_rows):
        error = require_admin(req)
        if error:
            return error
        state = build_dashboard(get_ctx(req), page, rows, users_page, users_rows)
        action(state)
        return render_dashboard(req, state, "users")

    @app.post("/users/{user_id}/block")
    def block_user(req, user_id: str, page: str = "0", rows: str = "", users_page: str = "0", users_rows: str = ""):
        return run(req, lambda s: s.block_user(user_id), page, rows, users_page, users_rows)

    @app.post("/users/{user_id}/unblock")
    def unblock_user(req, user_id: str, page: str = "0", rows: str = "", users_page: str = "0", users_rows: str = ""):
        return run(req, lambda s: s.unblock_user(user_id), page, rows, users_page, users_rows)

    @app.post("/users/{user_id}/delete")
    def delete_user(req, user_id: str, page: str = "0", rows: str = "", users_page: str = "0", users_rows: str = ""):
        return run(req, lambda s: s.delete_user(user_id), page, rows, users_page, users_rows)

    @app.post("/users/{user_id}/role")
    def change_role(
        req,
        user_id: str,
        role: str = "",
        page: str = "0",
        rows: str = "",
        users_page: str = "0",
        users_rows: str = "",
    ):
        error = require_admin(req)
        if error:
            return error
        try:
            new_role = Role(role)
        except ValueError:
            return Response(f"Invalid role: {role}", status_code=400)
        return run(req, lambda s: s.change_user_role(user_id, new_role), page, rows, users_page, users_rows)

    @app.post("/users/{user_id}/author-request")
    def process_author_request(
        req,
        user_id: str,
        decision: str = "",
        page: str = "0",
        rows: str = "",
        users_page: str = "0",
        users_rows: str = "",
    ):
        """Approve or reject a pending author request."""
        error = require_admin(req)
        if error:
            return error
        try:
            status = AuthorRequestStatus(decision)
        except ValueError:
            return Response(f"Invalid decision: {decision}", status_code=400)

        def action(state):
            try:
                state.process_author_request(user_id, status)
            except AuthorRequestError as e:
                get_ctx(req).notifier.warning(str(e))

        return run(req, action, page, rows, users_page, users_rows)
