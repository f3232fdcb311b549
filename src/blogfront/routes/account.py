"""Routes acting on the logged-in user's own account."""

from fasthtml.common import *

from .utils import get_ctx, redirect_after_logout, redirect_to
from ..services.author_requests import AuthorRequestError, AuthorRequestWorkflow
from ..services.session import DASHBOARD_ROUTE


def register(app, rt):
    """Register account routes."""

    @app.post("/account/request-author")
    def request_author(req):
        """Ask for the author role; the header shows the pending state right away."""
        ctx = get_ctx(req)
        workflow = AuthorRequestWorkflow(ctx.session, ctx.api, ctx.notifier)
        try:
            workflow.submit_author_request()
        except AuthorRequestError as e:
            ctx.notifier.warning(str(e))

        redirect = redirect_after_logout(req)
        if redirect:
            return redirect
        return redirect_to(req, DASHBOARD_ROUTE)
