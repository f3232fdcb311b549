"""Shared utilities for route handlers."""

from typing import Optional

from starlette.responses import RedirectResponse, Response

from ..context import RequestContext
from ..models.user import Role
from ..services.session import LOGIN_ROUTE


def get_ctx(req) -> RequestContext:
    """Return the per-request context installed by the session beforeware."""
    return req.scope["ctx"]


def require_admin(req) -> Response | None:
    """Check if user is admin, return error response if not."""
    user = req.scope.get("auth")
    if not user or user.role != Role.ADMIN:
        return Response("Admin access required", status_code=403)
    return None


def require_author(req) -> Response | None:
    """Check if user may write posts (AUTHOR or ADMIN)."""
    user = req.scope.get("auth")
    if not user or not user.can_author:
        return Response("Author access required", status_code=403)
    return None


def redirect_to(req, location: str) -> Response:
    """Redirect, using HX-Redirect for HTMX requests so the whole page navigates."""
    if req.headers.get("hx-request"):
        return Response(status_code=200, headers={"HX-Redirect": location})
    return RedirectResponse(location, status_code=303)


def redirect_after_logout(req) -> Optional[Response]:
    """Redirect to login if a backend call ended the session (expired/rejected token)."""
    ctx = get_ctx(req)
    if ctx.session.identity is None and ctx.navigator.location == LOGIN_ROUTE:
        return redirect_to(req, LOGIN_ROUTE)
    return None


def parse_page_index(value, default: int = 0) -> int:
    """Parse a 0-based page index from a query string value."""
    try:
        index = int(value)
    except (TypeError, ValueError):
        return default
    return index if index >= 0 else default


def parse_page_size(value, default: int, maximum: int = 100) -> int:
    """Parse a page size, clamped to 1..maximum."""
    try:
        size = int(value)
    except (TypeError, ValueError):
        return default
    return min(max(size, 1), maximum)


def sanitize_string(value: str, max_len: int = 256) -> str:
    """Sanitize user input string: strip whitespace and limit length.

    Args:
        value: String to sanitize
        max_len: Maximum length after stripping (default: 256)

    Returns:
        Stripped and length-limited string
    """
    return value.strip()[:max_len] if value else ""
