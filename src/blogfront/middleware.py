"""Session middleware: rehydrate the client session and apply route guards."""

import re
from typing import Callable, Optional

from fasthtml.common import Beforeware, add_toast

from .config import FrontendConfig
from .routes.utils import redirect_to
from .services.guards import require_authenticated, require_public_only
from .services.notifications import Notification
from .startup import build_request_context

# Routes only anonymous visitors may enter
PUBLIC_ONLY_ROUTES = [r"/login", r"/register"]

# Routes (and all their children) that need a live session
PROTECTED_ROUTES = [
    r"/dashboard(/.*)?",
    r"/posts/new",
    r"/posts/[^/]+/(edit|delete)",
    r"/account(/.*)?",
    r"/users(/.*)?",
]

_PUBLIC_ONLY_RE = [re.compile(p + "$") for p in PUBLIC_ONLY_ROUTES]
_PROTECTED_RE = [re.compile(p + "$") for p in PROTECTED_ROUTES]


def guard_for_path(path: str) -> Optional[Callable]:
    """Return the guard that applies to a path, or None for open routes."""
    if any(p.match(path) for p in _PUBLIC_ONLY_RE):
        return require_public_only
    if any(p.match(path) for p in _PROTECTED_RE):
        return require_authenticated
    return None


def make_session_beforeware(get_config_fn: Callable[[], FrontendConfig]):
    """Create session beforeware.

    Args:
        get_config_fn: Callable that returns the FrontendConfig.

    Returns:
        Beforeware instance for FastHTML app.
    """

    def session_beforeware(req, sess):
        """
        Rehydrate the session and guard the requested route.

        Adds `ctx` (RequestContext) and `auth` (Identity or None) to the
        request scope. Guards run on every request, nested routes included.
        """

        def toast(notification: Notification) -> None:
            add_toast(sess, notification.detail, notification.severity.value)

        ctx = build_request_context(sess, get_config_fn(), toast_sink=toast)
        req.scope["ctx"] = ctx
        req.scope["auth"] = ctx.session.identity

        guard = guard_for_path(req.url.path)
        if guard is None:
            return
        if not guard(ctx.session, ctx.navigator):
            return redirect_to(req, ctx.navigator.location)

    return Beforeware(session_beforeware, skip=[r"/favicon\.ico", r"/static/.*", r"/css/.*", r"/img/.*"])
