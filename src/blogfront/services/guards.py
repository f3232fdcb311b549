"""Navigation guards.

Both guards decide synchronously from the in-memory session; neither makes a
network call. A denial triggers a redirect through `navigate`.
"""

from typing import Callable

from .session import DASHBOARD_ROUTE, LOGIN_ROUTE, SessionStore


def require_authenticated(session: SessionStore, navigate: Callable[[str], None]) -> bool:
    """Admit only authenticated visitors; send everyone else to the login page."""
    if session.is_authenticated():
        return True
    navigate(LOGIN_ROUTE)
    return False


def require_public_only(session: SessionStore, navigate: Callable[[str], None]) -> bool:
    """Admit only anonymous visitors (login/register); send users to the dashboard."""
    if not session.is_authenticated():
        return True
    navigate(DASHBOARD_ROUTE)
    return False
