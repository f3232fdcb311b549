"""Per-request context objects for dependency injection."""

from dataclasses import dataclass
from typing import Optional

from .config import FrontendConfig
from .models.user import Identity
from .services.api_client import BlogApiClient
from .services.notifications import Notifier
from .services.session import SessionStore


class Navigator:
    """Records where the client state machine wants to go next.

    Services call it like a function; the route layer turns the recorded
    location into a redirect response.
    """

    def __init__(self):
        self.location: Optional[str] = None

    def __call__(self, path: str) -> None:
        self.location = path


@dataclass
class RequestContext:
    """
    Everything a route handler needs to act on behalf of one browser.

    Built by the session beforeware for every request and stored in
    `req.scope["ctx"]`.
    """

    config: FrontendConfig
    session: SessionStore
    api: BlogApiClient
    navigator: Navigator
    notifier: Notifier

    @property
    def identity(self) -> Optional[Identity]:
        return self.session.identity
