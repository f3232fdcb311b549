"""Client session state: who is logged in, with which token and role."""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from ..models.user import AuthorRequestStatus, Identity, Role
from ..models.validation import Credentials, Registration, ensure_valid
from .api_client import ApiError, BlogApiClient, LoginResponse
from .storage import SessionStorage
from .tokens import is_token_expired

logger = logging.getLogger(__name__)

LOGIN_ROUTE = "/login"
DASHBOARD_ROUTE = "/dashboard"
HOME_ROUTE = "/blogs"

IdentityListener = Callable[[Optional[Identity]], None]


class AuthenticationError(Exception):
    """Login was rejected by the backend or could not be performed."""
    pass


class RegistrationError(Exception):
    """Account registration failed."""
    pass


def _no_navigation(path: str) -> None:
    pass


class SessionStore:
    """Single owner of the session: identity, bearer token and persistence.

    The token and the JSON identity live in `storage`; the in-memory identity
    mirrors them. All mutation goes through the named methods below, and every
    completed transition is reported to subscribers synchronously, in the
    order they subscribed.

    Construction rehydrates from storage, so a store built from a browser's
    session cookie reflects that browser's login (or lack of one).

    Args:
        storage: Durable token/identity storage.
        api: Backend client used by login/register. May be None for stores
            that only read session state.
        navigate: Callback invoked with a route path after login/logout.
        clock: Returns the current time; used for token expiry checks.
    """

    def __init__(
        self,
        storage: SessionStorage,
        api: Optional[BlogApiClient] = None,
        navigate: Optional[Callable[[str], None]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._storage = storage
        self._api = api
        self._navigate = navigate or _no_navigation
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._identity: Optional[Identity] = None
        self._listeners: list[IdentityListener] = []
        self._rehydrate()

    # Read side

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    def current_identity(self) -> Optional[Identity]:
        return self._identity

    def is_authenticated(self) -> bool:
        """True if a token is stored and not expired. No network call."""
        token = self._storage.get_token()
        if not token:
            return False
        return not is_token_expired(token, now=self._clock())

    def has_role(self, *roles: Role) -> bool:
        return self._identity is not None and self._identity.role in roles

    def get_token(self) -> Optional[str]:
        """Token to attach to outbound requests.

        An expired token is never handed out: the session is logged out first
        and None is returned.
        """
        token = self._storage.get_token()
        if not token:
            return None
        if is_token_expired(token, now=self._clock()):
            logger.info("Stored token has expired; logging out")
            self.logout()
            return None
        return token

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """Register a listener for identity changes. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Transitions

    def login(self, credentials: Credentials) -> LoginResponse:
        """Authenticate against the backend and establish the session.

        Raises:
            ValidationError: The form is incomplete; nothing was sent.
            AuthenticationError: The backend rejected the login.
        """
        ensure_valid(credentials)
        if self._api is None:
            raise AuthenticationError("No backend configured")
        try:
            response = self._api.login(credentials)
        except ApiError as e:
            raise AuthenticationError(e.message)

        self._storage.save(response.access_token, response.identity.to_dict())
        self._set_identity(response.identity)
        logger.info(f"User {response.identity.id} logged in as {response.identity.role.value}")
        self._navigate(DASHBOARD_ROUTE)
        return response

    def register(self, registration: Registration) -> Optional[Identity]:
        """Create an account. Does not log the new user in.

        Raises:
            ValidationError: The form is invalid; nothing was sent.
            RegistrationError: The backend rejected the registration.
        """
        ensure_valid(registration)
        if self._api is None:
            raise RegistrationError("No backend configured")
        try:
            return self._api.register(registration)
        except ApiError as e:
            raise RegistrationError(e.message)

    def logout(self) -> None:
        """Clear the session unconditionally and go to the login page."""
        self._storage.clear()
        had_identity = self._identity is not None
        self._set_identity(None)
        if had_identity:
            logger.info("User logged out")
        self._navigate(LOGIN_ROUTE)

    def update_author_request_status(self, status: AuthorRequestStatus) -> None:
        """Patch the author request status of the current identity and persist it."""
        if self._identity is None:
            logger.warning("Ignoring author request status update without a session")
            return
        updated = self._identity.with_author_request_status(status)
        self._storage.save_identity(updated.to_dict())
        self._set_identity(updated)

    # Internals

    def _set_identity(self, identity: Optional[Identity]) -> None:
        self._identity = identity
        for listener in list(self._listeners):
            listener(identity)

    def _rehydrate(self) -> None:
        token = self._storage.get_token()
        data = self._storage.get_identity()

        if token is None and data is None:
            return

        if token is None or data is None:
            logger.warning("Stored session is incomplete; clearing it")
            self._storage.clear()
            return

        if is_token_expired(token, now=self._clock()):
            logger.info("Stored session token has expired")
            self.logout()
            return

        try:
            self._identity = Identity.from_dict(data)
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Stored identity is invalid ({e}); logging out")
            self.logout()
