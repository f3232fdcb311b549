"""Client for the blog platform's REST backend."""

import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Callable, Optional
from urllib.parse import quote, urlencode

from ..models.page import PageResult
from ..models.post import Post, PostDraft
from ..models.user import AuthorRequestStatus, Identity, Role, User
from ..models.validation import Credentials, Registration

logger = logging.getLogger(__name__)

# Maximum API response size (10 MB)
_MAX_RESPONSE_SIZE = 10 * 1024 * 1024

DEFAULT_TIMEOUT = 30


class ApiError(Exception):
    """Error returned by, or while talking to, the backend.

    `status` is the HTTP status code, or None for transport failures.
    `server_message` is the message the backend put in its error body, if any.
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        server_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.server_message = server_message

    @property
    def is_unauthorized(self) -> bool:
        return self.status == 401


@dataclass
class LoginResponse:
    """Successful login: the bearer token and the identity it belongs to."""

    access_token: str
    identity: Identity


def _build_headers(token: Optional[str]) -> dict:
    """Request headers; Authorization only when a token is present."""
    headers = {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "User-Agent": "blogfront",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _error_message(body: bytes) -> Optional[str]:
    """Extract the server-supplied message from an error body, if any."""
    try:
        data = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    message = data.get("message")
    # NestJS validation pipes report a list of messages
    if isinstance(message, list):
        message = "; ".join(str(m) for m in message)
    return str(message) if message else None


def _api_request(
    method: str,
    url: str,
    token: Optional[str] = None,
    payload: Optional[dict] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """Make a request to the API and return parsed JSON (None for empty bodies)."""
    data = json.dumps(payload).encode("utf-8") if payload is not None else None
    request = urllib.request.Request(url, data=data, headers=_build_headers(token), method=method)

    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            body = response.read(_MAX_RESPONSE_SIZE + 1)
    except urllib.error.HTTPError as e:
        message = _error_message(e.read())
        raise ApiError(
            message or f"API error: {e.code} {e.reason}", status=e.code, server_message=message
        )
    except urllib.error.URLError as e:
        raise ApiError(f"Network error: {e.reason}")
    except TimeoutError:
        raise ApiError("Network error: request timed out")

    if len(body) > _MAX_RESPONSE_SIZE:
        raise ApiError("API response exceeds maximum size limit")
    if not body.strip():
        return None
    try:
        return json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise ApiError("API response is not valid JSON")


def _unwrap(data: Any) -> Any:
    """Unwrap {message, data} envelopes returned by the users endpoints."""
    if isinstance(data, dict) and "data" in data and "message" in data:
        return data["data"]
    return data


def _expect_dict(data: Any) -> dict:
    if not isinstance(data, dict):
        raise ApiError("API response is not a valid format")
    return data


def _parse(factory, data: Any, what: str):
    """Build a model from a response body, reporting malformed bodies as ApiError."""
    try:
        return factory(_expect_dict(data))
    except (KeyError, ValueError, TypeError) as e:
        raise ApiError(f"API response contains an invalid {what}: {e}")


def _parse_written(factory, data: Any, what: str):
    """
    Build a model from the body of a successful write, or None.

    The write has already been applied by the backend, so an empty or
    unexpected body is not an error.
    """
    if not isinstance(data, dict):
        return None
    try:
        return factory(data)
    except (KeyError, ValueError, TypeError) as e:
        logger.debug(f"Ignoring unparseable {what} in write response: {e}")
        return None


class BlogApiClient:
    """Typed wrapper around the backend's auth, posts and users endpoints.

    Args:
        base_url: Backend root, e.g. http://localhost:3000
        token_provider: Callable returning the current bearer token or None.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider
        self.timeout = timeout
        # Called when a request carrying a token is rejected with 401
        self.on_unauthorized: Optional[Callable[[], None]] = None

    def _url(self, path: str, params: Optional[dict] = None) -> str:
        url = f"{self.base_url}{path}"
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    def _request(
        self,
        method: str,
        path: str,
        payload: Optional[dict] = None,
        params: Optional[dict] = None,
        authenticated: bool = True,
    ) -> Any:
        token = self.token_provider() if (authenticated and self.token_provider) else None
        url = self._url(path, params)
        try:
            return _api_request(method, url, token=token, payload=payload, timeout=self.timeout)
        except ApiError as e:
            logger.warning(f"{method} {path} failed: {e.message}")
            if e.is_unauthorized and token and self.on_unauthorized is not None:
                self.on_unauthorized()
            raise

    def _page(self, path: str, page: int, limit: int, factory) -> PageResult:
        data = self._request("GET", path, params={"page": page, "limit": limit})
        return _parse(lambda body: PageResult.from_dict(body, factory), data, "page")

    # Auth

    def login(self, credentials: Credentials) -> LoginResponse:
        data = _expect_dict(
            self._request("POST", "/auth/login", credentials.to_payload(), authenticated=False)
        )
        token = data.get("accessToken")
        user = data.get("user")
        if not token or not isinstance(user, dict):
            raise ApiError("Login response is missing the access token or user")
        identity = _parse(Identity.from_dict, user, "user")
        return LoginResponse(access_token=token, identity=identity)

    def register(self, registration: Registration) -> Optional[Identity]:
        """Create an account. The returned token is deliberately not used."""
        data = self._request(
            "POST", "/auth/register", registration.to_payload(), authenticated=False
        )
        user = data.get("user") if isinstance(data, dict) else None
        return _parse_written(Identity.from_dict, user, "user")

    # Posts

    def list_published_posts(self, page: int = 1, limit: int = 5) -> PageResult[Post]:
        return self._page("/posts", page, limit, Post.from_dict)

    def list_my_posts(self, page: int = 1, limit: int = 5) -> PageResult[Post]:
        return self._page("/posts/my-posts", page, limit, Post.from_dict)

    def get_post(self, post_id: str) -> Post:
        data = self._request("GET", f"/posts/{quote(str(post_id), safe='')}")
        return _parse(Post.from_dict, _unwrap(data), "post")

    def create_post(self, draft: PostDraft) -> Optional[Post]:
        data = self._request("POST", "/posts", draft.to_payload())
        return _parse_written(Post.from_dict, _unwrap(data), "post")

    def update_post(self, post_id: str, draft: PostDraft) -> Optional[Post]:
        data = self._request("PATCH", f"/posts/{quote(str(post_id), safe='')}", draft.to_payload())
        return _parse_written(Post.from_dict, _unwrap(data), "post")

    def delete_post(self, post_id: str) -> None:
        self._request("DELETE", f"/posts/{quote(str(post_id), safe='')}")

    # Users

    def list_users(self, page: int = 1, limit: int = 10) -> PageResult[User]:
        return self._page("/users", page, limit, User.from_dict)

    def get_user(self, user_id: str) -> User:
        data = self._request("GET", f"/users/{quote(str(user_id), safe='')}")
        return _parse(User.from_dict, _unwrap(data), "user")

    def update_user(self, user_id: str, fields: dict) -> Optional[User]:
        data = self._request("PATCH", f"/users/{quote(str(user_id), safe='')}", fields)
        return _parse_written(User.from_dict, _unwrap(data), "user")

    def set_user_blocked(self, user_id: str, blocked: bool) -> Optional[User]:
        return self.update_user(user_id, {"isBlocked": blocked})

    def update_user_role(self, user_id: str, role: Role) -> Optional[User]:
        data = self._request(
            "PATCH", f"/users/{quote(str(user_id), safe='')}/role", {"role": role.value}
        )
        return _parse_written(User.from_dict, _unwrap(data), "user")

    def delete_user(self, user_id: str) -> None:
        self._request("DELETE", f"/users/{quote(str(user_id), safe='')}")

    def request_author_role(self) -> str:
        """Ask for promotion to AUTHOR. Returns the server's confirmation message."""
        data = self._request("POST", "/users/request-author-role", {"requestAuthor": True})
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return "Author role request sent."

    def process_author_request(
        self, user_id: str, status: AuthorRequestStatus
    ) -> Optional[User]:
        data = self._request(
            "PATCH",
            f"/users/{quote(str(user_id), safe='')}/process-author-request",
            {"status": status.value},
        )
        return _parse_written(User.from_dict, _unwrap(data), "user")
