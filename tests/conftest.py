"""Pytest fixtures for blogfront tests."""

import json
import time

import jwt
import pytest

from blogfront.models.page import PageResult
from blogfront.models.post import Post
from blogfront.models.user import AuthorRequestStatus, Identity, Role, User
from blogfront.services.api_client import ApiError, LoginResponse
from blogfront.services.notifications import Notifier
from blogfront.services.session import SessionStore
from blogfront.services.storage import ACCESS_TOKEN_KEY, CURRENT_USER_KEY, SessionStorage

TOKEN_KEY = "test-signing-key-that-is-long-enough-for-hs256"


def make_token(expires_in: int = 3600, **claims) -> str:
    """Create a signed token expiring `expires_in` seconds from now."""
    payload = {"sub": "u1", "exp": int(time.time()) + expires_in, **claims}
    return jwt.encode(payload, TOKEN_KEY, algorithm="HS256")


def identity_dict(role: str = "USER", user_id: str = "u1", **extra) -> dict:
    data = {"id": user_id, "email": f"{user_id}@example.com", "name": f"User {user_id}", "role": role}
    data.update(extra)
    return data


def session_backing(role: str = "USER", expires_in: int = 3600, **extra) -> dict:
    """A cookie-session mapping holding a logged-in user."""
    return {
        ACCESS_TOKEN_KEY: make_token(expires_in),
        CURRENT_USER_KEY: json.dumps(identity_dict(role, **extra)),
    }


class NavigationRecorder:
    def __init__(self):
        self.paths = []

    def __call__(self, path: str) -> None:
        self.paths.append(path)

    @property
    def last(self):
        return self.paths[-1] if self.paths else None


class FakeBlogApi:
    """In-memory stand-in for BlogApiClient.

    Every call is recorded in `calls`. Put an ApiError in `errors[name]` to
    make the method of that name fail.
    """

    def __init__(self):
        self.calls = []
        self.errors = {}
        self.login_response = None
        self.posts = []
        self.users = []
        self.author_request_message = "Author role request sent successfully"

    def _call(self, name, *args):
        self.calls.append((name, args))
        if name in self.errors:
            raise self.errors[name]

    def called(self, name):
        return [args for call, args in self.calls if call == name]

    @staticmethod
    def _page(items, page, limit):
        start = (page - 1) * limit
        return PageResult(items=items[start:start + limit], total=len(items), page=page, limit=limit)

    def login(self, credentials):
        self._call("login", credentials)
        return self.login_response

    def register(self, registration):
        self._call("register", registration)
        return None

    def list_published_posts(self, page, limit):
        self._call("list_published_posts", page, limit)
        return self._page(self.posts, page, limit)

    def list_my_posts(self, page, limit):
        self._call("list_my_posts", page, limit)
        return self._page(self.posts, page, limit)

    def list_users(self, page, limit):
        self._call("list_users", page, limit)
        return self._page(self.users, page, limit)

    def delete_post(self, post_id):
        self._call("delete_post", post_id)
        self.posts = [p for p in self.posts if p.id != post_id]

    def set_user_blocked(self, user_id, blocked):
        self._call("set_user_blocked", user_id, blocked)
        return self._find_user(user_id)

    def update_user_role(self, user_id, role):
        self._call("update_user_role", user_id, role)
        user = self._find_user(user_id)
        user.role = role
        return user

    def delete_user(self, user_id):
        self._call("delete_user", user_id)
        self.users = [u for u in self.users if u.id != user_id]

    def request_author_role(self):
        self._call("request_author_role")
        return self.author_request_message

    def process_author_request(self, user_id, status):
        self._call("process_author_request", user_id, status)
        user = self._find_user(user_id)
        user.author_request_status = status
        return user

    def _find_user(self, user_id):
        for user in self.users:
            if user.id == user_id:
                return user
        raise ApiError("User not found", status=404, server_message="User not found")


def make_posts(count: int, author_id: str = "u1") -> list[Post]:
    return [Post(id=f"p{i}", title=f"Post {i}", author_id=author_id) for i in range(1, count + 1)]


def make_users(count: int) -> list[User]:
    return [
        User(id=f"u{i}", email=f"u{i}@example.com", name=f"User {i}", role=Role.USER)
        for i in range(1, count + 1)
    ]


@pytest.fixture
def fake_api():
    return FakeBlogApi()


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def navigate():
    return NavigationRecorder()


@pytest.fixture
def make_session(fake_api, navigate):
    """Build a SessionStore over a dict backing, rehydrating from it."""

    def _make(backing=None):
        backing = {} if backing is None else backing
        return SessionStore(SessionStorage(backing), api=fake_api, navigate=navigate)

    return _make


@pytest.fixture
def login_response():
    """A successful login for an AUTHOR."""
    return LoginResponse(
        access_token=make_token(),
        identity=Identity.from_dict(identity_dict("AUTHOR")),
    )


@pytest.fixture
def pending_user_backing():
    return session_backing("USER", authorRequestStatus=AuthorRequestStatus.PENDING.value)
