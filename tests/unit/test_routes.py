"""Handler-level tests for the front-end routes."""

from unittest.mock import patch

import pytest
from fasthtml.common import fast_app, setup_toasts
from starlette.testclient import TestClient

from blogfront.config import FrontendConfig
from blogfront.middleware import make_session_beforeware
from blogfront.models.page import PageResult
from blogfront.models.post import Post
from blogfront.models.user import Identity, Role
from blogfront.routes import account, auth, blogs, dashboard, posts, users
from blogfront.services.api_client import ApiError, BlogApiClient, LoginResponse
from conftest import identity_dict, make_token


@pytest.fixture
def client():
    """Test client over an app wired like the real one, pointing at a fake backend URL."""
    bware = make_session_beforeware(lambda: FrontendConfig(api_url="http://api.test"))
    app, rt = fast_app(secret_key="test-session-secret", before=bware, pico=False)
    setup_toasts(app)
    auth.register(app, rt)
    blogs.register(app, rt)
    dashboard.register(app, rt)
    posts.register(app, rt)
    blogs.register_post_detail(app, rt)
    users.register(app, rt)
    account.register(app, rt)
    return TestClient(app)


@pytest.fixture
def log_in(client):
    """Log the test client in with the given role through the login form."""

    def _log_in(role="AUTHOR", user_id="u1"):
        response = LoginResponse(
            access_token=make_token(sub=user_id),
            identity=Identity.from_dict(identity_dict(role, user_id=user_id)),
        )
        with patch.object(BlogApiClient, "login", return_value=response):
            result = client.post(
                "/login",
                data={"email": f"{user_id}@example.com", "password": "secret1"},
                follow_redirects=False,
            )
        assert result.status_code == 303
        return client

    return _log_in


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


class TestRegisterSubmit:
    """Tests for POST /register."""

    @patch.object(BlogApiClient, "login")
    @patch.object(BlogApiClient, "register", return_value=None)
    def test_redirects_to_login_without_session(self, mock_register, mock_login, client):
        response = client.post(
            "/register",
            data={"name": "New", "email": "new@example.com", "password": "secret1"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/login"
        mock_register.assert_called_once()
        mock_login.assert_not_called()

        # Still anonymous: the dashboard guard sends us to the login page
        follow = client.get("/dashboard", follow_redirects=False)
        assert follow.status_code == 303
        assert follow.headers["location"] == "/login"

    @patch.object(BlogApiClient, "register")
    def test_invalid_form_not_sent(self, mock_register, client):
        response = client.post("/register", data={"name": "", "email": "bad", "password": "1"})
        assert response.status_code == 200
        mock_register.assert_not_called()

    @patch.object(BlogApiClient, "register", side_effect=ApiError("Email taken", status=409))
    def test_backend_rejection_rendered(self, mock_register, client):
        response = client.post(
            "/register", data={"name": "New", "email": "new@example.com", "password": "secret1"}
        )
        assert response.status_code == 200
        assert "Email taken" in response.text


# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------


class TestEditPost:
    """Tests for GET /posts/{id}/edit."""

    def test_someone_elses_post_forbidden(self, log_in):
        client = log_in("AUTHOR", "u1")
        other = Post(id="p9", title="Not mine", author_id="u2")
        with patch.object(BlogApiClient, "get_post", return_value=other):
            response = client.get("/posts/p9/edit")
        assert response.status_code == 403
        assert "only edit your own posts" in response.text

    def test_own_post_opens_editor(self, log_in):
        client = log_in("AUTHOR", "u1")
        mine = Post(id="p1", title="Mine", author_id="u1")
        with patch.object(BlogApiClient, "get_post", return_value=mine):
            response = client.get("/posts/p1/edit")
        assert response.status_code == 200
        assert "Mine" in response.text

    def test_plain_user_forbidden(self, log_in):
        client = log_in("USER", "u1")
        with patch.object(BlogApiClient, "get_post") as mock_get:
            response = client.get("/posts/p1/edit")
        assert response.status_code == 403
        mock_get.assert_not_called()


class TestPostDetail:
    """Tests for GET /posts/{id}."""

    @patch("blogfront.services.api_client._api_request")
    def test_malformed_post_renders_not_found(self, mock_request, client):
        mock_request.return_value = {"id": "p1", "title": "T", "createdAt": "not a date"}
        response = client.get("/posts/p1")
        assert response.status_code == 200
        assert "does not exist" in response.text


# ---------------------------------------------------------------------------
# User management
# ---------------------------------------------------------------------------


class TestChangeRole:
    """Tests for POST /users/{id}/role."""

    def test_invalid_role_rejected_for_admin(self, log_in):
        client = log_in("ADMIN", "u1")
        with patch.object(BlogApiClient, "update_user_role") as mock_update:
            response = client.post("/users/u2/role", data={"role": "ROOT"})
        assert response.status_code == 400
        mock_update.assert_not_called()

    def test_non_admin_forbidden_before_role_check(self, log_in):
        client = log_in("AUTHOR", "u1")
        response = client.post("/users/u2/role", data={"role": "ROOT"})
        assert response.status_code == 403

    def test_non_admin_forbidden_before_decision_check(self, log_in):
        client = log_in("USER", "u1")
        response = client.post("/users/u2/author-request", data={"decision": "MAYBE"})
        assert response.status_code == 403

    def test_admin_changes_role(self, log_in):
        client = log_in("ADMIN", "u1")
        with patch.object(BlogApiClient, "update_user_role", return_value=None) as mock_update, \
                patch.object(BlogApiClient, "list_my_posts", return_value=PageResult()), \
                patch.object(BlogApiClient, "list_users", return_value=PageResult()):
            response = client.post("/users/u2/role", data={"role": "AUTHOR"})
        assert response.status_code == 200
        assert 'id="dashboard"' in response.text
        mock_update.assert_called_once_with("u2", Role.AUTHOR)
