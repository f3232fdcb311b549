"""Tests for navigation guards."""

from blogfront.services.guards import require_authenticated, require_public_only
from blogfront.services.session import DASHBOARD_ROUTE, LOGIN_ROUTE
from conftest import NavigationRecorder, session_backing


class TestRequireAuthenticated:
    """Tests for require_authenticated()."""

    def test_admits_logged_in_user(self, make_session):
        session = make_session(session_backing("USER"))
        nav = NavigationRecorder()
        assert require_authenticated(session, nav) is True
        assert nav.paths == []

    def test_redirects_anonymous_to_login(self, make_session):
        nav = NavigationRecorder()
        assert require_authenticated(make_session(), nav) is False
        assert nav.paths == [LOGIN_ROUTE]

    def test_redirects_expired_session_to_login(self, make_session):
        session = make_session(session_backing("ADMIN", expires_in=-5))
        nav = NavigationRecorder()
        assert require_authenticated(session, nav) is False
        assert nav.last == LOGIN_ROUTE


class TestRequirePublicOnly:
    """Tests for require_public_only()."""

    def test_admits_anonymous(self, make_session):
        nav = NavigationRecorder()
        assert require_public_only(make_session(), nav) is True
        assert nav.paths == []

    def test_redirects_logged_in_user_to_dashboard(self, make_session):
        session = make_session(session_backing("AUTHOR"))
        nav = NavigationRecorder()
        assert require_public_only(session, nav) is False
        assert nav.paths == [DASHBOARD_ROUTE]
