"""Tests for rendered page components."""

from urllib.parse import parse_qs, urlsplit

import pytest
from bs4 import BeautifulSoup
from fasthtml.common import to_xml

from blogfront.components.dashboard import MyPostsTable, UsersTable
from blogfront.components.layout import Paginator
from blogfront.services.dashboard import DashboardState
from conftest import make_posts, make_users, session_backing


def _render(component) -> BeautifulSoup:
    return BeautifulSoup(to_xml(component), "html.parser")


def _query(href: str) -> dict:
    return {k: v[0] for k, v in parse_qs(urlsplit(href).query).items()}


def _link(soup: BeautifulSoup, text: str):
    return next(a for a in soup.find_all("a") if text in a.get_text())


# ---------------------------------------------------------------------------
# Paginator
# ---------------------------------------------------------------------------


class TestPaginator:
    """Tests for Paginator()."""

    def test_rows_options(self):
        soup = _render(Paginator(0, 3, 10, "/blogs"))
        select = soup.find("select")
        assert select["name"] == "rows"
        assert [o["value"] for o in select.find_all("option")] == ["5", "10", "20"]
        selected = [o["value"] for o in select.find_all("option") if o.has_attr("selected")]
        assert selected == ["10"]

    def test_unlisted_page_size_is_offered(self):
        soup = _render(Paginator(0, 1, 7, "/blogs"))
        values = [o["value"] for o in soup.find("select").find_all("option")]
        assert values == ["5", "7", "10", "20"]

    def test_rows_form_resets_page_and_keeps_extra(self):
        soup = _render(Paginator(2, 4, 5, "/dashboard", page_param="users_page",
                                 rows_param="users_rows", extra={"tab": "users", "page": 1}))
        form = soup.find("form")
        assert form["method"] == "get"
        assert form["action"] == "/dashboard"
        hidden = {i["name"]: i["value"] for i in form.find_all("input", type="hidden")}
        assert hidden == {"tab": "users", "page": "1", "users_page": "0"}
        assert soup.find("select")["name"] == "users_rows"

    def test_links_carry_page_and_rows(self):
        soup = _render(Paginator(1, 3, 5, "/blogs"))
        assert _query(_link(soup, "Next")["href"]) == {"page": "2", "rows": "5"}
        assert _query(_link(soup, "Previous")["href"]) == {"page": "0", "rows": "5"}

    def test_first_and_last_page_disable_links(self):
        soup = _render(Paginator(0, 1, 5, "/blogs"))
        assert soup.find_all("a") == []
        assert "Page 1 of 1" in soup.get_text()


# ---------------------------------------------------------------------------
# Dashboard tables
# ---------------------------------------------------------------------------


@pytest.fixture
def admin_dashboard(make_session, fake_api, notifier):
    fake_api.posts = make_posts(12)
    fake_api.users = make_users(25)
    state = DashboardState(make_session(session_backing("ADMIN")), fake_api, notifier,
                           posts_page_size=5, users_page_size=10)
    state.my_posts.seek(1)
    state.users.seek(2, 5)
    state.refresh()
    return state


class TestDashboardPaginators:
    """Paging one dashboard table keeps the other table where it was."""

    def test_posts_links_keep_users_position(self, admin_dashboard):
        soup = _render(MyPostsTable(admin_dashboard))
        assert _query(_link(soup, "Next")["href"]) == {
            "tab": "posts",
            "page": "2",
            "rows": "5",
            "users_page": "2",
            "users_rows": "5",
        }

    def test_users_links_keep_posts_position(self, admin_dashboard):
        soup = _render(UsersTable(admin_dashboard))
        assert _query(_link(soup, "Previous")["href"]) == {
            "tab": "users",
            "page": "1",
            "rows": "5",
            "users_page": "1",
            "users_rows": "5",
        }

    def test_users_rows_selector_keeps_posts_position(self, admin_dashboard):
        soup = _render(UsersTable(admin_dashboard))
        form = soup.find("form", class_="paginator-rows")
        hidden = {i["name"]: i["value"] for i in form.find_all("input", type="hidden")}
        assert hidden == {"tab": "users", "page": "1", "rows": "5", "users_page": "0"}
        assert form.find("select")["name"] == "users_rows"
