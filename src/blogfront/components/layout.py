"""Layout components for the application shell."""

from typing import Optional

from fasthtml.common import *

from ..models.user import Identity, Role


def AppShell(identity: Optional[Identity], active_route: str, content, title: str = "Blog"):
    """
    Main application shell with header and sidebar navigation.

    Args:
        identity: The logged-in user, or None for anonymous visitors
        active_route: Current active route for highlighting nav items
        content: The main content to display
        title: Page title
    """
    return (
        Title(f"{title} - Blog"),
        Main(
            AppHeader(identity),
            Div(
                Sidebar(identity, active_route),
                Div(content, cls="main-content"),
                cls="app-shell",
            ),
            cls="app-container",
        ),
    )


def AppHeader(identity: Optional[Identity]):
    """Application header with brand and session controls."""
    if identity is None:
        session_controls = Div(
            A("Login", href="/login", cls="btn btn-secondary btn-small"),
            A("Register", href="/register", cls="btn btn-primary btn-small"),
            cls="user-info",
        )
    else:
        session_controls = Div(
            Span(f"Logged in as: {identity.name or identity.email}", cls="username"),
            RoleBadge(identity),
            AuthorRequestControl(identity),
            A("Logout", href="/logout"),
            cls="user-info",
        )

    return Header(
        A(Span("Blog", cls="app-brand-text"), href="/blogs", cls="app-brand"),
        session_controls,
        cls="app-header",
    )


def RoleBadge(identity: Identity):
    return Span(identity.role.value.title(), cls=f"tag tag-{identity.role.value.lower()}")


def AuthorRequestControl(identity: Identity):
    """Button to request the author role, or the state of an open request."""
    if identity.can_request_author:
        return Form(
            Button("Become an author", type="submit", cls="btn btn-secondary btn-small"),
            action="/account/request-author",
            method="post",
            cls="inline-form",
        )
    if identity.author_request_status is not None and identity.role == Role.USER:
        status = identity.author_request_status.value.title()
        return Span(f"Author request: {status}", cls="author-request-status")
    return None


def Sidebar(identity: Optional[Identity], active: str):
    """
    Left sidebar navigation.

    Args:
        identity: The logged-in user, or None
        active: Current active route path
    """
    items = [NavItem("Blog", "/blogs", active=(active == "/blogs"))]
    if identity is not None:
        items.append(NavItem("Dashboard", "/dashboard", active=(active == "/dashboard")))
        if identity.can_author:
            items.append(
                A("+ New Post", href="/posts/new", cls="btn btn-primary sidebar-btn")
            )
    return Nav(*items, cls="sidebar")


def NavItem(label: str, href: str, active: bool = False):
    """
    Navigation item for the sidebar.

    Args:
        label: Display text
        href: Link destination
        active: Whether this item is currently active
    """
    cls = "nav-item active" if active else "nav-item"
    return A(label, href=href, cls=cls)


# Choices offered by the rows-per-page selector
PAGE_SIZE_OPTIONS = (5, 10, 20)


def Paginator(
    page_index: int,
    last_page: int,
    page_size: int,
    base_url: str,
    page_param: str = "page",
    rows_param: str = "rows",
    extra: Optional[dict] = None,
    page_sizes=PAGE_SIZE_OPTIONS,
):
    """
    Previous/next links and a rows-per-page selector for a paged list.

    Page indexes in URLs are 0-based. Changing the page size goes back to
    the first page. `extra` holds query parameters every link keeps.
    """
    extra = extra or {}

    def href(index: int) -> str:
        params = {**extra, page_param: index, rows_param: page_size}
        query = "&".join(f"{k}={v}" for k, v in params.items())
        return f"{base_url}?{query}"

    current = page_index + 1
    return Div(
        A("« Previous", href=href(page_index - 1), cls="btn btn-secondary btn-small")
        if page_index > 0
        else Span("« Previous", cls="btn btn-secondary btn-small disabled"),
        Span(f"Page {current} of {max(last_page, 1)}", cls="paginator-status"),
        A("Next »", href=href(page_index + 1), cls="btn btn-secondary btn-small")
        if current < last_page
        else Span("Next »", cls="btn btn-secondary btn-small disabled"),
        RowsSelector(page_size, base_url, page_param, rows_param, extra, page_sizes),
        cls="paginator",
    )


def RowsSelector(page_size: int, base_url: str, page_param: str, rows_param: str, extra: dict, page_sizes):
    """GET form that reloads the list with a new page size."""
    sizes = sorted({*page_sizes, page_size})
    return Form(
        *[Input(type="hidden", name=k, value=str(v)) for k, v in extra.items()],
        Input(type="hidden", name=page_param, value="0"),
        Label(
            "Rows per page",
            Select(
                *[Option(str(n), value=str(n), selected=(n == page_size)) for n in sizes],
                name=rows_param,
                onchange="this.form.submit()",
            ),
        ),
        method="get",
        action=base_url,
        cls="paginator-rows",
    )


def ErrorList(errors: list[str]):
    """Inline validation messages."""
    if not errors:
        return None
    return Div(*[P(e) for e in errors], cls="error-message")


def NotFoundPage(identity: Optional[Identity] = None, message: str = "Page not found."):
    return AppShell(
        identity,
        active_route="",
        content=Div(
            H2("Not Found"),
            P(message),
            A("Back to the blog", href="/blogs", cls="btn btn-primary"),
            cls="empty-state",
        ),
        title="Not Found",
    )
