"""Dashboard components: the viewer's posts and the admin user table."""

from fasthtml.common import *

from ..models.post import Post
from ..models.user import AuthorRequestStatus, Identity, Role, User
from ..services.dashboard import DashboardState
from .layout import Paginator

# Tag styles per role / request status
_ROLE_CLS = {Role.ADMIN: "tag-danger", Role.AUTHOR: "tag-success", Role.USER: "tag-info"}
_REQUEST_CLS = {
    AuthorRequestStatus.PENDING: "tag-info",
    AuthorRequestStatus.APPROVED: "tag-success",
    AuthorRequestStatus.REJECTED: "tag-danger",
}


def _view_params(state: DashboardState, tab: str) -> dict:
    """Query parameters describing the current page and size of both tables."""
    return {
        "tab": tab,
        "page": state.my_posts.page_index,
        "rows": state.my_posts.page_size,
        "users_page": state.users.page_index,
        "users_rows": state.users.page_size,
    }


def _view_fields(state: DashboardState, tab: str):
    """Hidden inputs that carry the current page of both tables through a mutation."""
    return tuple(Input(type="hidden", name=k, value=str(v)) for k, v in _view_params(state, tab).items())


def _paginator(state: DashboardState, tab: str, page_param: str, rows_param: str):
    """Paginator for one table that keeps the other table's position."""
    paged = state.my_posts if tab == "posts" else state.users
    extra = {k: v for k, v in _view_params(state, tab).items() if k not in (page_param, rows_param)}
    return Paginator(
        paged.page_index,
        paged.last_page,
        paged.page_size,
        "/dashboard",
        page_param=page_param,
        rows_param=rows_param,
        extra=extra,
    )


def _action(label: str, url: str, state: DashboardState, tab: str, confirm: str = "", cls: str = "btn-secondary", **extra):
    """Small inline form posting a mutation and swapping the dashboard."""
    return Form(
        *_view_fields(state, tab),
        *[Input(type="hidden", name=k, value=v) for k, v in extra.items()],
        Button(label, type="submit", cls=f"btn {cls} btn-small"),
        hx_post=url,
        hx_target="#dashboard",
        hx_swap="outerHTML",
        hx_confirm=confirm or None,
        cls="inline-form",
    )


def DashboardContent(state: DashboardState, identity: Identity, active_tab: str = "posts"):
    """
    Dashboard body with tabs for posts and (for admins) users.

    Args:
        state: Loaded dashboard lists
        identity: The viewer
        active_tab: "posts" or "users"
    """
    if not identity.is_admin:
        active_tab = "posts"

    tabs = [("posts", "My Posts")]
    if identity.is_admin:
        tabs.append(("users", "Users"))

    if active_tab == "users":
        content = UsersTable(state)
    elif identity.can_author:
        content = MyPostsTable(state)
    else:
        content = NoAuthorAccess(identity)

    return Div(
        H2(f"Welcome, {identity.name or identity.email}"),
        Div(
            *[
                A(
                    label,
                    href=f"/dashboard?tab={key}",
                    cls="tab-button active" if key == active_tab else "tab-button",
                )
                for key, label in tabs
            ],
            cls="tab-buttons dashboard-tabs",
        ),
        Div(content, cls="dashboard-tab-content"),
        cls="dashboard-content",
        id="dashboard",
    )


def NoAuthorAccess(identity: Identity):
    """Shown to plain users, who have no posts of their own."""
    if identity.author_request_status == AuthorRequestStatus.PENDING:
        text = "Your request to become an author is pending review."
    elif identity.author_request_status == AuthorRequestStatus.REJECTED:
        text = "Your author request was rejected. You may request the role again."
    else:
        text = "Request the author role to start writing posts."
    return Div(P(text), cls="empty-state")


def MyPostsTable(state: DashboardState):
    """The viewer's posts with edit and delete actions."""
    posts = state.my_posts
    if not posts.items:
        return Div(
            P("You have not written any posts on this page."),
            A("+ New Post", href="/posts/new", cls="btn btn-primary"),
            _paginator(state, "posts", "page", "rows"),
            cls="empty-state",
        )

    return Div(
        Table(
            Thead(Tr(Th("Title"), Th("Status"), Th("Created"), Th("Updated"), Th(""))),
            Tbody(*[PostRow(p, state) for p in posts.items]),
            cls="data-table",
        ),
        P(f"{posts.total_count} posts total", cls="table-footer"),
        _paginator(state, "posts", "page", "rows"),
    )


def PostRow(post: Post, state: DashboardState):
    return Tr(
        Td(A(post.title, href=f"/posts/{post.id}")),
        Td(Span("Published", cls="tag tag-success") if post.published else Span("Draft", cls="tag tag-info")),
        Td(post.created_at.strftime("%Y-%m-%d %H:%M") if post.created_at else "-"),
        Td(post.updated_at.strftime("%Y-%m-%d %H:%M") if post.updated_at else "-"),
        Td(
            A("Edit", href=f"/posts/{post.id}/edit", cls="btn btn-secondary btn-small"),
            _action(
                "Delete",
                f"/posts/{post.id}/delete",
                state,
                "posts",
                confirm=f'Delete the post "{post.title}"? This action cannot be undone.',
                cls="btn-danger",
            ),
            cls="row-actions",
        ),
    )


def UsersTable(state: DashboardState):
    """All users with role, block and author request actions."""
    users = state.users
    if not users.items:
        return Div(
            P("No users on this page."),
            _paginator(state, "users", "users_page", "users_rows"),
            cls="empty-state",
        )

    return Div(
        Table(
            Thead(
                Tr(Th("Name"), Th("Email"), Th("Role"), Th("Author request"), Th("Status"), Th("Joined"), Th(""))
            ),
            Tbody(*[UserRow(u, state) for u in users.items]),
            cls="data-table",
        ),
        P(f"{users.total_count} users total", cls="table-footer"),
        _paginator(state, "users", "users_page", "users_rows"),
    )


def UserRow(user: User, state: DashboardState):
    status = user.author_request_status
    request_tag = (
        Span(status.value.title(), cls=f"tag {_REQUEST_CLS[status]}")
        if status
        else Span("Not requested", cls="tag tag-secondary")
    )

    actions = [RoleForm(user, state)]
    if user.has_pending_request:
        actions.append(_action("Approve", f"/users/{user.id}/author-request", state, "users",
                               confirm=f'Approve the author request for "{user.email}"?',
                               cls="btn-primary", decision=AuthorRequestStatus.APPROVED.value))
        actions.append(_action("Reject", f"/users/{user.id}/author-request", state, "users",
                               confirm=f'Reject the author request for "{user.email}"?',
                               decision=AuthorRequestStatus.REJECTED.value))
    if user.is_blocked:
        actions.append(_action("Unblock", f"/users/{user.id}/unblock", state, "users",
                               confirm=f'Unblock user "{user.email}"? They will be able to log in again.'))
    else:
        actions.append(_action("Block", f"/users/{user.id}/block", state, "users",
                               confirm=f'Block user "{user.email}"? They will not be able to log in.'))
    actions.append(_action("Delete", f"/users/{user.id}/delete", state, "users",
                           confirm=f'Delete user "{user.email}"? This action cannot be undone.',
                           cls="btn-danger"))

    return Tr(
        Td(user.name or "-"),
        Td(user.email),
        Td(Span(user.role.value.title(), cls=f"tag {_ROLE_CLS[user.role]}")),
        Td(request_tag),
        Td(Span("Blocked", cls="tag tag-danger") if user.is_blocked else Span("Active", cls="tag tag-success")),
        Td(user.created_at.strftime("%Y-%m-%d") if user.created_at else "-"),
        Td(*actions, cls="row-actions"),
    )


def RoleForm(user: User, state: DashboardState):
    """Role selector for one user."""
    return Form(
        *_view_fields(state, "users"),
        Select(
            *[Option(r.value.title(), value=r.value, selected=(r == user.role)) for r in Role],
            name="role",
        ),
        Button("Change role", type="submit", cls="btn btn-secondary btn-small"),
        hx_post=f"/users/{user.id}/role",
        hx_target="#dashboard",
        hx_swap="outerHTML",
        cls="inline-form",
    )
