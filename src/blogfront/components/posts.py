"""Blog post components: public list, detail view and editor."""

from typing import Optional

from fasthtml.common import *

from ..models.post import Post, PostDraft
from ..models.user import Identity
from ..services.paged_list import PagedList
from ..utils.html import html_to_text, sanitize_post_html
from .layout import ErrorList, Paginator


def _date(post: Post) -> str:
    return post.created_at.strftime("%Y-%m-%d") if post.created_at else ""


def PostCard(post: Post):
    """Summary card for the public blog list."""
    excerpt = post.excerpt or html_to_text(post.body, max_len=200)
    return Article(
        H3(A(post.title, href=f"/posts/{post.id}")),
        P(
            Span(post.author_name or "Unknown author", cls="post-author"),
            Span(_date(post), cls="post-date"),
            cls="post-meta",
        ),
        P(excerpt, cls="post-excerpt"),
        A("Read more", href=f"/posts/{post.id}", cls="btn btn-secondary btn-small"),
        cls="post-card",
    )


def PostListContent(posts: PagedList[Post]):
    """Published posts with pagination."""
    if not posts.items:
        body = Div(P("No posts published yet."), cls="empty-state")
    else:
        body = Div(*[PostCard(p) for p in posts.items], cls="post-list")

    return Div(
        H2("Latest posts"),
        body,
        Paginator(posts.page_index, posts.last_page, posts.page_size, "/blogs"),
        id="post-list",
    )


def PostDetail(post: Post, identity: Optional[Identity] = None):
    """Full post view."""
    actions = None
    if post.can_be_edited_by(identity):
        actions = Div(
            A("Edit", href=f"/posts/{post.id}/edit", cls="btn btn-secondary btn-small"),
            cls="post-actions",
        )
    return Article(
        H1(post.title),
        P(
            Span(post.author_name or "Unknown author", cls="post-author"),
            Span(_date(post), cls="post-date"),
            Span("Draft", cls="tag tag-draft") if not post.published else None,
            cls="post-meta",
        ),
        actions,
        Div(NotStr(sanitize_post_html(post.body)), cls="post-body"),
        A("« Back to the blog", href="/blogs"),
        cls="post-detail",
    )


def PostEditor(draft: PostDraft, post_id: Optional[str] = None, errors: list[str] | None = None):
    """
    Create/edit form for a post.

    Args:
        draft: Field values to prefill
        post_id: ID of the post being edited, None when creating
        errors: Validation or server messages to display
    """
    is_edit = post_id is not None
    action = f"/posts/{post_id}/edit" if is_edit else "/posts/new"
    return Div(
        H2("Edit Post" if is_edit else "Create New Post"),
        Form(
            Div(
                Label("Title", fr="title"),
                Input(type="text", name="title", id="title", value=draft.title, required=True),
                cls="form-group",
            ),
            Div(
                Label("Excerpt", fr="excerpt"),
                Textarea(draft.excerpt, name="excerpt", id="excerpt", rows="3", required=True),
                cls="form-group",
            ),
            Div(
                Label("Body", fr="body"),
                Textarea(draft.body, name="body", id="body", rows="16", required=True, cls="rich-text"),
                cls="form-group",
            ),
            Div(
                Label(
                    Input(type="checkbox", name="published", value="true", checked=draft.published),
                    " Published",
                ),
                cls="form-group",
            ),
            ErrorList(errors or []),
            Div(
                Button("Update Post" if is_edit else "Create Post", type="submit", cls="btn btn-primary"),
                A("Cancel", href="/dashboard", cls="btn btn-secondary"),
                cls="form-actions",
            ),
            action=action,
            method="post",
            cls="post-editor",
        ),
        cls="post-editor-page",
    )
