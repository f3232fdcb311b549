"""Data models for the blog front-end."""

from .page import PageResult
from .post import Post, PostAuthor, PostDraft
from .user import AuthorRequestStatus, Identity, Role, User
from .validation import Credentials, Registration, ValidationError

__all__ = [
    "PageResult",
    "Post",
    "PostAuthor",
    "PostDraft",
    "AuthorRequestStatus",
    "Identity",
    "Role",
    "User",
    "Credentials",
    "Registration",
    "ValidationError",
]
