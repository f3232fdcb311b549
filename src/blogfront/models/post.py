"""Blog post data models."""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from .timestamps import format_timestamp, parse_timestamp
from .validation import require_fields

if TYPE_CHECKING:
    from .user import Identity


@dataclass
class PostAuthor:
    """Author summary embedded in a post."""

    id: str
    name: str = ""


@dataclass
class Post:
    """A blog post. The body is HTML produced by the rich-text editor."""

    id: str
    title: str
    body: str = ""
    excerpt: str = ""
    published: bool = False
    author_id: str = ""
    author: Optional[PostAuthor] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def author_name(self) -> str:
        return self.author.name if self.author else ""

    def can_be_edited_by(self, identity: Optional["Identity"]) -> bool:
        """Posts are mutable by their author or an admin."""
        if identity is None:
            return False
        return identity.is_admin or identity.id == self.author_id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "excerpt": self.excerpt,
            "published": self.published,
            "authorId": self.author_id,
            "author": {"id": self.author.id, "name": self.author.name} if self.author else None,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Post":
        author_data = data.get("author")
        author = None
        if isinstance(author_data, dict) and author_data.get("id") is not None:
            author = PostAuthor(id=str(author_data["id"]), name=author_data.get("name") or "")

        author_id = data.get("authorId")
        if author_id is None and author is not None:
            author_id = author.id

        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            body=data.get("body") or "",
            excerpt=data.get("excerpt") or "",
            published=bool(data.get("published", False)),
            author_id=str(author_id) if author_id is not None else "",
            author=author,
            created_at=parse_timestamp(data.get("createdAt")),
            updated_at=parse_timestamp(data.get("updatedAt")),
        )


@dataclass
class PostDraft:
    """Editable fields of a post, as submitted by the editor form."""

    title: str = ""
    excerpt: str = ""
    body: str = ""
    published: bool = False

    def validate(self) -> list[str]:
        return require_fields(
            [("Title", self.title), ("Excerpt", self.excerpt), ("Body", self.body)]
        )

    def to_payload(self) -> dict:
        return {
            "title": self.title.strip(),
            "excerpt": self.excerpt.strip(),
            "body": self.body,
            "published": self.published,
        }

    @classmethod
    def from_post(cls, post: Post) -> "PostDraft":
        return cls(
            title=post.title,
            excerpt=post.excerpt,
            body=post.body,
            published=post.published,
        )
