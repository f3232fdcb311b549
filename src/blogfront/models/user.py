"""User-related data models."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from .timestamps import format_timestamp, parse_timestamp


class Role(Enum):
    """User authorization roles."""

    USER = "USER"
    AUTHOR = "AUTHOR"
    ADMIN = "ADMIN"


class AuthorRequestStatus(Enum):
    """State of a user's request to become an author."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


def _parse_status(value) -> Optional[AuthorRequestStatus]:
    if value in (None, ""):
        return None
    return AuthorRequestStatus(value)


@dataclass(frozen=True)
class Identity:
    """The logged-in user as returned by the login endpoint.

    Frozen so that holders of the current identity cannot modify session
    state behind the session store's back.
    """

    id: str
    role: Role
    email: str = ""
    name: str = ""
    author_request_status: Optional[AuthorRequestStatus] = None

    @property
    def is_admin(self) -> bool:
        """Check if user has admin privileges."""
        return self.role == Role.ADMIN

    @property
    def can_author(self) -> bool:
        """Authors and admins may write posts."""
        return self.role in (Role.AUTHOR, Role.ADMIN)

    @property
    def can_request_author(self) -> bool:
        """Only plain users without an open or granted request may ask."""
        return self.role == Role.USER and self.author_request_status not in (
            AuthorRequestStatus.PENDING,
            AuthorRequestStatus.APPROVED,
        )

    def with_author_request_status(self, status: AuthorRequestStatus) -> "Identity":
        return replace(self, author_request_status=status)

    def to_dict(self) -> dict:
        """Convert to dictionary for session storage."""
        data = {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
        }
        if self.author_request_status is not None:
            data["authorRequestStatus"] = self.author_request_status.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Identity":
        """Create Identity from a backend payload or session data."""
        return cls(
            id=str(data["id"]),
            role=Role(data["role"]),
            email=data.get("email") or "",
            name=data.get("name") or "",
            author_request_status=_parse_status(data.get("authorRequestStatus")),
        )


@dataclass
class User:
    """A user account as seen by administrators."""

    id: str
    email: str
    name: str
    role: Role
    author_request_status: Optional[AuthorRequestStatus] = None
    is_blocked: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    image: Optional[str] = None

    @property
    def has_pending_request(self) -> bool:
        return self.author_request_status == AuthorRequestStatus.PENDING

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "authorRequestStatus": (
                self.author_request_status.value if self.author_request_status else None
            ),
            "isBlocked": self.is_blocked,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
            "image": self.image,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=str(data["id"]),
            email=data.get("email") or "",
            name=data.get("name") or "",
            role=Role(data["role"]),
            author_request_status=_parse_status(data.get("authorRequestStatus")),
            is_blocked=bool(data.get("isBlocked", False)),
            created_at=parse_timestamp(data.get("createdAt")),
            updated_at=parse_timestamp(data.get("updatedAt")),
            image=data.get("image"),
        )
