"""Client-side form validation.

Forms are checked before anything is sent to the backend. A failed check
raises ValidationError, which the route layer renders inline next to the form.
"""

import re
from dataclasses import dataclass
from typing import Iterable

# Loose check matching what browsers accept for type="email"
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MIN_PASSWORD_LENGTH = 6


class ValidationError(Exception):
    """One or more form fields failed client-side validation."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def require_fields(fields: Iterable[tuple[str, str]]) -> list[str]:
    """Return an error message for every (label, value) pair that is blank."""
    return [f"{label} is required." for label, value in fields if not (value or "").strip()]


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email or ""))


@dataclass
class Credentials:
    """Login form data."""

    email: str = ""
    password: str = ""

    def validate(self) -> list[str]:
        return require_fields([("Email", self.email), ("Password", self.password)])

    def to_payload(self) -> dict:
        return {"email": self.email.strip(), "password": self.password}


@dataclass
class Registration:
    """Registration form data."""

    name: str = ""
    email: str = ""
    password: str = ""

    def validate(self) -> list[str]:
        errors = require_fields([("Name", self.name), ("Email", self.email)])
        if self.email.strip() and not is_valid_email(self.email.strip()):
            errors.append("Email must be a valid email address.")
        if len(self.password or "") < MIN_PASSWORD_LENGTH:
            errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
        return errors

    def to_payload(self) -> dict:
        return {
            "name": self.name.strip(),
            "email": self.email.strip(),
            "password": self.password,
        }


def ensure_valid(form) -> None:
    """Raise ValidationError if the form reports any errors."""
    errors = form.validate()
    if errors:
        raise ValidationError(errors)
