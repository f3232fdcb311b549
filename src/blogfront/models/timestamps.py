"""ISO-8601 timestamp helpers shared by the models."""

from datetime import datetime
from typing import Optional


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO-8601 string from the backend, accepting a trailing 'Z'."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
