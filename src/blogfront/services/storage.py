"""Durable storage for the session token and identity.

In the web application the backing mapping is the signed session cookie, so
a browser's login survives server restarts; tests pass a plain dict.
"""

import json
import logging
from typing import MutableMapping, Optional

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "accessToken"
CURRENT_USER_KEY = "currentUser"


class SessionStorage:
    """Two-key view over a mutable mapping: the token and the JSON identity."""

    def __init__(self, backing: MutableMapping):
        self._backing = backing

    def get_token(self) -> Optional[str]:
        token = self._backing.get(ACCESS_TOKEN_KEY)
        return token or None

    def get_identity(self) -> Optional[dict]:
        """Return the stored identity record, or None if absent or unreadable."""
        raw = self._backing.get(CURRENT_USER_KEY)
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            logger.warning("Stored identity is not valid JSON; ignoring it")
            return None
        return data if isinstance(data, dict) else None

    def save(self, token: str, identity: dict) -> None:
        self._backing[ACCESS_TOKEN_KEY] = token
        self.save_identity(identity)

    def save_identity(self, identity: dict) -> None:
        self._backing[CURRENT_USER_KEY] = json.dumps(identity)

    def clear(self) -> None:
        self._backing.pop(ACCESS_TOKEN_KEY, None)
        self._backing.pop(CURRENT_USER_KEY, None)

    def is_empty(self) -> bool:
        return ACCESS_TOKEN_KEY not in self._backing and CURRENT_USER_KEY not in self._backing
