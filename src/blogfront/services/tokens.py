"""Bearer token inspection.

The front-end never verifies token signatures (it does not hold the backend's
key); it only reads the expiry claim to decide whether a stored session is
still usable.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import jwt

logger = logging.getLogger(__name__)


def decode_expiry(token: Optional[str]) -> Optional[datetime]:
    """Return the token's `exp` claim as an aware UTC datetime.

    Returns None when the token is missing, cannot be decoded, or carries no
    usable numeric `exp` claim. Never raises.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError as e:
        logger.debug(f"Could not decode token: {e}")
        return None

    exp = payload.get("exp") if isinstance(payload, dict) else None
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        return None
    try:
        return datetime.fromtimestamp(exp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def is_token_expired(token: Optional[str], now: Optional[datetime] = None) -> bool:
    """Check whether a token is expired. Undecodable tokens count as expired."""
    expiry = decode_expiry(token)
    if expiry is None:
        return True
    now = now or datetime.now(timezone.utc)
    return expiry <= now
