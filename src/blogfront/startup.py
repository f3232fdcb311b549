"""Application startup: configuration, logging, and per-request context factory."""

import logging
import os
import secrets
from pathlib import Path
from typing import Callable, MutableMapping, Optional

from .config import PROJECT_ROOT, FrontendConfig, load_config
from .context import Navigator, RequestContext
from .services.api_client import BlogApiClient
from .services.notifications import Notification, Notifier
from .services.session import SessionStore
from .services.storage import SessionStorage

SESSKEY_PATH = PROJECT_ROOT / ".sesskey"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Module-level state
_config: Optional[FrontendConfig] = None


def resolve_session_secret(sesskey_path: Path = SESSKEY_PATH) -> str:
    """Resolve session secret from environment or file.

    Priority: BLOGFRONT_SESSION_SECRET env var > .sesskey file > auto-generate.
    """
    secret = os.environ.get("BLOGFRONT_SESSION_SECRET")
    if secret:
        return secret
    if sesskey_path.exists():
        return sesskey_path.read_text().strip()
    secret = secrets.token_hex(32)
    sesskey_path.write_text(secret)
    return secret


def init_config(path: Optional[Path] = None) -> FrontendConfig:
    """Load configuration once and keep it for the process."""
    global _config
    _config = load_config(path)
    return _config


def get_config() -> FrontendConfig:
    if _config is None:
        return init_config()
    return _config


def init_logging(config: FrontendConfig) -> None:
    """Configure the root logger from the configured level."""
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)
    logging.getLogger("blogfront").setLevel(config.log_level)


def build_request_context(
    backing: MutableMapping,
    config: FrontendConfig,
    toast_sink: Optional[Callable[[Notification], None]] = None,
) -> RequestContext:
    """Wire a session store, API client, navigator and notifier for one request.

    `backing` is the browser's session cookie mapping. Building the session
    store rehydrates it, which also logs out an expired session.
    """
    navigator = Navigator()
    api = BlogApiClient(config.api_url, timeout=config.request_timeout)
    session = SessionStore(SessionStorage(backing), api=api, navigate=navigator)
    api.token_provider = session.get_token
    api.on_unauthorized = session.logout
    return RequestContext(
        config=config,
        session=session,
        api=api,
        navigator=navigator,
        notifier=Notifier(sink=toast_sink),
    )
