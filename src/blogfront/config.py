"""Front-end configuration: YAML file with environment overrides."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "blogfront.yaml"


@dataclass
class FrontendConfig:
    """Settings for the blog front-end.

    Attributes:
        api_url: Root URL of the blog REST backend.
        request_timeout: Seconds before a backend call is abandoned.
        published_page_size: Posts per page on the public blog list.
        posts_page_size: Posts per page in the dashboard's "my posts" table.
        users_page_size: Users per page in the admin user table.
        log_level: Root logger level name.
    """

    api_url: str = "http://localhost:3000"
    request_timeout: float = 30.0
    published_page_size: int = 5
    posts_page_size: int = 5
    users_page_size: int = 10
    log_level: str = "INFO"

    def to_dict(self) -> dict:
        return {
            "api_url": self.api_url,
            "request_timeout": self.request_timeout,
            "published_page_size": self.published_page_size,
            "posts_page_size": self.posts_page_size,
            "users_page_size": self.users_page_size,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FrontendConfig":
        defaults = cls()
        config = cls(
            api_url=str(data.get("api_url", defaults.api_url)),
            request_timeout=float(data.get("request_timeout", defaults.request_timeout)),
            published_page_size=int(data.get("published_page_size", defaults.published_page_size)),
            posts_page_size=int(data.get("posts_page_size", defaults.posts_page_size)),
            users_page_size=int(data.get("users_page_size", defaults.users_page_size)),
            log_level=str(data.get("log_level", defaults.log_level)).upper(),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Raise ValueError for settings the application cannot run with."""
        if not self.api_url.startswith(("http://", "https://")):
            raise ValueError(f"api_url must be an http(s) URL, got {self.api_url!r}")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        for name in ("published_page_size", "posts_page_size", "users_page_size"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1")


# Environment variable -> config key
_ENV_OVERRIDES = {
    "BLOGFRONT_API_URL": "api_url",
    "BLOGFRONT_REQUEST_TIMEOUT": "request_timeout",
    "BLOGFRONT_LOG_LEVEL": "log_level",
}


def load_config(path: Optional[Path] = None, environ: Optional[dict] = None) -> FrontendConfig:
    """Load configuration.

    Priority: environment variables > YAML file > built-in defaults. The file
    path comes from the argument, then BLOGFRONT_CONFIG, then
    config/blogfront.yaml; a missing file is not an error.
    """
    environ = os.environ if environ is None else environ
    if path is None:
        path = Path(environ.get("BLOGFRONT_CONFIG", DEFAULT_CONFIG_PATH))

    data: dict = {}
    if path.exists():
        with open(path) as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        data.update(loaded)
        logger.info(f"Loaded configuration from {path}")

    for env_name, key in _ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            data[key] = value

    return FrontendConfig.from_dict(data)
