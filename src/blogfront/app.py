"""Main FastHTML application."""

from pathlib import Path

from fasthtml.common import *

from .components.layout import NotFoundPage
from .middleware import make_session_beforeware
from .routes import account, auth, blogs, dashboard, posts, users
from .startup import get_config, init_config, init_logging, resolve_session_secret

# Static files directory
static_dir = Path(__file__).parent / "static"

# Load configuration and set up logging
config = init_config()
init_logging(config)

# Resolve session secret
SESSION_SECRET = resolve_session_secret()

# Create session middleware (rehydrates the browser session and guards routes)
bware = make_session_beforeware(get_config)


def not_found(req, exc):
    return NotFoundPage(req.scope.get("auth"))


# Create FastHTML app with session support
app, rt = fast_app(
    hdrs=[Link(rel="stylesheet", href="/css/app.css")],
    pico=False,  # Use custom CSS instead of Pico
    secret_key=SESSION_SECRET,
    before=bware,
    static_path=str(static_dir),
    exception_handlers={404: not_found},
)
setup_toasts(app)

# Register routes
# Note: Order matters! /posts/new and /posts/{id}/edit must come before /posts/{id}
auth.register(app, rt)
blogs.register(app, rt)
dashboard.register(app, rt)
posts.register(app, rt)
blogs.register_post_detail(app, rt)
users.register(app, rt)
account.register(app, rt)


def main_func():
    """Entry point for running the application."""
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=5001)


if __name__ == "__main__":
    main_func()
