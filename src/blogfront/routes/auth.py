"""Authentication routes for login, registration and logout."""

from fasthtml.common import *
from starlette.responses import RedirectResponse

from .utils import get_ctx
from ..components.auth import LoginPage, RegisterPage
from ..models.validation import Credentials, Registration, ValidationError
from ..services.session import (
    DASHBOARD_ROUTE,
    LOGIN_ROUTE,
    AuthenticationError,
    RegistrationError,
)


def register(app, rt):
    """Register authentication routes."""

    @app.get("/login")
    def login_page(req):
        """Display login page. Logged-in users never get here (public-only guard)."""
        return LoginPage()

    @app.post("/login")
    def login_submit(req, email: str = "", password: str = ""):
        """Process login form submission."""
        ctx = get_ctx(req)
        try:
            ctx.session.login(Credentials(email=email, password=password))
        except ValidationError as e:
            return LoginPage(errors=e.errors, email=email)
        except AuthenticationError as e:
            return LoginPage(errors=[str(e)], email=email)

        return RedirectResponse(ctx.navigator.location or DASHBOARD_ROUTE, status_code=303)

    @app.get("/register")
    def register_page(req):
        return RegisterPage()

    @app.post("/register")
    def register_submit(req, name: str = "", email: str = "", password: str = ""):
        """Create an account, then send the user to the login page."""
        ctx = get_ctx(req)
        try:
            ctx.session.register(Registration(name=name, email=email, password=password))
        except ValidationError as e:
            return RegisterPage(errors=e.errors, name=name, email=email)
        except RegistrationError as e:
            return RegisterPage(errors=[str(e) or "Registration failed. Please try again."], name=name, email=email)

        ctx.notifier.success("Registration successful! You can now log in.")
        return RedirectResponse(LOGIN_ROUTE, status_code=303)

    @app.get("/logout")
    def logout(req):
        """Log out user and redirect to login."""
        ctx = get_ctx(req)
        ctx.session.logout()
        ctx.notifier.info("You have been successfully logged out.", summary="Logged Out")
        return RedirectResponse(ctx.navigator.location or LOGIN_ROUTE, status_code=303)
