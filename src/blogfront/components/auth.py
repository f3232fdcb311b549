"""Login and registration page components."""

from fasthtml.common import *

from .layout import ErrorList


def _field(label: str, name: str, type: str = "text", value: str = "", **kwargs):
    return Div(
        Label(label, fr=name),
        Input(type=type, name=name, id=name, value=value, **kwargs),
        cls="form-group",
    )


def LoginPage(errors: list[str] | None = None, email: str = ""):
    """
    Render the login page.

    Args:
        errors: Validation or authentication messages to display
        email: Previously entered email, kept on failure
    """
    return (
        Title("Blog - Login"),
        Main(
            Div(
                Div(
                    H1("Blog"),
                    P("Sign in to write and manage posts", cls="login-subtitle"),
                    cls="login-header",
                ),
                Form(
                    _field("Email", "email", type="email", value=email,
                           required=True, autofocus=True, placeholder="you@example.com"),
                    _field("Password", "password", type="password",
                           required=True, placeholder="Enter your password"),
                    ErrorList(errors or []),
                    Button("Sign In", type="submit", cls="btn-primary btn-login"),
                    action="/login",
                    method="post",
                    cls="login-form",
                ),
                P("No account yet? ", A("Register", href="/register"), cls="login-footer"),
                cls="login-card",
            ),
            cls="login-container",
        ),
    )


def RegisterPage(errors: list[str] | None = None, name: str = "", email: str = ""):
    """Render the registration page."""
    return (
        Title("Blog - Register"),
        Main(
            Div(
                Div(H1("Create an account"), cls="login-header"),
                Form(
                    _field("Name", "name", value=name, required=True, autofocus=True),
                    _field("Email", "email", type="email", value=email, required=True),
                    _field("Password", "password", type="password", required=True,
                           minlength="6", placeholder="At least 6 characters"),
                    ErrorList(errors or []),
                    Button("Register", type="submit", cls="btn-primary btn-login"),
                    action="/register",
                    method="post",
                    cls="login-form",
                ),
                P("Already registered? ", A("Sign in", href="/login"), cls="login-footer"),
                cls="login-card",
            ),
            cls="login-container",
        ),
    )
