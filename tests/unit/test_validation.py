"""Tests for client-side form validation."""

import pytest

from blogfront.models.validation import (
    Credentials,
    Registration,
    ValidationError,
    ensure_valid,
    is_valid_email,
    require_fields,
)


class TestRequireFields:
    """Tests for require_fields()."""

    def test_blank_and_whitespace_fields(self):
        assert require_fields([("Name", ""), ("Email", "  "), ("Other", "x")]) == [
            "Name is required.",
            "Email is required.",
        ]

    def test_none_value(self):
        assert require_fields([("Name", None)]) == ["Name is required."]


class TestIsValidEmail:
    """Tests for is_valid_email()."""

    @pytest.mark.parametrize("email", ["a@b.co", "first.last@example.org"])
    def test_valid(self, email):
        assert is_valid_email(email) is True

    @pytest.mark.parametrize("email", ["", "plain", "a@b", "a b@c.de", "@example.com"])
    def test_invalid(self, email):
        assert is_valid_email(email) is False


class TestCredentials:
    """Tests for Credentials."""

    def test_valid(self):
        assert Credentials(email="a@b.co", password="x").validate() == []

    def test_missing_fields(self):
        assert Credentials().validate() == ["Email is required.", "Password is required."]


class TestRegistration:
    """Tests for Registration."""

    def test_valid(self):
        assert Registration(name="Ann", email="a@b.co", password="secret").validate() == []

    def test_invalid_email(self):
        errors = Registration(name="Ann", email="nope", password="secret").validate()
        assert errors == ["Email must be a valid email address."]

    def test_short_password(self):
        errors = Registration(name="Ann", email="a@b.co", password="12345").validate()
        assert errors == ["Password must be at least 6 characters."]

    def test_payload_is_trimmed(self):
        payload = Registration(name=" Ann ", email=" a@b.co ", password=" pw ").to_payload()
        assert payload == {"name": "Ann", "email": "a@b.co", "password": " pw "}


class TestEnsureValid:
    """Tests for ensure_valid()."""

    def test_raises_with_all_errors(self):
        with pytest.raises(ValidationError) as exc_info:
            ensure_valid(Registration())
        assert exc_info.value.errors == [
            "Name is required.",
            "Email is required.",
            "Password must be at least 6 characters.",
        ]

    def test_passes_valid_form(self):
        ensure_valid(Credentials(email="a@b.co", password="x"))
