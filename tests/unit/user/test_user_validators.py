"""Tests for signup and login input validation."""

import pytest

from tasklist.core.modules.user.validators import validate_login, validate_signup
from tasklist.errors import FieldValidationError


class TestSignupValidation:
    def test_valid_input_is_normalized(self):
        fullname, email, password = validate_signup("  Alice  ", "  Alice@Example.COM ", "password1")
        assert fullname == "Alice"
        assert email == "alice@example.com"
        assert password == "password1"

    def test_all_fields_missing_reported_together(self):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_signup(None, None, None)
        assert exc_info.value.fields == {
            "fullname": "Full name is required",
            "email": "Email is required",
            "password": "Password is required",
        }

    def test_blank_fullname(self):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_signup("   ", "a@x.com", "password1")
        assert set(exc_info.value.fields) == {"fullname"}

    def test_short_password(self):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_signup("Alice", "a@x.com", "short")
        assert exc_info.value.fields == {"password": "Password must be at least 8 characters long"}

    def test_password_of_exactly_eight_characters_is_accepted(self):
        validate_signup("Alice", "a@x.com", "12345678")

    def test_password_over_bcrypt_limit(self):
        with pytest.raises(FieldValidationError, match="Invalid input data") as exc_info:
            validate_signup("Alice", "a@x.com", "p" * 73)
        assert "password" in exc_info.value.fields

    @pytest.mark.parametrize("value", [123, ["a"], {"a": 1}])
    def test_non_string_values(self, value):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_signup(value, value, value)
        assert set(exc_info.value.fields) == {"fullname", "email", "password"}


class TestLoginValidation:
    def test_valid_input(self):
        assert validate_login(" A@X.com", "anything") == ("a@x.com", "anything")

    def test_missing_fields(self):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_login("", None)
        assert exc_info.value.fields == {"email": "Email is required", "password": "Password is required"}

    def test_short_password_is_not_a_login_validation_error(self):
        # Length rules only apply at signup; login just reports invalid credentials
        assert validate_login("a@x.com", "x") == ("a@x.com", "x")
