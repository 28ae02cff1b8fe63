from typing import Any

from tasklist.errors import FieldValidationError
from tasklist.utils import normalize_email

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72  # bcrypt input limit


def validate_signup(fullname: Any, email: Any, password: Any) -> tuple[str, str, str]:
    """Validate signup input, reporting every invalid field at once.

    Requirements:
    - fullname is a string with at least one non-whitespace character
    - email is a non-empty string
    - password is a string of at least MIN_PASSWORD_LENGTH characters
      and at most MAX_PASSWORD_BYTES bytes

    Returns:
        Trimmed fullname, normalized email and the password unchanged

    Raises:
        FieldValidationError: If any field doesn't meet requirements
    """
    errors: dict[str, str] = {}

    if not isinstance(fullname, str) or not fullname.strip():
        errors["fullname"] = "Full name is required"

    if not isinstance(email, str) or not email.strip():
        errors["email"] = "Email is required"

    if not isinstance(password, str) or not password:
        errors["password"] = "Password is required"
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        errors["password"] = f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"

    if errors:
        raise FieldValidationError(errors)
    return fullname.strip(), normalize_email(email), password


def validate_login(email: Any, password: Any) -> tuple[str, str]:
    """Validate that login input carries both an email and a password."""
    errors: dict[str, str] = {}

    if not isinstance(email, str) or not email.strip():
        errors["email"] = "Email is required"

    if not isinstance(password, str) or not password:
        errors["password"] = "Password is required"

    if errors:
        raise FieldValidationError(errors)
    return normalize_email(email), password
