from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when a request cannot be tied to a live session.

    The message is the same for every cause (missing token, bad signature,
    expired or deleted session, orphaned session).
    """

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Raised on login for both an unknown email and a wrong password."""

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message)


class ConflictError(UserError):
    """Raised when a write collides with an existing record."""


class ValidationError(UserError):
    """Raised when user input fails validation."""


class InvalidJsonError(ValidationError):
    """Raised when a request body is not valid JSON."""

    def __init__(self, message: str = "Request body is not valid JSON") -> None:
        super().__init__(message)


class FieldValidationError(ValidationError):
    """Raised when one or more named input fields are invalid."""

    def __init__(self, fields: dict[str, str], message: str = "Invalid input data") -> None:
        super().__init__(message)
        self.fields = fields


class StoreError(Exception):
    """Raised when the document store fails unexpectedly.

    Not a UserError: the details are logged, the caller only sees a generic message.
    """


class DuplicateKeyError(StoreError):
    """Raised when an insert violates a unique index."""
