from uuid import UUID

from pydantic import BaseModel, Field

from tasklist.core.db import MongoModel


class User(MongoModel):
    """User domain model with credentials.

    Indexed on email - unique.
    """

    fullname: str
    email: str  # trimmed, lower-cased
    password_hash: str  # bcrypt hash


class UserView(BaseModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    fullname: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, fullname=user.fullname, email=user.email)
