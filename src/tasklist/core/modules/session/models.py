"""Session management models."""

from datetime import datetime
from typing import NewType
from uuid import UUID

from pydantic import Field

from tasklist.core.db import MongoModel
from tasklist.utils import now

SessionToken = NewType("SessionToken", str)


class Session(MongoModel):
    """User authentication session.

    Indexed on user_id, created_at (TTL, session lifetime).
    """

    user_id: UUID
    created_at: datetime = Field(default_factory=now)
    expires_at: datetime
