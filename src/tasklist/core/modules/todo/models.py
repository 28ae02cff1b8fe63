from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from tasklist.core.db import MongoModel
from tasklist.utils import now


class Todo(MongoModel):
    """Todo item owned by a single user.

    Indexed on user_id.
    """

    user_id: UUID
    text: str
    completed: bool = False
    created_at: datetime = Field(default_factory=now)


class TodoView(BaseModel):
    """Todo item (API representation)."""

    id: UUID = Field(..., description="Todo ID")
    text: str = Field(..., description="Todo text")
    completed: bool = Field(..., description="Whether the todo is done")

    @classmethod
    def from_domain(cls, todo: Todo) -> "TodoView":
        return cls(id=todo.id, text=todo.text, completed=todo.completed)
