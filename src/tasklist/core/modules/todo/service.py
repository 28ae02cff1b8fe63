from typing import Any
from uuid import UUID

import structlog

from tasklist.core.core import Service
from tasklist.core.modules.todo.models import Todo
from tasklist.core.modules.todo.validators import validate_text, validate_update
from tasklist.core.store import DocumentStore
from tasklist.errors import NotFoundError

logger = structlog.get_logger(__name__)


class TodoService(Service):
    """Manages todos. Every query is filtered by the owning user id."""

    def __init__(self, store: DocumentStore) -> None:
        super().__init__(store)
        self._collection = store.collection("todos")

    async def on_start(self) -> None:
        await self._collection.create_index("user_id")

    async def list_todos(self, user_id: UUID) -> list[Todo]:
        """Get all todos of a user, oldest first."""
        documents = await self._collection.find({"user_id": user_id}, sort=[("created_at", 1)])
        return Todo.list_documents(documents)

    async def create_todo(self, user_id: UUID, text: Any) -> Todo:
        todo = Todo(user_id=user_id, text=validate_text(text))
        await self._collection.insert_one(todo.to_mongo())
        logger.info("todo_created", user_id=str(user_id), todo_id=str(todo.id))
        return todo

    async def get_todo(self, user_id: UUID, todo_id: UUID) -> Todo:
        todo = await self._collection.find_one({"_id": todo_id, "user_id": user_id})
        if todo is None:
            raise NotFoundError("Todo not found")
        return Todo.model_validate(todo)

    async def update_todo(self, user_id: UUID, todo_id: UUID, fields: dict[str, Any]) -> Todo:
        """Update either the text or the completed flag of a todo."""
        changes = validate_update(fields)
        matched = await self._collection.update_one({"_id": todo_id, "user_id": user_id}, changes)
        if not matched:
            raise NotFoundError("Todo not found")
        return await self.get_todo(user_id, todo_id)

    async def delete_todo(self, user_id: UUID, todo_id: UUID) -> None:
        deleted = await self._collection.delete_one({"_id": todo_id, "user_id": user_id})
        if not deleted:
            raise NotFoundError("Todo not found")
        logger.info("todo_deleted", user_id=str(user_id), todo_id=str(todo_id))
