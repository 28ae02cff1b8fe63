from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, NamedTuple
from uuid import UUID

from tasklist.config import Config
from tasklist.core.core import Core
from tasklist.core.modules.session.models import SessionToken
from tasklist.core.modules.session.token import format_session_id, parse_session_id
from tasklist.core.modules.todo.models import TodoView
from tasklist.core.modules.user.models import UserView
from tasklist.core.store import DocumentStore
from tasklist.errors import NotFoundError, ValidationError


class LoginResult(NamedTuple):
    token: SessionToken
    user: UserView


class App:
    """Facade for all application operations, authenticates requests before delegating to Core."""

    def __init__(self, config: Config, store: DocumentStore | None = None) -> None:
        self._core = Core(config, store)

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def signup(self, fullname: str | None, email: str | None, password: str | None) -> UserView:
        """Register a new user account."""
        user = await self._core.services.user.create_user(fullname, email, password)
        return UserView.from_domain(user)

    async def login(self, email: str | None, password: str | None) -> LoginResult:
        """Verify credentials, open a session and sign a token for it."""
        user = await self._core.services.user.verify_credentials(email, password)
        session = await self._core.services.session.create_session(user.id)
        await self._core.services.session.enforce_concurrency_limit(user.id, self.config.max_sessions_per_user)
        token = self._core.tokens.sign(format_session_id(session.id))
        return LoginResult(token=token, user=UserView.from_domain(user))

    async def logout(self, token: str | None) -> None:
        """Destroy the session behind a token. A missing token is a no-op."""
        if not token:
            return
        raw_session_id = self._core.tokens.session_id(token)
        if raw_session_id is None:
            raise ValidationError("Invalid session cookie")
        session_id = parse_session_id(raw_session_id)
        if session_id is not None:
            await self._core.services.session.destroy_session(session_id)

    async def get_current_user(self, token: str | None) -> UserView:
        """Get the user owning the session token."""
        user = await self._core.services.access.authenticate(token)
        return UserView.from_domain(user)

    async def get_todos(self, token: str | None) -> list[TodoView]:
        """Get all todos of the current user."""
        user = await self._core.services.access.authenticate(token)
        todos = await self._core.services.todo.list_todos(user.id)
        return [TodoView.from_domain(todo) for todo in todos]

    async def create_todo(self, token: str | None, text: Any) -> TodoView:
        user = await self._core.services.access.authenticate(token)
        todo = await self._core.services.todo.create_todo(user.id, text)
        return TodoView.from_domain(todo)

    async def get_todo(self, token: str | None, todo_id: str) -> TodoView:
        user = await self._core.services.access.authenticate(token)
        todo = await self._core.services.todo.get_todo(user.id, self._resolve_todo_id(todo_id))
        return TodoView.from_domain(todo)

    async def update_todo(self, token: str | None, todo_id: str, fields: dict[str, Any]) -> TodoView:
        """Update text or completion of a todo (only the fields present in ``fields``)."""
        user = await self._core.services.access.authenticate(token)
        todo = await self._core.services.todo.update_todo(user.id, self._resolve_todo_id(todo_id), fields)
        return TodoView.from_domain(todo)

    async def delete_todo(self, token: str | None, todo_id: str) -> None:
        user = await self._core.services.access.authenticate(token)
        await self._core.services.todo.delete_todo(user.id, self._resolve_todo_id(todo_id))

    def _resolve_todo_id(self, todo_id: str) -> UUID:
        try:
            return UUID(todo_id)
        except ValueError as e:
            raise NotFoundError("Todo not found") from e
