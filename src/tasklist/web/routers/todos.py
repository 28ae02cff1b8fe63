"""Todo-related API endpoints."""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from tasklist.core.modules.todo.models import TodoView
from tasklist.web.deps import AppDep, SessionTokenDep
from tasklist.web.openapi import ErrorResponse
from tasklist.web.routers.auth import MessageResponse

router: APIRouter = APIRouter(tags=["todos"])


class CreateTodoRequest(BaseModel):
    """Request to create a new todo."""

    # Type checked by validate_text
    text: Any = Field(None, description="The todo text")


class UpdateTodoRequest(BaseModel):
    """Partial update: exactly one of text or completed."""

    text: Any = Field(None, description="New todo text")
    completed: Any = Field(None, description="New completion state")


@router.get(
    "/todos",
    summary="List todos",
    description="Get all todos of the current user, oldest first.",
    operation_id="listTodos",
    responses={
        200: {"description": "List of todos"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_todos(app: AppDep, token: SessionTokenDep) -> list[TodoView]:
    return await app.get_todos(token)


@router.post(
    "/todos",
    summary="Create todo",
    description="Add a new todo for the current user. Text is trimmed and must not be empty.",
    operation_id="createTodo",
    status_code=201,
    responses={
        201: {"description": "Todo created successfully"},
        400: {"model": ErrorResponse, "description": "Invalid todo text"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_todo(request: CreateTodoRequest, app: AppDep, token: SessionTokenDep) -> TodoView:
    return await app.create_todo(token, request.text)


@router.get(
    "/todos/{todo_id}",
    summary="Get todo",
    description="Get a single todo of the current user.",
    operation_id="getTodo",
    responses={
        200: {"description": "Todo details"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Todo not found"},
    },
)
async def get_todo(todo_id: str, app: AppDep, token: SessionTokenDep) -> TodoView:
    return await app.get_todo(token, todo_id)


@router.patch(
    "/todos/{todo_id}",
    summary="Update todo",
    description="Change either the text or the completion state of a todo, never both in one request.",
    operation_id="updateTodo",
    responses={
        200: {"description": "Todo updated successfully"},
        400: {"model": ErrorResponse, "description": "Both or neither of text and completed given"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Todo not found"},
    },
)
async def update_todo(todo_id: str, request: UpdateTodoRequest, app: AppDep, token: SessionTokenDep) -> TodoView:
    # Only keys the client sent; an explicit null still counts as present
    fields = request.model_dump(exclude_unset=True)
    return await app.update_todo(token, todo_id, fields)


@router.delete(
    "/todos/{todo_id}",
    summary="Delete todo",
    description="Delete a todo of the current user.",
    operation_id="deleteTodo",
    responses={
        200: {"description": "Todo deleted successfully"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Todo not found"},
    },
)
async def delete_todo(todo_id: str, app: AppDep, token: SessionTokenDep) -> MessageResponse:
    await app.delete_todo(token, todo_id)
    return MessageResponse(message="Todo deleted successfully")
