"""Tests for the todo endpoints."""

from uuid import uuid4

import pytest
import pytest_asyncio
from helpers import login, signup


@pytest_asyncio.fixture
async def alice(make_client):
    """Client logged in as Alice."""
    client = make_client()
    await signup(client, "alice@x.com", fullname="Alice")
    await login(client, "alice@x.com")
    return client


@pytest_asyncio.fixture
async def bob(make_client):
    """Client logged in as Bob."""
    client = make_client()
    await signup(client, "bob@x.com", fullname="Bob")
    await login(client, "bob@x.com")
    return client


@pytest_asyncio.fixture
async def alice_todo(alice):
    response = await alice.post("/todos", json={"text": "buy milk"})
    assert response.status_code == 201
    return response.json()


class TestAuthRequired:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "path", "body"),
        [
            ("GET", "/todos", None),
            ("POST", "/todos", {"text": "x"}),
            ("GET", f"/todos/{uuid4()}", None),
            ("PATCH", f"/todos/{uuid4()}", {"completed": True}),
            ("DELETE", f"/todos/{uuid4()}", None),
        ],
    )
    async def test_requires_session(self, client, method, path, body):
        response = await client.request(method, path, json=body)
        assert response.status_code == 401
        assert response.json()["message"] == "Not authenticated"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "path", "body"),
        [
            ("POST", "/todos", {"text": 123}),
            ("POST", "/todos", {}),
            ("PATCH", f"/todos/{uuid4()}", {"completed": "yes"}),
            ("PATCH", f"/todos/{uuid4()}", {"text": "a", "completed": True}),
        ],
    )
    async def test_invalid_body_without_session_is_401(self, client, method, path, body):
        response = await client.request(method, path, json=body)
        assert response.status_code == 401


class TestCreate:
    @pytest.mark.asyncio
    async def test_create(self, alice):
        response = await alice.post("/todos", json={"text": "  buy milk "})
        assert response.status_code == 201
        data = response.json()
        assert data["text"] == "buy milk"
        assert data["completed"] is False
        assert set(data) == {"id", "text", "completed"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body", [{}, {"text": ""}, {"text": "   "}, {"text": None}, {"text": 123}, {"text": ["a"]}, {"text": {"a": 1}}]
    )
    async def test_invalid_text(self, alice, body):
        response = await alice.post("/todos", json=body)
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid todo text provided"
        assert (await alice.get("/todos")).json() == []


class TestList:
    @pytest.mark.asyncio
    async def test_list_only_own_todos(self, alice, bob, alice_todo):
        await bob.post("/todos", json={"text": "bob's"})

        alice_list = (await alice.get("/todos")).json()
        bob_list = (await bob.get("/todos")).json()
        assert alice_list == [alice_todo]
        assert [todo["text"] for todo in bob_list] == ["bob's"]

    @pytest.mark.asyncio
    async def test_empty_list(self, alice):
        response = await alice.get("/todos")
        assert response.status_code == 200
        assert response.json() == []


class TestGet:
    @pytest.mark.asyncio
    async def test_get_own(self, alice, alice_todo):
        response = await alice.get(f"/todos/{alice_todo['id']}")
        assert response.status_code == 200
        assert response.json() == alice_todo

    @pytest.mark.asyncio
    @pytest.mark.parametrize("todo_id", ["not-an-id", str(uuid4())])
    async def test_unknown_id(self, alice, todo_id):
        response = await alice.get(f"/todos/{todo_id}")
        assert response.status_code == 404
        assert response.json() == {"message": "Todo not found", "type": "not_found"}


class TestCrossUserAccess:
    """Another user's todo behaves exactly like a missing one."""

    @pytest.mark.asyncio
    async def test_get(self, bob, alice_todo):
        response = await bob.get(f"/todos/{alice_todo['id']}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_patch(self, alice, bob, alice_todo):
        response = await bob.patch(f"/todos/{alice_todo['id']}", json={"completed": True})
        assert response.status_code == 404
        assert (await alice.get(f"/todos/{alice_todo['id']}")).json()["completed"] is False

    @pytest.mark.asyncio
    async def test_delete(self, alice, bob, alice_todo):
        response = await bob.delete(f"/todos/{alice_todo['id']}")
        assert response.status_code == 404
        assert (await alice.get(f"/todos/{alice_todo['id']}")).status_code == 200


class TestPatch:
    @pytest.mark.asyncio
    async def test_update_text(self, alice, alice_todo):
        response = await alice.patch(f"/todos/{alice_todo['id']}", json={"text": " buy oat milk "})
        assert response.status_code == 200
        assert response.json() == {**alice_todo, "text": "buy oat milk"}

    @pytest.mark.asyncio
    async def test_update_completed(self, alice, alice_todo):
        response = await alice.patch(f"/todos/{alice_todo['id']}", json={"completed": True})
        assert response.status_code == 200
        assert response.json()["completed"] is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body", [{"text": "new", "completed": True}, {"text": 5, "completed": True}, {"text": None, "completed": None}]
    )
    async def test_both_fields_rejected(self, alice, alice_todo, body):
        response = await alice.patch(f"/todos/{alice_todo['id']}", json=body)
        assert response.status_code == 400
        assert response.json()["message"] == "Only one field (text or completed) can be updated at a time"

    @pytest.mark.asyncio
    async def test_neither_field_rejected(self, alice, alice_todo):
        response = await alice.patch(f"/todos/{alice_todo['id']}", json={})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid fields to update"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"text": ""},
            {"text": None},
            {"text": 5},
            {"completed": None},
            {"completed": "yes"},
            {"completed": 1},
            {"completed": "true"},
        ],
    )
    async def test_invalid_values_rejected(self, alice, alice_todo, body):
        response = await alice.patch(f"/todos/{alice_todo['id']}", json=body)
        assert response.status_code == 400
        assert response.json() == {"message": "Invalid fields to update", "type": "validation_error"}
        assert (await alice.get(f"/todos/{alice_todo['id']}")).json() == alice_todo

    @pytest.mark.asyncio
    async def test_unknown_todo(self, alice):
        response = await alice.patch(f"/todos/{uuid4()}", json={"completed": True})
        assert response.status_code == 404


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete(self, alice, alice_todo):
        response = await alice.delete(f"/todos/{alice_todo['id']}")
        assert response.status_code == 200
        assert response.json() == {"message": "Todo deleted successfully"}
        assert (await alice.get("/todos")).json() == []

    @pytest.mark.asyncio
    async def test_delete_twice(self, alice, alice_todo):
        await alice.delete(f"/todos/{alice_todo['id']}")
        response = await alice.delete(f"/todos/{alice_todo['id']}")
        assert response.status_code == 404
