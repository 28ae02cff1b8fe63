"""HTTP helpers shared by API tests."""

from httpx import AsyncClient

DEFAULT_PASSWORD = "password1"


def cookie_header(token: str) -> dict[str, str]:
    """Explicit session cookie header, for replaying a specific token."""
    return {"Cookie": f"sid={token}"}


async def signup(client: AsyncClient, email: str, fullname: str = "Test User", password: str = DEFAULT_PASSWORD) -> dict:
    response = await client.post("/auth/signup", json={"fullname": fullname, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()["user"]


async def login(client: AsyncClient, email: str, password: str = DEFAULT_PASSWORD) -> str:
    """Log in and return the session token (the client's cookie jar keeps it too)."""
    response = await client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.cookies["sid"]
