from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from tasklist.web.deps import SESSION_COOKIE

PUBLIC_ENDPOINTS = {
    ("POST", "/auth/signup"),
    ("POST", "/auth/login"),
    ("GET", "/health"),
}


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Tasklist API",
            version="0.1.0",
            summary="Multi-user task list with cookie sessions",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "SessionCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": SESSION_COOKIE,
                "description": "Signed session token set by /auth/login",
            },
        }

        # Apply security globally (overridden for public endpoints)
        openapi_schema["security"] = [{"SessionCookie": []}]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")
    fields: dict[str, str] | None = Field(None, description="Per-field messages for validation errors")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Not authenticated", "type": "authentication_error"},
                {"message": "Todo not found", "type": "not_found"},
                {
                    "message": "Invalid input data",
                    "type": "field_validation_error",
                    "fields": {"password": "Password must be at least 8 characters long"},
                },
            ]
        }
    }
