from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from tasklist.core.modules.user.models import UserView
from tasklist.utils import now
from tasklist.web.deps import SESSION_COOKIE, AppDep, ConfigDep, SessionTokenDep
from tasklist.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class SignupRequest(BaseModel):
    """Account creation request."""

    fullname: str | None = Field(None, description="Full name of the user")
    email: str | None = Field(None, description="Email address, used as the login name")
    password: str | None = Field(None, description="Password, at least 8 characters")


class LoginRequest(BaseModel):
    """Authentication request."""

    email: str | None = Field(None, description="Email address for authentication")
    password: str | None = Field(None, description="Password for authentication")


class UserResponse(BaseModel):
    """Message and the affected user account."""

    message: str = Field(..., description="Human-readable result")
    user: UserView = Field(..., description="User account")


class CurrentUserResponse(BaseModel):
    user: UserView = Field(..., description="Currently authenticated user")


class MessageResponse(BaseModel):
    message: str = Field(..., description="Human-readable result")


@router.post(
    "/auth/signup",
    summary="Create account",
    description="Register a new user with full name, email and password.",
    operation_id="signup",
    status_code=201,
    responses={
        201: {"description": "User created successfully"},
        400: {"model": ErrorResponse, "description": "Request body is not valid JSON"},
        409: {"model": ErrorResponse, "description": "Email already exists"},
        422: {"model": ErrorResponse, "description": "Invalid input data"},
    },
)
async def signup(signup_data: SignupRequest, app: AppDep) -> UserResponse:
    user = await app.signup(signup_data.fullname, signup_data.email, signup_data.password)
    return UserResponse(message="New user created successfully", user=user)


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with email and password. The session token is returned in the `sid` cookie.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        400: {"model": ErrorResponse, "description": "Request body is not valid JSON"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        422: {"model": ErrorResponse, "description": "Invalid input data"},
    },
)
async def login(login_data: LoginRequest, app: AppDep, config: ConfigDep, response: Response) -> UserResponse:
    """Authenticate user and create session."""
    result = await app.login(login_data.email, login_data.password)

    response.set_cookie(
        key=SESSION_COOKIE,
        value=result.token,
        max_age=int(config.session_ttl.total_seconds()),  # Matches session TTL
        expires=now() + config.session_ttl,
        httponly=True,
        secure=config.cookie_secure,
        samesite="lax",
    )

    return UserResponse(message="Login successful", user=result.user)


@router.post(
    "/auth/logout",
    summary="End session",
    description="Invalidate the current session and clear the session cookie.",
    operation_id="logout",
    responses={
        200: {"description": "Successfully logged out"},
        400: {"model": ErrorResponse, "description": "Invalid session cookie"},
    },
)
async def logout(app: AppDep, config: ConfigDep, token: SessionTokenDep, response: Response) -> MessageResponse:
    await app.logout(token)
    if token:
        response.delete_cookie(SESSION_COOKIE, httponly=True, secure=config.cookie_secure, samesite="lax")
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/auth/me",
    summary="Get current user",
    description="Get the account of the currently authenticated user.",
    operation_id="getCurrentUser",
    responses={
        200: {"description": "Current user"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def me(app: AppDep, token: SessionTokenDep) -> CurrentUserResponse:
    return CurrentUserResponse(user=await app.get_current_user(token))
