from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from tasklist.app import App
from tasklist.config import Config

SESSION_COOKIE = "sid"

cookie_scheme = APIKeyCookie(name=SESSION_COOKIE, scheme_name="SessionCookie", auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_config(request: Request) -> Config:
    return cast(Config, request.app.state.config)


async def get_session_token(token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None) -> str | None:
    """Get the raw session token from the cookie; verification happens in App."""
    return token_cookie or None


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
ConfigDep = Annotated[Config, Depends(get_config)]
SessionTokenDep = Annotated[str | None, Depends(get_session_token)]
