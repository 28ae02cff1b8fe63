import structlog

from tasklist.core.core import Service
from tasklist.core.modules.session.token import parse_session_id
from tasklist.core.modules.user.models import User
from tasklist.errors import AuthenticationError

logger = structlog.get_logger(__name__)


class AccessService(Service):
    """Resolves session tokens to users; every protected operation goes through here."""

    async def authenticate(self, token: str | None) -> User:
        """Return the user behind a live session token.

        Every failure raises the same AuthenticationError; the cause is only
        logged. Expiry is left to the store's TTL index, so an existing
        session is treated as live.
        """
        if not token:
            raise _reject("missing_token")

        raw_session_id = self.core.tokens.session_id(token)
        if raw_session_id is None:
            raise _reject("invalid_token")

        session_id = parse_session_id(raw_session_id)
        if session_id is None:
            raise _reject("invalid_session_id")

        session = await self.core.services.session.get_session(session_id)
        if session is None:
            raise _reject("session_not_found")

        user = await self.core.services.user.get_user(session.user_id)
        if user is None:
            raise _reject("orphaned_session")

        return user


def _reject(reason: str) -> AuthenticationError:
    logger.debug("authentication_failed", reason=reason)
    return AuthenticationError()
