"""Signed session tokens.

A token is ``{session_id}.{mac}`` where ``mac`` is the hex HMAC-SHA512 of the
session id under the server secret. Session ids are rendered as 32 hex
characters, so they never contain the separator and splitting on the first
``.`` is unambiguous.
"""

import hashlib
import hmac
import re
from uuid import UUID

from tasklist.core.modules.session.models import SessionToken

SEPARATOR = "."
SESSION_ID_RE = re.compile(r"[0-9a-f]{32}")


def format_session_id(session_id: UUID) -> str:
    return session_id.hex


def parse_session_id(value: str) -> UUID | None:
    """Parse the fixed-width hex form produced by format_session_id."""
    if not SESSION_ID_RE.fullmatch(value):
        return None
    return UUID(hex=value)


class TokenCodec:
    """Signs session ids and verifies tokens with a fixed secret key."""

    def __init__(self, secret_key: str) -> None:
        if not secret_key:
            raise ValueError("Session secret key must not be empty")
        self._key = secret_key.encode("utf-8")

    def _mac(self, session_id: str) -> str:
        return hmac.new(self._key, session_id.encode("utf-8"), hashlib.sha512).hexdigest()

    def sign(self, session_id: str) -> SessionToken:
        return SessionToken(f"{session_id}{SEPARATOR}{self._mac(session_id)}")

    def session_id(self, token: str) -> str | None:
        """Return the session id of a token whose MAC verifies, otherwise None."""
        session_id, separator, mac = token.partition(SEPARATOR)
        if not separator or not session_id or not mac:
            return None
        expected = self._mac(session_id)
        if not hmac.compare_digest(expected.encode("utf-8"), mac.encode("utf-8")):
            return None
        return session_id

    def verify(self, token: str) -> bool:
        return self.session_id(token) is not None
