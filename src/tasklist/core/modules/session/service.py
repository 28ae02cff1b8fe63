from uuid import UUID

import structlog

from tasklist.core.core import Service
from tasklist.core.modules.session.models import Session
from tasklist.core.store import DocumentStore
from tasklist.utils import now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Service for managing user sessions."""

    def __init__(self, store: DocumentStore) -> None:
        super().__init__(store)
        self._collection = store.collection("sessions")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        # Single index for user_id (for counting and evicting a user's sessions)
        await self._collection.create_index("user_id")
        # TTL index for automatic session cleanup
        ttl_seconds = int(self.core.config.session_ttl.total_seconds())
        await self._collection.create_index("created_at", expire_after_seconds=ttl_seconds)

    async def create_session(self, user_id: UUID) -> Session:
        created_at = now()
        session = Session(user_id=user_id, created_at=created_at, expires_at=created_at + self.core.config.session_ttl)
        await self._collection.insert_one(session.to_mongo())
        logger.info("session_created", user_id=str(user_id), session_id=str(session.id))
        return session

    async def enforce_concurrency_limit(self, user_id: UUID, max_sessions: int) -> int:
        """Evict the user's oldest session if they hold more than max_sessions.

        Runs after insertion, so concurrent logins can leave the count above
        the limit until the next login. Returns the number of sessions evicted.
        """
        total = await self._collection.count({"user_id": user_id})
        if total <= max_sessions:
            return 0

        evicted = await self._collection.find_one_and_delete({"user_id": user_id}, sort=[("created_at", 1)])
        if evicted is None:
            return 0
        logger.info("session_evicted", user_id=str(user_id), session_id=str(evicted["_id"]))
        return 1

    async def get_session(self, session_id: UUID) -> Session | None:
        session = await self._collection.find_one({"_id": session_id})
        return Session.model_validate(session) if session is not None else None

    async def count_sessions(self, user_id: UUID) -> int:
        return await self._collection.count({"user_id": user_id})

    async def destroy_session(self, session_id: UUID) -> None:
        """Delete a session by id. Deleting a missing session is not an error."""
        deleted = await self._collection.delete_one({"_id": session_id})
        logger.info("session_destroyed", session_id=str(session_id), existed=bool(deleted))
