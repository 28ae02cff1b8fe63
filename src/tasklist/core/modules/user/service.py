import functools
from uuid import UUID

import bcrypt
import structlog

from tasklist.core.core import Service
from tasklist.core.modules.user.models import User
from tasklist.core.modules.user.validators import MAX_PASSWORD_BYTES, validate_login, validate_signup
from tasklist.core.store import DocumentStore
from tasklist.errors import ConflictError, DuplicateKeyError, InvalidCredentialsError
from tasklist.utils import normalize_email

logger = structlog.get_logger(__name__)

BCRYPT_ROUNDS = 12


@functools.cache
def dummy_password_hash() -> bytes:
    """Hash verified against for unknown emails, matching the cost of a real check."""
    return bcrypt.hashpw(b"unused-dummy-password", bcrypt.gensalt(rounds=BCRYPT_ROUNDS))


class UserService(Service):
    """Manages user accounts and credential checks."""

    def __init__(self, store: DocumentStore) -> None:
        super().__init__(store)
        self._collection = store.collection("users")

    async def get_user(self, user_id: UUID) -> User | None:
        """Get user by ID, or None if it does not exist."""
        user = await self._collection.find_one({"_id": user_id})
        return User.model_validate(user) if user is not None else None

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email (normalized before lookup), or None."""
        user = await self._collection.find_one({"email": normalize_email(email)})
        return User.model_validate(user) if user is not None else None

    async def create_user(self, fullname: str | None, email: str | None, password: str | None) -> User:
        """Create user with hashed password."""
        fullname, email, password = validate_signup(fullname, email, password)

        password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")
        user = User(fullname=fullname, email=email, password_hash=password_hash)
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            raise ConflictError("Email already exists") from e

        logger.info("user_created", user_id=str(user.id))
        return user

    async def verify_credentials(self, email: str | None, password: str | None) -> User:
        """Return the user owning these credentials.

        Raises:
            FieldValidationError: If email or password is missing
            InvalidCredentialsError: Unknown email or wrong password, indistinguishably
        """
        email, password = validate_login(email, password)

        user = await self.get_user_by_email(email)
        # bcrypt rejects inputs over 72 bytes; such passwords never match
        password_bytes = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
        too_long = len(password.encode("utf-8")) > MAX_PASSWORD_BYTES

        if user is None:
            bcrypt.checkpw(password_bytes, dummy_password_hash())
            raise InvalidCredentialsError
        if not bcrypt.checkpw(password_bytes, user.password_hash.encode("utf-8")) or too_long:
            raise InvalidCredentialsError
        return user

    async def on_start(self) -> None:
        """Create the unique email index."""
        await self._collection.create_index("email", unique=True)
