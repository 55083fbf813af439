"""Account Service — register, authenticate, update, verify, delete and list accounts.

Invariants:
    - Required fields re-checked here before any store round trip
    - Every result is a PublicUser (or nothing); hashes never leave the service
    - authenticate collapses unknown email and wrong password into one
      InvalidCredentialsError; verify_password and delete_user stay specific
    - update_profile runs in one transaction: hash, UPDATE ... RETURNING,
      rollback + AccountNotFoundError when zero rows match
    - No retries: store failures surface once as StoreUnavailableError

Design Decisions:
    - Repository factory injected alongside the manager: tests swap either side
    - Duplicate check before hashing avoids bcrypt work for known conflicts;
      the unique constraint still settles concurrent registrations
"""

import logging
from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from account_store.core.domain_types import (
    KeepPassword, PasswordUpdate, PublicUser, ReplacePassword,
)
from account_store.core.enforce_fields import password_supplied, require_fields
from account_store.core.errors import (
    AccountExistsError, AccountNotFoundError, ErrorContext,
    InvalidCredentialsError, WrongPasswordError,
)
from account_store.core.repository_protocols import PasswordHasher, UserRepository
from account_store.infrastructure.database import DatabaseSessionManager
from account_store.infrastructure.user_repository import SqlUserRepository

logger = logging.getLogger(__name__)

RepositoryFactory = Callable[[AsyncSession], UserRepository]


class AccountService:
    """Credential and profile-state operations over the users table."""

    def __init__(
        self,
        db_manager: DatabaseSessionManager,
        hasher: PasswordHasher,
        repository_factory: RepositoryFactory = SqlUserRepository,
    ):
        self._db = db_manager
        self._hasher = hasher
        self._repo = repository_factory

    async def register(
        self, username: str, email: str, password: str, bio: str, avatar: str,
    ) -> PublicUser:
        """Create an account. AccountExistsError if the email is taken."""
        require_fields(
            username=username, email=email, password=password,
            bio=bio, avatar=avatar,
        )
        async with self._db.session() as db:
            existing = await self._repo(db).get_by_email(email)
        if existing:
            raise AccountExistsError(ErrorContext(operation="register"))

        password_hash = await self._hasher.hash(password)
        async with self._db.transaction() as db:
            user = await self._repo(db).insert(
                username=username, email=email, password_hash=password_hash,
                bio=bio, avatar=avatar,
            )
        logger.info("Account registered", extra={"user_id": user.id, "operation": "register"})
        return user

    async def authenticate(self, email: str, password: str) -> PublicUser:
        """Sign in. Any failure is the same InvalidCredentialsError."""
        require_fields(email=email, password=password)
        async with self._db.session() as db:
            credentials = await self._repo(db).get_credentials(email)

        if credentials is None:
            await self._hasher.dummy_verify()
            raise InvalidCredentialsError(ErrorContext(operation="authenticate"))
        user, password_hash = credentials
        if not await self._hasher.verify(password, password_hash):
            raise InvalidCredentialsError(ErrorContext(operation="authenticate"))
        return user

    async def update_profile(
        self,
        email: str,
        username: str,
        bio: str,
        avatar: str,
        password: str | None = None,
    ) -> PublicUser:
        """Edit username/bio/avatar, and the password only when one is given."""
        require_fields(email=email, username=username, bio=bio, avatar=avatar)
        async with self._db.transaction() as db:
            password_update: PasswordUpdate = KeepPassword()
            if password_supplied(password):
                password_update = ReplacePassword(await self._hasher.hash(password))
            user = await self._repo(db).update_profile(
                email=email, username=username, bio=bio, avatar=avatar,
                password=password_update,
            )
            if user is None:
                raise AccountNotFoundError(ErrorContext(operation="update_profile"))
        logger.info(
            "Profile updated", extra={"user_id": user.id, "operation": "update_profile"},
        )
        return user

    async def verify_password(self, email: str, password: str) -> None:
        """Re-confirm a password before a sensitive action."""
        require_fields(email=email, password=password)
        async with self._db.session() as db:
            password_hash = await self._repo(db).get_password_hash(email)
        if password_hash is None:
            raise AccountNotFoundError(ErrorContext(operation="verify_password"))
        if not await self._hasher.verify(password, password_hash):
            raise WrongPasswordError(ErrorContext(operation="verify_password"))

    async def delete_user(self, email: str) -> None:
        require_fields(email=email)
        async with self._db.transaction() as db:
            deleted = await self._repo(db).delete_by_email(email)
            if deleted == 0:
                raise AccountNotFoundError(ErrorContext(operation="delete_user"))
        logger.info("Account deleted", extra={"operation": "delete_user"})

    async def list_users(self) -> list[PublicUser]:
        """All accounts, sanitized. Callers must not rely on the order."""
        async with self._db.session() as db:
            return await self._repo(db).list_all()
