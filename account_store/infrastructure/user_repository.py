"""SQL User Repository — users table access bound to one AsyncSession.

Invariants:
    - Every read returns PublicUser; the ORM row never leaves this module
    - get_password_hash selects the hash column only; get_credentials is the
      one read that pairs a hash with a PublicUser (sign-in)
    - update_profile returns the row produced by the UPDATE itself (RETURNING),
      never a second SELECT
    - A unique violation on insert surfaces as AccountExistsError
    - Repository never commits: the caller's transaction decides

Design Decisions:
    - Two explicit UPDATE statements chosen by the PasswordUpdate variant:
      the password column is in exactly one of them
    - list_all orders by id (insertion order of the autoincrement key)
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from account_store.core.domain_types import (
    KeepPassword, PasswordUpdate, PublicUser, ReplacePassword,
)
from account_store.core.errors import AccountExistsError, ErrorContext
from account_store.models.user import User

logger = logging.getLogger(__name__)

_PUBLIC_COLUMNS = (User.id, User.username, User.email, User.bio, User.avatar)


class SqlUserRepository:
    """UserRepository over SQLAlchemy Core statements."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> PublicUser | None:
        result = await self.db.execute(
            select(*_PUBLIC_COLUMNS).where(User.email == email),
        )
        row = result.first()
        return PublicUser.from_row(row) if row else None

    async def get_password_hash(self, email: str) -> str | None:
        result = await self.db.execute(
            select(User.password_hash).where(User.email == email),
        )
        return result.scalar_one_or_none()

    async def get_credentials(
        self, email: str,
    ) -> tuple[PublicUser, str] | None:
        """Public row plus its hash, for sign-in only."""
        result = await self.db.execute(
            select(*_PUBLIC_COLUMNS, User.password_hash).where(User.email == email),
        )
        row = result.first()
        if row is None:
            return None
        return PublicUser.from_row(row), row.password_hash

    async def insert(
        self, username: str, email: str, password_hash: str,
        bio: str, avatar: str,
    ) -> PublicUser:
        """Insert a complete row. Caller commits."""
        user = User(
            username=username, email=email, password_hash=password_hash,
            bio=bio, avatar=avatar,
        )
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError as e:
            logger.info(
                "Duplicate email rejected by unique constraint",
                extra={"operation": "register"},
            )
            raise AccountExistsError(
                ErrorContext(operation="register", debug_info={"db": str(e.orig)}),
            )
        return PublicUser.from_row(user)

    async def update_profile(
        self, email: str, username: str, bio: str, avatar: str,
        password: PasswordUpdate,
    ) -> PublicUser | None:
        """Apply a profile edit. None when no row matches the email."""
        match password:
            case ReplacePassword(password_hash=password_hash):
                stmt = _update_replacing_password(
                    email, username, password_hash, bio, avatar,
                )
            case KeepPassword():
                stmt = _update_keeping_password(email, username, bio, avatar)
            case _:
                raise TypeError(f"Unknown password update: {password!r}")

        result = await self.db.execute(
            stmt.returning(*_PUBLIC_COLUMNS),
            execution_options={"synchronize_session": False},
        )
        row = result.first()
        return PublicUser.from_row(row) if row else None

    async def delete_by_email(self, email: str) -> int:
        """Delete matching row. Returns affected row count (0 or 1)."""
        result = await self.db.execute(
            delete(User).where(User.email == email),
            execution_options={"synchronize_session": False},
        )
        return result.rowcount

    async def list_all(self) -> list[PublicUser]:
        result = await self.db.execute(
            select(*_PUBLIC_COLUMNS).order_by(User.id),
        )
        return [PublicUser.from_row(row) for row in result.all()]


def _update_keeping_password(email: str, username: str, bio: str, avatar: str):
    return (
        update(User)
        .where(User.email == email)
        .values(username=username, bio=bio, avatar=avatar)
    )


def _update_replacing_password(
    email: str, username: str, password_hash: str, bio: str, avatar: str,
):
    return (
        update(User)
        .where(User.email == email)
        .values(
            username=username, password_hash=password_hash,
            bio=bio, avatar=avatar,
        )
    )
