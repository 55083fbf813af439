"""User ORM — the sole persisted entity, one row per registered account.

Invariants:
    - email is UNIQUE NOT NULL: the store rejects a second row for the same email
    - password_hash holds a salted bcrypt hash, never the raw secret
    - Every column NOT NULL: a row is either complete or absent

Design Decisions:
    - Integer autoincrement id: SERIAL on PostgreSQL
    - No ORM relationships: posts and other entities live outside this service
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from account_store.db.base import Base


class User(Base):
    """Account row. Never serialized directly; see PublicUser."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    username: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    bio: Mapped[str] = mapped_column(Text, nullable=False)
    avatar: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
