"""Boundary Protocols — contracts between the account service and its collaborators.

Invariants:
    - Core NEVER imports from infrastructure; dependencies point inward
    - Repository methods return PublicUser, never the ORM row or a hash-bearing dict
    - Hash columns are read only by get_password_hash (hash alone) and
      get_credentials (sign-in)

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async in Protocol: implementations do IO; core functions that use these
      types stay synchronous
"""

from typing import Protocol

from account_store.core.domain_types import PasswordUpdate, PublicUser


class UserRepository(Protocol):
    """Contract for user persistence, implemented by infrastructure."""
    async def get_by_email(self, email: str) -> PublicUser | None: ...
    async def get_password_hash(self, email: str) -> str | None: ...
    async def get_credentials(
        self, email: str,
    ) -> tuple[PublicUser, str] | None: ...
    async def insert(
        self, username: str, email: str, password_hash: str,
        bio: str, avatar: str,
    ) -> PublicUser: ...
    async def update_profile(
        self, email: str, username: str, bio: str, avatar: str,
        password: PasswordUpdate,
    ) -> PublicUser | None: ...
    async def delete_by_email(self, email: str) -> int: ...
    async def list_all(self) -> list[PublicUser]: ...


class PasswordHasher(Protocol):
    """Contract for one-way salted password hashing."""
    async def hash(self, password: str) -> str: ...
    async def verify(self, password: str, password_hash: str) -> bool: ...
    async def dummy_verify(self) -> None: ...
