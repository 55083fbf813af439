"""Password Hasher — salted one-way bcrypt hashing via passlib.

Invariants:
    - hash() never returns the input; every call embeds a fresh random salt
    - verify() is the algorithm's own comparison, never string equality
    - verify() returns False (does not raise) on a malformed stored hash
    - bcrypt work runs in a worker thread; the event loop is never blocked

Design Decisions:
    - Work factor fixed per process (settings.bcrypt_rounds, default 10)
    - dummy_verify() lets sign-in spend the same effort when the email is unknown
"""

import asyncio
import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS: int = 10


class BcryptPasswordHasher:
    """PasswordHasher backed by passlib's bcrypt scheme."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds,
        )

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self._context.hash, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        try:
            return await asyncio.to_thread(
                self._context.verify, password, password_hash,
            )
        except ValueError:
            logger.warning("Stored password hash is not a recognised bcrypt hash")
            return False

    async def dummy_verify(self) -> None:
        await asyncio.to_thread(self._context.dummy_verify)
