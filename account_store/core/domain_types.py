"""Domain Types — identity, sanitized projection and password-update variants.

Invariants:
    - PublicUser has no password field: a sanitized user cannot leak a hash
    - PasswordUpdate is exactly KeepPassword | ReplacePassword, never a bare optional string
    - ReplacePassword carries a hash, never the raw secret

Design Decisions:
    - Frozen dataclasses over dicts: projection is immutable once read from the store
    - Tagged variants over `str | None`: the repository picks one of two explicit
      UPDATE statements instead of assembling columns conditionally
"""

from dataclasses import asdict, dataclass
from typing import Any, NewType, Union


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Projections ─────────────────────────────────────────────────

@dataclass(frozen=True)
class PublicUser:
    """Sanitized user, used for every outward-facing representation of an account."""
    id: UserId
    username: str
    email: str
    bio: str
    avatar: str

    @classmethod
    def from_row(cls, row: Any) -> "PublicUser":
        """Build from any object exposing the public columns as attributes."""
        return cls(
            id=UserId(row.id),
            username=row.username,
            email=row.email,
            bio=row.bio,
            avatar=row.avatar,
        )

    def to_dict(self) -> dict:
        return asdict(self)


# ─── Password Update Variants ────────────────────────────────────

@dataclass(frozen=True)
class KeepPassword:
    """Profile update leaves the stored hash untouched."""


@dataclass(frozen=True)
class ReplacePassword:
    """Profile update swaps in a freshly derived hash."""
    password_hash: str


PasswordUpdate = Union[KeepPassword, ReplacePassword]
