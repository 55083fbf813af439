"""Account Schemas — request bodies and sanitized responses for account endpoints.

Invariants:
    - Required string fields must contain a non-whitespace character
    - Accepted values are passed on exactly as sent (no trimming)
    - EditProfileRequest.password is optional; blank means keep the current one
    - UserResponse has no password field

Design Decisions:
    - Blank check as a field_validator that returns the value unchanged,
      so stored text matches what the client sent
    - Email is matched as given (no format check): it is a lookup key only
"""

from pydantic import BaseModel, ConfigDict, field_validator


def _reject_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("field cannot be empty or whitespace")
    return v


class SignupRequest(BaseModel):
    """Account creation. Every field required."""
    username: str
    email: str
    password: str
    bio: str
    avatar: str

    @field_validator("username", "email", "password", "bio", "avatar")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _reject_blank(v)


class SigninRequest(BaseModel):
    email: str
    password: str

    @field_validator("email", "password")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _reject_blank(v)


class VerifyPasswordRequest(SigninRequest):
    """Password re-confirmation before a sensitive action."""


class EditProfileRequest(BaseModel):
    """Profile edit with optional password."""
    email: str
    username: str
    password: str | None = None
    bio: str
    avatar: str

    @field_validator("email", "username", "bio", "avatar")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _reject_blank(v)


class UserResponse(BaseModel):
    """Sanitized user: public-facing account data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    bio: str
    avatar: str


class UserEnvelope(BaseModel):
    message: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str
