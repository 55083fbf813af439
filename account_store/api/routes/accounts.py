"""Account Routes — sign-up, sign-in, profile edit, deletion, listing, password check.

Invariants:
    - Bodies validated by Pydantic before reaching the handler
    - Every response user is a UserResponse built from PublicUser (no hash)
    - Errors propagate as AccountStoreError to the global handlers

Design Decisions:
    - Paths kept as the existing web client calls them (/signup, /signin, ...)
    - Handlers only translate HTTP <-> AccountService calls
"""

import logging

from fastapi import APIRouter, Depends

from account_store.api.dependencies import get_account_service
from account_store.schemas.account import (
    EditProfileRequest, MessageResponse, SigninRequest, SignupRequest,
    UserEnvelope, UserResponse, VerifyPasswordRequest,
)
from account_store.services.account_service import AccountService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["accounts"])


@router.post("/signup", response_model=UserEnvelope)
async def signup(
    body: SignupRequest,
    service: AccountService = Depends(get_account_service),
):
    """Register a new account."""
    user = await service.register(
        username=body.username, email=body.email, password=body.password,
        bio=body.bio, avatar=body.avatar,
    )
    return UserEnvelope(
        message="Registered successfully",
        user=UserResponse.model_validate(user),
    )


@router.post("/signin", response_model=UserEnvelope)
async def signin(
    body: SigninRequest,
    service: AccountService = Depends(get_account_service),
):
    user = await service.authenticate(body.email, body.password)
    return UserEnvelope(
        message="Login successful", user=UserResponse.model_validate(user),
    )


@router.put("/editprofile", response_model=UserEnvelope)
async def edit_profile(
    body: EditProfileRequest,
    service: AccountService = Depends(get_account_service),
):
    """Update username, bio, avatar and (optionally) password."""
    user = await service.update_profile(
        email=body.email, username=body.username,
        bio=body.bio, avatar=body.avatar, password=body.password,
    )
    return UserEnvelope(
        message="Profile updated successfully",
        user=UserResponse.model_validate(user),
    )


@router.delete("/deleteuser/{email}", response_model=MessageResponse)
async def delete_user(
    email: str,
    service: AccountService = Depends(get_account_service),
):
    await service.delete_user(email)
    return MessageResponse(message=f"{email} has been deleted")


@router.get("/users", response_model=list[UserResponse])
async def list_users(service: AccountService = Depends(get_account_service)):
    """All accounts, sanitized. Order is not guaranteed."""
    users = await service.list_users()
    return [UserResponse.model_validate(u) for u in users]


@router.post("/verify-password", response_model=MessageResponse)
async def verify_password(
    body: VerifyPasswordRequest,
    service: AccountService = Depends(get_account_service),
):
    """Confirm the caller knows the password before a sensitive action."""
    await service.verify_password(body.email, body.password)
    return MessageResponse(message="Password verified")
