"""API Dependencies — resolve lifespan-owned resources into request handlers.

Invariants:
    - The manager and hasher are created once in the lifespan (app.state)
    - Handlers never construct infrastructure themselves

Design Decisions:
    - Small dependency functions so tests override one seam via
      app.dependency_overrides
"""

from fastapi import Depends, Request

from account_store.infrastructure.database import DatabaseSessionManager
from account_store.infrastructure.password_hasher import BcryptPasswordHasher
from account_store.services.account_service import AccountService


def get_db_manager(request: Request) -> DatabaseSessionManager:
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        raise RuntimeError("Database not initialized")
    return manager


def get_password_hasher(request: Request) -> BcryptPasswordHasher:
    hasher = getattr(request.app.state, "password_hasher", None)
    if hasher is None:
        raise RuntimeError("Password hasher not initialized")
    return hasher


def get_account_service(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
    hasher: BcryptPasswordHasher = Depends(get_password_hasher),
) -> AccountService:
    return AccountService(db_manager, hasher)
