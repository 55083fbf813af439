"""Account Service — the six account operations against a real (SQLite) store.

Invariants:
    - register → authenticate succeeds; results never carry a password field
    - Duplicate email: second register fails, exactly one row remains
    - Unknown email and wrong password are the same error at sign-in
    - update_profile without password keeps the hash; with one, replaces it
    - update_profile on unknown email changes nothing
    - After delete_user, every email-keyed operation reports not found
    - list_users is sanitized for zero, one and many rows
"""

import dataclasses

import pytest

from account_store.core.domain_types import PublicUser
from account_store.core.errors import (
    AccountExistsError, AccountNotFoundError, InvalidCredentialsError,
    MissingFieldsError, WrongPasswordError,
)
from account_store.infrastructure.user_repository import SqlUserRepository


def _field_names(user: PublicUser) -> set[str]:
    return {f.name for f in dataclasses.fields(user)}


# ─── register / authenticate ─────────────────────────────────────

async def test_register_then_authenticate(service, ann):
    assert ann.username == "ann"
    assert "password_hash" not in _field_names(ann)

    user = await service.authenticate("a@x.com", "secret1")
    assert user.id == ann.id
    assert user.username == "ann"


async def test_register_stores_hash_not_password(service, db_manager, ann):
    async with db_manager.session() as db:
        stored = await SqlUserRepository(db).get_password_hash("a@x.com")
    assert stored != "secret1"
    assert stored.startswith("$2b$")


async def test_register_duplicate_email(service, db_manager, ann):
    with pytest.raises(AccountExistsError):
        await service.register("other", "a@x.com", "pw", "bio", "pic.png")
    users = await service.list_users()
    assert [u.username for u in users] == ["ann"]


@pytest.mark.parametrize(
    "missing", ["username", "email", "password", "bio", "avatar"],
)
async def test_register_rejects_blank_fields(service, missing):
    fields = dict(
        username="ann", email="a@x.com", password="secret1",
        bio="hi", avatar="img.png",
    )
    fields[missing] = "  "
    with pytest.raises(MissingFieldsError) as exc_info:
        await service.register(**fields)
    assert exc_info.value.fields == [missing]
    assert await service.list_users() == []


async def test_authenticate_wrong_password_and_unknown_email_match(service, ann):
    with pytest.raises(InvalidCredentialsError) as wrong:
        await service.authenticate("a@x.com", "wrong")
    with pytest.raises(InvalidCredentialsError) as unknown:
        await service.authenticate("nobody@x.com", "secret1")
    assert wrong.value.message == unknown.value.message
    assert wrong.value.code == unknown.value.code
    assert wrong.value.http_status == unknown.value.http_status == 401


async def test_authenticate_requires_fields(service):
    with pytest.raises(MissingFieldsError):
        await service.authenticate("", "secret1")


# ─── update_profile ──────────────────────────────────────────────

async def test_update_without_password_keeps_hash(service, ann):
    user = await service.update_profile(
        "a@x.com", "ann2", "hi2", "img2.png", password="",
    )
    assert (user.username, user.bio, user.avatar) == ("ann2", "hi2", "img2.png")
    assert user.id == ann.id
    assert (await service.authenticate("a@x.com", "secret1")).username == "ann2"


async def test_update_with_none_password_keeps_hash(service, ann):
    await service.update_profile("a@x.com", "ann", "hi", "img.png", password=None)
    await service.authenticate("a@x.com", "secret1")


async def test_update_with_password_replaces_hash(service, ann):
    await service.update_profile(
        "a@x.com", "ann", "hi", "img.png", password="secret2",
    )
    with pytest.raises(InvalidCredentialsError):
        await service.authenticate("a@x.com", "secret1")
    assert (await service.authenticate("a@x.com", "secret2")).id == ann.id


async def test_update_unknown_email_changes_nothing(service, ann):
    with pytest.raises(AccountNotFoundError):
        await service.update_profile(
            "nobody@x.com", "x", "x", "x", password="new",
        )
    users = await service.list_users()
    assert users == [ann]


async def test_update_requires_fields(service, ann):
    with pytest.raises(MissingFieldsError) as exc_info:
        await service.update_profile("a@x.com", "", "hi", "")
    assert exc_info.value.fields == ["username", "avatar"]


# ─── verify_password ─────────────────────────────────────────────

async def test_verify_password(service, ann):
    assert await service.verify_password("a@x.com", "secret1") is None


async def test_verify_password_is_specific(service, ann):
    with pytest.raises(WrongPasswordError):
        await service.verify_password("a@x.com", "wrong")
    with pytest.raises(AccountNotFoundError):
        await service.verify_password("nobody@x.com", "secret1")


# ─── delete_user ─────────────────────────────────────────────────

async def test_delete_removes_only_target(service, ann):
    bob = await service.register("bob", "b@x.com", "pw", "yo", "b.png")
    await service.delete_user("a@x.com")
    assert await service.list_users() == [bob]


async def test_deleted_account_is_gone_everywhere(service, ann):
    await service.delete_user("a@x.com")
    with pytest.raises(InvalidCredentialsError):
        await service.authenticate("a@x.com", "secret1")
    with pytest.raises(AccountNotFoundError):
        await service.update_profile("a@x.com", "ann", "hi", "img.png")
    with pytest.raises(AccountNotFoundError):
        await service.verify_password("a@x.com", "secret1")
    with pytest.raises(AccountNotFoundError):
        await service.delete_user("a@x.com")


# ─── list_users ──────────────────────────────────────────────────

async def test_list_users_sanitized_for_any_size(service):
    assert await service.list_users() == []
    await service.register("ann", "a@x.com", "secret1", "hi", "img.png")
    await service.register("bob", "b@x.com", "pw", "yo", "b.png")
    users = await service.list_users()
    assert {u.email for u in users} == {"a@x.com", "b@x.com"}
    for user in users:
        assert "password_hash" not in user.to_dict()


# ─── end-to-end scenario ─────────────────────────────────────────

async def test_account_lifecycle_scenario(service):
    await service.register("ann", "a@x.com", "secret1", "hi", "img.png")
    assert (await service.authenticate("a@x.com", "secret1")).username == "ann"
    with pytest.raises(InvalidCredentialsError):
        await service.authenticate("a@x.com", "wrong")

    user = await service.update_profile(
        "a@x.com", "ann2", "hi2", "img2.png", password="",
    )
    assert user.username == "ann2"
    await service.authenticate("a@x.com", "secret1")

    await service.delete_user("a@x.com")
    with pytest.raises(InvalidCredentialsError):
        await service.authenticate("a@x.com", "secret1")
