"""Domain Types — verifies the sanitized projection and password-update variants.

Tests:
    - PublicUser exposes no password attribute in any form
    - from_row copies the public columns from any attribute-bearing row
    - KeepPassword / ReplacePassword are distinct, immutable variants
"""

import dataclasses
from types import SimpleNamespace

import pytest

from account_store.core.domain_types import (
    KeepPassword, PublicUser, ReplacePassword, UserId,
)


def _row(**overrides):
    values = dict(
        id=1, username="ann", email="a@x.com", bio="hi", avatar="img.png",
        password_hash="$2b$10$abc",
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def test_public_user_has_no_password_field():
    names = {f.name for f in dataclasses.fields(PublicUser)}
    assert names == {"id", "username", "email", "bio", "avatar"}


def test_from_row_drops_hash():
    user = PublicUser.from_row(_row())
    assert user.id == UserId(1)
    assert user.username == "ann"
    assert "password_hash" not in user.to_dict()
    assert not hasattr(user, "password_hash")


def test_public_user_is_frozen():
    user = PublicUser.from_row(_row())
    with pytest.raises(dataclasses.FrozenInstanceError):
        user.username = "bob"


def test_password_update_variants():
    keep = KeepPassword()
    replace = ReplacePassword("$2b$10$new")
    assert keep == KeepPassword()
    assert replace.password_hash == "$2b$10$new"
    assert keep != replace
