"""Password hashing and account creation."""

from __future__ import annotations

import pytest

from pursewise.errors import ValidationFailed
from pursewise.infra.memory import MemoryStore, MemoryUserRepository
from pursewise.services.auth import authenticate, create_user, get_user


@pytest.fixture
def users():
    return MemoryUserRepository(MemoryStore())


def test_create_user_hashes_password(users):
    user = create_user(username=" dana ", password="s3cret-pass", name="Dana", repository=users)

    assert user.id is not None
    assert user.username == "dana"
    assert user.password_hash != "s3cret-pass"
    assert user.password_hash.startswith("$argon2")
    assert get_user(user.id, repository=users).name == "Dana"


def test_authenticate(users):
    create_user(username="dana", password="s3cret-pass", repository=users)

    assert authenticate(username="dana", password="s3cret-pass", repository=users) is not None
    assert authenticate(username="dana", password="wrong-pass", repository=users) is None
    assert authenticate(username="nobody", password="s3cret-pass", repository=users) is None
    assert authenticate(username="", password="", repository=users) is None


def test_create_user_validation(users):
    create_user(username="dana", password="s3cret-pass", repository=users)

    with pytest.raises(ValidationFailed) as excinfo:
        create_user(username="dana", password="short", repository=users)

    assert excinfo.value.errors == {
        "username": ["Username already exists."],
        "password": ["Password must be at least 8 characters."],
    }
