"""Authentication and user management services."""

from __future__ import annotations

from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

from ..domain.repositories import UserRepository
from ..errors import ValidationFailed
from ..logging_config import get_logger
from ..models.user import User

logger = get_logger(__name__)

_hasher = PasswordHasher()
MIN_PASSWORD_LENGTH = 8


def create_user(
    *,
    username: str,
    password: str,
    name: str = "",
    email: str = "",
    avatar: Optional[str] = None,
    repository: UserRepository,
) -> User:
    """Create a new user with hashed password."""

    username = (username or "").strip()
    errors: dict[str, list[str]] = {}
    if not username:
        errors["username"] = ["Username is required."]
    elif repository.get_by_username(username) is not None:
        errors["username"] = ["Username already exists."]
    if len(password or "") < MIN_PASSWORD_LENGTH:
        errors["password"] = [f"Password must be at least {MIN_PASSWORD_LENGTH} characters."]
    if errors:
        raise ValidationFailed(errors)

    user = User(
        username=username,
        password_hash=_hasher.hash(password),
        name=(name or "").strip(),
        email=(email or "").strip(),
        avatar=avatar,
    )
    created = repository.create(user)
    logger.info("User registered", extra={"user_id": created.id})
    return created


def authenticate(*, username: str, password: str, repository: UserRepository) -> Optional[User]:
    """Validate credentials and return the user when correct."""

    username = (username or "").strip()
    if not username:
        return None
    user = repository.get_by_username(username)
    if user is None:
        return None
    try:
        _hasher.verify(user.password_hash, password or "")
    except (VerifyMismatchError, InvalidHash, VerificationError):
        logger.info("Rejected login", extra={"username": username})
        return None
    return user


def get_user(user_id: int, *, repository: UserRepository) -> Optional[User]:
    return repository.get_by_id(user_id)
