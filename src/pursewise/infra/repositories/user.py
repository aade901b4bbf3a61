"""SQLModel implementation of User repository."""

from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ...errors import ValidationFailed
from ...models.user import User
from ..database import SessionFactory


class SQLModelUserRepository:
    """SQLModel-based user repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self.session_factory() as session:
            user = session.get(User, user_id)
            if user:
                session.expunge(user)
            return user

    def get_by_username(self, username: str) -> Optional[User]:
        with self.session_factory() as session:
            user = session.exec(select(User).where(User.username == username)).first()
            if user:
                session.expunge(user)
            return user

    def create(self, user: User) -> User:
        """Insert a user; a taken username raises ValidationFailed."""
        try:
            with self.session_factory() as session:
                session.add(user)
                session.commit()
                session.refresh(user)
                session.expunge(user)
                return user
        except IntegrityError as exc:
            raise ValidationFailed({"username": ["Username already exists."]}) from exc
