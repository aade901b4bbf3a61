"""SQLModel implementation of Category repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.category import Category
from ..database import SessionFactory


class SQLModelCategoryRepository:
    """SQLModel-based category repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, category_id: int) -> Optional[Category]:
        """Retrieve a category by ID."""
        with self.session_factory() as session:
            obj = session.get(Category, category_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[Category]:
        """List all categories in insertion order."""
        with self.session_factory() as session:
            rows = list(session.exec(select(Category).order_by(Category.id)).all())  # type: ignore[arg-type]
            session.expunge_all()
            return rows

    def list_by_type(self, category_type: str) -> list[Category]:
        """List categories filtered by type (income/expense)."""
        with self.session_factory() as session:
            statement = (
                select(Category)
                .where(Category.type == category_type)
                .order_by(Category.id)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, category: Category) -> Category:
        """Create a new category."""
        with self.session_factory() as session:
            session.add(category)
            session.commit()
            session.refresh(category)
            session.expunge(category)
            return category
