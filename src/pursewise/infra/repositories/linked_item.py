"""SQLModel implementation of LinkedItem repository."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import select

from ...models.linked_item import LinkedItem
from ..database import SessionFactory


class SQLModelLinkedItemRepository:
    """Stores aggregator item ids and access tokens per user."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_item_id(self, item_id: str) -> Optional[LinkedItem]:
        with self.session_factory() as session:
            item = session.exec(select(LinkedItem).where(LinkedItem.item_id == item_id)).first()
            if item:
                session.expunge(item)
            return item

    def list_for_user(self, user_id: int) -> list[LinkedItem]:
        with self.session_factory() as session:
            statement = (
                select(LinkedItem)
                .where(LinkedItem.user_id == user_id)
                .order_by(LinkedItem.id)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def save(self, item: LinkedItem) -> LinkedItem:
        """Insert a new item or rotate the access token of an existing one."""
        with self.session_factory() as session:
            existing = session.exec(
                select(LinkedItem).where(LinkedItem.item_id == item.item_id)
            ).first()
            if existing is not None:
                existing.access_token = item.access_token
                existing.user_id = item.user_id
                item = existing
            session.add(item)
            session.commit()
            session.refresh(item)
            session.expunge(item)
            return item

    def mark_synced(self, item_id: str, synced_at: datetime) -> None:
        with self.session_factory() as session:
            item = session.exec(select(LinkedItem).where(LinkedItem.item_id == item_id)).first()
            if item is None:
                return
            item.last_synced_at = synced_at
            session.add(item)
            session.commit()
