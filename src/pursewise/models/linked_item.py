"""Bank connections linked through the data aggregator."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class LinkedItem(SQLModel, table=True):
    """An aggregator item (one institution login) owned by a user."""

    __tablename__: ClassVar[str] = "linked_item"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    item_id: str = Field(nullable=False, unique=True, index=True, max_length=128)
    access_token: str = Field(nullable=False, max_length=255)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    last_synced_at: Optional[datetime] = Field(default=None)
