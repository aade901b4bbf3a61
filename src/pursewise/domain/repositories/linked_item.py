"""Linked aggregator item repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ...models.linked_item import LinkedItem


class LinkedItemRepository(Protocol):
    """Repository for aggregator connections."""

    def get_by_item_id(self, item_id: str) -> Optional[LinkedItem]:
        ...

    def list_for_user(self, user_id: int) -> list[LinkedItem]:
        ...

    def save(self, item: LinkedItem) -> LinkedItem:
        """Insert the item or replace the access token of an existing item id."""
        ...

    def mark_synced(self, item_id: str, synced_at: datetime) -> None:
        ...
