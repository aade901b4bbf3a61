"""Category repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.category import Category


class CategoryRepository(Protocol):
    """Repository for the shared category catalogue."""

    def get_by_id(self, category_id: int) -> Optional[Category]:
        ...

    def list_all(self) -> list[Category]:
        ...

    def list_by_type(self, category_type: str) -> list[Category]:
        ...

    def create(self, category: Category) -> Category:
        ...
