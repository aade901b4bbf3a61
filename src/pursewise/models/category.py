"""Transaction category definitions."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Category(SQLModel, table=True):
    """Category offered to users when recording income or expenses.

    ``type`` says which transaction type the category belongs to in the UI; the
    data store does not enforce it.
    """

    __tablename__: ClassVar[str] = "category"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, nullable=False, max_length=64)
    icon: str = Field(nullable=False, max_length=64)
    color: str = Field(nullable=False, max_length=7)
    is_default: bool = Field(default=False, nullable=False)
    type: str = Field(default="expense", nullable=False, max_length=16, index=True)
