"""Savings goal table."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class SavingsGoal(SQLModel, table=True):
    """A savings target with the amount put aside so far."""

    __tablename__: ClassVar[str] = "savings_goal"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=128)
    icon: str = Field(nullable=False, max_length=64, description="UI icon identifier")
    current_amount: Decimal = Field(nullable=False, max_digits=14, decimal_places=2)
    target_amount: Decimal = Field(nullable=False, max_digits=14, decimal_places=2)
    target_date: date = Field(nullable=False)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
