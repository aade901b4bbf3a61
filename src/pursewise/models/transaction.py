"""SQLModel definitions for income/expense transactions."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

TRANSACTION_TYPES = ("income", "expense")


class Transaction(SQLModel, table=True):
    """A single income or expense entry, hand-entered or imported.

    ``amount`` is always a non-negative magnitude; the sign is implied by ``type``.
    """

    __tablename__: ClassVar[str] = "transaction"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    amount: Decimal = Field(nullable=False, max_digits=14, decimal_places=2)
    type: str = Field(nullable=False, max_length=16, index=True)
    description: str = Field(nullable=False, max_length=255)
    category: str = Field(nullable=False, max_length=64, index=True)
    date: dt.date = Field(nullable=False, index=True)
    notes: Optional[str] = Field(default=None)
    # Aggregator transaction id, used to keep re-syncs idempotent.
    external_id: Optional[str] = Field(default=None, index=True, max_length=128)
    created_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc),
        nullable=False,
    )
