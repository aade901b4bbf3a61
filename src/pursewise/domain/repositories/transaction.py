"""Transaction repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.transaction import Transaction
from ..patches import TransactionPatch


class TransactionRepository(Protocol):
    """Repository for managing transaction entities."""

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        """Retrieve a transaction by ID regardless of owner."""
        ...

    def list_for_user(
        self,
        user_id: int,
        *,
        txn_type: Optional[str] = None,
        category: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List a user's transactions, newest date first."""
        ...

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction and return it with its id."""
        ...

    def update(self, transaction_id: int, patch: TransactionPatch) -> Optional[Transaction]:
        """Apply ``patch``; return the updated row or None when missing."""
        ...

    def delete(self, transaction_id: int) -> bool:
        """Delete a transaction, returning whether a row was removed."""
        ...

    def external_ids(self, user_id: int) -> set[str]:
        """Return aggregator ids already imported for the user."""
        ...
