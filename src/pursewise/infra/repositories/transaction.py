"""SQLModel implementation of Transaction repository."""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import select

from ...domain.patches import TransactionPatch
from ...models.transaction import Transaction
from ..database import SessionFactory


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        with self.session_factory() as session:
            obj = session.get(Transaction, transaction_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_for_user(
        self,
        user_id: int,
        *,
        txn_type: Optional[str] = None,
        category: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List a user's transactions ordered by date, newest first."""
        with self.session_factory() as session:
            statement = select(Transaction).where(Transaction.user_id == user_id)
            if txn_type:
                statement = statement.where(Transaction.type == txn_type)
            if category:
                statement = statement.where(Transaction.category == category)
            if start_date:
                statement = statement.where(Transaction.date >= start_date)
            if end_date:
                statement = statement.where(Transaction.date <= end_date)

            statement = statement.order_by(
                Transaction.date.desc(), Transaction.id.desc()  # type: ignore[union-attr]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, transaction: Transaction) -> Transaction:
        """Create a new transaction."""
        with self.session_factory() as session:
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def update(self, transaction_id: int, patch: TransactionPatch) -> Optional[Transaction]:
        """Apply a patch to an existing transaction."""
        with self.session_factory() as session:
            transaction = session.get(Transaction, transaction_id)
            if transaction is None:
                return None
            patch.apply_to(transaction)
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def delete(self, transaction_id: int) -> bool:
        """Delete a transaction by ID."""
        with self.session_factory() as session:
            transaction = session.get(Transaction, transaction_id)
            if transaction is None:
                return False
            session.delete(transaction)
            session.commit()
            return True

    def external_ids(self, user_id: int) -> set[str]:
        """Return aggregator ids already imported for the user."""
        with self.session_factory() as session:
            statement = (
                select(Transaction.external_id)
                .where(Transaction.user_id == user_id)
                .where(Transaction.external_id.is_not(None))  # type: ignore[union-attr]
            )
            return {value for value in session.exec(statement).all() if value}
