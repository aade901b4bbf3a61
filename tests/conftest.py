"""Pytest configuration and shared fixtures for Pursewise tests.

Provides an isolated SQLite database for repository tests, record factories for
the pure aggregation helpers, and Flask app/client fixtures backed by the
in-memory storage backend.
"""

from __future__ import annotations

import tempfile
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from pursewise import create_app
from pursewise.config import TestConfig
from pursewise.context import create_app_context
from pursewise.infra.database import create_session_factory
from pursewise.infra.repositories import SQLModelUserRepository
from pursewise.models import SavingsGoal, Transaction, User

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one the application builds at startup."""

    return create_session_factory(db_engine)


@pytest.fixture
def user(session_factory) -> User:
    """Persist a default user for scoping SQL-backed records."""

    repo = SQLModelUserRepository(session_factory)
    return repo.create(User(username="tester", password_hash="dummy-hash", name="Tester"))


# =============================================================================
# Record Factories
# =============================================================================


@pytest.fixture
def make_transaction():
    """Factory for unsaved transactions used by the pure services."""

    def _make(
        amount="10.00",
        txn_type: str = "expense",
        day: date | str = date(2024, 1, 15),
        category: str = "Food",
        description: str = "Entry",
        user_id: int = 1,
        **overrides,
    ) -> Transaction:
        if isinstance(day, str):
            day = date.fromisoformat(day)
        return Transaction(
            user_id=user_id,
            amount=Decimal(str(amount)),
            type=txn_type,
            description=description,
            category=category,
            date=day,
            **overrides,
        )

    return _make


@pytest.fixture
def make_goal():
    """Factory for unsaved savings goals."""

    def _make(
        current="300.00",
        target="1000.00",
        created_at: datetime = datetime(2024, 1, 10, tzinfo=timezone.utc),
        target_date: date = date(2024, 12, 31),
        user_id: int = 1,
        title: str = "Emergency fund",
    ) -> SavingsGoal:
        return SavingsGoal(
            user_id=user_id,
            title=title,
            icon="ri-safe-line",
            current_amount=Decimal(str(current)),
            target_amount=Decimal(str(target)),
            target_date=target_date,
            created_at=created_at,
        )

    return _make


# =============================================================================
# Application Fixtures
# =============================================================================


class FakeBankGateway:
    """In-process stand-in for the aggregator used by import tests."""

    def __init__(self, transactions: list[dict] | None = None):
        self.transactions = list(transactions or [])
        self.link_requests: list[tuple[int, str | None]] = []
        self.fetch_calls: list[tuple[str, date, date]] = []

    def create_link_token(self, user_id: int, *, webhook: str | None = None) -> dict:
        self.link_requests.append((user_id, webhook))
        return {"link_token": f"link-sandbox-{user_id}", "request_id": "req-1"}

    def exchange_public_token(self, public_token: str) -> tuple[str, str]:
        return f"access-{public_token}", f"item-{public_token}"

    def fetch_transactions(self, access_token: str, start_date: date, end_date: date) -> list[dict]:
        self.fetch_calls.append((access_token, start_date, end_date))
        return [dict(raw) for raw in self.transactions]


@pytest.fixture
def fake_gateway() -> FakeBankGateway:
    return FakeBankGateway(
        [
            {
                "transaction_id": "tx-1",
                "amount": 12.5,
                "date": "2024-03-02",
                "name": "Coffee Shop",
                "merchant_name": "Blue Bottle",
                "category": ["Food and Drink", "Coffee"],
                "pending": False,
            },
            {
                "transaction_id": "tx-2",
                "amount": -1500,
                "date": "2024-03-01",
                "name": "Payroll",
                "merchant_name": None,
                "category": None,
                "personal_finance_category": {"primary": "INCOME_WAGES"},
                "pending": False,
            },
            {
                "transaction_id": "tx-3",
                "amount": 40,
                "date": "2024-03-03",
                "name": "Gas",
                "pending": True,
            },
        ]
    )


@pytest.fixture
def test_config(tmp_path, monkeypatch: pytest.MonkeyPatch) -> TestConfig:
    monkeypatch.setenv("PURSEWISE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PURSEWISE_STORAGE_BACKEND", "memory")
    monkeypatch.delenv("PURSEWISE_DATABASE_URL", raising=False)
    return TestConfig()


@pytest.fixture
def app(test_config):
    """Application with in-memory storage and no aggregator configured."""

    return create_app(config=test_config)


@pytest.fixture
def plaid_app(test_config, fake_gateway):
    """Application wired to the fake aggregator."""

    context = create_app_context(test_config, bank_gateway=fake_gateway)
    return create_app(config=test_config, context=context)


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


def register(client, username: str = "alice", password: str = "correct-horse", **extra):
    payload = {"username": username, "password": password, "name": username.title()}
    payload.update(extra)
    return client.post("/api/register", json=payload)


@pytest.fixture
def auth_client(app):
    """Test client signed in as ``alice``."""

    with app.test_client() as client:
        response = register(client)
        assert response.status_code == 201
        yield client


@pytest.fixture
def plaid_client(plaid_app):
    with plaid_app.test_client() as client:
        response = register(client)
        assert response.status_code == 201
        yield client
