"""HTTP API behaviour through the Flask test client."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from pursewise import config as app_config
from pursewise import create_app
from pursewise.context import EXTENSION_KEY
from pursewise.services.categories import DEFAULT_CATEGORIES


def _transaction_payload(**overrides):
    payload = {
        "amount": "40.00",
        "type": "expense",
        "description": "Groceries",
        "category": "Food",
        "date": date.today().isoformat(),
    }
    payload.update(overrides)
    return payload


def _goal_payload(**overrides):
    payload = {
        "title": "Holiday",
        "icon": "ri-plane-line",
        "currentAmount": "300",
        "targetAmount": "1000",
        "targetDate": "2030-06-01",
    }
    payload.update(overrides)
    return payload


# =============================================================================
# Authentication
# =============================================================================


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/api/transactions"),
        ("post", "/api/transactions"),
        ("get", "/api/savings-goals"),
        ("get", "/api/categories"),
        ("get", "/api/dashboard"),
        ("get", "/api/dashboard/series"),
        ("get", "/api/plaid/status"),
        ("get", "/api/user"),
    ],
)
def test_protected_routes_require_login(client, method, path):
    response = getattr(client, method)(path)

    assert response.status_code == 401
    assert response.get_json()["error"] == "unauthorized"


def test_register_login_logout_flow(client):
    registered = client.post(
        "/api/register",
        json={"username": "bob", "password": "hunter22!", "name": "Bob", "email": "b@x.io"},
    )
    assert registered.status_code == 201
    assert registered.get_json()["username"] == "bob"
    assert "password_hash" not in registered.get_json()

    assert client.get("/api/user").get_json()["email"] == "b@x.io"
    assert client.post("/api/logout").status_code == 204
    assert client.get("/api/user").status_code == 401

    bad = client.post("/api/login", json={"username": "bob", "password": "nope"})
    assert bad.status_code == 401

    good = client.post("/api/login", json={"username": "bob", "password": "hunter22!"})
    assert good.status_code == 200
    assert client.get("/api/user").get_json()["name"] == "Bob"


def test_register_validation_errors(client):
    response = client.post("/api/register", json={"username": "", "password": "x"})

    body = response.get_json()
    assert response.status_code == 400
    assert body["error"] == "validation_failed"
    assert set(body["details"]) == {"username", "password"}


def test_register_duplicate_username_race_is_a_validation_error(tmp_path, monkeypatch):
    monkeypatch.setenv("PURSEWISE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PURSEWISE_STORAGE_BACKEND", "sql")
    monkeypatch.delenv("PURSEWISE_DATABASE_URL", raising=False)
    app = create_app(config=app_config.TestConfig())
    users = app.extensions[EXTENSION_KEY].users

    with app.test_client() as client:
        payload = {"username": "erin", "password": "long-password"}
        assert client.post("/api/register", json=payload).status_code == 201

        # Another request inserted the name after this one checked for it.
        monkeypatch.setattr(users, "get_by_username", lambda username: None)
        response = client.post("/api/register", json=payload)

    assert response.status_code == 400
    assert response.get_json()["details"] == {"username": ["Username already exists."]}


# =============================================================================
# Transactions
# =============================================================================


def test_transaction_crud(auth_client):
    created = auth_client.post("/api/transactions", json=_transaction_payload(notes="weekly"))
    assert created.status_code == 201
    body = created.get_json()
    assert body["amount"] == "40.00"
    assert body["notes"] == "weekly"
    txn_id = body["id"]

    fetched = auth_client.get(f"/api/transactions/{txn_id}")
    assert fetched.get_json()["description"] == "Groceries"

    updated = auth_client.put(f"/api/transactions/{txn_id}", json={"amount": "55.5"})
    assert updated.status_code == 200
    assert updated.get_json()["amount"] == "55.50"
    assert updated.get_json()["category"] == "Food"

    assert auth_client.delete(f"/api/transactions/{txn_id}").status_code == 204
    assert auth_client.get(f"/api/transactions/{txn_id}").status_code == 404


def test_transaction_create_rejects_invalid_payload(auth_client):
    response = auth_client.post(
        "/api/transactions", json=_transaction_payload(amount="-3", type="gift")
    )

    body = response.get_json()
    assert response.status_code == 400
    assert set(body["details"]) == {"amount", "type"}


def test_transaction_update_requires_fields(auth_client):
    txn_id = auth_client.post("/api/transactions", json=_transaction_payload()).get_json()["id"]

    response = auth_client.patch(f"/api/transactions/{txn_id}", json={})

    assert response.status_code == 400
    assert "body" in response.get_json()["details"]


def test_transaction_ownership_is_enforced(app, auth_client):
    txn_id = auth_client.post("/api/transactions", json=_transaction_payload()).get_json()["id"]

    with app.test_client() as intruder:
        intruder.post("/api/register", json={"username": "mallory", "password": "password123"})

        assert intruder.get(f"/api/transactions/{txn_id}").status_code == 403
        assert intruder.put(f"/api/transactions/{txn_id}", json={"amount": "1"}).status_code == 403
        assert intruder.delete(f"/api/transactions/{txn_id}").status_code == 403
        assert intruder.get("/api/transactions").get_json() == []

    assert auth_client.get(f"/api/transactions/{txn_id}").status_code == 200


def test_transaction_list_filters(auth_client):
    auth_client.post("/api/transactions", json=_transaction_payload(description="Grocery store"))
    auth_client.post(
        "/api/transactions",
        json=_transaction_payload(type="income", category="Salary", description="Payday"),
    )

    expenses = auth_client.get("/api/transactions?type=expense").get_json()
    searched = auth_client.get("/api/transactions?search=pay&range=this-month").get_json()

    assert [row["description"] for row in expenses] == ["Grocery store"]
    assert [row["description"] for row in searched] == ["Payday"]
    assert auth_client.get("/api/transactions?range=forever").status_code == 400


# =============================================================================
# Savings goals
# =============================================================================


def test_savings_goal_crud(auth_client):
    created = auth_client.post("/api/savings-goals", json=_goal_payload())
    assert created.status_code == 201
    body = created.get_json()
    assert body["progress"] == 30
    assert body["remaining"] == 700.0
    goal_id = body["id"]

    updated = auth_client.put(f"/api/savings-goals/{goal_id}", json={"currentAmount": "1200"})
    assert updated.get_json()["progress"] == 120
    assert updated.get_json()["title"] == "Holiday"

    listed = auth_client.get("/api/savings-goals").get_json()
    assert [goal["id"] for goal in listed] == [goal_id]

    assert auth_client.delete(f"/api/savings-goals/{goal_id}").status_code == 204
    assert auth_client.get(f"/api/savings-goals/{goal_id}").status_code == 404


def test_savings_goal_rejects_zero_target(auth_client):
    response = auth_client.post("/api/savings-goals", json=_goal_payload(targetAmount="0"))

    assert response.status_code == 400
    assert "targetAmount" in response.get_json()["details"]


# =============================================================================
# Categories
# =============================================================================


def test_categories(auth_client):
    everything = auth_client.get("/api/categories").get_json()
    income = auth_client.get("/api/categories/type/income").get_json()

    assert len(everything) == len(DEFAULT_CATEGORIES)
    assert {row["type"] for row in income} == {"income"}
    assert auth_client.get("/api/categories/type/transfer").status_code == 400


# =============================================================================
# Dashboard
# =============================================================================


def test_dashboard_payload(auth_client):
    today = date.today().isoformat()
    auth_client.post(
        "/api/transactions",
        json=_transaction_payload(amount="100", type="income", category="Salary", date=today),
    )
    auth_client.post("/api/transactions", json=_transaction_payload(amount="40", date=today))
    auth_client.post("/api/savings-goals", json=_goal_payload())

    body = auth_client.get("/api/dashboard").get_json()

    assert list(body) == ["summary", "recentTransactions", "savingsGoals", "transactions"]
    assert body["summary"] == {
        "totalIncome": 100.0,
        "totalExpenses": 40.0,
        "netBalance": 60.0,
        "savingsRate": 60,
        "incomeChange": 100,
        "expenseChange": 100,
    }
    assert len(body["recentTransactions"]) == 2
    assert body["savingsGoals"][0]["progress"] == 30
    assert len(body["transactions"]) == 2


def test_dashboard_for_new_user_is_all_zero(auth_client):
    body = auth_client.get("/api/dashboard").get_json()

    assert body["summary"]["totalIncome"] == 0
    assert body["summary"]["savingsRate"] == 0
    assert body["recentTransactions"] == []


def test_category_breakdown_endpoint(auth_client):
    auth_client.post("/api/transactions", json=_transaction_payload(amount="40", category="Food"))
    auth_client.post("/api/transactions", json=_transaction_payload(amount="60", category="Gym"))
    auth_client.post(
        "/api/transactions",
        json=_transaction_payload(amount="500", type="income", category="Salary"),
    )

    rows = auth_client.get("/api/dashboard/category-breakdown").get_json()

    assert rows == [
        {"category": "Gym", "amount": 60.0, "color": "#6b7280"},
        {"category": "Food", "amount": 40.0, "color": "#3b82f6"},
    ]


def test_series_endpoint(auth_client):
    auth_client.post("/api/transactions", json=_transaction_payload(amount="25"))

    monthly = auth_client.get("/api/dashboard/series?months=3").get_json()
    yearly = auth_client.get("/api/dashboard/series?timeframe=yearly").get_json()

    assert monthly["timeframe"] == "monthly"
    assert len(monthly["buckets"]) == 3
    assert monthly["buckets"][-1]["expense"] == 25.0
    assert [bucket["label"] for bucket in yearly["buckets"]] == ["Q1", "Q2", "Q3", "Q4"]
    assert sum(bucket["expense"] for bucket in yearly["buckets"]) == 25.0
    assert auth_client.get("/api/dashboard/series?timeframe=weekly").status_code == 400
    assert auth_client.get("/api/dashboard/series?months=0").status_code == 400


# =============================================================================
# Bank import
# =============================================================================


def test_plaid_unavailable_without_credentials(auth_client):
    assert auth_client.get("/api/plaid/status").get_json() == {"available": False}

    response = auth_client.post("/api/plaid/create-link-token", json={})

    assert response.status_code == 503
    assert response.get_json()["error"] == "integration_unavailable"


def test_plaid_link_and_sync(plaid_client, fake_gateway):
    assert plaid_client.get("/api/plaid/status").get_json() == {"available": True}

    token = plaid_client.post("/api/plaid/create-link-token", json={}).get_json()
    assert token["link_token"] == "link-sandbox-1"

    exchanged = plaid_client.post("/api/plaid/exchange-token", json={"public_token": "pub"})
    assert exchanged.status_code == 201
    body = exchanged.get_json()
    assert body["item"]["itemId"] == "item-pub"
    assert "access_token" not in body["item"]
    assert body["import"]["created"] == 2

    resync = plaid_client.post("/api/plaid/sync-transactions", json={"item_id": "item-pub"})
    assert resync.get_json()["skippedDuplicate"] == 2

    items = plaid_client.get("/api/plaid/items").get_json()
    assert [item["itemId"] for item in items] == ["item-pub"]
    assert items[0]["lastSyncedAt"] is not None

    imported = plaid_client.get("/api/transactions").get_json()
    assert {row["externalId"] for row in imported} == {"tx-1", "tx-2"}


def test_plaid_sync_requires_token_or_item(plaid_client):
    response = plaid_client.post("/api/plaid/sync-transactions", json={})

    assert response.status_code == 400


def test_plaid_sync_with_unknown_item(plaid_client):
    response = plaid_client.post("/api/plaid/sync-transactions", json={"item_id": "nope"})

    assert response.status_code == 404


# =============================================================================
# Storage failures and notes normalisation
# =============================================================================


def test_storage_failure_is_reported_as_unavailable(app, auth_client, monkeypatch):
    def _fail(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(app.extensions[EXTENSION_KEY].transactions, "list_for_user", _fail)

    response = auth_client.get("/api/dashboard")

    assert response.status_code == 503
    assert response.get_json()["error"] == "storage_unavailable"


def test_blank_notes_are_stored_as_null_on_create_and_update(auth_client):
    created = auth_client.post("/api/transactions", json=_transaction_payload(notes=""))
    assert created.get_json()["notes"] is None
    txn_id = created.get_json()["id"]

    auth_client.put(f"/api/transactions/{txn_id}", json={"notes": "split with Sam"})
    cleared = auth_client.put(f"/api/transactions/{txn_id}", json={"notes": "  "})

    assert cleared.status_code == 200
    assert cleared.get_json()["notes"] is None
