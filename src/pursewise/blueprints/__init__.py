"""Blueprint exports."""

from . import auth, categories, dashboard, plaid, savings, transactions

__all__ = [
    "auth",
    "categories",
    "dashboard",
    "plaid",
    "savings",
    "transactions",
]
