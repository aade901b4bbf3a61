"""Service module exports."""

from . import (
    aggregation,
    auth,
    bank_import,
    categories,
    goals,
    periods,
    serialization,
    transaction_filters,
)

__all__ = [
    "aggregation",
    "auth",
    "bank_import",
    "categories",
    "goals",
    "periods",
    "serialization",
    "transaction_filters",
]
