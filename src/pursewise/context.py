"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from flask import current_app

from .config import BaseConfig
from .domain.repositories import (
    CategoryRepository,
    LinkedItemRepository,
    SavingsGoalRepository,
    TransactionRepository,
    UserRepository,
)
from .infra.database import bootstrap_database
from .infra.memory import (
    MemoryCategoryRepository,
    MemoryLinkedItemRepository,
    MemorySavingsGoalRepository,
    MemoryStore,
    MemoryTransactionRepository,
    MemoryUserRepository,
)
from .infra.repositories import (
    SQLModelCategoryRepository,
    SQLModelLinkedItemRepository,
    SQLModelSavingsGoalRepository,
    SQLModelTransactionRepository,
    SQLModelUserRepository,
)
from .logging_config import get_logger
from .services.bank_import import BankDataGateway, build_gateway
from .services.categories import ensure_default_categories

logger = get_logger(__name__)

EXTENSION_KEY = "pursewise"


@dataclass
class AppContext:
    """Repositories and integrations chosen once at process startup."""

    config: BaseConfig
    users: UserRepository
    transactions: TransactionRepository
    savings_goals: SavingsGoalRepository
    categories: CategoryRepository
    linked_items: LinkedItemRepository
    bank_gateway: Optional[BankDataGateway] = None


def create_app_context(
    config: BaseConfig, *, bank_gateway: Optional[BankDataGateway] = None
) -> AppContext:
    """Build repositories for the configured storage backend and seed categories."""

    if config.STORAGE_BACKEND == "memory":
        store = MemoryStore()
        ctx = AppContext(
            config=config,
            users=MemoryUserRepository(store),
            transactions=MemoryTransactionRepository(store),
            savings_goals=MemorySavingsGoalRepository(store),
            categories=MemoryCategoryRepository(store),
            linked_items=MemoryLinkedItemRepository(store),
        )
    else:
        _engine, session_factory = bootstrap_database(config)
        ctx = AppContext(
            config=config,
            users=SQLModelUserRepository(session_factory),
            transactions=SQLModelTransactionRepository(session_factory),
            savings_goals=SQLModelSavingsGoalRepository(session_factory),
            categories=SQLModelCategoryRepository(session_factory),
            linked_items=SQLModelLinkedItemRepository(session_factory),
        )

    ctx.bank_gateway = bank_gateway or build_gateway(config)
    ensure_default_categories(ctx.categories)
    logger.info("Application context ready", extra={"storage_backend": config.STORAGE_BACKEND})
    return ctx


def get_context() -> AppContext:
    """Return the context bound to the current Flask application."""

    return current_app.extensions[EXTENSION_KEY]
