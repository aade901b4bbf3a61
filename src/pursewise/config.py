"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Pursewise"
    DB_FILENAME = "pursewise.db"
    STORAGE_BACKENDS = ("sql", "memory")
    PLAID_ENVIRONMENTS = ("sandbox", "production")
    PLAID_CLIENT_NAME = "Personal Finance Tracker"
    PLAID_IMPORT_DAYS = 30
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("PURSEWISE_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("PURSEWISE_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("PURSEWISE_DATABASE_URL", self._build_sqlite_url())
        self.STORAGE_BACKEND = os.getenv("PURSEWISE_STORAGE_BACKEND", "sql").strip().lower()
        self.RECENT_TRANSACTIONS_LIMIT = _env_int("PURSEWISE_RECENT_LIMIT", 5)
        self.PLAID_CLIENT_ID = os.getenv("PLAID_CLIENT_ID")
        self.PLAID_SECRET = os.getenv("PLAID_SECRET")
        self.PLAID_ENV = os.getenv("PLAID_ENV", "sandbox").strip().lower()

        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("PURSEWISE_SECRET_KEY must be set in non-dev mode.")
        if self.STORAGE_BACKEND not in self.STORAGE_BACKENDS:
            raise ValueError(
                f"PURSEWISE_STORAGE_BACKEND must be one of {self.STORAGE_BACKENDS}, "
                f"got {self.STORAGE_BACKEND!r}"
            )
        if self.PLAID_ENV not in self.PLAID_ENVIRONMENTS:
            raise ValueError(f"PLAID_ENV must be one of {self.PLAID_ENVIRONMENTS}")

    @property
    def plaid_configured(self) -> bool:
        """Return True when both aggregator credentials are present."""

        return bool(self.PLAID_CLIENT_ID and self.PLAID_SECRET)

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("PURSEWISE_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite: in-memory storage, no aggregator."""

    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.STORAGE_BACKEND = os.getenv("PURSEWISE_STORAGE_BACKEND", "memory").strip().lower()
        self.PLAID_CLIENT_ID = None
        self.PLAID_SECRET = None
