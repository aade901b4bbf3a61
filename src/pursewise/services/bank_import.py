"""Bank-data aggregator integration and transaction import reconciliation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Mapping, Optional, Protocol

import plaid
from plaid.api import plaid_api
from plaid.exceptions import ApiException
from plaid.model.country_code import CountryCode
from plaid.model.item_public_token_exchange_request import ItemPublicTokenExchangeRequest
from plaid.model.link_token_create_request import LinkTokenCreateRequest
from plaid.model.link_token_create_request_user import LinkTokenCreateRequestUser
from plaid.model.products import Products
from plaid.model.transactions_get_request import TransactionsGetRequest
from plaid.model.transactions_get_request_options import TransactionsGetRequestOptions

from ..config import BaseConfig
from ..domain.repositories import LinkedItemRepository, TransactionRepository
from ..errors import ImportFailed
from ..logging_config import get_logger
from ..models import LinkedItem, Transaction
from .periods import coerce_date

logger = get_logger(__name__)

PAGE_SIZE = 100
FALLBACK_CATEGORY = "Other"

_PLAID_HOSTS = {
    "sandbox": plaid.Environment.Sandbox,
    "production": plaid.Environment.Production,
}


class BankDataGateway(Protocol):
    """Operations the import flow needs from a bank-data aggregator."""

    def create_link_token(self, user_id: int, *, webhook: Optional[str] = None) -> dict:
        ...

    def exchange_public_token(self, public_token: str) -> tuple[str, str]:
        """Return (access_token, item_id)."""
        ...

    def fetch_transactions(
        self, access_token: str, start_date: date, end_date: date
    ) -> list[dict]:
        ...


class PlaidGateway:
    """:class:`BankDataGateway` backed by the Plaid API client."""

    def __init__(self, client: plaid_api.PlaidApi, *, client_name: str):
        self.client = client
        self.client_name = client_name

    @classmethod
    def from_config(cls, config: BaseConfig) -> PlaidGateway:
        configuration = plaid.Configuration(
            host=_PLAID_HOSTS[config.PLAID_ENV],
            api_key={
                "clientId": config.PLAID_CLIENT_ID,
                "secret": config.PLAID_SECRET,
            },
        )
        client = plaid_api.PlaidApi(plaid.ApiClient(configuration))
        return cls(client, client_name=config.PLAID_CLIENT_NAME)

    def create_link_token(self, user_id: int, *, webhook: Optional[str] = None) -> dict:
        kwargs: dict[str, Any] = {
            "products": [Products("transactions")],
            "client_name": self.client_name,
            "country_codes": [CountryCode("US")],
            "language": "en",
            "user": LinkTokenCreateRequestUser(client_user_id=str(user_id)),
        }
        if webhook:
            kwargs["webhook"] = webhook
        try:
            response = self.client.link_token_create(LinkTokenCreateRequest(**kwargs))
        except ApiException as exc:
            raise ImportFailed("Failed to create link token") from exc
        return response.to_dict()

    def exchange_public_token(self, public_token: str) -> tuple[str, str]:
        request = ItemPublicTokenExchangeRequest(public_token=public_token)
        try:
            response = self.client.item_public_token_exchange(request)
        except ApiException as exc:
            raise ImportFailed("Failed to exchange token") from exc
        return response["access_token"], response["item_id"]

    def fetch_transactions(
        self, access_token: str, start_date: date, end_date: date
    ) -> list[dict]:
        """Page through ``/transactions/get`` for the window."""

        collected: list[dict] = []
        while True:
            request = TransactionsGetRequest(
                access_token=access_token,
                start_date=start_date,
                end_date=end_date,
                options=TransactionsGetRequestOptions(count=PAGE_SIZE, offset=len(collected)),
            )
            try:
                response = self.client.transactions_get(request).to_dict()
            except ApiException as exc:
                raise ImportFailed("Failed to fetch transactions") from exc
            page = response.get("transactions") or []
            collected.extend(page)
            if not page or len(collected) >= int(response.get("total_transactions") or 0):
                return collected


def build_gateway(config: BaseConfig) -> Optional[BankDataGateway]:
    """Return a Plaid gateway, or None when credentials are missing."""

    if not config.plaid_configured:
        logger.warning("Missing Plaid API credentials. Bank import is disabled.")
        return None
    return PlaidGateway.from_config(config)


@dataclass(slots=True)
class ImportResult:
    """Outcome of one import run."""

    fetched: int = 0
    created: int = 0
    skipped_pending: int = 0
    skipped_duplicate: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "fetched": self.fetched,
            "created": self.created,
            "skippedPending": self.skipped_pending,
            "skippedDuplicate": self.skipped_duplicate,
        }


def _humanize(label: str) -> str:
    return label.replace("_", " ").title()


def resolve_category(raw: Mapping[str, Any]) -> str:
    """Pick the most specific aggregator category, falling back to ``Other``."""

    legacy = raw.get("category") or []
    if legacy:
        return str(legacy[-1])
    finance_category = raw.get("personal_finance_category") or {}
    primary = finance_category.get("primary") if isinstance(finance_category, Mapping) else None
    if primary:
        return _humanize(str(primary))
    return FALLBACK_CATEGORY


def to_transaction(raw: Mapping[str, Any], *, user_id: int) -> Transaction:
    """Map an aggregator transaction onto our record.

    The aggregator reports outflows as positive amounts and inflows as negative.
    """

    signed = Decimal(str(raw["amount"]))
    merchant = raw.get("merchant_name") or "Unknown merchant"
    return Transaction(
        user_id=user_id,
        type="income" if signed < 0 else "expense",
        amount=abs(signed).quantize(Decimal("0.01")),
        date=coerce_date(raw["date"]),
        description=raw.get("name") or merchant,
        category=resolve_category(raw),
        notes=f"Imported from Plaid: {merchant}",
        external_id=raw.get("transaction_id"),
    )


def import_transactions(
    gateway: BankDataGateway,
    repository: TransactionRepository,
    *,
    user_id: int,
    access_token: str,
    today: date,
    days: int = 30,
) -> ImportResult:
    """Fetch the trailing ``days`` of transactions and store the new ones.

    Pending entries are skipped, as is anything whose aggregator id was already
    imported for this user, so repeated syncs never duplicate rows.
    """

    start_date = today - timedelta(days=days)
    raw_transactions = gateway.fetch_transactions(access_token, start_date, today)
    known_ids = repository.external_ids(user_id)

    result = ImportResult(fetched=len(raw_transactions))
    for raw in raw_transactions:
        if raw.get("pending"):
            result.skipped_pending += 1
            continue
        external_id = raw.get("transaction_id")
        if external_id and external_id in known_ids:
            result.skipped_duplicate += 1
            continue
        repository.create(to_transaction(raw, user_id=user_id))
        if external_id:
            known_ids.add(external_id)
        result.created += 1

    logger.info(
        "Imported transactions",
        extra={"user_id": user_id, "import_result": result.to_dict()},
    )
    return result


def link_item(
    gateway: BankDataGateway,
    repository: LinkedItemRepository,
    *,
    user_id: int,
    public_token: str,
) -> LinkedItem:
    """Exchange a public token and remember the resulting item for the user."""

    access_token, item_id = gateway.exchange_public_token(public_token)
    item = repository.save(LinkedItem(user_id=user_id, item_id=item_id, access_token=access_token))
    logger.info("User linked account", extra={"user_id": user_id, "item_id": item_id})
    return item


def sync_item(
    gateway: BankDataGateway,
    items: LinkedItemRepository,
    transactions: TransactionRepository,
    *,
    item: LinkedItem,
    today: date,
    days: int = 30,
) -> ImportResult:
    """Import recent transactions for a stored item and stamp its sync time."""

    result = import_transactions(
        gateway,
        transactions,
        user_id=item.user_id,
        access_token=item.access_token,
        today=today,
        days=days,
    )
    items.mark_synced(item.item_id, datetime.now(timezone.utc))
    return result
