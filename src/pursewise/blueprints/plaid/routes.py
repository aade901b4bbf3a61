"""Routes linking bank accounts through the aggregator and importing activity."""

from __future__ import annotations

from datetime import date

from flask import jsonify

from ...context import get_context
from ...errors import IntegrationUnavailable, ValidationFailed
from ...logging_config import get_logger
from ...services.bank_import import (
    BankDataGateway,
    import_transactions,
    link_item,
    sync_item,
)
from ...services.serialization import linked_item_to_dict
from ..auth.guards import current_user_id, ensure_owner, login_required
from ..validation import as_text, json_body
from . import bp

logger = get_logger(__name__)


def _gateway() -> BankDataGateway:
    gateway = get_context().bank_gateway
    if gateway is None:
        raise IntegrationUnavailable("Bank integration is not configured")
    return gateway


@bp.get("/status")
@login_required
def status():
    return jsonify({"available": get_context().bank_gateway is not None})


@bp.post("/create-link-token")
@login_required
def create_link_token():
    payload = json_body()
    webhook = as_text(payload.get("webhook")) or None
    token = _gateway().create_link_token(current_user_id(), webhook=webhook)
    return jsonify(token)


@bp.post("/exchange-token")
@login_required
def exchange_token():
    """Swap a public token for an item, then run the first import."""

    ctx = get_context()
    gateway = _gateway()
    user_id = current_user_id()
    public_token = as_text(json_body().get("public_token"))
    if not public_token:
        raise ValidationFailed({"public_token": ["Public token is required."]})

    item = link_item(gateway, ctx.linked_items, user_id=user_id, public_token=public_token)
    result = sync_item(
        gateway,
        ctx.linked_items,
        ctx.transactions,
        item=item,
        today=date.today(),
        days=ctx.config.PLAID_IMPORT_DAYS,
    )
    return jsonify({"item": linked_item_to_dict(item), "import": result.to_dict()}), 201


@bp.post("/sync-transactions")
@login_required
def sync_transactions():
    """Import recent activity for a stored item or a raw access token."""

    ctx = get_context()
    gateway = _gateway()
    user_id = current_user_id()
    payload = json_body()
    item_id = as_text(payload.get("item_id"))
    access_token = as_text(payload.get("access_token"))

    if item_id:
        item = ensure_owner(ctx.linked_items.get_by_item_id(item_id), user_id)
        result = sync_item(
            gateway,
            ctx.linked_items,
            ctx.transactions,
            item=item,
            today=date.today(),
            days=ctx.config.PLAID_IMPORT_DAYS,
        )
    elif access_token:
        result = import_transactions(
            gateway,
            ctx.transactions,
            user_id=user_id,
            access_token=access_token,
            today=date.today(),
            days=ctx.config.PLAID_IMPORT_DAYS,
        )
    else:
        raise ValidationFailed({"access_token": ["Provide an access_token or item_id."]})

    return jsonify(result.to_dict())


@bp.get("/items")
@login_required
def list_items():
    items = get_context().linked_items.list_for_user(current_user_id())
    return jsonify([linked_item_to_dict(item) for item in items])
