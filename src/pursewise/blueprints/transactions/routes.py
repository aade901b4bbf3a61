"""Transaction CRUD routes."""

from __future__ import annotations

from datetime import date

from flask import abort, jsonify, request

from ...context import get_context
from ...errors import ValidationFailed
from ...logging_config import get_logger
from ...services.serialization import transaction_to_dict
from ...services.transaction_filters import TransactionFilters, apply_filters
from ..auth.guards import current_user_id, ensure_owner, login_required
from ..validation import json_body
from . import bp
from .forms import TransactionForm

logger = get_logger(__name__)


@bp.get("")
@login_required
def list_transactions():
    """List the user's transactions, newest first, with optional filters."""

    user_id = current_user_id()
    filters = TransactionFilters.from_mapping(request.args)
    rows = get_context().transactions.list_for_user(user_id)
    rows = apply_filters(rows, filters, today=date.today())
    return jsonify([transaction_to_dict(row) for row in rows])


@bp.post("")
@login_required
def create_transaction():
    user_id = current_user_id()
    form = TransactionForm.from_mapping(json_body())
    form.raise_for_errors()

    created = get_context().transactions.create(form.to_record(user_id=user_id))
    logger.info("Transaction created", extra={"user_id": user_id, "transaction_id": created.id})
    return jsonify(transaction_to_dict(created)), 201


@bp.get("/<int:transaction_id>")
@login_required
def get_transaction(transaction_id: int):
    record = get_context().transactions.get_by_id(transaction_id)
    ensure_owner(record, current_user_id())
    return jsonify(transaction_to_dict(record))


@bp.put("/<int:transaction_id>")
@bp.patch("/<int:transaction_id>")
@login_required
def update_transaction(transaction_id: int):
    user_id = current_user_id()
    repo = get_context().transactions
    ensure_owner(repo.get_by_id(transaction_id), user_id)

    form = TransactionForm.from_mapping(json_body(), partial=True)
    form.raise_for_errors()
    patch = form.to_patch()
    if patch.is_empty():
        raise ValidationFailed({"body": ["No updatable fields supplied."]})

    updated = repo.update(transaction_id, patch)
    if updated is None:
        # Deleted between the ownership check and the write.
        abort(404)
    return jsonify(transaction_to_dict(updated))


@bp.delete("/<int:transaction_id>")
@login_required
def delete_transaction(transaction_id: int):
    repo = get_context().transactions
    ensure_owner(repo.get_by_id(transaction_id), current_user_id())
    if not repo.delete(transaction_id):
        abort(404)
    return "", 204
