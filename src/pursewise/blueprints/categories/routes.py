"""Category listing routes."""

from __future__ import annotations

from flask import jsonify

from ...context import get_context
from ...errors import ValidationFailed
from ...models import TRANSACTION_TYPES
from ...services.serialization import category_to_dict
from ..auth.guards import login_required
from . import bp


@bp.get("")
@login_required
def list_categories():
    return jsonify([category_to_dict(row) for row in get_context().categories.list_all()])


@bp.get("/type/<string:category_type>")
@login_required
def list_categories_by_type(category_type: str):
    if category_type not in TRANSACTION_TYPES:
        raise ValidationFailed(
            {"type": [f"Type must be one of: {', '.join(TRANSACTION_TYPES)}."]},
            message="Invalid category type",
        )
    rows = get_context().categories.list_by_type(category_type)
    return jsonify([category_to_dict(row) for row in rows])
