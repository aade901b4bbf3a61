"""Field parsers shared by the JSON form classes."""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal
from typing import Any, Mapping

from flask import request

from ..errors import ValidationFailed

AMOUNT_PATTERN = re.compile(r"^\d+(\.\d{1,2})?$")


def json_body() -> Mapping[str, Any]:
    """Return the request's JSON object or raise ValidationFailed."""

    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ValidationFailed({"body": ["Request body must be a JSON object."]})
    return payload


def as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def parse_amount(raw: str) -> Decimal:
    """Parse a non-negative amount with at most two decimals."""

    if not AMOUNT_PATTERN.match(raw):
        raise ValueError("Invalid amount format")
    return Decimal(raw)


def parse_iso_date(raw: str) -> date:
    """Parse ``YYYY-MM-DD``."""

    if len(raw) != 10:
        raise ValueError("Enter a valid date (YYYY-MM-DD).")
    return date.fromisoformat(raw)
