"""Payload validation shared by the auth and top-up services.

Handlers pass raw JSON values straight through; these helpers coerce and trim
them. Any failure is collected into a field -> message map and raised as a
single `ValidationError` (HTTP 400 "Invalid payload").
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, Union

from topup_store.database.base import normalize_amount, normalize_email
from topup_store.error_handler import ValidationError

logger = logging.getLogger(__name__)


def _strip(v: Any) -> str:
    return "" if v is None else str(v).strip()


def add_error(errors: Dict[str, str], field: str, message: str) -> None:
    if field not in errors:
        errors[field] = message


def require_str(value: Any, field: str, errors: Dict[str, str]) -> str:
    value = _strip(value)
    if not value:
        add_error(errors, field, f"{field} is required")
    return value


def require_email(value: Any, field: str, errors: Dict[str, str]) -> str:
    email = normalize_email(value)
    if not email:
        add_error(errors, field, f"{field} is required")
    return email


def require_amount(value: Any, field: str, errors: Dict[str, str]) -> Union[int, float]:
    if isinstance(value, bool) or _strip(value) == "":
        add_error(errors, field, f"{field} must be a number")
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        add_error(errors, field, f"{field} must be a number")
        return 0.0
    if not math.isfinite(amount):
        add_error(errors, field, f"{field} must be a number")
        return 0.0
    return normalize_amount(amount)


def validate_enum(value: Any, field: str, errors: Dict[str, str], allowed: Iterable[str]) -> str:
    value = _strip(value)
    allowed = list(allowed)
    if not value:
        add_error(errors, field, f"{field} is required")
    elif value not in allowed:
        add_error(errors, field, f"{field} must be one of {', '.join(allowed)}")
    return value


def raise_if_errors(errors: Dict[str, str]) -> None:
    if errors:
        logger.warning("Payload rejected: %s", errors)
        raise ValidationError()
