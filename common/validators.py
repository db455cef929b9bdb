"""Validation helpers shared across expense tracker services."""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Dict, Optional

from .exceptions import ValidationError

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def sanitize_amount_input(raw: str) -> str:
    """Strip whitespace and thousands separators from typed amounts."""
    return raw.replace(",", "").strip()


def parse_amount(raw: object, field: str) -> float:
    """Convert raw input to a finite float, keeping its sign and full precision."""
    if raw is None or isinstance(raw, bool):
        raise ValidationError(f"{field} is required")
    if isinstance(raw, str):
        raw = sanitize_amount_input(raw)
        if not raw:
            raise ValidationError(f"{field} is required")
    try:
        amount = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValidationError(f"{field} must be a numeric value") from exc

    if not math.isfinite(amount):
        raise ValidationError(f"{field} must be a finite number")
    return amount


def validate_required_str(value: object, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(f"{field} cannot be empty")
    return trimmed


def validate_optional_str(value: object, field: str) -> Optional[str]:
    """Trim optional text; blank input collapses to ``None``."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value.strip() or None


def validate_date(value: object, field: str, *, default: date) -> date:
    if value is None:
        return default
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a date or YYYY-MM-DD string")
    text = value.strip()
    if not text:
        return default
    if not DATE_PATTERN.fullmatch(text):
        raise ValidationError(f"{field} must use the YYYY-MM-DD format")
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"{field} must be a valid YYYY-MM-DD date") from exc


def validate_expense_fields(
    amount: object,
    category: object,
    note: object = None,
    day: object = None,
    *,
    today: date,
) -> Dict[str, object]:
    """Normalise the mutable fields of an expense, raising on the first invalid one."""
    return {
        "amount": parse_amount(amount, "amount"),
        "category": validate_required_str(category, "category"),
        "note": validate_optional_str(note, "note"),
        "date": validate_date(day, "date", default=today),
    }
