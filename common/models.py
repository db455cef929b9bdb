"""Data models for the expense tracker domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from .exceptions import ValidationError

__all__ = [
    "Adding",
    "Editing",
    "Expense",
    "FilterMode",
    "FormMode",
    "Totals",
    "isoformat_date",
    "parse_date",
]


def isoformat_date(day: date) -> str:
    """Return the YYYY-MM-DD form stored in the ``date`` column."""
    return day.isoformat()


def parse_date(value: str) -> date:
    """Parse an ISO 8601 calendar date, ignoring any time component."""
    value = value.strip()
    # Rows written by other clients may carry a timestamp; only the day matters.
    return date.fromisoformat(value[:10])


@dataclass(frozen=True)
class Expense:
    id: int
    amount: float
    category: str
    date: date
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the expense to JSON-friendly natives."""
        return {
            "id": self.id,
            "amount": self.amount,
            "category": self.category,
            "note": self.note,
            "date": isoformat_date(self.date),
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Expense":
        """Hydrate an Expense from a database row."""
        return cls(
            id=int(row["id"]),
            amount=float(row["amount"]),
            category=row["category"],
            note=row["note"],
            date=parse_date(row["date"]),
        )


class FilterMode(str, Enum):
    ALL = "ALL"
    WEEK = "WEEK"
    MONTH = "MONTH"

    @classmethod
    def parse(cls, raw: object) -> "FilterMode":
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            raise ValidationError("filter must be a string")
        try:
            return cls(raw.strip().upper())
        except ValueError as exc:
            allowed = ", ".join(mode.value for mode in cls)
            raise ValidationError(f"filter must be one of: {allowed}") from exc


@dataclass(frozen=True)
class Totals:
    total: float
    by_category: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": f"{self.total:.2f}",
            "category_totals": {name: f"{value:.2f}" for name, value in self.by_category.items()},
        }


@dataclass(frozen=True)
class Adding:
    """Form is collecting a new expense."""


@dataclass(frozen=True)
class Editing:
    """Form is replacing the fields of an existing expense."""

    expense_id: int


FormMode = Union[Adding, Editing]
