"""Framework-agnostic business services for the expense tracker."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from .clock import Clock, local_today
from .exceptions import RecordNotFoundError, ValidationError
from .models import Expense, FilterMode, Totals, isoformat_date
from .storage import SQLiteStorage
from .validators import validate_expense_fields

logger = logging.getLogger(__name__)


def week_start(today: date) -> date:
    """Return the Sunday on or before ``today``."""
    # date.weekday() counts from Monday; shift so Sunday is day 0.
    return today - timedelta(days=(today.weekday() + 1) % 7)


def filter_expenses(records: Iterable[Expense], mode: object, today: date) -> List[Expense]:
    mode = FilterMode.parse(mode)
    if mode is FilterMode.WEEK:
        start = week_start(today)
        return [expense for expense in records if expense.date >= start]
    if mode is FilterMode.MONTH:
        return [
            expense
            for expense in records
            if expense.date.year == today.year and expense.date.month == today.month
        ]
    return list(records)


def compute_totals(records: Iterable[Expense]) -> Totals:
    total = 0.0
    by_category: Dict[str, float] = {}
    for expense in records:
        total += expense.amount
        by_category[expense.category] = by_category.get(expense.category, 0.0) + expense.amount
    return Totals(total=total, by_category=by_category)


class ExpenseStore:
    """CRUD and aggregation facade over the expenses table."""

    def __init__(self, storage: SQLiteStorage, clock: Clock = local_today) -> None:
        self._storage = storage
        self._clock = clock

    # Public API -----------------------------------------------------------
    def initialize(self) -> None:
        """Create the backing table if needed; safe on every startup."""
        self._storage.create_schema()

    def list(self) -> List[Expense]:
        rows = self._storage.fetch_all("SELECT * FROM expenses ORDER BY id DESC;")
        return [Expense.from_row(row) for row in rows]

    def get(self, expense_id: int) -> Expense:
        """Return an expense or raise if it does not exist."""
        row = self._storage.fetch_one("SELECT * FROM expenses WHERE id = ?;", (expense_id,))
        if row is None:
            raise RecordNotFoundError(f"Expense {expense_id} not found")
        return Expense.from_row(row)

    def add(
        self,
        amount: object,
        category: object,
        note: object = None,
        date: object = None,
    ) -> Optional[Expense]:
        """Insert one expense and return it, or ``None`` when the input is rejected."""
        data = self._clean(amount, category, note, date)
        if data is None:
            return None
        new_id = self._storage.execute(
            "INSERT INTO expenses (amount, category, note, date) VALUES (?, ?, ?, ?);",
            (data["amount"], data["category"], data["note"], isoformat_date(data["date"])),
        )
        logger.info("Created expense %s", new_id)
        return self.get(new_id)

    def create(
        self,
        amount: object,
        category: object,
        note: object = None,
        date: object = None,
    ) -> List[Expense]:
        self.add(amount, category, note, date)
        return self.list()

    def update(
        self,
        expense_id: int,
        amount: object,
        category: object,
        note: object = None,
        date: object = None,
    ) -> List[Expense]:
        data = self._clean(amount, category, note, date)
        if data is not None:
            changed = self._storage.execute(
                "UPDATE expenses SET amount = ?, category = ?, note = ?, date = ? WHERE id = ?;",
                (
                    data["amount"],
                    data["category"],
                    data["note"],
                    isoformat_date(data["date"]),
                    expense_id,
                ),
            )
            if changed:
                logger.info("Updated expense %s", expense_id)
            else:
                logger.debug("Update skipped, expense %s does not exist", expense_id)
        return self.list()

    def delete(self, expense_id: int) -> List[Expense]:
        removed = self._storage.execute("DELETE FROM expenses WHERE id = ?;", (expense_id,))
        if removed:
            logger.info("Deleted expense %s", expense_id)
        return self.list()

    def filter(
        self, records: Iterable[Expense], mode: object, today: Optional[date] = None
    ) -> List[Expense]:
        return filter_expenses(records, mode, today or self.today())

    def totals(self, records: Iterable[Expense]) -> Totals:
        return compute_totals(records)

    def today(self) -> date:
        return self._clock()

    # Internal helpers -----------------------------------------------------
    def _clean(
        self, amount: object, category: object, note: object, day: object
    ) -> Optional[Dict[str, object]]:
        try:
            return validate_expense_fields(amount, category, note, day, today=self.today())
        except ValidationError as exc:
            # Invalid submissions leave the table untouched, like a form that ignores them.
            logger.debug("Rejected expense input: %s", exc)
            return None
