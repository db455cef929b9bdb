"""Toolkit-independent state of the add/edit expense form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from common.exceptions import ValidationError
from common.models import Adding, Editing, Expense, FormMode
from common.services import ExpenseStore
from common.validators import validate_expense_fields


@dataclass
class ExpenseForm:
    amount: str = ""
    category: str = ""
    note: str = ""
    date: str = ""
    mode: FormMode = field(default_factory=Adding)

    @property
    def title(self) -> str:
        if isinstance(self.mode, Editing):
            return f"Editing expense #{self.mode.expense_id}"
        return "Add Expense"

    @property
    def save_label(self) -> str:
        return "Save Changes" if isinstance(self.mode, Editing) else "Add Expense"

    def begin_edit(self, expense: Expense) -> None:
        self.mode = Editing(expense.id)
        self.amount = str(expense.amount)
        self.category = expense.category
        self.note = expense.note or ""
        self.date = expense.date.isoformat()

    def reset(self) -> None:
        self.mode = Adding()
        self.amount = ""
        self.category = ""
        self.note = ""
        self.date = ""

    def submit(self, store: ExpenseStore) -> Optional[List[Expense]]:
        """Save the form through ``store``.

        Invalid input leaves the form untouched and returns ``None``. On success
        the form is cleared back to adding mode and the reloaded records are
        returned. ``StorageError`` propagates with the form intact.
        """
        fields = (self.amount, self.category, self.note, self.date)
        try:
            validate_expense_fields(*fields, today=store.today())
        except ValidationError:
            return None
        if isinstance(self.mode, Editing):
            records = store.update(self.mode.expense_id, *fields)
        else:
            records = store.create(*fields)
        self.reset()
        return records

    def forget(self, expense_id: int) -> None:
        """Drop out of editing when the edited record has been deleted."""
        if self.mode == Editing(expense_id):
            self.reset()
