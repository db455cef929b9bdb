"""Core business logic package for the expense tracker."""

from .clock import fixed_clock, local_today
from .models import Adding, Editing, Expense, FilterMode, FormMode, Totals
from .services import ExpenseStore, compute_totals, filter_expenses, week_start
from .storage import SQLiteStorage
from .exceptions import RecordNotFoundError, StorageError, ValidationError

__all__ = [
    "Adding",
    "Editing",
    "Expense",
    "FilterMode",
    "FormMode",
    "Totals",
    "ExpenseStore",
    "compute_totals",
    "filter_expenses",
    "week_start",
    "SQLiteStorage",
    "fixed_clock",
    "local_today",
    "RecordNotFoundError",
    "StorageError",
    "ValidationError",
]
