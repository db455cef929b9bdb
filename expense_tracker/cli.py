"""Console interface for the expense tracker."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from common.exceptions import RecordNotFoundError, StorageError, ValidationError
from common.models import Expense, FilterMode
from common.services import ExpenseStore
from common.storage import SQLiteStorage
from common.validators import parse_amount, validate_date


def _parse_date(value: str) -> str:
    try:
        validate_date(value, "date", default=date.today())
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        ) from exc
    return value


def _parse_amount(value: str) -> str:
    try:
        parse_amount(value, "amount")
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return value


def _parse_category(value: str) -> str:
    if not value.strip():
        raise argparse.ArgumentTypeError("Category cannot be empty")
    return value


def _load_store(data_dir: Path) -> ExpenseStore:
    store = ExpenseStore(SQLiteStorage(data_dir))
    store.initialize()
    return store


def _format_expense(expense: Expense) -> str:
    return (
        f"[{expense.id}] {expense.date.isoformat()} {expense.amount:.2f} {expense.category}\n"
        f"  Note: {expense.note or '-'}\n"
    )


def handle_command(args: argparse.Namespace, store: ExpenseStore) -> None:
    if args.command == "add":
        expense = store.add(args.amount, args.category, args.note, args.date)
        print("Expense added:\n" + _format_expense(expense))
    elif args.command == "list":
        records = store.filter(store.list(), args.filter)
        if not records:
            print("No expenses found.")
            return
        totals = store.totals(records)
        print(f"Found {len(records)} expenses (total {totals.total:.2f}):")
        for expense in records:
            print(_format_expense(expense))
        print("By category:")
        for category, value in totals.by_category.items():
            print(f"  {category}: {value:.2f}")
    elif args.command == "edit":
        store.get(args.id)
        store.update(args.id, args.amount, args.category, args.note, args.date)
        print("Expense updated:\n" + _format_expense(store.get(args.id)))
    elif args.command == "delete":
        store.delete(args.id)
        print(f"Expense {args.id} deleted.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Expense Tracker CLI")
    parser.add_argument(
        "--data-dir",
        default="data",
        type=Path,
        help="Directory holding the SQLite database (default: ./data)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log storage statements")

    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Add a new expense")
    add.add_argument("amount", type=_parse_amount)
    add.add_argument("category", type=_parse_category)
    add.add_argument("--note")
    add.add_argument("--date", type=_parse_date, help="Defaults to today")

    listing = subparsers.add_parser("list", help="List expenses with totals")
    listing.add_argument(
        "--filter",
        default=FilterMode.ALL.value,
        type=str.upper,
        choices=[mode.value for mode in FilterMode],
    )

    edit = subparsers.add_parser("edit", help="Replace the fields of an existing expense")
    edit.add_argument("id", type=int)
    edit.add_argument("amount", type=_parse_amount)
    edit.add_argument("category", type=_parse_category)
    edit.add_argument("--note")
    edit.add_argument("--date", type=_parse_date, help="Defaults to today")

    delete = subparsers.add_parser("delete", help="Delete an expense")
    delete.add_argument("id", type=int)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        store = _load_store(args.data_dir)
        handle_command(args, store)
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except RecordNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except StorageError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
