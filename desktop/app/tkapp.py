"""Tkinter desktop app for the expense tracker."""

from __future__ import annotations

import argparse
import tkinter as tk
from pathlib import Path
from tkinter import messagebox, ttk
from typing import Iterable, List, Optional

from common.exceptions import RecordNotFoundError, StorageError
from common.models import Expense, FilterMode
from common.services import ExpenseStore
from common.storage import SQLiteStorage
from desktop.app.form import ExpenseForm


PRIMARY_BG = "#0f172a"
SECONDARY_BG = "#1e293b"
ACCENT_BG = "#1d4ed8"
ACCENT_ACTIVE_BG = "#2563eb"
TEXT_PRIMARY = "#e2e8f0"
TEXT_MUTED = "#94a3b8"


def format_amount_display(value: float) -> str:
    return f"${value:,.2f}"


class ExpenseScreen(ttk.Frame):
    """Filter bar, totals, entry form and record list over one ExpenseStore."""

    def __init__(self, master: tk.Misc, store: ExpenseStore) -> None:
        super().__init__(master, padding=16, style="Panel.TFrame")
        self.store = store

        self.expenses: List[Expense] = []
        self.filter_mode = FilterMode.ALL
        self.form = ExpenseForm()

        self.amount_var = tk.StringVar()
        self.category_var = tk.StringVar()
        self.note_var = tk.StringVar()
        self.date_var = tk.StringVar()
        self.total_var = tk.StringVar(value=format_amount_display(0.0))
        self.form_title_var = tk.StringVar(value="Add Expense")
        self.save_label_var = tk.StringVar(value="Add Expense")

        self.columnconfigure(0, weight=1)
        self.rowconfigure(3, weight=1)

        self._build_filter_bar()
        self._build_summary()
        self._build_form()
        self._build_table()

    def _build_filter_bar(self) -> None:
        bar = ttk.Frame(self, style="Panel.TFrame")
        bar.grid(row=0, column=0, sticky="w", pady=(0, 8))
        for column, mode in enumerate(FilterMode):
            ttk.Button(
                bar,
                text=mode.value.title(),
                command=lambda selected=mode: self.set_filter(selected),
                style="Secondary.TButton",
            ).grid(row=0, column=column, padx=4)

    def _build_summary(self) -> None:
        summary = ttk.Frame(self, style="Metric.TFrame", padding=(16, 12))
        summary.grid(row=1, column=0, sticky="ew", pady=(0, 12))
        ttk.Label(summary, text="Total", style="MetricLabel.TLabel").grid(row=0, column=0, sticky="w")
        ttk.Label(summary, textvariable=self.total_var, style="MetricValue.TLabel").grid(
            row=1, column=0, sticky="w"
        )
        ttk.Label(summary, text="By Category", style="MetricLabel.TLabel").grid(
            row=2, column=0, sticky="w", pady=(8, 0)
        )
        self.category_frame = ttk.Frame(summary, style="Metric.TFrame")
        self.category_frame.grid(row=3, column=0, sticky="w")

    def _build_form(self) -> None:
        form = ttk.LabelFrame(self, text="Expense", style="Card.TLabelframe")
        form.grid(row=2, column=0, sticky="ew", padx=4, pady=(0, 12))
        form.columnconfigure(0, weight=1)
        form.columnconfigure(1, weight=1)

        ttk.Label(form, textvariable=self.form_title_var, style="FormLabel.TLabel").grid(
            column=0, row=0, columnspan=2, sticky="w", padx=4, pady=4
        )

        def add_field(label: str, var: tk.StringVar, column: int, row: int) -> ttk.Entry:
            ttk.Label(form, text=label, style="FormLabel.TLabel").grid(
                column=column, row=row, sticky="w", padx=4, pady=4
            )
            entry = ttk.Entry(form, textvariable=var, style="App.TEntry")
            entry.grid(column=column, row=row + 1, sticky="ew", padx=4, pady=(0, 8))
            return entry

        add_field("Amount", self.amount_var, 0, 1)
        add_field("Category", self.category_var, 1, 1)
        add_field("Note", self.note_var, 0, 3)
        add_field("Date (YYYY-MM-DD, blank for today)", self.date_var, 1, 3)

        button_row = ttk.Frame(form, style="Panel.TFrame")
        button_row.grid(column=0, row=5, columnspan=2, sticky="e", padx=4, pady=4)
        ttk.Button(
            button_row,
            text="Cancel",
            command=self.reset_form,
            style="Secondary.TButton",
        ).grid(column=0, row=0, padx=4)
        ttk.Button(
            button_row,
            textvariable=self.save_label_var,
            command=self.submit,
            style="Primary.TButton",
        ).grid(column=1, row=0, padx=4)

    def _build_table(self) -> None:
        table_frame = ttk.Frame(self, style="Panel.TFrame")
        table_frame.grid(row=3, column=0, sticky="nsew")
        table_frame.columnconfigure(0, weight=1)
        table_frame.rowconfigure(0, weight=1)

        columns = ("date", "category", "amount", "note")
        self.tree = ttk.Treeview(
            table_frame,
            columns=columns,
            show="headings",
            height=10,
            style="App.Treeview",
        )
        headings = {"date": "Date", "category": "Category", "amount": "Amount", "note": "Note"}
        for key, label in headings.items():
            width = 200 if key == "note" else 120
            self.tree.heading(key, text=label, anchor="w")
            self.tree.column(key, width=width, anchor="w")

        vsb = ttk.Scrollbar(table_frame, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscroll=vsb.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")

        button_bar = ttk.Frame(table_frame, style="Panel.TFrame")
        button_bar.grid(row=1, column=0, columnspan=2, sticky="e", pady=8)
        ttk.Button(
            button_bar,
            text="Edit Selected",
            command=self.edit_selected,
            style="Secondary.TButton",
        ).grid(row=0, column=0, padx=4)
        ttk.Button(
            button_bar,
            text="Delete Selected",
            command=self.delete_selected,
            style="Secondary.TButton",
        ).grid(row=0, column=1, padx=4)

    def load(self) -> None:
        try:
            self.store.initialize()
            self.expenses = self.store.list()
        except StorageError as exc:
            messagebox.showerror("Storage Error", f"Could not load expenses.\n{exc}", parent=self)
            self.expenses = []
        self.render()

    def set_filter(self, mode: FilterMode) -> None:
        self.filter_mode = mode
        self.render()

    def submit(self) -> None:
        self._read_form()
        try:
            records = self.form.submit(self.store)
        except StorageError as exc:
            messagebox.showerror("Storage Error", f"Could not save the expense.\n{exc}", parent=self)
            return
        if records is None:
            return
        self.expenses = records
        self._show_form()
        self.render()

    def edit_selected(self) -> None:
        expense_id = self._selected_id()
        if expense_id is None:
            return
        try:
            expense = self.store.get(expense_id)
        except RecordNotFoundError as exc:
            messagebox.showwarning("Not Found", str(exc), parent=self)
            return
        except StorageError as exc:
            messagebox.showerror("Storage Error", str(exc), parent=self)
            return
        self.form.begin_edit(expense)
        self._show_form()

    def delete_selected(self) -> None:
        expense_id = self._selected_id()
        if expense_id is None:
            return
        try:
            self.expenses = self.store.delete(expense_id)
        except StorageError as exc:
            messagebox.showerror("Storage Error", f"Could not delete the expense.\n{exc}", parent=self)
            return
        self._read_form()
        self.form.forget(expense_id)
        self._show_form()
        self.render()

    def reset_form(self) -> None:
        self.form.reset()
        self._show_form()

    def _read_form(self) -> None:
        self.form.amount = self.amount_var.get()
        self.form.category = self.category_var.get()
        self.form.note = self.note_var.get()
        self.form.date = self.date_var.get()

    def _show_form(self) -> None:
        self.amount_var.set(self.form.amount)
        self.category_var.set(self.form.category)
        self.note_var.set(self.form.note)
        self.date_var.set(self.form.date)
        self.form_title_var.set(self.form.title)
        self.save_label_var.set(self.form.save_label)

    def render(self) -> None:
        visible = self.store.filter(self.expenses, self.filter_mode)
        totals = self.store.totals(visible)

        self.total_var.set(format_amount_display(totals.total))
        for child in self.category_frame.winfo_children():
            child.destroy()
        for row, (category, value) in enumerate(totals.by_category.items()):
            ttk.Label(
                self.category_frame,
                text=f"{category}: {format_amount_display(value)}",
                style="FormLabel.TLabel",
            ).grid(row=row, column=0, sticky="w")

        self.tree.delete(*self.tree.get_children())
        for expense in visible:
            values = (
                expense.date.isoformat(),
                expense.category,
                format_amount_display(expense.amount),
                expense.note or "-",
            )
            self.tree.insert("", "end", iid=str(expense.id), values=values)

    def _selected_id(self) -> Optional[int]:
        selection = self.tree.selection()
        if not selection:
            messagebox.showinfo("No selection", "Please select an expense first.", parent=self)
            return None
        return int(selection[0])


class ExpenseTrackerApp(tk.Tk):
    """Main window hosting the expense screen."""

    def __init__(self, data_dir: Path) -> None:
        super().__init__()
        self.title("Expense Tracker")
        self.geometry("820x720")
        self.minsize(640, 560)
        self.configure(bg=PRIMARY_BG)

        self._configure_styles()

        self.storage = SQLiteStorage(data_dir)
        self.store = ExpenseStore(self.storage)

        self._build_layout()
        self.screen.load()
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _configure_styles(self) -> None:
        style = ttk.Style(self)
        try:
            style.theme_use("clam")
        except tk.TclError:
            pass

        style.configure("TFrame", background=PRIMARY_BG)
        style.configure("TLabel", background=PRIMARY_BG, foreground=TEXT_PRIMARY)

        style.configure("Panel.TFrame", background=SECONDARY_BG, relief="flat")
        style.configure("Card.TLabelframe", background=SECONDARY_BG, foreground=TEXT_PRIMARY)
        style.configure("Card.TLabelframe.Label", background=SECONDARY_BG, foreground=TEXT_PRIMARY)
        style.configure("Header.TFrame", background=PRIMARY_BG)
        style.configure("Metric.TFrame", background=SECONDARY_BG)

        style.configure("FormLabel.TLabel", background=SECONDARY_BG, foreground=TEXT_MUTED, font=("Segoe UI", 9))
        style.configure("Header.TLabel", background=PRIMARY_BG, foreground=TEXT_PRIMARY, font=("Segoe UI", 20, "bold"))
        style.configure("MetricLabel.TLabel", background=SECONDARY_BG, foreground=TEXT_MUTED, font=("Segoe UI", 9, "bold"))
        style.configure("MetricValue.TLabel", background=SECONDARY_BG, foreground=TEXT_PRIMARY, font=("Segoe UI", 16, "bold"))

        style.configure(
            "App.TEntry",
            fieldbackground=SECONDARY_BG,
            background=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            insertcolor=TEXT_PRIMARY,
            bordercolor=ACCENT_BG,
        )
        style.configure(
            "Primary.TButton",
            background=ACCENT_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=ACCENT_BG,
            padding=(18, 6),
        )
        style.map("Primary.TButton", background=[("active", ACCENT_ACTIVE_BG)])
        style.configure(
            "Secondary.TButton",
            background=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=SECONDARY_BG,
            padding=(14, 6),
        )
        style.map("Secondary.TButton", background=[("active", ACCENT_BG)])
        style.configure(
            "App.Treeview",
            background=SECONDARY_BG,
            fieldbackground=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=SECONDARY_BG,
            rowheight=28,
        )
        style.map(
            "App.Treeview",
            background=[("selected", ACCENT_BG)],
            foreground=[("selected", TEXT_PRIMARY)],
        )

    def _build_layout(self) -> None:
        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        header = ttk.Frame(self, padding=20, style="Header.TFrame")
        header.grid(row=0, column=0, sticky="ew")
        ttk.Label(header, text="Expense Tracker", style="Header.TLabel").grid(row=0, column=0, sticky="w")

        self.screen = ExpenseScreen(self, self.store)
        self.screen.grid(row=1, column=0, sticky="nsew")

    def _on_close(self) -> None:
        self.storage.close()
        self.destroy()


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Tkinter desktop app for the expense tracker")
    parser.add_argument(
        "--data-dir",
        default="data",
        type=Path,
        help="Directory containing the SQLite database (default: ./data)",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    app = ExpenseTrackerApp(args.data_dir)
    app.mainloop()


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
