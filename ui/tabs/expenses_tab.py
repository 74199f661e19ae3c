import csv
import customtkinter as ctk
from tkinter import filedialog, messagebox
from models.category import category_choices, get_category_info
from models.expense import Expense
from services.data_service import DataService
from services.expense_service import ExpenseService
from ui.components.confirm_dialog import ConfirmDialog
from utils.date_helpers import long_label


_MAX_RENDERED_ROWS = 100
_ALL_CATEGORIES = "All Categories"


class ExpensesTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        expense_service: ExpenseService,
        data_service: DataService | None,
        open_add_form,    # callable
        notify_refresh,   # callable(scope)
        notify=None,      # callable(message, severity)
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._expense_svc = expense_service
        self._data_svc = data_service
        self._open_add_form = open_add_form
        self._notify_refresh = notify_refresh
        self._notify = notify or (lambda *_a, **_k: None)

        self._names = {name: key for key, name in category_choices()}
        self._category_var = ctk.StringVar(value=_ALL_CATEGORIES)
        self._search_var = ctk.StringVar()
        self._search_var.trace_add("write", lambda *_: self._load())

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_filter_bar()
        self._build_header()
        self._build_list()
        self._load()

    def refresh(self):
        self._load()

    def clear_search(self):
        self._search_var.set("")
        self._category_var.set(_ALL_CATEGORIES)
        self._load()

    # ── Filter bar ──────────────────────────────────────────────────────────
    def _build_filter_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        bar.grid_columnconfigure(2, weight=1)

        ctk.CTkEntry(
            bar, textvariable=self._search_var,
            placeholder_text="Search expenses…", width=220,
        ).grid(row=0, column=0, padx=8, pady=6)

        ctk.CTkComboBox(
            bar,
            values=[_ALL_CATEGORIES, *self._names],
            variable=self._category_var,
            command=lambda _: self._load(),
            width=170,
            state="readonly",
        ).grid(row=0, column=1, padx=8)

        ctk.CTkButton(
            bar, text="Export CSV", width=100,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._export_csv,
        ).grid(row=0, column=3, padx=4)
        ctk.CTkButton(
            bar, text="+ Expense", width=100,
            command=self._open_add_form,
        ).grid(row=0, column=4, padx=(4, 8))

    # ── Column headers ───────────────────────────────────────────────────────
    def _build_header(self):
        hdr = ctk.CTkFrame(self, fg_color=("gray82", "gray22"), corner_radius=0)
        hdr.grid(row=1, column=0, sticky="ew", padx=8, pady=(4, 0))
        cols = [("", 36), ("Description", 260), ("Category", 140), ("Date", 110),
                ("Receipt", 70), ("Amount", 100), ("", 50)]
        for i, (label, width) in enumerate(cols):
            ctk.CTkLabel(
                hdr, text=label, width=width, anchor="w",
                font=ctk.CTkFont(weight="bold"),
            ).grid(row=0, column=i, padx=4, pady=4, sticky="w")

    # ── Scrollable list ──────────────────────────────────────────────────────
    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        category = self._names.get(self._category_var.get())
        rows = self._expense_svc.search(self._search_var.get(), category)

        if not rows:
            empty = "No expenses yet. Add your first one!" if not self._expense_svc.get_all() \
                else "No expenses match your search."
            ctk.CTkLabel(self._scroll, text=empty, text_color="gray60").grid(
                row=0, column=0, pady=20
            )
            return

        for idx, expense in enumerate(rows[:_MAX_RENDERED_ROWS]):
            self._add_row(idx, expense)

        if len(rows) > _MAX_RENDERED_ROWS:
            ctk.CTkLabel(
                self._scroll,
                text=f"Showing {_MAX_RENDERED_ROWS} of {len(rows)} expenses. Narrow the search to see more.",
                text_color="gray60",
                font=ctk.CTkFont(size=11),
            ).grid(row=_MAX_RENDERED_ROWS, column=0, pady=8)

    def _add_row(self, idx: int, expense: Expense):
        info = get_category_info(expense.category)
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=4)
        row.grid(row=idx, column=0, sticky="ew", pady=1, padx=2)

        ctk.CTkLabel(row, text=info.icon, width=36).grid(row=0, column=0, padx=(6, 0), pady=4)
        ctk.CTkLabel(row, text=expense.description, width=260, anchor="w").grid(
            row=0, column=1, padx=4
        )
        ctk.CTkLabel(row, text=info.name, width=140, anchor="w", text_color=info.color_hex).grid(
            row=0, column=2, padx=4
        )
        ctk.CTkLabel(row, text=long_label(expense.date), width=110, anchor="w").grid(
            row=0, column=3, padx=4
        )
        ctk.CTkLabel(row, text="📎" if expense.receipt else "", width=70).grid(
            row=0, column=4, padx=4
        )
        ctk.CTkLabel(
            row, text=self._expense_svc.currency(expense.amount), width=100, anchor="e",
            text_color="#F44336",
        ).grid(row=0, column=5, padx=4)
        ctk.CTkButton(
            row, text="Del", width=44, height=24,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda e=expense: self._delete(e),
        ).grid(row=0, column=6, padx=(4, 6))

    # ── Actions ──────────────────────────────────────────────────────────────
    def _delete(self, expense: Expense):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            "Delete Expense",
            f"Delete \"{expense.description}\" ({self._expense_svc.currency(expense.amount)})?",
            detail="This cannot be undone.",
        )
        if dlg.result and self._expense_svc.delete_expense(expense.id):
            self._notify_refresh("expense")
            self._notify("Expense deleted.", "info")

    def _export_csv(self):
        if self._data_svc is None:
            return
        path = filedialog.asksaveasfilename(
            title="Export as CSV",
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            with open(path, "w", newline="", encoding="utf-8") as f:
                csv.writer(f).writerows(self._data_svc.export_csv_rows())
        except OSError as e:
            messagebox.showerror("Export Failed", str(e))
            return
        self._notify(f"Exported to {path}", "success")
